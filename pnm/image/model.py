"""
Immutable image value and its validating factory.

`create` is the usual way to build an Image: it checks the pixel data,
infers the type when none is given, settles the max value and broadcasts
gray values to RGB triples for color images. Constructing an Image directly
runs the same invariant checks without inference or broadcasting. The
resulting Image stores its pixels as nested tuples and is frozen.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from pnm.exceptions import ArgumentError, DataError
from pnm.formats.registry import (
    MAX_VALUE_LIMIT,
    Encoding,
    LogicalType,
    default_max_value,
    magic_number,
    parse_encoding,
    parse_type,
    profile,
)


Row = Tuple[Union[int, Tuple[int, int, int]], ...]

# CR and CRLF end a comment line in a header just like LF does.
_LINE_BREAK_RE = re.compile(r"\r\n?")


@dataclass(frozen=True, eq=False)
class Image:
    """
    A PBM, PGM or PPM image.

    - type: logical type (bilevel, grayscale or color)
    - width, height: dimensions in pixels
    - max_value: maximum sample value (always 1 for bilevel images)
    - pixels: rows of samples, or rows of RGB triples for color images
    - comment: optional multiline comment; CR and CRLF line breaks are
      stored as LF

    Raises ArgumentError or DataError when the fields break an invariant.
    """
    type: LogicalType
    width: int
    height: int
    max_value: int
    pixels: Tuple[Row, ...]
    comment: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, LogicalType):
            raise ArgumentError(f"invalid image type: {self.type!r}")
        _check_max_value(self.max_value)
        if self.type is LogicalType.BILEVEL and self.max_value != 1:
            raise ArgumentError(f"invalid max value for bilevel image: {self.max_value}")
        if not _is_sequence(self.pixels):
            raise ArgumentError(
                f"invalid pixel data: rows expected, got {_type_name(self.pixels)}"
            )

        triples = _check_pixel_array(self.pixels)
        if triples != (self.type is LogicalType.COLOR):
            raise DataError("type does not match data")
        _check_range(self.pixels, triples, self.max_value)

        frozen = _freeze(self.pixels, triples)
        if (
            not (_is_int(self.width) and _is_int(self.height))
            or (self.width, self.height) != (len(frozen[0]), len(frozen))
        ):
            raise DataError(
                f"image dimensions {self.width}x{self.height} do not match data "
                f"{len(frozen[0])}x{len(frozen)}"
            )
        object.__setattr__(self, "pixels", frozen)
        object.__setattr__(self, "comment", _normalize_comment(self.comment))

    @property
    def info(self) -> str:
        """Short description, e.g. 'PGM 4x3 Grayscale'."""
        return (
            f"{self.type.value.upper()} {self.width}x{self.height} "
            f"{profile(self.type).label}"
        )

    def __str__(self) -> str:
        return self.info

    def __repr__(self) -> str:
        return f"<Image {self.info} max_value={self.max_value}>"

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self.type is other.type
            and self.max_value == other.max_value
            and self.comment == other.comment
            and self.pixels == other.pixels
        )

    def __hash__(self) -> int:
        return hash((self.type, self.max_value, self.comment, self.pixels))

    def tolist(self) -> List[list]:
        """Return the pixels as an independent nested list."""
        if self.type is LogicalType.COLOR:
            return [[list(pixel) for pixel in row] for row in self.pixels]
        return [list(row) for row in self.pixels]

    def header(self, encoding: Union[Encoding, str] = Encoding.BINARY) -> str:
        """
        Header text for the given encoding: magic number, comment lines,
        dimensions and (except for bilevel images) the max value.
        """
        lines = [magic_number(self.type, parse_encoding(encoding))]
        if self.comment is not None:
            for line in self.comment.split("\n"):
                lines.append(f"# {line}" if line else "#")
        lines.append(f"{self.width} {self.height}")
        if self.type is not LogicalType.BILEVEL:
            lines.append(str(self.max_value))
        return "\n".join(lines) + "\n"

    def to_bytes(self, encoding: Union[Encoding, str, None] = None) -> bytes:
        from pnm.pipeline.runner import encode

        return encode(self, encoding)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _type_name(value: object) -> str:
    return type(value).__name__


def _check_pixel_array(pixels: Sequence) -> bool:
    """
    Check the matrix shape and element types.

    Returns True when the pixels are RGB triples, False for scalars.
    """
    if (
        len(pixels) == 0
        or not all(_is_sequence(row) for row in pixels)
        or len(pixels[0]) == 0
        or any(len(row) != len(pixels[0]) for row in pixels)
    ):
        raise DataError("invalid pixel array")

    triples = _is_sequence(pixels[0][0])
    for row in pixels:
        for pixel in row:
            if triples:
                if not _is_sequence(pixel) or len(pixel) != 3:
                    raise DataError("invalid pixel array")
                if not all(_is_int(value) for value in pixel):
                    raise DataError("invalid pixel value: integer expected")
            elif _is_sequence(pixel):
                raise DataError("invalid pixel array")
            elif not _is_int(pixel):
                raise DataError("invalid pixel value: integer expected")
    return triples


def _check_max_value(max_value: object) -> None:
    if not _is_int(max_value):
        raise ArgumentError(f"invalid max value: integer expected, got {max_value!r}")
    if not 1 <= max_value <= MAX_VALUE_LIMIT:
        raise ArgumentError(
            f"invalid max value: {max_value} (expected 1..{MAX_VALUE_LIMIT})"
        )


def _samples(pixels: Sequence, triples: bool):
    for row in pixels:
        for pixel in row:
            if triples:
                yield from pixel
            else:
                yield pixel


def _check_range(pixels: Sequence, triples: bool, max_value: int) -> None:
    for value in _samples(pixels, triples):
        if not 0 <= value <= max_value:
            raise DataError(f"invalid pixel value: must be in 0..{max_value}, got {value}")


def _freeze(pixels: Sequence, triples: bool) -> Tuple[Row, ...]:
    if triples:
        return tuple(tuple(tuple(pixel) for pixel in row) for row in pixels)
    return tuple(tuple(row) for row in pixels)


def _normalize_comment(comment: object) -> Optional[str]:
    if comment is None:
        return None
    if not isinstance(comment, str):
        raise ArgumentError(f"invalid comment: string expected, got {_type_name(comment)}")
    return _LINE_BREAK_RE.sub("\n", comment)


def _detect_type(pixels: Sequence, triples: bool, max_value: Optional[int]) -> LogicalType:
    if triples:
        return LogicalType.COLOR
    if (max_value is not None and max_value > 1) or any(
        value > 1 for value in _samples(pixels, triples)
    ):
        return LogicalType.GRAYSCALE
    return LogicalType.BILEVEL


def create(
    pixels: Sequence,
    image_type: Union[LogicalType, str, None] = None,
    max_value: Optional[int] = None,
    comment: Optional[str] = None,
) -> Image:
    """
    Create an image from a two-dimensional array of bilevel, gray or RGB values.

    When `image_type` is omitted it is inferred: triples give a color image;
    otherwise a max value above 1 or any sample above 1 gives a grayscale
    image, and anything else a bilevel image. For bilevel images the max
    value is always 1; for the other types it defaults to 255. Gray values
    given for a color image are broadcast to (v, v, v).

    Raises ArgumentError for invalid options and DataError for invalid
    pixel data.
    """
    if not _is_sequence(pixels):
        raise ArgumentError(
            f"invalid pixel data: list of rows expected, got {_type_name(pixels)}"
        )

    # Step 1: shape and element types
    triples = _check_pixel_array(pixels)

    # Step 2: options
    if image_type is not None:
        image_type = parse_type(image_type)
    if max_value is not None:
        _check_max_value(max_value)
    comment = _normalize_comment(comment)

    # Step 3: type inference and type/data agreement
    if image_type is None:
        image_type = _detect_type(pixels, triples, max_value)
    if triples and image_type is not LogicalType.COLOR:
        raise DataError("type does not match data")

    # Step 4: max value
    if image_type is LogicalType.BILEVEL or max_value is None:
        max_value = default_max_value(image_type)

    # Step 5: value range
    _check_range(pixels, triples, max_value)

    # Step 6: broadcast gray values for color images; Image copies the rows
    if image_type is LogicalType.COLOR and not triples:
        pixels = [[(value, value, value) for value in row] for row in pixels]

    return Image(
        type=image_type,
        width=len(pixels[0]),
        height=len(pixels),
        max_value=max_value,
        pixels=pixels,
        comment=comment,
    )
