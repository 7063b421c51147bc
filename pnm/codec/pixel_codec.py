"""
Conversion between pixel matrices and the two PNM payload encodings.

A pixel matrix is a list of rows; each row holds `width` scalars (bilevel,
grayscale) or `width` RGB triples (color).
"""

import re
from typing import Iterator, List, Sequence, Union

from pnm.exceptions import DataError, DataSizeError
from pnm.formats.registry import WHITESPACE, LogicalType, profile
from pnm.utils.debug import _dbg


_WHITESPACE_RE = re.compile(rb"[ \t\r\n]+")
_NUMBER_RE = re.compile(rb"[0-9]+")

Pixel = Union[int, Sequence[int]]
Matrix = List[List[Pixel]]


def byte_width(image_type: LogicalType, width: int) -> int:
    """Number of bytes occupied by one row in binary encoding."""
    if image_type is LogicalType.BILEVEL:
        return (width + 7) // 8
    return profile(image_type).samples_per_pixel * width


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("ascii", errors="replace")
    return bytes(data)


def _tokenize_ascii(image_type: LogicalType, data: bytes) -> List[bytes]:
    if image_type is LogicalType.BILEVEL:
        # bilevel digits need no separators
        packed = _WHITESPACE_RE.sub(b"", data)
        return [packed[i:i + 1] for i in range(len(packed))]
    return [token for token in _WHITESPACE_RE.split(data) if token]


def _to_integers(tokens: List[bytes]) -> List[int]:
    values = []
    for token in tokens:
        if not _NUMBER_RE.fullmatch(token):
            raise DataError(f"invalid pixel value: integer expected, got {token!r}")
        values.append(int(token))
    return values


def _assert_data_size(actual: int, expected: int) -> None:
    if actual != expected:
        raise DataSizeError(
            f"data size does not match expected size: {actual} != {expected}"
        )


def _reshape(image_type: LogicalType, width: int, values: Sequence[int]) -> Matrix:
    samples = profile(image_type).samples_per_pixel
    row_len = samples * width
    rows = [values[i:i + row_len] for i in range(0, len(values), row_len)]
    if samples == 1:
        return [list(row) for row in rows]
    return [
        [list(row[j:j + samples]) for j in range(0, row_len, samples)]
        for row in rows
    ]


def _unpack_bilevel_row(row_bytes: bytes, width: int) -> List[int]:
    # MSB first; bits past `width` are padding
    bits = format(int.from_bytes(row_bytes, "big"), f"0{8 * len(row_bytes)}b")
    return [int(bit) for bit in bits[:width]]


def _is_bit(value: Pixel) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in (0, 1)


def _pack_bilevel_row(row: Sequence[Pixel]) -> bytes:
    if not all(_is_bit(value) for value in row):
        raise DataError(f"invalid bilevel row: values must be 0 or 1, got {list(row)!r}")
    if not row:
        return b""
    bits = "".join(str(value) for value in row)
    bits += "0" * (-len(bits) % 8)
    return int(bits, 2).to_bytes(len(bits) // 8, "big")


def ascii_to_matrix(
    image_type: LogicalType,
    width: int,
    height: int,
    data: Union[bytes, str],
) -> Matrix:
    """
    Convert an ASCII payload to a pixel matrix.

    Raises DataError for non-integer tokens and DataSizeError when the token
    count does not match the dimensions.
    """
    values = _to_integers(_tokenize_ascii(image_type, _as_bytes(data)))
    expected = profile(image_type).samples_per_pixel * width * height
    _dbg(f"ascii payload: {len(values)} values, expected {expected}")
    _assert_data_size(len(values), expected)
    return _reshape(image_type, width, values)


def binary_to_matrix(
    image_type: LogicalType,
    width: int,
    height: int,
    data: bytes,
) -> Matrix:
    """
    Convert a binary payload to a pixel matrix.

    One trailing whitespace byte beyond the expected length is tolerated.
    Bilevel rows are unpacked MSB first; padding bits are discarded.
    """
    data = bytes(data)
    bytes_per_row = byte_width(image_type, width)
    expected = bytes_per_row * height

    if len(data) == expected + 1 and data[-1] in WHITESPACE:
        data = data[:-1]
    _dbg(f"binary payload: {len(data)} bytes, expected {expected}")
    _assert_data_size(len(data), expected)

    if image_type is LogicalType.BILEVEL:
        matrix: Matrix = []
        for offset in range(0, expected, bytes_per_row):
            matrix.append(_unpack_bilevel_row(data[offset:offset + bytes_per_row], width))
        return matrix

    return _reshape(image_type, width, list(data))


def _is_triple(pixel: Pixel) -> bool:
    return isinstance(pixel, (list, tuple))


def _flatten_row(row: Sequence[Pixel]) -> Iterator[int]:
    for pixel in row:
        if _is_triple(pixel):
            yield from pixel
        else:
            yield pixel


def matrix_to_ascii(matrix: Sequence[Sequence[Pixel]]) -> str:
    """
    Render a pixel matrix as ASCII: one line per row, samples space-separated,
    with a trailing newline.
    """
    lines = [" ".join(str(value) for value in _flatten_row(row)) for row in matrix]
    return "\n".join(lines) + "\n"


def matrix_to_binary(image_type: LogicalType, matrix: Sequence[Sequence[Pixel]]) -> bytes:
    """
    Render a pixel matrix as a binary payload.

    Bilevel rows are packed MSB first and padded to a byte boundary per row.
    Raises DataError for bilevel samples other than 0 and 1.
    """
    if image_type is LogicalType.BILEVEL:
        return b"".join(_pack_bilevel_row(row) for row in matrix)

    return bytes(value for row in matrix for value in _flatten_row(row))
