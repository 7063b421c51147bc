"""
Format registry: the three logical image types, the two encodings and the
six magic numbers that combine them.

All type-dependent constants live in the profile table below; the rest of
the package looks them up here instead of branching on the type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from pnm.exceptions import ArgumentError, ParserError


MAX_VALUE_LIMIT = 255
COMMENT_MARKER = b"#"
WHITESPACE = b" \t\r\n"


class LogicalType(Enum):
    BILEVEL = "pbm"
    GRAYSCALE = "pgm"
    COLOR = "ppm"


class Encoding(Enum):
    ASCII = "ascii"
    BINARY = "binary"


@dataclass(frozen=True)
class TypeProfile:
    """
    Fixed properties of one logical type.

    - label: descriptive name used in image summaries
    - token_count: structural header tokens after the magic number
    - default_max_value: max value used when none is given
    - samples_per_pixel: 1 for scalar pixels, 3 for RGB triples
    - extension: conventional file extension
    """
    label: str
    token_count: int
    default_max_value: int
    samples_per_pixel: int
    extension: str


TYPE_PROFILES: Dict[LogicalType, TypeProfile] = {
    LogicalType.BILEVEL: TypeProfile("Bilevel", 2, 1, 1, ".pbm"),
    LogicalType.GRAYSCALE: TypeProfile("Grayscale", 3, 255, 1, ".pgm"),
    LogicalType.COLOR: TypeProfile("Color", 3, 255, 3, ".ppm"),
}

MAGIC_NUMBERS: Dict[Tuple[LogicalType, Encoding], str] = {
    (LogicalType.BILEVEL, Encoding.ASCII): "P1",
    (LogicalType.GRAYSCALE, Encoding.ASCII): "P2",
    (LogicalType.COLOR, Encoding.ASCII): "P3",
    (LogicalType.BILEVEL, Encoding.BINARY): "P4",
    (LogicalType.GRAYSCALE, Encoding.BINARY): "P5",
    (LogicalType.COLOR, Encoding.BINARY): "P6",
}

MAGIC_LOOKUP: Dict[str, Tuple[LogicalType, Encoding]] = {
    magic: key for key, magic in MAGIC_NUMBERS.items()
}

# Alternative spellings accepted for the type option.
TYPE_ALIASES: Dict[str, LogicalType] = {
    "pbm": LogicalType.BILEVEL,
    "pgm": LogicalType.GRAYSCALE,
    "ppm": LogicalType.COLOR,
    "bilevel": LogicalType.BILEVEL,
    "grayscale": LogicalType.GRAYSCALE,
    "color": LogicalType.COLOR,
}

ENCODING_NAMES = {encoding.value for encoding in Encoding}


def profile(image_type: LogicalType) -> TypeProfile:
    return TYPE_PROFILES[image_type]


def token_count(image_type: LogicalType) -> int:
    return TYPE_PROFILES[image_type].token_count


def default_max_value(image_type: LogicalType) -> int:
    return TYPE_PROFILES[image_type].default_max_value


def magic_number(image_type: LogicalType, encoding: Encoding) -> str:
    return MAGIC_NUMBERS[(image_type, encoding)]


def lookup_magic(magic: str) -> Tuple[LogicalType, Encoding]:
    """
    Resolve a magic number ("P1".."P6") to its (type, encoding) pair.
    """
    if magic not in MAGIC_LOOKUP:
        raise ParserError(f"unknown magic number: {magic!r}")
    return MAGIC_LOOKUP[magic]


def parse_type(token: Union[LogicalType, str]) -> LogicalType:
    """
    Accept a LogicalType member or one of its string spellings.
    """
    if isinstance(token, LogicalType):
        return token
    if isinstance(token, str) and token.lower() in TYPE_ALIASES:
        return TYPE_ALIASES[token.lower()]
    raise ArgumentError(f"invalid image type: {token!r}")


def parse_encoding(token: Union[Encoding, str]) -> Encoding:
    if isinstance(token, Encoding):
        return token
    if isinstance(token, str) and token.lower() in ENCODING_NAMES:
        return Encoding(token.lower())
    raise ArgumentError(f"invalid encoding: {token!r}")
