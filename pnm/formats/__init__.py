from pnm.formats.registry import (
    Encoding,
    LogicalType,
    MAGIC_NUMBERS,
    MAX_VALUE_LIMIT,
    lookup_magic,
    magic_number,
    parse_encoding,
    parse_type,
)

__all__ = [
    "Encoding",
    "LogicalType",
    "MAGIC_NUMBERS",
    "MAX_VALUE_LIMIT",
    "lookup_magic",
    "magic_number",
    "parse_encoding",
    "parse_type",
]
