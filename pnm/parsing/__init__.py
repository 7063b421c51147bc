from pnm.parsing.header import ParsedHeader, parse

__all__ = [
    "ParsedHeader",
    "parse",
]
