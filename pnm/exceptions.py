"""
Error hierarchy for the PNM library.

Every error carries a human-readable message; all of them derive from
`PnmError`, which is itself a `ValueError`.
"""


class PnmError(ValueError):
    """Base class for all PNM errors."""


class ArgumentError(PnmError):
    """Invalid caller-supplied option (type, max value, comment, input shape)."""


class ParserError(PnmError):
    """Malformed or truncated header."""


class DataSizeError(PnmError):
    """Payload size does not match the dimensions declared in the header."""


class DataError(PnmError):
    """Invalid pixel content."""
