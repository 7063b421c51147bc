from pnm.io.files import read, write

__all__ = [
    "read",
    "write",
]
