"""Utility helpers shared across the PNM package."""

from pnm.utils.file_utils import add_extension

__all__ = [
    "add_extension",
]
