"""
Create, read and write PNM images (PBM, PGM, PPM).

    import pnm

    image = pnm.create([[0, 1, 2], [1, 2, 3]], max_value=3)
    pnm.write(image, "test.pgm")

    image = pnm.read("test.pgm")
    image.info       # 'PGM 3x2 Grayscale'
    image.max_value  # 3
    image.pixels     # ((0, 1, 2), (1, 2, 3))
"""

from pnm.exceptions import ArgumentError, DataError, DataSizeError, ParserError, PnmError
from pnm.formats.registry import Encoding, LogicalType
from pnm.image.model import Image, create
from pnm.io.files import read, write
from pnm.pipeline import PnmConfig, decode, encode
from pnm.utils.image_utils import from_pil, to_pil

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "DataError",
    "DataSizeError",
    "ParserError",
    "PnmError",
    "Encoding",
    "LogicalType",
    "Image",
    "create",
    "read",
    "write",
    "PnmConfig",
    "decode",
    "encode",
    "from_pil",
    "to_pil",
]
