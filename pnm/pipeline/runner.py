from typing import Optional, Union

from pnm.codec.pixel_codec import (
    ascii_to_matrix,
    binary_to_matrix,
    matrix_to_ascii,
    matrix_to_binary,
)
from pnm.exceptions import ArgumentError
from pnm.formats.registry import Encoding, parse_encoding
from pnm.image.model import Image, create
from pnm.parsing.header import parse
from pnm.pipeline.config import PnmConfig
from pnm.utils.debug import _dbg


def decode(raw: bytes, cfg: Optional[PnmConfig] = None) -> Image:
    """
    Decode the content of a PNM file into an Image.

    Header comments are joined with newlines into the image comment.
    """
    if cfg is None:
        cfg = PnmConfig()
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise ArgumentError(f"invalid content: bytes expected, got {type(raw).__name__}")

    header = parse(raw, text_encoding=cfg.text_encoding)
    image_type = header.image_type
    encoding = header.encoding

    if encoding is Encoding.ASCII:
        pixels = ascii_to_matrix(image_type, header.width, header.height, header.payload)
    else:
        pixels = binary_to_matrix(image_type, header.width, header.height, header.payload)

    comment = "\n".join(header.comments) if header.comments else None
    _dbg(f"decoded {header.magic} ({image_type.name.lower()}, {encoding.value})")
    return create(
        pixels,
        image_type=image_type,
        max_value=header.max_value,
        comment=comment,
    )


def encode(
    image: Image,
    encoding: Union[Encoding, str, None] = None,
    cfg: Optional[PnmConfig] = None,
) -> bytes:
    """
    Encode an Image as the content of a PNM file (header + payload).
    """
    if cfg is None:
        cfg = PnmConfig()
    if not isinstance(image, Image):
        raise ArgumentError(f"invalid image: Image expected, got {type(image).__name__}")
    encoding = parse_encoding(encoding if encoding is not None else cfg.encoding)

    header = image.header(encoding).encode(cfg.text_encoding)
    if encoding is Encoding.ASCII:
        payload = matrix_to_ascii(image.pixels).encode("ascii")
    else:
        payload = matrix_to_binary(image.type, image.pixels)

    _dbg(f"encoded {image.info} as {encoding.value}: {len(header)} + {len(payload)} bytes")
    return header + payload
