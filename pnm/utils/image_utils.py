from typing import Optional

from pnm.codec.pixel_codec import binary_to_matrix, matrix_to_binary
from pnm.exceptions import ArgumentError
from pnm.formats.registry import LogicalType
from pnm.image.model import Image, create


def _require_pillow():
    try:
        from PIL import Image as PILImage
    except ImportError as exc:
        raise RuntimeError(
            "Pillow is required for image conversion. Install 'Pillow' to use to_pil/from_pil."
        ) from exc
    return PILImage


def _scale_to_255(v: int, max_value: int) -> int:
    if max_value == 255:
        return v
    return int(round((v / max_value) * 255))


def _invert(data: bytes) -> bytes:
    # PBM uses 1 for black, Pillow's mode "1" uses 1 for white
    return bytes(b ^ 0xFF for b in data)


def to_pil(image: Image):
    """
    Convert an Image to a Pillow image.

    Bilevel -> mode "1", grayscale -> "L", color -> "RGB". Samples are
    scaled to 0..255 when max_value is not 255.
    """
    PILImage = _require_pillow()
    size = (image.width, image.height)

    if image.type is LogicalType.BILEVEL:
        packed = matrix_to_binary(LogicalType.BILEVEL, image.pixels)
        return PILImage.frombytes("1", size, _invert(packed))

    data = matrix_to_binary(image.type, image.pixels)
    if image.max_value != 255:
        data = bytes(_scale_to_255(v, image.max_value) for v in data)
    mode = "RGB" if image.type is LogicalType.COLOR else "L"
    return PILImage.frombytes(mode, size, data)


def from_pil(pil_image, comment: Optional[str] = None) -> Image:
    """
    Convert a Pillow image to an Image.

    Mode "1" gives a bilevel image, "L" a grayscale image; any other mode is
    converted to RGB and gives a color image.
    """
    PILImage = _require_pillow()
    if not isinstance(pil_image, PILImage.Image):
        raise ArgumentError(
            f"invalid image: PIL.Image.Image expected, got {type(pil_image).__name__}"
        )

    width, height = pil_image.size
    if pil_image.mode == "1":
        image_type = LogicalType.BILEVEL
        data = _invert(pil_image.tobytes())
    elif pil_image.mode == "L":
        image_type = LogicalType.GRAYSCALE
        data = pil_image.tobytes()
    else:
        image_type = LogicalType.COLOR
        data = pil_image.convert("RGB").tobytes()

    pixels = binary_to_matrix(image_type, width, height, data)
    return create(pixels, image_type=image_type, comment=comment)
