from pnm.image.model import Image, create

__all__ = [
    "Image",
    "create",
]
