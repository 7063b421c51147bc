"""
Reading and writing PNM images from/to files and streams.

A source or target is either a path (str or os.PathLike) or a binary
stream object with read()/write().
"""

import os
from pathlib import Path
from typing import Optional, Union

from pnm.exceptions import ArgumentError
from pnm.formats.registry import Encoding, profile
from pnm.image.model import Image
from pnm.pipeline.config import PnmConfig
from pnm.pipeline.runner import decode, encode
from pnm.utils.debug import _dbg
from pnm.utils.file_utils import add_extension as _add_extension


def _is_path(value: object) -> bool:
    return isinstance(value, (str, os.PathLike))


def read(source, cfg: Optional[PnmConfig] = None) -> Image:
    """
    Read an image from a file name or a readable stream.
    """
    if _is_path(source):
        path = Path(source).expanduser()
        _dbg(f"reading {path}")
        content = path.read_bytes()
    elif hasattr(source, "read"):
        content = source.read()
        if isinstance(content, str):
            # text streams: keep byte values 0..255 intact
            content = content.encode("latin-1")
    else:
        raise ArgumentError(
            f"invalid source: file name or stream expected, got {type(source).__name__}"
        )
    return decode(content, cfg)


def write(
    image: Image,
    target,
    encoding: Union[Encoding, str, None] = None,
    add_extension: Optional[bool] = None,
    cfg: Optional[PnmConfig] = None,
) -> int:
    """
    Write an image to a file name or a writable stream.

    Returns the number of bytes written.
    """
    if cfg is None:
        cfg = PnmConfig()
    if add_extension is None:
        add_extension = cfg.add_extension

    if not _is_path(target) and not hasattr(target, "write"):
        raise ArgumentError(
            f"invalid target: file name or stream expected, got {type(target).__name__}"
        )

    content = encode(image, encoding, cfg)

    if _is_path(target):
        path = Path(target).expanduser()
        if add_extension:
            path = _add_extension(path, profile(image.type).extension)
        _dbg(f"writing {len(content)} bytes to {path}")
        path.write_bytes(content)
    else:
        target.write(content)
    return len(content)
