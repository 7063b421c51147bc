from pnm.pipeline.config import PnmConfig
from pnm.pipeline.runner import decode, encode

__all__ = [
    "PnmConfig",
    "decode",
    "encode",
]
