import os
import sys

# Debug logging controlled by environment variable PNM_DEBUG
_DEBUG = os.environ.get("PNM_DEBUG", "").lower() in {"1", "true", "yes"}


def _dbg(msg: str) -> None:
    if _DEBUG:
        print(f"[PNM] {msg}", file=sys.stderr)
