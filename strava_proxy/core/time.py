"""Clock helpers."""

from __future__ import annotations

import time


def unix_now() -> int:
    """Return the current time as whole Unix seconds."""
    return int(time.time())


__all__ = ["unix_now"]
