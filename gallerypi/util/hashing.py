"""Cache keys for generated thumbnails."""

from __future__ import annotations

import hashlib


def thumb_cache_key(path: str, mtime: int) -> str:
    """Return sha256(path + little-endian mtime), hex of the first 16 bytes."""
    digest = hashlib.sha256()
    digest.update(path.encode("utf-8"))
    digest.update(mtime.to_bytes(8, "little", signed=True))
    return digest.digest()[:16].hex()