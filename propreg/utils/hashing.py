"""Content addressing for uploaded images."""

from __future__ import annotations

import hashlib
from pathlib import Path

DIGEST_HEX_LENGTH = 64
_CHUNK_SIZE = 8192


def digest(data: bytes) -> str:
    """Return the SHA-256 of ``data`` as 64 lowercase hex characters.

    Empty input is accepted and hashes like any other byte string.
    """
    return hashlib.sha256(data).hexdigest()


def digest_file(path: str | Path) -> str:
    """Hash a file on disk, reading it in chunks.

    Produces the same value as ``digest(Path(path).read_bytes())``.
    """
    sha256 = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            sha256.update(chunk)
    return sha256.hexdigest()
