# Path: core/indexing/hashing.py
# Purpose: Compute content digests used as the identity of scanned files.
# Layer: core/indexing.
# Details: Streams files through SHA-256 in fixed-size chunks so memory stays bounded.

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Tuple

DEFAULT_CHUNK_SIZE = 64 * 1024


def hash_file(path: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Tuple[str, int]:
    """Return the lower-case SHA-256 hex digest of a file and the number of bytes hashed.

    Raises ``OSError`` if the file cannot be opened or a read fails mid-stream.
    """

    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    hasher = hashlib.sha256()
    total = 0
    with open(path, "rb") as stream:
        for chunk in iter(lambda: stream.read(chunk_size), b""):
            hasher.update(chunk)
            total += len(chunk)
    return hasher.hexdigest(), total


def compute_file_digest(path: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Return the lower-case SHA-256 hex digest of a file's content."""

    digest, _ = hash_file(path, chunk_size)
    return digest


__all__ = ["DEFAULT_CHUNK_SIZE", "compute_file_digest", "hash_file"]
