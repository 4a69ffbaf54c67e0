# Path: core/indexing/__init__.py
# Purpose: Package initializer for scanning utilities.
# Layer: core/indexing.
# Details: Exposes the tree walker, the content digest helpers, and scan errors.

from .errors import ScanCancelledError, ScanError, TraversalError
from .hashing import DEFAULT_CHUNK_SIZE, compute_file_digest, hash_file
from .scanner import ImageScanner, scan_directory

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ImageScanner",
    "ScanCancelledError",
    "ScanError",
    "TraversalError",
    "compute_file_digest",
    "hash_file",
    "scan_directory",
]
