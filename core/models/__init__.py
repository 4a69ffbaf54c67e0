# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes scan options and the records a scan produces.

from .domain import FileError, FileMetadata, ImageDimensions, ScanReport, ScanResult
from .options import DEFAULT_FILE_TYPES, ScanOptions

__all__ = [
    "DEFAULT_FILE_TYPES",
    "FileError",
    "FileMetadata",
    "ImageDimensions",
    "ScanOptions",
    "ScanReport",
    "ScanResult",
]
