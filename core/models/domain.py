# Path: core/models/domain.py
# Purpose: Define domain records produced by directory scans.
# Layer: core/models.
# Details: Lightweight dataclasses simplify serialization between CLI, API, and core services.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

# Fields an enricher may set on a record; identity fields stay owned by the scanner.
ENRICHABLE_FIELDS = frozenset({"dimensions"})


def printable_text(text: str) -> str:
    """Return ``text`` as valid UTF-8, replacing undecodable filename bytes kept as surrogates."""

    return os.fsencode(text).decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of an image."""

    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class FileMetadata:
    """Metadata describing one accepted file.

    ``size`` is the number of bytes fed to the hash, so ``hash`` always covers
    exactly ``size`` bytes even if the file changed after it was stat-ed.
    """

    path: str
    absolute_path: str
    size: int
    hash: str
    created: datetime
    modified: datetime
    dimensions: Optional[ImageDimensions] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "path": printable_text(self.path),
            "absolutePath": printable_text(self.absolute_path),
            "size": self.size,
            "hash": self.hash,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
        }
        if self.dimensions is not None:
            payload["dimensions"] = self.dimensions.to_dict()
        return payload


@dataclass(frozen=True)
class FileError:
    """Diagnostic for a file or subdirectory that was skipped because of a failure."""

    path: str
    absolute_path: str
    message: str
    error_type: str
    stage: str

    @classmethod
    def from_exception(cls, path: str, absolute_path: str, stage: str, exc: BaseException) -> "FileError":
        return cls(
            path=path,
            absolute_path=absolute_path,
            message=str(exc),
            error_type=type(exc).__name__,
            stage=stage,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": printable_text(self.path),
            "absolutePath": printable_text(self.absolute_path),
            "message": printable_text(self.message),
            "errorType": self.error_type,
            "stage": self.stage,
        }


@dataclass
class ScanReport:
    """Outcome of a scan that reached the end (or was cancelled) without a root failure."""

    root: Path
    records: List[FileMetadata] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.records)


@dataclass
class ScanResult:
    """Envelope returned by the HTTP API for a completed scan."""

    id: str
    timestamp: datetime
    report: ScanReport

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "totalFiles": self.report.total_files,
            "images": [record.to_dict() for record in self.report.records],
            "errors": [error.to_dict() for error in self.report.errors],
        }
