# Path: core/indexing/errors.py
# Purpose: Define operation-level failures raised by the scanner.
# Layer: core/indexing.
# Details: Per-file problems are reported as FileError values, never through these exceptions.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from core.models.domain import ScanReport


class ScanError(Exception):
    """Base class for failures that end a scan."""


class TraversalError(ScanError):
    """The scan root could not be listed."""

    def __init__(self, root: Path, cause: OSError) -> None:
        super().__init__(f"Cannot list scan root {root}: {cause.strerror or cause}")
        self.root = root
        self.cause = cause


class ScanCancelledError(ScanError):
    """The scan was cancelled; ``report`` holds what was gathered before cancellation."""

    def __init__(self, report: ScanReport, message: Optional[str] = None) -> None:
        super().__init__(message or f"Scan of {report.root} cancelled after {report.total_files} files")
        self.report = report
