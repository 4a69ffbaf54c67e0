# Path: core/enrichers/base.py
# Purpose: Define the Enricher interface for optional per-file metadata.
# Layer: core/enrichers.
# Details: Enrichers run after a file is accepted and hashed; each may fail independently.

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict


class Enricher(ABC):
    """Abstract base class for per-file enrichment steps.

    ``enrich`` returns a mapping of FileMetadata field names to values; only
    names in ``ENRICHABLE_FIELDS`` are accepted. Raising any ``Exception`` or
    returning another field marks the enrichment as failed for that file only.
    """

    name: str

    def applies_to(self, path: Path) -> bool:
        """Return True if this enricher should run for ``path``."""

        return True

    @abstractmethod
    def enrich(self, path: Path) -> Dict[str, Any]:
        """Return FileMetadata field updates for the file at ``path``."""
