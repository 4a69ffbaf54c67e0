# Path: core/enrichers/dimensions.py
# Purpose: Read pixel dimensions of accepted image files.
# Layer: core/enrichers.
# Details: Uses Pillow's lazy header parsing, so pixel data is never decoded.

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from PIL import Image

from core.models.domain import ImageDimensions

from .base import Enricher


class ImageDimensionsEnricher(Enricher):
    """Fill ``FileMetadata.dimensions`` from the image header."""

    name = "dimensions"

    def enrich(self, path: Path) -> Dict[str, Any]:
        with Image.open(path) as img:
            width, height = img.size
        return {"dimensions": ImageDimensions(width=width, height=height)}
