# Path: core/enrichers/__init__.py
# Purpose: Package initializer for per-file enrichment steps.
# Layer: core/enrichers.
# Details: Exposes the base interface and the Pillow-backed dimensions reader.

from .base import Enricher
from .dimensions import ImageDimensionsEnricher

__all__ = ["Enricher", "ImageDimensionsEnricher"]
