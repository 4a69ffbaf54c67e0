"""Tests for core.enrichers."""
from pathlib import Path

from PIL import Image

from core.enrichers import ImageDimensionsEnricher
from core.indexing.scanner import ImageScanner
from core.models.domain import ImageDimensions


def test_dimensions_enricher_reads_header(tmp_path: Path) -> None:
    target = tmp_path / "pic.png"
    Image.new("RGB", (3, 2), color=(255, 0, 0)).save(target)
    assert ImageDimensionsEnricher().enrich(target) == {"dimensions": ImageDimensions(width=3, height=2)}


def test_scan_with_dimensions(tmp_path: Path) -> None:
    Image.new("L", (5, 7)).save(tmp_path / "gray.gif")
    (tmp_path / "broken.jpg").write_bytes(b"not an image")

    report = ImageScanner(tmp_path, enrichers=[ImageDimensionsEnricher()]).scan()

    by_path = {record.path: record for record in report.records}
    assert by_path["gray.gif"].dimensions == ImageDimensions(width=5, height=7)
    assert by_path["gray.gif"].to_dict()["dimensions"] == {"width": 5, "height": 7}
    # Undecodable content keeps its record but loses the enrichment.
    assert by_path["broken.jpg"].dimensions is None
    assert "dimensions" not in by_path["broken.jpg"].to_dict()
    assert [(error.path, error.stage) for error in report.errors] == [("broken.jpg", "enrich:dimensions")]
