# Path: scripts/scan_images.py
# Purpose: CLI tool to scan an image folder and print file metadata as JSON.
# Layer: scripts.
# Details: Wires settings, the core scanner, and a tqdm progress bar together.

from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tqdm import tqdm

from config import AppSettings, configure_logging
from core.enrichers import ImageDimensionsEnricher
from core.indexing.errors import TraversalError
from core.indexing.scanner import ImageScanner
from core.models.domain import ScanResult

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scan a folder for images and print their metadata")
    parser.add_argument("--root", type=Path, required=True, help="Folder to scan")
    parser.add_argument("--no-recursive", action="store_true", help="Only scan the top-level folder")
    parser.add_argument("--types", nargs="+", default=None, help="Extensions to accept, e.g. .jpg .png")
    parser.add_argument("--max-size", type=int, default=None, help="Largest accepted file size in bytes")
    parser.add_argument("--workers", type=int, default=None, help="Number of hashing threads")
    parser.add_argument("--dimensions", action="store_true", help="Read image dimensions for each file")
    parser.add_argument("--log-level", default=None, help="Logging verbosity (default from settings)")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a single scan and print the result."""

    parser = build_parser()
    args = parser.parse_args(argv)
    settings = AppSettings.from_env()
    configure_logging(args.log_level or settings.log_level)

    overrides = {"recursive": not args.no_recursive}
    if args.types:
        overrides["file_types"] = args.types
    if args.max_size is not None:
        overrides["max_size"] = args.max_size

    enrichers = [ImageDimensionsEnricher()] if args.dimensions or settings.scan.enrich_dimensions else []
    try:
        options = settings.scan.default_options().merged(overrides)
        scanner = ImageScanner(
            args.root,
            chunk_size=settings.scan.chunk_size,
            max_workers=args.workers if args.workers is not None else settings.scan.max_workers,
            enrichers=enrichers,
        )
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError too.
        parser.error(str(exc))

    with tqdm(desc="Scanning files", unit="file", disable=args.no_progress, file=sys.stderr) as bar:
        try:
            report = scanner.scan(options, progress_callback=lambda done: bar.update(done - bar.n))
        except TraversalError as exc:
            logger.error("%s", exc)
            return 1

    result = ScanResult(id=uuid.uuid4().hex, timestamp=datetime.now(timezone.utc), report=report)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
