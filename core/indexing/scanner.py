# Path: core/indexing/scanner.py
# Purpose: Scan folders and collect content-addressed metadata for matching files.
# Layer: core/indexing.
# Details: Depth-first walk with extension and size predicates, streaming hashes, and per-file error isolation.

from __future__ import annotations

import logging
import os
import threading
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Deque, Iterator, List, Optional, Sequence, Tuple

from core.enrichers.base import Enricher
from core.models.domain import ENRICHABLE_FIELDS, FileError, FileMetadata, ScanReport
from core.models.options import ScanOptions

from .errors import ScanCancelledError, TraversalError
from .hashing import DEFAULT_CHUNK_SIZE, hash_file

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

# (absolute path, root-relative path) of a file that passed the type predicate.
Candidate = Tuple[str, str]


@dataclass
class _Outcome:
    """Result of processing one candidate file."""

    record: Optional[FileMetadata] = None
    errors: List[FileError] = field(default_factory=list)
    cancelled: bool = False


class ImageScanner:
    """Scan a directory tree for files of the configured types and describe each one."""

    def __init__(
        self,
        root: Path | str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_workers: int = 1,
        enrichers: Optional[Sequence[Enricher]] = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.root = Path(root).resolve()
        self.chunk_size = chunk_size
        self.max_workers = max_workers
        self.enrichers: List[Enricher] = list(enrichers or [])

    def scan(
        self,
        options: Optional[ScanOptions] = None,
        cancel_event: Optional[threading.Event] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScanReport:
        """Walk the root and return every accepted file plus per-file diagnostics.

        Raises ``TraversalError`` when the root itself cannot be listed and
        ``ScanCancelledError`` (carrying the partial report) when
        ``cancel_event`` stops at least one matching file from being
        processed. An event set after the last file was handled does not
        turn a complete scan into a cancelled one.
        """

        options = options or ScanOptions()
        started = time.perf_counter()
        report = ScanReport(root=self.root)

        try:
            root_entries = self._list_directory(self.root)
        except OSError as exc:
            logger.error("Cannot list scan root %s: %s", self.root, exc)
            raise TraversalError(self.root, exc) from exc

        candidates = self._iter_candidates(root_entries, "", options, report)
        if self.max_workers == 1:
            interrupted = self._run_sequential(candidates, options, report, cancel_event, progress_callback)
        else:
            interrupted = self._run_parallel(candidates, options, report, cancel_event, progress_callback)

        report.duration_seconds = time.perf_counter() - started
        if interrupted:
            logger.info("Scan of %s cancelled with %d files collected", self.root, report.total_files)
            raise ScanCancelledError(report)

        logger.info(
            "Scanned %s: %d files accepted, %d errors in %.2fs",
            self.root,
            report.total_files,
            len(report.errors),
            report.duration_seconds,
        )
        return report

    # Traversal
    @staticmethod
    def _list_directory(directory: Path | str) -> List[os.DirEntry]:
        with os.scandir(directory) as iterator:
            return list(iterator)

    def _iter_candidates(
        self,
        entries: List[os.DirEntry],
        rel_dir: str,
        options: ScanOptions,
        report: ScanReport,
    ) -> Iterator[Candidate]:
        """Yield type-matching regular files depth-first, recursing into directories in listing order."""

        for entry in entries:
            rel_path = os.path.join(rel_dir, entry.name) if rel_dir else entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError as exc:
                report.errors.append(self._failure(rel_path, entry.path, "stat", exc))
                continue

            if is_dir:
                if not options.recursive:
                    continue
                try:
                    children = self._list_directory(entry.path)
                except OSError as exc:
                    report.errors.append(self._failure(rel_path, entry.path, "list", exc))
                    continue
                yield from self._iter_candidates(children, rel_path, options, report)
            elif is_file and options.accepts_name(entry.name):
                yield entry.path, rel_path
            # Symlinks and special files are neither; they are skipped.

    # Execution
    def _run_sequential(
        self,
        candidates: Iterator[Candidate],
        options: ScanOptions,
        report: ScanReport,
        cancel_event: Optional[threading.Event],
        progress_callback: Optional[ProgressCallback],
    ) -> bool:
        """Process candidates one by one; return True if cancellation skipped any."""

        processed = 0
        for candidate in candidates:
            if _is_set(cancel_event):
                return True
            outcome = self._process(candidate, options, cancel_event)
            processed = self._accumulate(report, outcome, processed, progress_callback)
        return False

    def _run_parallel(
        self,
        candidates: Iterator[Candidate],
        options: ScanOptions,
        report: ScanReport,
        cancel_event: Optional[threading.Event],
        progress_callback: Optional[ProgressCallback],
    ) -> bool:
        """Hash candidates on a thread pool; return True if cancellation skipped any.

        At most ``2 * max_workers`` files are in flight. Results are collected
        oldest first, so output order and progress match the sequential walk.
        """

        window = self.max_workers * 2
        in_flight: Deque[Future] = deque()
        processed = 0
        interrupted = False
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="scan-hash") as pool:
            for candidate in candidates:
                if _is_set(cancel_event):
                    interrupted = True
                    break
                in_flight.append(pool.submit(self._process, candidate, options, cancel_event))
                while len(in_flight) >= window:
                    outcome = in_flight.popleft().result()
                    interrupted = interrupted or outcome.cancelled
                    processed = self._accumulate(report, outcome, processed, progress_callback)

            while in_flight:
                future = in_flight.popleft()
                if _is_set(cancel_event):
                    for pending in in_flight:
                        pending.cancel()
                if future.cancelled():
                    interrupted = True
                    continue
                outcome = future.result()
                interrupted = interrupted or outcome.cancelled
                processed = self._accumulate(report, outcome, processed, progress_callback)
        return interrupted

    @staticmethod
    def _accumulate(
        report: ScanReport,
        outcome: _Outcome,
        processed: int,
        progress_callback: Optional[ProgressCallback],
    ) -> int:
        if outcome.cancelled:
            return processed
        report.errors.extend(outcome.errors)
        if outcome.record is not None:
            report.records.append(outcome.record)
        processed += 1
        if progress_callback is not None:
            progress_callback(processed)
        return processed

    def _process(
        self,
        candidate: Candidate,
        options: ScanOptions,
        cancel_event: Optional[threading.Event],
    ) -> _Outcome:
        """Stat, size-filter, hash, and enrich one file. Never raises for I/O failures."""

        abs_path, rel_path = candidate
        if _is_set(cancel_event):
            return _Outcome(cancelled=True)

        try:
            stat = os.stat(abs_path)
        except OSError as exc:
            return _Outcome(errors=[self._failure(rel_path, abs_path, "stat", exc)])

        # Skip the read entirely when the stat size is already over the limit.
        if not options.accepts_size(stat.st_size):
            return _Outcome()

        try:
            digest, size = hash_file(abs_path, self.chunk_size)
        except OSError as exc:
            return _Outcome(errors=[self._failure(rel_path, abs_path, "read", exc)])

        # The file may have grown between stat and read.
        if not options.accepts_size(size):
            return _Outcome()

        created = getattr(stat, "st_birthtime", None) or stat.st_ctime
        fields = {
            "path": rel_path,
            "absolute_path": abs_path,
            "size": size,
            "hash": digest,
            "created": datetime.fromtimestamp(created, tz=timezone.utc),
            "modified": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        }

        errors: List[FileError] = []
        path = Path(abs_path)
        for enricher in self.enrichers:
            if not enricher.applies_to(path):
                continue
            try:
                updates = dict(enricher.enrich(path))
                unknown = sorted(set(updates) - ENRICHABLE_FIELDS)
                if unknown:
                    raise ValueError(f"enricher {enricher.name!r} returned fields it may not set: {unknown}")
                fields.update(updates)
            except Exception as exc:  # noqa: BLE001 - enrichment failure only drops that enrichment
                errors.append(self._failure(rel_path, abs_path, f"enrich:{enricher.name}", exc))

        return _Outcome(record=FileMetadata(**fields), errors=errors)

    @staticmethod
    def _failure(rel_path: str, abs_path: str, stage: str, exc: BaseException) -> FileError:
        logger.warning("Skipping %s (%s): %s", abs_path, stage, exc)
        return FileError.from_exception(rel_path, abs_path, stage, exc)


def scan_directory(
    root: Path | str,
    options: Optional[ScanOptions] = None,
    **scanner_kwargs,
) -> ScanReport:
    """Scan ``root`` once with a throwaway ImageScanner."""

    return ImageScanner(root, **scanner_kwargs).scan(options)


def _is_set(event: Optional[threading.Event]) -> bool:
    return event is not None and event.is_set()
