# Path: api/app.py
# Purpose: Expose a FastAPI application for directory scan operations.
# Layer: api.
# Details: Provides health checks, path validation, and a scan endpoint delegating to the core scanner.

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config import AppSettings, configure_logging
from core.enrichers import Enricher, ImageDimensionsEnricher
from core.indexing.errors import TraversalError
from core.indexing.scanner import ImageScanner
from core.models.domain import ScanResult

logger = logging.getLogger(__name__)


def _error(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        payload["details"] = details
    return payload


def create_app(settings: Optional[AppSettings] = None):  # type: ignore[override]
    """Create a FastAPI app instance scanning with the provided settings."""

    from fastapi import APIRouter, FastAPI, Request
    from fastapi.responses import JSONResponse

    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)

    enrichers: List[Enricher] = []
    if settings.scan.enrich_dimensions:
        enrichers.append(ImageDimensionsEnricher())

    app = FastAPI(title=settings.api.title, version="0.1.0")
    router = APIRouter(prefix="/api")

    @app.exception_handler(Exception)
    def internal_error(request: Request, exc: Exception) -> JSONResponse:
        """Render unexpected failures in the same error format as handled ones."""

        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error("INTERNAL_ERROR", "An internal error occurred"))

    @app.get("/health")
    @router.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "healthy"}

    @router.post("/scan")
    def scan(payload: Dict[str, Any]):
        """Scan a directory and return metadata for every accepted file."""

        scan_path = payload.get("path")
        raw_options = payload.get("options") or {}
        if not scan_path:
            return JSONResponse(status_code=400, content=_error("INVALID_REQUEST", "Path is required"))
        if not isinstance(scan_path, str):
            return JSONResponse(status_code=400, content=_error("INVALID_REQUEST", "Path must be a string"))
        if not isinstance(raw_options, dict):
            return JSONResponse(status_code=400, content=_error("INVALID_REQUEST", "Options must be an object"))

        try:
            options = settings.scan.default_options().merged(raw_options)
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            return JSONResponse(
                status_code=400,
                content=_error("INVALID_REQUEST", "Invalid scan options", {"errors": errors}),
            )

        scanner = ImageScanner(
            os.path.abspath(scan_path),
            chunk_size=settings.scan.chunk_size,
            max_workers=settings.scan.max_workers,
            enrichers=enrichers,
        )
        try:
            report = scanner.scan(options)
        except TraversalError as exc:
            return JSONResponse(
                status_code=500,
                content=_error("SCAN_ERROR", str(exc), {"path": scan_path, "options": raw_options}),
            )

        result = ScanResult(id=uuid.uuid4().hex, timestamp=datetime.now(timezone.utc), report=report)
        return result.to_dict()

    @router.post("/validate")
    def validate(payload: Dict[str, Any]):
        """Report whether a path exists and is accessible."""

        test_path = payload.get("path")
        if not test_path:
            return JSONResponse(status_code=400, content=_error("INVALID_REQUEST", "Path is required"))
        if not isinstance(test_path, str):
            return JSONResponse(status_code=400, content=_error("INVALID_REQUEST", "Path must be a string"))

        absolute_path = os.path.abspath(test_path)
        if not os.path.exists(absolute_path):
            return {"valid": False, "path": test_path, "reason": f"No such file or directory: {absolute_path}"}
        if not os.access(absolute_path, os.R_OK):
            return {"valid": False, "path": test_path, "reason": f"Permission denied: {absolute_path}"}
        return {"valid": True, "path": absolute_path}

    app.include_router(router)
    logger.info("API configured with scan defaults %s", settings.scan.default_options())
    return app
