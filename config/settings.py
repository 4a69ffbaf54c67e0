# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes scan defaults, HTTP API parameters, and logging verbosity.

import os
from typing import Optional, Set

from pydantic import BaseModel, Field

from core.indexing.hashing import DEFAULT_CHUNK_SIZE
from core.models.options import DEFAULT_FILE_TYPES, ScanOptions


class ScanSettings(BaseModel):
    """Defaults applied to scans when a caller omits an option."""

    recursive: bool = Field(default=True, description="Descend into subdirectories by default.")
    file_types: Set[str] = Field(
        default_factory=lambda: set(DEFAULT_FILE_TYPES),
        description="Extensions accepted when a request does not list any.",
    )
    max_size: Optional[int] = Field(default=None, ge=0, description="Inclusive size limit in bytes; None is unbounded.")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0, description="Read size used by the streaming hash.")
    max_workers: int = Field(default=1, ge=1, description="Hashing threads; 1 keeps the scan sequential.")
    enrich_dimensions: bool = Field(default=False, description="Read image dimensions with Pillow for each record.")

    def default_options(self) -> ScanOptions:
        """Return the ScanOptions a request starts from before its own overrides."""

        return ScanOptions(recursive=self.recursive, file_types=self.file_types, max_size=self.max_size)


class ApiSettings(BaseModel):
    """Settings for the HTTP surface."""

    title: str = Field(default="Image Crawler API", description="Title reported in the OpenAPI schema.")
    host: str = Field(default="0.0.0.0", description="Interface the server binds to.")
    port: int = Field(default=3000, description="Port the server listens on.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    scan: ScanSettings = Field(default_factory=ScanSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings, overriding defaults with IMGSCAN_* environment variables."""

        settings = cls()
        env = os.environ
        if "IMGSCAN_LOG_LEVEL" in env:
            settings.log_level = env["IMGSCAN_LOG_LEVEL"].upper()
        if "IMGSCAN_PORT" in env:
            settings.api.port = int(env["IMGSCAN_PORT"])
        scan_overrides = {}
        if "IMGSCAN_MAX_WORKERS" in env:
            scan_overrides["max_workers"] = int(env["IMGSCAN_MAX_WORKERS"])
        if "IMGSCAN_CHUNK_SIZE" in env:
            scan_overrides["chunk_size"] = int(env["IMGSCAN_CHUNK_SIZE"])
        if scan_overrides:
            # Re-validate so bad values fail here rather than mid-scan.
            settings.scan = ScanSettings.model_validate({**settings.scan.model_dump(), **scan_overrides})
        return settings


__all__ = ["AppSettings", "ApiSettings", "ScanSettings"]
