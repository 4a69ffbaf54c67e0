# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and the logging bootstrap.

from .log_setup import configure_logging
from .settings import ApiSettings, AppSettings, ScanSettings

__all__ = ["ApiSettings", "AppSettings", "ScanSettings", "configure_logging"]
