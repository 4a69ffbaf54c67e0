# Path: scripts/serve_api.py
# Purpose: Run the HTTP API with uvicorn.
# Layer: scripts.
# Details: Binds to the host and port from AppSettings unless overridden on the command line.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from api import create_app
from config import AppSettings


def main() -> None:
    """Start the API server."""

    settings = AppSettings.from_env()
    parser = argparse.ArgumentParser(description="Serve the image crawler API")
    parser.add_argument("--host", default=settings.api.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.api.port, help="Port to listen on")
    args = parser.parse_args()

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
