"""Logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Send cpmgraph log records to stderr at *level*."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
