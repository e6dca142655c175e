"""Logging setup shared by the command-line and ASGI entry points."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with the service-wide format."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
