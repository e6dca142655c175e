"""Command-line entry point for running the Server Status API server."""
from __future__ import annotations

import uvicorn

from status_api.config.logging_config import configure_logging
from status_api.config.settings import get_settings


def main() -> None:
    """Run the API server using Uvicorn."""

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "status_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
