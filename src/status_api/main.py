"""Application entry point defining the HTTP API."""
from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware

from status_api.application.query_server_status import QueryServerStatusUseCase
from status_api.config.settings import get_settings
from status_api.domain.models.server_address import ServerAddress
from status_api.domain.models.session_error import SessionError
from status_api.domain.repositories.server_status_repository import ServerStatusRepository
from status_api.infrastructure.repositories.java_ping_status_repository import (
    JavaPingStatusRepository,
)

logger = logging.getLogger(__name__)


def create_app(status_repo: ServerStatusRepository | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance."""

    settings = get_settings()
    status_repository = status_repo or JavaPingStatusRepository(
        session_timeout=settings.session_timeout_seconds,
        socket_timeout=settings.socket_timeout_seconds,
    )
    status_query = QueryServerStatusUseCase(
        status_repository, default_port=settings.default_port
    )

    app = FastAPI(title="Server Status API", version=settings.app_version)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def get_root() -> dict[str, str]:
        """Return a simple heartbeat response for uptime monitoring."""

        return {"message": "RUNNING SERVER STATUS API"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_router = APIRouter(prefix=settings.api_prefix)

    @api_router.get("/health", status_code=status.HTTP_200_OK)
    async def get_health() -> dict:
        """Return the operational status and version of the service."""

        return {"status": "ok", "version": settings.app_version}

    @api_router.get("/status/{server_address}", status_code=status.HTTP_200_OK)
    async def get_server_status(server_address: str, response: Response) -> dict:
        """Query the server at ``server_address`` and return its live status."""

        address = _parse_address(status_query, server_address)
        response.headers["Cache-Control"] = "no-store"
        try:
            server_status = await status_query.execute(address)
        except SessionError as error:
            logger.warning("Status of %s unavailable: %s", address, error.code)
            return error.to_dict()
        return server_status.to_dict()

    app.include_router(api_router)
    return app


def _parse_address(
    status_query: QueryServerStatusUseCase, raw_address: str
) -> ServerAddress:
    """Parse ``raw_address`` converting domain ``ValueError`` to HTTP errors."""

    try:
        return status_query.parse_address(raw_address)
    except ValueError as parsing_error:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(parsing_error),
        ) from parsing_error


app = create_app()
