"""Repository that queries servers through a live status ping session."""
from __future__ import annotations

from status_api.domain.models.server_address import ServerAddress
from status_api.domain.models.server_status import ServerStatus
from status_api.domain.repositories.server_status_repository import ServerStatusRepository
from status_api.infrastructure.network.ping_session import (
    DEFAULT_TIMEOUT_SECONDS,
    PingSession,
)


class JavaPingStatusRepository(ServerStatusRepository):
    """Open one :class:`PingSession` per requested status."""

    def __init__(
        self,
        session_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        socket_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Store the deadlines applied to every session."""

        self._session_timeout = session_timeout
        self._socket_timeout = socket_timeout

    async def fetch_status(self, address: ServerAddress) -> ServerStatus:
        """Run a fresh session against ``address`` and return its result."""

        session = PingSession(
            address,
            timeout=self._session_timeout,
            idle_timeout=self._socket_timeout,
        )
        return await session.run()
