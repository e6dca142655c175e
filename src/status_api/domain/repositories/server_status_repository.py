"""Repository abstraction for querying a server's public status."""
from __future__ import annotations

from typing import Protocol

from status_api.domain.models.server_address import ServerAddress
from status_api.domain.models.server_status import ServerStatus


class ServerStatusRepository(Protocol):
    """Provide the live status of a Java server."""

    async def fetch_status(self, address: ServerAddress) -> ServerStatus:
        """Return the status of ``address`` or raise ``SessionError``."""
