"""Use case for querying the live status of a Java server."""
from __future__ import annotations

from status_api.domain.models.server_address import DEFAULT_SERVER_PORT, ServerAddress
from status_api.domain.models.server_status import ServerStatus
from status_api.domain.repositories.server_status_repository import ServerStatusRepository


class QueryServerStatusUseCase:
    """Resolve a raw ``host[:port]`` string into a queried server status."""

    def __init__(
        self,
        repository: ServerStatusRepository,
        default_port: int = DEFAULT_SERVER_PORT,
    ) -> None:
        """Initialize the use case with its status source and default port."""

        self._repository = repository
        self._default_port = default_port

    def parse_address(self, raw_address: str) -> ServerAddress:
        """Return the address described by ``raw_address``.

        Raises ``ValueError`` when the host is empty or the port is invalid.
        """

        return ServerAddress.parse(raw_address, default_port=self._default_port)

    async def execute(self, address: ServerAddress) -> ServerStatus:
        """Query ``address`` once; failures surface as ``SessionError``."""

        return await self._repository.fetch_status(address)
