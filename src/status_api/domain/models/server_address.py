"""Domain model describing the server a status query targets."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SERVER_PORT = 25565


@dataclass(frozen=True)
class ServerAddress:
    """Host name or IP literal plus TCP port of a Java server."""

    host: str
    port: int = DEFAULT_SERVER_PORT

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("Server host must not be empty.")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Server port must be between 0 and 65535, got {self.port}.")

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, raw_address: str, default_port: int = DEFAULT_SERVER_PORT) -> "ServerAddress":
        """Create an address from ``host``, ``host:port`` or ``[ipv6]:port``."""

        trimmed = raw_address.strip()
        host, raw_port = cls._split_host_port(trimmed)
        if raw_port is None or raw_port == "":
            return cls(host=host, port=default_port)

        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"Server port must be an integer, got {raw_port!r}.") from None
        return cls(host=host, port=port)

    @staticmethod
    def _split_host_port(address: str) -> tuple[str, str | None]:
        """Return the host and the raw port text contained in ``address``."""

        if address.startswith("["):
            closing_index = address.find("]")
            if closing_index != -1:
                host = address[1:closing_index]
                remainder = address[closing_index + 1 :]
                if remainder.startswith(":"):
                    return host, remainder[1:]
                if remainder:
                    raise ValueError(f"Unexpected text after IPv6 literal: {remainder!r}.")
                return host, None

        if address.count(":") == 1:
            host, raw_port = address.split(":", 1)
            return host, raw_port

        return address, None
