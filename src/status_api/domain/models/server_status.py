"""Domain models for a successfully queried server status."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from status_api.domain.models.chat_component import (
    ChatComponent,
    ChatText,
    chat_component_from_json,
)
from status_api.domain.services.chat_renderer import render_component, strip_formatting
from status_api.domain.services.varint import ProtocolError


@dataclass(frozen=True)
class ServerVersion:
    """Version name and protocol number advertised by the server."""

    name: str | None = None
    protocol: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "protocol": self.protocol}


@dataclass(frozen=True)
class PlayerSample:
    """One entry of the sample of online players."""

    name: str
    id: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"name": self.name, "id": self.id}


@dataclass(frozen=True)
class ServerPlayers:
    """Player counts and the optional sample list."""

    max: int
    online: int
    sample: List[PlayerSample] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max": self.max,
            "online": self.online,
            "list": [player.to_dict() for player in self.sample],
        }


@dataclass(frozen=True)
class ServerStatus:
    """Complete result of a status query, including the measured latency."""

    version: ServerVersion
    players: ServerPlayers
    description: ChatComponent = field(default_factory=ChatText)
    latency: int = 0
    favicon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready success body with rendered descriptions."""

        description = render_component(self.description)
        return {
            "success": True,
            "version": self.version.to_dict(),
            "players": self.players.to_dict(),
            "description": description,
            "description_clean": strip_formatting(description),
            "latency": self.latency,
            "favicon": self.favicon,
        }

    @classmethod
    def from_status_json(cls, data: Any, latency: int) -> "ServerStatus":
        """Create a status from the decoded status response document.

        Raises :class:`ProtocolError` when the document lacks the version or
        players objects, or when its description nests too deeply.
        """

        if not isinstance(data, Mapping):
            raise ProtocolError("Status response must be a JSON object.")

        raw_version = data.get("version")
        if not isinstance(raw_version, Mapping):
            raise ProtocolError("Status response is missing the version object.")
        raw_players = data.get("players")
        if not isinstance(raw_players, Mapping):
            raise ProtocolError("Status response is missing the players object.")

        try:
            description = chat_component_from_json(data.get("description"))
        except ValueError as error:
            raise ProtocolError(str(error)) from error

        raw_favicon = data.get("favicon")
        return cls(
            version=ServerVersion(
                name=_optional_str(raw_version.get("name")),
                protocol=_optional_int(raw_version.get("protocol")),
            ),
            players=ServerPlayers(
                max=_optional_int(raw_players.get("max")) or 0,
                online=_optional_int(raw_players.get("online")) or 0,
                sample=_parse_sample(raw_players.get("sample")),
            ),
            description=description,
            latency=latency,
            favicon=raw_favicon if isinstance(raw_favicon, str) else None,
        )


def _parse_sample(raw_sample: Any) -> List[PlayerSample]:
    if not isinstance(raw_sample, list):
        return []

    sample: List[PlayerSample] = []
    for entry in raw_sample:
        if not isinstance(entry, Mapping) or entry.get("name") is None:
            continue
        sample.append(
            PlayerSample(name=str(entry["name"]), id=_optional_str(entry.get("id")))
        )
    return sample


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None
