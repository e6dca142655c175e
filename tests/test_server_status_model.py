"""Tests for the server status domain model."""
from __future__ import annotations

import pytest

from status_api.domain.models.chat_component import (
    MAX_COMPONENT_DEPTH,
    ChatNode,
    ChatText,
)
from status_api.domain.models.server_status import (
    PlayerSample,
    ServerPlayers,
    ServerStatus,
    ServerVersion,
)
from status_api.domain.services.varint import ProtocolError


def test_from_status_json_reads_every_field() -> None:
    """All documented fields of the status document should be captured."""

    status = ServerStatus.from_status_json(
        {
            "version": {"name": "1.20.4", "protocol": 765},
            "players": {
                "max": 20,
                "online": 2,
                "sample": [
                    {"name": "Steve", "id": "8667ba71-b85a-4004-af54-457a9734eed7"},
                    {"id": "missing-name"},
                ],
            },
            "description": {"text": "Hi", "color": "yellow"},
            "favicon": "data:image/png;base64,AAAA",
        },
        latency=12,
    )

    assert status == ServerStatus(
        version=ServerVersion(name="1.20.4", protocol=765),
        players=ServerPlayers(
            max=20,
            online=2,
            sample=[PlayerSample("Steve", "8667ba71-b85a-4004-af54-457a9734eed7")],
        ),
        description=ChatNode(text="Hi", color="yellow"),
        latency=12,
        favicon="data:image/png;base64,AAAA",
    )


def test_to_dict_renders_description_and_plain_variant() -> None:
    """The success body should expose formatted and clean descriptions."""

    status = ServerStatus(
        version=ServerVersion(name="Paper 1.21", protocol=767),
        players=ServerPlayers(max=100, online=0),
        description=ChatNode(text="Lobby", bold=True, extra=(ChatText(" open"),)),
        latency=33,
    )

    assert status.to_dict() == {
        "success": True,
        "version": {"name": "Paper 1.21", "protocol": 767},
        "players": {"max": 100, "online": 0, "list": []},
        "description": "§lLobby§r open",
        "description_clean": "Lobby open",
        "latency": 33,
        "favicon": None,
    }


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"players": {"max": 1, "online": 0}},
        {"version": {"name": "x"}},
        {"version": "1.20", "players": {"max": 1, "online": 0}},
    ],
)
def test_from_status_json_rejects_incomplete_documents(document: object) -> None:
    """Documents lacking the version or players objects are protocol errors."""

    with pytest.raises(ProtocolError):
        ServerStatus.from_status_json(document, latency=0)


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 1e400])
def test_non_finite_numbers_are_treated_as_missing(value: float) -> None:
    """Player counts and protocol numbers that cannot become integers fall back."""

    status = ServerStatus.from_status_json(
        {
            "version": {"name": "1.20.4", "protocol": value},
            "players": {"max": value, "online": value},
        },
        latency=0,
    )

    assert status.version.protocol is None
    assert status.players.max == 0
    assert status.players.online == 0


def test_deeply_nested_description_is_a_protocol_error() -> None:
    """A description nesting past the component depth limit is rejected."""

    description: object = "x"
    for _ in range(MAX_COMPONENT_DEPTH + 5):
        description = {"extra": [description]}

    with pytest.raises(ProtocolError):
        ServerStatus.from_status_json(
            {
                "version": {"name": "1.20.4", "protocol": 765},
                "players": {"max": 1, "online": 0},
                "description": description,
            },
            latency=0,
        )
