"""Packet framing for the length-prefixed Java server protocol."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from status_api.domain.services.varint import (
    IncompleteData,
    ProtocolError,
    decode_varint,
    encode_varint,
)


@dataclass(frozen=True)
class Packet:
    """A single decoded packet: its id and the bytes following the id."""

    packet_id: int
    payload: bytes


def build_packet(packet_id: int, payload: bytes = b"") -> bytes:
    """Return ``VarInt(length) ++ VarInt(packet_id) ++ payload``."""

    body = encode_varint(packet_id) + bytes(payload)
    return encode_varint(len(body)) + body


def try_read_packet(
    data: bytes | bytearray | memoryview, offset: int = 0
) -> tuple[Packet, int] | None:
    """Extract one whole packet from ``data`` starting at ``offset``.

    Returns the packet and the number of bytes it occupied, or ``None`` when
    the buffer does not hold a complete packet yet.
    """

    try:
        length, body_start = decode_varint(data, offset)
    except IncompleteData:
        return None

    body_end = body_start + length
    if len(data) < body_end:
        return None

    body = bytes(data[body_start:body_end])
    try:
        packet_id, id_end = decode_varint(body)
    except IncompleteData:
        raise ProtocolError(
            f"Packet length {length} is too short to hold a packet id"
        ) from None

    return Packet(packet_id=packet_id, payload=body[id_end:]), body_end - offset


class PacketBuffer:
    """Accumulate received bytes and hand out whole packets in order.

    Consumed bytes are tracked with a cursor and only discarded once they make
    up at least half of the underlying storage.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._data) - self._cursor

    def append(self, chunk: bytes) -> None:
        """Add freshly received bytes to the end of the buffer."""

        self._data.extend(chunk)

    def read_packets(self) -> Iterator[Packet]:
        """Yield every complete packet currently held by the buffer."""

        try:
            while True:
                extracted = try_read_packet(self._data, self._cursor)
                if extracted is None:
                    break
                packet, consumed = extracted
                self._cursor += consumed
                yield packet
        finally:
            self._compact()

    def _compact(self) -> None:
        if self._cursor and self._cursor * 2 >= len(self._data):
            del self._data[: self._cursor]
            self._cursor = 0
