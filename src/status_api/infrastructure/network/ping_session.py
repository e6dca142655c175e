"""Status query session speaking the Java server handshake protocol."""
from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import math
import struct
import time
from enum import Enum
from typing import Any, Callable, Protocol

from status_api.domain.models.server_address import ServerAddress
from status_api.domain.models.server_status import ServerStatus
from status_api.domain.models.session_error import SessionError
from status_api.domain.services.error_classifier import classify_error
from status_api.domain.services.packet_framer import Packet, PacketBuffer, build_packet
from status_api.domain.services.varint import (
    IncompleteData,
    ProtocolError,
    decode_varint,
    encode_varint,
)

logger = logging.getLogger(__name__)

HANDSHAKE_PACKET_ID = 0x00
STATUS_REQUEST_PACKET_ID = 0x00
STATUS_RESPONSE_PACKET_ID = 0x00
PING_PACKET_ID = 0x01
PONG_PACKET_ID = 0x01

UNSPECIFIED_PROTOCOL_VERSION = -1
NEXT_STATE_STATUS = 1
DEFAULT_PING_PAYLOAD = bytes(range(1, 9))
DEFAULT_TIMEOUT_SECONDS = 7.0
READ_CHUNK_SIZE = 4096
CLOSE_WAIT_SECONDS = 1.0


class SessionState(Enum):
    """Protocol states a session moves through, in order."""

    CONNECTING = "connecting"
    HANDSHAKE_SENT = "handshake_sent"
    AWAITING_STATUS_RESPONSE = "awaiting_status_response"
    AWAITING_PONG = "awaiting_pong"
    COMPLETE = "complete"
    FAILED = "failed"


TERMINAL_STATES = frozenset({SessionState.COMPLETE, SessionState.FAILED})


class PacketWriter(Protocol):
    """Subset of :class:`asyncio.StreamWriter` the session writes through."""

    def write(self, data: bytes) -> None:
        """Queue ``data`` for sending."""

    def close(self) -> None:
        """Close the underlying connection."""

    def is_closing(self) -> bool:
        """Return ``True`` once the connection is closed or closing."""


def build_handshake_payload(address: ServerAddress) -> bytes:
    """Return the handshake fields announcing a status query for ``address``."""

    host_bytes = address.host.encode("utf-8")
    return (
        encode_varint(UNSPECIFIED_PROTOCOL_VERSION)
        + encode_varint(len(host_bytes))
        + host_bytes
        + struct.pack(">H", address.port)
        + encode_varint(NEXT_STATE_STATUS)
    )


def parse_status_response(payload: bytes) -> Any:
    """Decode the JSON document carried by a status response packet."""

    try:
        json_length, offset = decode_varint(payload)
    except IncompleteData:
        raise ProtocolError("Status response is missing its JSON length") from None

    json_bytes = payload[offset : offset + json_length]
    if len(json_bytes) < json_length:
        raise ProtocolError(
            f"Status response JSON truncated: expected {json_length} bytes, got {len(json_bytes)}"
        )

    try:
        return json.loads(json_bytes.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise ProtocolError(f"Invalid status response JSON: {error}") from error
    except RecursionError as error:
        raise ProtocolError("Status response JSON is nested too deeply") from error


class PingSession:
    """Drive one status query from connection to settlement.

    The session is an explicit state machine fed by discrete events
    (:meth:`handle_connected`, :meth:`handle_data`, :meth:`handle_error`).
    :meth:`run` wires those events to an asyncio connection and applies the
    overall deadline plus a per-read idle timeout. Once the session reaches
    ``COMPLETE`` or ``FAILED`` every further event is ignored.
    """

    def __init__(
        self,
        address: ServerAddress,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        idle_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        ping_payload: bytes = DEFAULT_PING_PAYLOAD,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if len(ping_payload) != 8:
            raise ValueError("Ping payload must be exactly 8 bytes.")

        self._address = address
        self._timeout = timeout
        self._idle_timeout = idle_timeout
        self._ping_payload = ping_payload
        self._clock = clock

        self._state = SessionState.CONNECTING
        self._buffer = PacketBuffer()
        self._writer: PacketWriter | None = None
        self._status: ServerStatus | None = None
        self._ping_started_at: float | None = None
        self._result: ServerStatus | None = None
        self._error: SessionError | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def settled(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def result(self) -> ServerStatus | None:
        return self._result

    @property
    def error(self) -> SessionError | None:
        return self._error

    async def run(self) -> ServerStatus:
        """Perform the status query and return the server status.

        Raises :class:`SessionError` describing why the query failed.
        """

        try:
            await asyncio.wait_for(self._communicate(), timeout=self._timeout)
        except Exception as error:
            self.handle_error(error)
        finally:
            self._close()
            await self._wait_closed()

        if self._error is not None:
            raise self._error
        if self._result is None:
            raise RuntimeError("Status query ended without settling.")
        return self._result

    async def _communicate(self) -> None:
        logger.debug("Connecting to %s", self._address)
        reader, writer = await asyncio.open_connection(self._address.host, self._address.port)
        self.handle_connected(writer)
        await writer.drain()

        while not self.settled:
            chunk = await asyncio.wait_for(reader.read(READ_CHUNK_SIZE), timeout=self._idle_timeout)
            if not chunk:
                raise ConnectionResetError(
                    f"{self._address} closed the connection before the status query completed"
                )
            self.handle_data(chunk)
            if not writer.is_closing():
                await writer.drain()

    def handle_connected(self, writer: PacketWriter) -> None:
        """Send the handshake and status request over a freshly opened connection."""

        if self._state is not SessionState.CONNECTING:
            return

        self._writer = writer
        writer.write(build_packet(HANDSHAKE_PACKET_ID, build_handshake_payload(self._address)))
        self._transition(SessionState.HANDSHAKE_SENT)
        writer.write(build_packet(STATUS_REQUEST_PACKET_ID))
        self._transition(SessionState.AWAITING_STATUS_RESPONSE)

    def handle_data(self, chunk: bytes) -> None:
        """Consume received bytes, processing every packet that is now complete."""

        if self.settled:
            return

        self._buffer.append(chunk)
        try:
            for packet in self._buffer.read_packets():
                self._dispatch(packet)
                if self.settled:
                    break
        except Exception as error:
            self.handle_error(error)

    def handle_error(self, error: BaseException) -> None:
        """Settle the session as failed unless it has already settled."""

        if self.settled:
            logger.debug("Ignoring %r for %s: session already settled", error, self._address)
            return

        self._error = classify_error(error)
        logger.warning(
            "Status query to %s failed (%s): %s",
            self._address,
            self._error.code,
            str(error) or type(error).__name__,
        )
        self._close()
        self._transition(SessionState.FAILED)

    def _dispatch(self, packet: Packet) -> None:
        if (
            self._state is SessionState.AWAITING_STATUS_RESPONSE
            and packet.packet_id == STATUS_RESPONSE_PACKET_ID
        ):
            self._on_status_response(packet.payload)
        elif self._state is SessionState.AWAITING_PONG and packet.packet_id == PONG_PACKET_ID:
            self._on_pong()
        else:
            logger.debug(
                "Skipping packet 0x%02x from %s in state %s",
                packet.packet_id,
                self._address,
                self._state.value,
            )

    def _on_status_response(self, payload: bytes) -> None:
        document = parse_status_response(payload)
        # Parsed before the ping so a malformed document never gets one.
        self._status = ServerStatus.from_status_json(document, latency=0)

        self._ping_started_at = self._clock()
        self._send(build_packet(PING_PACKET_ID, self._ping_payload))
        self._transition(SessionState.AWAITING_PONG)

    def _on_pong(self) -> None:
        elapsed_ms = (self._clock() - self._ping_started_at) * 1000
        latency = max(0, math.floor(elapsed_ms + 0.5))
        self._result = dataclasses.replace(self._status, latency=latency)
        self._close()
        self._transition(SessionState.COMPLETE)
        logger.info("Status query to %s completed in %d ms", self._address, latency)

    def _send(self, data: bytes) -> None:
        if self._writer is None or self._writer.is_closing():
            raise ConnectionResetError(f"Connection to {self._address} is already closed")
        self._writer.write(data)

    def _transition(self, new_state: SessionState) -> None:
        logger.debug("%s: %s -> %s", self._address, self._state.value, new_state.value)
        self._state = new_state

    def _close(self) -> None:
        if self._writer is not None and not self._writer.is_closing():
            self._writer.close()
            logger.debug("Connection to %s closed", self._address)

    async def _wait_closed(self) -> None:
        wait_closed = getattr(self._writer, "wait_closed", None)
        if wait_closed is None:
            return
        try:
            await asyncio.wait_for(wait_closed(), timeout=CLOSE_WAIT_SECONDS)
        except (asyncio.TimeoutError, OSError) as error:
            logger.debug("Closing connection to %s did not finish cleanly: %r", self._address, error)
