"""Variable-length integer codec used by the Java server protocol."""
from __future__ import annotations

MAX_VARINT_BYTES = 5
_UINT32_MASK = 0xFFFFFFFF


class ProtocolError(ValueError):
    """Raised when received bytes violate the wire format."""


class IncompleteData(Exception):
    """Raised when more bytes are needed before a value can be decoded."""


def encode_varint(value: int) -> bytes:
    """Encode ``value`` using 7 payload bits per byte.

    Negative numbers are written as their unsigned 32-bit representation, so
    ``-1`` becomes ``ff ff ff ff 0f``.
    """

    if value < -(1 << 31) or value > _UINT32_MASK:
        raise ValueError(f"VarInt value out of 32-bit range: {value}")

    remaining = value & _UINT32_MASK
    encoded = bytearray()
    while remaining & ~0x7F:
        encoded.append((remaining & 0x7F) | 0x80)
        remaining >>= 7
    encoded.append(remaining)
    return bytes(encoded)


def decode_varint(data: bytes | bytearray | memoryview, offset: int = 0) -> tuple[int, int]:
    """Decode a VarInt starting at ``offset``.

    Returns the decoded value and the offset just past it. Raises
    :class:`IncompleteData` when ``data`` ends before the terminating byte and
    :class:`ProtocolError` when the value spans more than five bytes.
    """

    value = 0
    position = offset
    for index in range(MAX_VARINT_BYTES):
        if position >= len(data):
            raise IncompleteData("VarInt runs past the end of the available data")
        byte = data[position]
        position += 1
        value |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            return value & _UINT32_MASK, position
    raise ProtocolError("VarInt too big")
