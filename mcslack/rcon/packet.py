"""Minecraft RCON wire protocol encoding and decoding.

Wire format, all integers little-endian::

    [length:u32][request_id:u32][type:u32][payload][0x00 0x00]

`length` covers everything after itself: request id, type, payload and the
two trailing null bytes.

See https://wiki.vg/RCON
"""

import asyncio
import struct
from dataclasses import dataclass
from enum import IntEnum


class PacketType(IntEnum):
    """RCON packet types.

    2 means "login response" from the server and "command" from the client,
    so the two names share a value.
    """

    COMMAND_RESPONSE = 0
    COMMAND = 2
    LOGIN_RESPONSE = 2
    LOGIN = 3


_HEADER = struct.Struct("<II")
_LENGTH = struct.Struct("<I")
_PADDING = b"\x00\x00"

# request id + type + padding
MIN_FRAME_LENGTH = _HEADER.size + len(_PADDING)
MAX_FRAME_LENGTH = 1024 * 1024


class FrameError(ValueError):
    """A frame could not be read or is malformed."""


@dataclass(frozen=True)
class Packet:
    request_id: int
    type: int
    payload: bytes = b""

    def encode(self) -> bytes:
        length = MIN_FRAME_LENGTH + len(self.payload)
        return (
            _LENGTH.pack(length)
            + _HEADER.pack(self.request_id, self.type)
            + self.payload
            + _PADDING
        )


def _check_length(length: int) -> int:
    if length < MIN_FRAME_LENGTH:
        raise FrameError(f"frame length {length} is shorter than {MIN_FRAME_LENGTH}")
    if length > MAX_FRAME_LENGTH:
        raise FrameError(f"frame length {length} exceeds {MAX_FRAME_LENGTH}")
    return length - MIN_FRAME_LENGTH


async def _read_exactly(reader: asyncio.StreamReader, n: int, what: str) -> bytes:
    try:
        return await reader.readexactly(n)
    except asyncio.IncompleteReadError as e:
        raise FrameError(
            f"short read on {what}: expected {n} bytes, got {len(e.partial)}"
        ) from e


async def read_packet(reader: asyncio.StreamReader) -> Packet:
    """Read one frame from a stream.

    Raises:
        FrameError: the stream ended early or the length field is invalid
    """
    (length,) = _LENGTH.unpack(await _read_exactly(reader, _LENGTH.size, "length"))
    payload_length = _check_length(length)

    request_id, packet_type = _HEADER.unpack(
        await _read_exactly(reader, _HEADER.size, "header")
    )
    payload = await _read_exactly(reader, payload_length, "payload")
    # Padding is discarded without checking its contents
    await _read_exactly(reader, len(_PADDING), "padding")

    return Packet(request_id=request_id, type=packet_type, payload=payload)


def decode(data: bytes) -> Packet:
    """Decode one complete frame held in memory.

    Raises:
        FrameError: the buffer is not exactly one well-formed frame
    """
    if len(data) < _LENGTH.size:
        raise FrameError(f"short read on length: got {len(data)} bytes")
    (length,) = _LENGTH.unpack_from(data)
    payload_length = _check_length(length)
    if len(data) != _LENGTH.size + length:
        raise FrameError(
            f"frame declares {length} bytes but {len(data) - _LENGTH.size} follow"
        )

    request_id, packet_type = _HEADER.unpack_from(data, _LENGTH.size)
    start = _LENGTH.size + _HEADER.size
    return Packet(
        request_id=request_id,
        type=packet_type,
        payload=data[start : start + payload_length],
    )
