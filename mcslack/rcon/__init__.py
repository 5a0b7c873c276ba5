"""
Minecraft RCON support.

Encodes and decodes RCON frames and runs commands over a single
self-healing connection.
"""

from .client import Connected, Disconnected, RconClient
from .errors import AuthError, ProtocolError, RconError, TransportError
from .packet import FrameError, Packet, PacketType, decode, read_packet

__all__ = [
    "AuthError",
    "Connected",
    "Disconnected",
    "FrameError",
    "Packet",
    "PacketType",
    "ProtocolError",
    "RconClient",
    "RconError",
    "TransportError",
    "decode",
    "read_packet",
]
