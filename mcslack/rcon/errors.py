"""Errors raised by the RCON client."""


class RconError(Exception):
    """Base class for RCON client failures."""


class AuthError(RconError):
    """The server rejected the login exchange."""


class ProtocolError(RconError):
    """The server replied with an unexpected type or request id."""


class TransportError(RconError):
    """Connecting, writing or reading failed, or the deadline expired."""
