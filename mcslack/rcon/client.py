"""RCON client holding a single lazily established connection."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from ..logger import logger
from .errors import AuthError, ProtocolError, TransportError
from .packet import FrameError, Packet, PacketType, read_packet

Connector = Callable[
    [str, int], Awaitable[tuple[asyncio.StreamReader, asyncio.StreamWriter]]
]

# Requests are strictly one at a time, so a constant id is enough to
# correlate a reply with its request.
REQUEST_ID = 1

# Closing happens under the client lock, so it must not wait on the peer
CLOSE_TIMEOUT = 1.0


@dataclass(frozen=True)
class Disconnected:
    pass


@dataclass(frozen=True)
class Connected:
    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter


ConnectionState = Disconnected | Connected


class RconClient:
    """Executes commands against a Minecraft server over RCON.

    The connection is opened and authenticated on first use. When a
    command fails at the transport level the connection is dropped and the
    next call reconnects and logs in again. All public operations are
    serialized by one lock, so at most one request/reply exchange is on the
    wire at any time.
    """

    def __init__(
        self,
        host: str,
        port: int,
        password: str,
        *,
        connect: Connector = asyncio.open_connection,
    ):
        self.host = host
        self.port = port
        self._password = password
        self._connect = connect

        self._state: ConnectionState = Disconnected()
        self._lock = asyncio.Lock()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def connected(self) -> bool:
        return isinstance(self._state, Connected)

    async def connect(self, timeout: float) -> None:
        """Connect and log in now instead of on the first command.

        Raises:
            AuthError: the password was rejected
            TransportError: the server could not be reached in time
        """
        async with self._lock:
            await self._ensure_connected(self._deadline(timeout))

    async def execute(self, command: str, timeout: float) -> str:
        """Run a command and return the server's reply.

        `timeout` bounds the whole call, including connecting and logging
        in when no connection is held.

        Raises:
            AuthError: the password was rejected
            ProtocolError: the reply did not match the request
            TransportError: connecting, writing or reading failed
        """
        async with self._lock:
            deadline = self._deadline(timeout)
            conn = await self._ensure_connected(deadline)

            request = Packet(REQUEST_ID, PacketType.COMMAND, command.encode("utf-8"))
            try:
                async with asyncio.timeout_at(deadline):
                    reply = await self._exchange(conn, request)
            except (OSError, FrameError) as e:
                await self._discard(conn)
                raise TransportError(
                    f"command exchange with {self.address} failed: {e!r}"
                ) from e
            except asyncio.CancelledError:
                # The stream may hold half a frame now
                await self._discard(conn)
                raise

            # The connection is kept even though the stream may be out of step
            if reply.type != PacketType.COMMAND_RESPONSE:
                raise ProtocolError(
                    f"expected reply type {PacketType.COMMAND_RESPONSE.value}, "
                    f"got {reply.type}"
                )
            if reply.request_id != request.request_id:
                raise ProtocolError(
                    f"expected request ID {request.request_id}, got {reply.request_id}"
                )

            return reply.payload.decode("utf-8", errors="replace")

    async def close(self) -> None:
        async with self._lock:
            if isinstance(self._state, Connected):
                await self._discard(self._state)

    @staticmethod
    def _deadline(timeout: float) -> float:
        return asyncio.get_running_loop().time() + timeout

    async def _ensure_connected(self, deadline: float) -> Connected:
        if isinstance(self._state, Connected):
            return self._state

        try:
            async with asyncio.timeout_at(deadline):
                reader, writer = await self._connect(self.host, self.port)
        except OSError as e:
            raise TransportError(f"failed to connect to {self.address}: {e!r}") from e
        conn = Connected(reader, writer)

        login = Packet(REQUEST_ID, PacketType.LOGIN, self._password.encode("utf-8"))
        try:
            async with asyncio.timeout_at(deadline):
                reply = await self._exchange(conn, login)
        except (OSError, FrameError) as e:
            await self._close_writer(conn.writer)
            raise TransportError(
                f"login exchange with {self.address} failed: {e!r}"
            ) from e
        except asyncio.CancelledError:
            await self._close_writer(conn.writer)
            raise

        if reply.type != PacketType.LOGIN_RESPONSE:
            await self._close_writer(conn.writer)
            raise AuthError(
                f"expected reply type {PacketType.LOGIN_RESPONSE.value}, got {reply.type}"
            )
        if reply.request_id != login.request_id:
            # The server answers a bad password with request ID -1
            await self._close_writer(conn.writer)
            raise AuthError(
                f"expected request ID {login.request_id}, got {reply.request_id}"
            )

        self._state = conn
        logger.info(f"Logged in to RCON at {self.address}")
        return conn

    @staticmethod
    async def _exchange(conn: Connected, request: Packet) -> Packet:
        conn.writer.write(request.encode())
        await conn.writer.drain()
        return await read_packet(conn.reader)

    async def _discard(self, conn: Connected) -> None:
        self._state = Disconnected()
        logger.warning(f"Dropped RCON connection to {self.address}")
        await self._close_writer(conn.writer)

    @staticmethod
    async def _close_writer(writer: asyncio.StreamWriter) -> None:
        writer.close()
        try:
            async with asyncio.timeout(CLOSE_TIMEOUT):
                await writer.wait_closed()
        except TimeoutError:
            # The peer stopped reading; drop unsent data instead of waiting
            logger.debug("Timed out closing RCON connection, aborting it")
            writer.transport.abort()
        except OSError as e:
            logger.debug(f"Error while closing RCON connection: {e!r}")
