"""Sources of raw server log lines."""

import asyncio
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
from aiofiles import os as aioos
from watchfiles import Change, awatch

from ..logger import logger

async def stdin_lines() -> AsyncIterator[str]:
    """Yield lines from standard input until EOF.

    Bytes that are not valid UTF-8 are replaced rather than ending the
    stream.

    Usage:
        tail -F logs/latest.log | python -m mcslack ingest
    """
    async for raw in aiofiles.stdin_bytes:
        yield raw.decode("utf-8", errors="replace").rstrip("\r\n")


class LogFileFollower:
    """Follows a log file as the server appends to it.

    Starts at the current end of the file. Handles the file being truncated
    or recreated on log rotation. An incomplete last line is held back
    until its newline arrives.
    """

    def __init__(self, log_path: Path, stop_event: Optional[asyncio.Event] = None):
        self.log_path = log_path.absolute()
        self.stop_event = stop_event
        self._position = 0

    async def lines(self) -> AsyncIterator[str]:
        try:
            self._position = await aioos.path.getsize(self.log_path)
            logger.info(f"Following {self.log_path} from byte {self._position}")
        except FileNotFoundError:
            logger.info(f"{self.log_path} not found, waiting for it to be created")

        while not await aioos.path.exists(self.log_path):
            if self.stop_event is not None and self.stop_event.is_set():
                return
            await asyncio.sleep(1)

        async for changes in awatch(self.log_path.parent, stop_event=self.stop_event):
            for change_type, changed_path in changes:
                if Path(changed_path) != self.log_path:
                    continue

                if change_type == Change.deleted:
                    logger.info(f"{self.log_path} deleted")
                    continue

                if change_type == Change.added:
                    logger.info(f"{self.log_path} created")
                    self._position = 0

                for line in await self._read_new_lines():
                    yield line

    async def _read_new_lines(self) -> list[str]:
        try:
            if not await aioos.path.exists(self.log_path):
                return []

            current_size = await aioos.path.getsize(self.log_path)
            if current_size < self._position:
                logger.info(f"{self.log_path} truncated, reading from the beginning")
                self._position = 0

            if current_size == self._position:
                return []

            async with aiofiles.open(self.log_path, "rb") as f:
                await f.seek(self._position)
                content = await f.read()
        except OSError as e:
            # Rotation can remove the file between the checks above
            logger.error(f"Error reading {self.log_path}: {e}", exc_info=True)
            return []

        complete = content.rfind(b"\n") + 1
        self._position += complete
        text = content[:complete].decode("utf-8", errors="ignore")
        return [line for line in text.splitlines() if line.strip()]
