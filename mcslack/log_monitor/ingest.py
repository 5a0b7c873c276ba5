"""Forwarding of server log messages to Slack."""

from datetime import datetime, timedelta, timezone
from typing import AsyncIterable, Optional, Protocol

from ..logger import log_exception, logger
from .classifier import EventCategory, MessageClassifier
from .parser import LogMessage, UnparsableError, parse_log_line


class StaleMessageError(ValueError):
    """A log message is too far in the past or future to forward."""


class Poster(Protocol):
    async def post(self, text: str, timeout: float) -> None: ...


def check_freshness(
    message: LogMessage, tolerance: timedelta, now: Optional[datetime] = None
) -> None:
    """Raise StaleMessageError when `message` is more than `tolerance` away
    from `now` in either direction."""
    now = now or datetime.now(timezone.utc)
    if abs(now - message.timestamp) > tolerance:
        raise StaleMessageError(
            f"message at {message.timestamp.isoformat()} is outside "
            f"{tolerance} of {now.isoformat()}"
        )


class LogIngestor:
    """Reads log lines in order and posts the interesting ones to chat.

    Each line is handled to completion before the next is read, so chat
    posts keep the order of the log. Delivery is best effort: a failed post
    is logged and dropped.
    """

    def __init__(
        self,
        poster: Poster,
        classifier: MessageClassifier,
        tolerance: timedelta,
        post_timeout: float,
    ):
        self.poster = poster
        self.classifier = classifier
        self.tolerance = tolerance
        self.post_timeout = post_timeout

    async def run(self, lines: AsyncIterable[str]) -> int:
        """Process every line from `lines` and return how many were posted."""
        forwarded = 0
        async for line in lines:
            if await self.process_line(line):
                forwarded += 1
        logger.info(f"Log stream ended, {forwarded} messages forwarded")
        return forwarded

    async def process_line(self, line: str, now: Optional[datetime] = None) -> bool:
        """Parse, filter and classify one line, posting it if it matches.

        Returns:
            True if the message was posted successfully
        """
        try:
            message = parse_log_line(line, now=now)
            check_freshness(message, self.tolerance, now=now)
        except UnparsableError:
            logger.warning(f"Skipping unparsable message: {line!r}")
            return False
        except StaleMessageError:
            logger.warning(f"Skipping message too far into past/future: {line!r}")
            return False

        category = self.classifier.classify(message.message)
        if category is EventCategory.NONE:
            return False

        logger.debug(f"Forwarding {category.value} message: {message.message}")
        return await self._post(message.message)

    @log_exception("Posting to Slack", default_return=False)
    async def _post(self, text: str) -> bool:
        await self.poster.post(text, self.post_timeout)
        return True
