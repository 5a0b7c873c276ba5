"""Parser for Minecraft server log lines."""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

LOG_LINE_PATTERN = re.compile(r"\[(\d{2}:\d{2}:\d{2})\] \[(.*)/(.*)\]: (.*)")


class UnparsableError(ValueError):
    """A log line does not have the `[HH:MM:SS] [source/level]: message` shape."""


class LogMessage(BaseModel):
    """One parsed server log line."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="When the line was logged (UTC)")
    source: str = Field(..., description="Thread or component, e.g. 'Server thread'")
    level: str = Field(..., description="Log level, e.g. 'INFO'")
    message: str = Field(..., description="Text after the header")


def parse_log_line(line: str, now: Optional[datetime] = None) -> LogMessage:
    """Parse a log line such as `[14:05:22] [Server thread/INFO]: <Alice> hello`.

    Server logs only carry the time of day, so the date is taken from `now`
    (the current UTC time by default). Lines logged before midnight and read
    after it end up a day off.

    Raises:
        UnparsableError: the line does not match or the time is invalid
    """
    match = LOG_LINE_PATTERN.fullmatch(line.rstrip("\r\n"))
    if match is None:
        raise UnparsableError(f"unparsable log line: {line!r}")

    time_str, source, level, message = match.groups()
    try:
        time_of_day = datetime.strptime(time_str, "%H:%M:%S").time()
    except ValueError as e:
        raise UnparsableError(f"invalid time {time_str!r} in log line") from e

    today = (now or datetime.now(timezone.utc)).astimezone(timezone.utc).date()
    return LogMessage(
        timestamp=datetime.combine(today, time_of_day, tzinfo=timezone.utc),
        source=source,
        level=level,
        message=message,
    )
