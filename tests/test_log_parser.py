"""Test cases for parsing Minecraft server log lines."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from mcslack.log_monitor import LogMessage, UnparsableError, parse_log_line

NOW = datetime(2024, 3, 9, 14, 6, 0, tzinfo=timezone.utc)


class TestParseLogLine:
    def test_chat_line(self):
        msg = parse_log_line("[14:05:22] [Server thread/INFO]: <Alice> hello", now=NOW)

        assert msg == LogMessage(
            timestamp=datetime(2024, 3, 9, 14, 5, 22, tzinfo=timezone.utc),
            source="Server thread",
            level="INFO",
            message="<Alice> hello",
        )

    def test_source_with_spaces_and_number(self):
        msg = parse_log_line(
            "[00:36:01] [User Authenticator #0/INFO]: UUID of player HermesImpact is d217394f-fb8a-4bde-95ad-9a5dd75ac0d9",
            now=NOW,
        )

        assert msg.source == "User Authenticator #0"
        assert msg.level == "INFO"
        assert msg.message.startswith("UUID of player HermesImpact")

    def test_warn_level(self):
        msg = parse_log_line(
            "[23:59:59] [Server thread/WARN]: Can't keep up! Is the server overloaded?",
            now=NOW,
        )

        assert msg.level == "WARN"
        assert msg.timestamp == datetime(2024, 3, 9, 23, 59, 59, tzinfo=timezone.utc)

    def test_trailing_newline_is_ignored(self):
        msg = parse_log_line("[14:05:22] [Server thread/INFO]: Bob joined the game\n", now=NOW)

        assert msg.message == "Bob joined the game"

    def test_empty_message(self):
        msg = parse_log_line("[14:05:22] [Server thread/INFO]: ", now=NOW)

        assert msg.message == ""

    def test_date_comes_from_now(self):
        """The time of day is always placed on the current date, even across midnight."""
        just_after_midnight = datetime(2024, 3, 10, 0, 0, 5, tzinfo=timezone.utc)

        msg = parse_log_line(
            "[23:59:58] [Server thread/INFO]: Bob left the game", now=just_after_midnight
        )

        assert msg.timestamp == datetime(2024, 3, 10, 23, 59, 58, tzinfo=timezone.utc)

    def test_defaults_to_current_utc_date(self):
        msg = parse_log_line("[12:00:00] [Server thread/INFO]: Done!")

        assert msg.timestamp.tzinfo == timezone.utc
        assert msg.timestamp.date() == datetime.now(timezone.utc).date()

    def test_message_is_immutable(self):
        msg = parse_log_line("[14:05:22] [Server thread/INFO]: Done!", now=NOW)

        with pytest.raises(ValidationError):
            msg.message = "changed"

    @pytest.mark.parametrize(
        "line",
        [
            "hello world",
            "",
            "[14:05:22] Server thread/INFO: missing brackets",
            "[14:05:22] [Server thread INFO]: no slash",
            "[14:05] [Server thread/INFO]: short time",
            "[24Jan2024 11:08:33.562] [Server thread/INFO] [net.minecraft/]: forge style",
            "  [14:05:22] [Server thread/INFO]: leading spaces",
        ],
    )
    def test_unparsable_lines(self, line):
        with pytest.raises(UnparsableError):
            parse_log_line(line, now=NOW)

    @pytest.mark.parametrize("time_str", ["24:00:00", "12:60:00", "12:00:61"])
    def test_invalid_time_of_day(self, time_str):
        with pytest.raises(UnparsableError, match="invalid time"):
            parse_log_line(f"[{time_str}] [Server thread/INFO]: Done!", now=NOW)
