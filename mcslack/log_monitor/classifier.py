"""Classification of log messages into the categories forwarded to chat."""

import re
from enum import Enum
from functools import cache
from typing import Iterable, List

from .patterns import ClassifierConfig


class EventCategory(str, Enum):
    CHAT = "chat"
    JOIN_LEAVE = "join_leave"
    DEATH = "death"
    ADVANCEMENT = "advancement"
    NONE = "none"


def _compile(patterns: Iterable[str]) -> List[re.Pattern[str]]:
    return [re.compile(pattern) for pattern in patterns]


def _matches_any(rules: List[re.Pattern[str]], message: str) -> bool:
    return any(rule.fullmatch(message) for rule in rules)


class MessageClassifier:
    """Matches messages against the compiled message catalog."""

    def __init__(self, config: ClassifierConfig):
        self._join_leave = _compile(config.join_leave_patterns)
        self._death = _compile(config.death_patterns)
        self._advancement = _compile(config.advancement_patterns)

    def is_chat(self, message: str) -> bool:
        # Chat lines look like "<player> text"
        return message.startswith("<")

    def is_join_leave(self, message: str) -> bool:
        return _matches_any(self._join_leave, message)

    def is_death(self, message: str) -> bool:
        return _matches_any(self._death, message)

    def is_advancement(self, message: str) -> bool:
        return _matches_any(self._advancement, message)

    def classify(self, message: str) -> EventCategory:
        """Return the first matching category, testing chat, join/leave,
        death and advancement in that order."""
        if self.is_chat(message):
            return EventCategory.CHAT
        if self.is_join_leave(message):
            return EventCategory.JOIN_LEAVE
        if self.is_death(message):
            return EventCategory.DEATH
        if self.is_advancement(message):
            return EventCategory.ADVANCEMENT
        return EventCategory.NONE


@cache
def default_classifier() -> MessageClassifier:
    """Classifier built from the configured message catalog."""
    from ..config import settings

    return MessageClassifier(settings.classifier)


def is_chat_message(message: str) -> bool:
    return default_classifier().is_chat(message)


def is_join_leave_message(message: str) -> bool:
    return default_classifier().is_join_leave(message)


def is_death_message(message: str) -> bool:
    return default_classifier().is_death(message)


def is_advancement_message(message: str) -> bool:
    return default_classifier().is_advancement(message)


def classify_message(message: str) -> EventCategory:
    return default_classifier().classify(message)
