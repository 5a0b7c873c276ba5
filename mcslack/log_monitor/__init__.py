"""
Server log processing for mc-slack-bridge.

Parses Minecraft server log lines and classifies their messages.
"""

from .classifier import EventCategory, MessageClassifier
from .parser import LogMessage, UnparsableError, parse_log_line
from .patterns import ClassifierConfig

__all__ = [
    "ClassifierConfig",
    "EventCategory",
    "LogMessage",
    "MessageClassifier",
    "UnparsableError",
    "parse_log_line",
]
