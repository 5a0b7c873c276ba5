"""Slack webhook support."""

from .client import SlackClient, SlackError
from .webhook import WebhookPayload

__all__ = [
    "SlackClient",
    "SlackError",
    "WebhookPayload",
]
