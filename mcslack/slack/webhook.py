"""Payload sent by Slack outgoing webhooks."""

from typing import Mapping

from pydantic import BaseModel, Field


class WebhookPayload(BaseModel):
    token: str = Field(default="", description="Verification token of the webhook")
    user_name: str = Field(default="", description="Slack user who wrote the message")
    text: str = Field(default="", description="Message text")

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "WebhookPayload":
        """Build a payload from form fields, ignoring unknown ones."""
        return cls(
            token=form.get("token", ""),
            user_name=form.get("user_name", ""),
            text=form.get("text", ""),
        )
