"""Domain types and errors for the post-to-Slack action."""

from slack_bot.domain.errors import ConfigurationError, SlackBotError
from slack_bot.domain.types import (
    ALL_DEFAULT_PAYLOADS,
    AttachmentColor,
    DefaultPayload,
    color_for_result,
)

__all__ = [
    "ALL_DEFAULT_PAYLOADS",
    "AttachmentColor",
    "ConfigurationError",
    "DefaultPayload",
    "SlackBotError",
    "color_for_result",
]
