"""Slack message formatting and delivery.

Provides the attachment builder, the generic deep merge used for
attachment properties, Slack link markup conversion, and the delivery
client for chat.postMessage.
"""

from slack_bot.slack.attachments import (
    build_attachment,
    build_default_fields,
    build_payload_fields,
    normalize_channel,
    normalize_newlines,
)
from slack_bot.slack.client import SLACK_POST_MESSAGE_URL, SlackBotClient, build_request_body
from slack_bot.slack.links import format_links
from slack_bot.slack.merge import deep_merge

__all__ = [
    "SLACK_POST_MESSAGE_URL",
    "SlackBotClient",
    "build_attachment",
    "build_default_fields",
    "build_payload_fields",
    "build_request_body",
    "deep_merge",
    "format_links",
    "normalize_channel",
    "normalize_newlines",
]
