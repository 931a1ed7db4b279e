"""Slack delivery client for posting attachments via chat.postMessage.

Performs exactly one synchronous HTTPS POST per notification.  Failures are
logged and swallowed so a notification problem never breaks the build.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"


def build_request_body(attachment: dict[str, Any], channel: str | None) -> dict[str, Any]:
    """Build the chat.postMessage body.

    The ``channel`` key is left out when no channel is given, so Slack posts
    to the bot's default conversation.
    """
    body: dict[str, Any] = {}
    if channel:
        body["channel"] = channel
    body["attachments"] = [attachment]
    return body


class SlackBotClient:
    """Posts a single attachment to Slack with a bot token.

    Sends with ``httpx``.  The response is not inspected (see
    ``post_attachment``).
    """

    def __init__(self, api_token: str, http_client: httpx.Client | None = None) -> None:
        """Initialize the SlackBotClient.

        Args:
            api_token: Slack bot token, sent as a bearer token.
            http_client: Optional ``httpx.Client`` to send the request with.
                When omitted, ``httpx.post`` is used with its default timeout.
        """
        self._api_token = api_token
        self._http = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_token}",
        }

    def post_attachment(self, attachment: dict[str, Any], channel: str | None = None) -> bool:
        """Post *attachment* to *channel*.

        Single attempt, no retry.  Any exception raised while serializing or
        sending is logged and swallowed.  When the request completes, success
        is reported regardless of the HTTP status or the ``ok`` flag in the
        response body.

        Args:
            attachment: The Slack attachment dict.
            channel: Normalized channel (``#name`` or ``@user``), or None.

        Returns:
            True if the request completed, False if it raised.
        """
        try:
            body = json.dumps(build_request_body(attachment, channel))
            logger.debug("posting_slack_message", channel=channel, url=SLACK_POST_MESSAGE_URL)
            if self._http is not None:
                self._http.post(SLACK_POST_MESSAGE_URL, headers=self._headers(), content=body)
            else:
                httpx.post(SLACK_POST_MESSAGE_URL, headers=self._headers(), content=body)
        except Exception as exc:
            logger.error("Failed to send Slack notification", channel=channel, error=str(exc))
            return False

        logger.info("Successfully sent Slack notification", channel=channel)
        return True
