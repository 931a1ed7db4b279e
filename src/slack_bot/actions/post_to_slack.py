"""The post-to-Slack build action.

Formats a message with one attachment and posts it to any #channel or
@user through the Slack bot ``chat.postMessage`` API.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel

from slack_bot.config import (
    TOKEN_ENV,
    TOKEN_FALLBACK_ENV,
    PostToSlackOptions,
    load_options,
    validate_options,
)
from slack_bot.environment import BuildContext, collect_build_context
from slack_bot.slack.attachments import build_attachment, normalize_channel
from slack_bot.slack.client import SlackBotClient

logger = structlog.get_logger()

_ENV_PREFIX = "FL_POST_TO_SLACK_"
_SENSITIVE_OPTIONS = {"api_token"}


class OptionInfo(BaseModel):
    """Description of one action option, for help output and docs."""

    key: str
    env_name: str
    description: str
    sensitive: bool = False
    fallback_env_name: str | None = None


class PostToSlackAction:
    """Post a Slack message."""

    @classmethod
    def run(
        cls,
        options: PostToSlackOptions,
        context: BuildContext | None = None,
        client: SlackBotClient | None = None,
    ) -> bool:
        """Format and deliver one notification.

        Delivery problems are logged and never raised.

        Args:
            options: The notification options.
            context: Build-environment facts. Collected from git when omitted.
            client: Delivery client. Built from the options' token when omitted.

        Returns:
            True if the request completed, False if delivery raised.

        Raises:
            ConfigurationError: If no bot token is configured.
        """
        validate_options(options)
        logger.debug("post_to_slack_started", options=options.loggable())

        if context is None:
            context = collect_build_context()

        attachment = build_attachment(options, context)
        channel = normalize_channel(options.channel)

        if client is None:
            client = SlackBotClient(options.api_token.get_secret_value())
        return client.post_attachment(attachment, channel)

    @staticmethod
    def description() -> str:
        """Return the one-line summary of the action."""
        return "Post a slack message"

    @staticmethod
    def details() -> str:
        """Return the longer description shown in action help."""
        return (
            "Post a slack message to any #channel/@user using Slack bot "
            "chat postMessage api."
        )

    @staticmethod
    def authors() -> list[str]:
        """Return the action's authors."""
        return ["crazymanish"]

    @staticmethod
    def is_supported(platform: str) -> bool:
        """Return True: posting to Slack works for every platform."""
        return True

    @staticmethod
    def available_options() -> list[OptionInfo]:
        """Describe every option, in declaration order."""
        infos = []
        for key, field in PostToSlackOptions.model_fields.items():
            if key == "api_token":
                env_name, fallback = TOKEN_ENV, TOKEN_FALLBACK_ENV
            else:
                env_name, fallback = f"{_ENV_PREFIX}{key.upper()}", None
            infos.append(
                OptionInfo(
                    key=key,
                    env_name=env_name,
                    description=field.description or "",
                    sensitive=key in _SENSITIVE_OPTIONS,
                    fallback_env_name=fallback,
                )
            )
        return infos

    @staticmethod
    def example_code() -> list[str]:
        """Return usage examples for the action's documentation."""
        return [
            'post_to_slack(message="App successfully released!")',
            """post_to_slack(
    message="App successfully released!",
    channel="#channel",  # Optional, defaults to the bot's default conversation.
    success=True,        # Optional, defaults to True.
    payload={            # Optional, any number of your own fields.
        "Build Date": str(datetime.now()),
        "Built by": "Jenkins",
    },
    default_payloads=["git_branch", "git_author"],  # Optional whitelist of built-in fields.
                                                    # [] suppresses them all; omit for all of them.
    attachment_properties={  # Optional, deep-merged into the attachment.
        "thumb_url": "http://example.com/path/to/thumb.png",
        "fields": [{"title": "My Field", "value": "My Value", "short": True}],
    },
)""",
        ]


def post_to_slack(
    context: BuildContext | None = None,
    client: SlackBotClient | None = None,
    **options: Any,
) -> bool:
    """Run the action with options given as keyword arguments.

    Options not passed are read from the environment.

    Example::

        post_to_slack(message="App successfully released!")

    Raises:
        ConfigurationError: If an option is invalid or no token is configured.
    """
    return PostToSlackAction.run(load_options(**options), context=context, client=client)
