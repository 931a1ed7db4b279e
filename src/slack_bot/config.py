"""Typed options for the post-to-Slack action using pydantic-settings.

Provides ``PostToSlackOptions``, backed by keyword arguments, environment
variables (``FL_POST_TO_SLACK_*``) and an optional ``.env`` file, a
``load_options()`` helper that turns validation failures into
``ConfigurationError``, and a ``validate_options()`` gate that enforces the
presence of the bot token.

IMPORTANT: the bot token is a ``SecretStr`` and is excluded from
``loggable()``.  Never log the options object through any other path.
"""

from __future__ import annotations

import json
from typing import Annotated, Any

import structlog
from pydantic import (
    AliasChoices,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from slack_bot.domain.errors import ConfigurationError
from slack_bot.domain.types import DefaultPayload

logger = structlog.get_logger()

TOKEN_ENV = "FL_POST_TO_SLACK_BOT_TOKEN"
TOKEN_FALLBACK_ENV = "SLACK_API_TOKEN"


class PostToSlackOptions(BaseSettings):
    """Parameters of one post-to-Slack invocation.

    Every field can be passed as a keyword argument or read from the
    environment.  Keyword arguments take precedence over the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="FL_POST_TO_SLACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(TOKEN_ENV, TOKEN_FALLBACK_ENV),
        description="Slack bot token",
    )
    channel: str | None = Field(default=None, description="#channel or @username")
    pretext: str | None = Field(
        default=None,
        description=(
            "Optional text that appears above the message attachment block. "
            "Supports the standard Slack markup language"
        ),
    )
    message: str | None = Field(
        default=None, description="The message that should be displayed on Slack"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional fields for the post, as a mapping of title to value",
    )
    default_payloads: Annotated[list[DefaultPayload] | None, NoDecode] = Field(
        default=None,
        description=(
            "Whitelist of built-in payloads to include. Empty means none, "
            "unset means all"
        ),
    )
    attachment_properties: dict[str, Any] = Field(
        default_factory=dict,
        description=(
            "Properties deep-merged into the Slack attachment, "
            "see https://api.slack.com/docs/attachments"
        ),
    )
    success: bool = Field(default=True, description="Was this successful? (true/false)")

    @field_validator("default_payloads", mode="before")
    @classmethod
    def _parse_default_payloads(cls, value: Any) -> Any:
        """Accept JSON arrays, comma lists and ``:symbol`` names; drop duplicates."""
        if value is None:
            return None
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                value = json.loads(stripped)
            else:
                value = stripped.split(",")
        if not isinstance(value, (list, tuple, set)):
            return value

        names: list[str] = []
        for item in value:
            name = str(item).strip().lstrip(":")
            if name and name not in names:
                names.append(name)
        return names

    @model_validator(mode="before")
    @classmethod
    def _prefer_explicit_token(cls, data: Any) -> Any:
        """Let an ``api_token`` keyword win over the token env vars."""
        if isinstance(data, dict) and "api_token" in data:
            env_keys = {TOKEN_ENV.lower(), TOKEN_FALLBACK_ENV.lower()}
            data = {key: value for key, value in data.items() if key.lower() not in env_keys}
        return data

    def loggable(self) -> dict[str, Any]:
        """Return the options as a plain dict with the bot token removed."""
        return self.model_dump(exclude={"api_token"})


def load_options(**overrides: Any) -> PostToSlackOptions:
    """Build options from keyword arguments and the environment.

    Args:
        **overrides: Option values that take precedence over the environment.

    Returns:
        The parsed ``PostToSlackOptions``.

    Raises:
        ConfigurationError: If any option fails validation.
    """
    try:
        return PostToSlackOptions(**overrides)
    except ValidationError as exc:
        # Inputs are left out: they may contain the token.
        errors = exc.errors(include_input=False, include_url=False)
        logger.error("options_validation_failed", errors=errors)
        first = errors[0]
        option = ".".join(str(part) for part in first["loc"]) or "options"
        raise ConfigurationError(option, first["msg"]) from exc


def validate_options(options: PostToSlackOptions) -> PostToSlackOptions:
    """Enforce presence of the Slack bot token.

    Args:
        options: The parsed options.

    Returns:
        The same options, for chaining.

    Raises:
        ConfigurationError: If no bot token was provided.
    """
    if not options.api_token.get_secret_value().strip():
        raise ConfigurationError(
            "api_token",
            f"no Slack bot token set (pass api_token, or set {TOKEN_ENV} "
            f"or {TOKEN_FALLBACK_ENV})",
        )
    return options
