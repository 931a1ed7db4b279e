"""Slack attachment builder for build notifications.

Pure functions: the build environment arrives as a ``BuildContext`` and the
result is a plain dict ready for ``chat.postMessage``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from slack_bot.config import PostToSlackOptions
from slack_bot.domain.types import ALL_DEFAULT_PAYLOADS, DefaultPayload, color_for_result
from slack_bot.environment import BuildContext
from slack_bot.slack.links import format_links
from slack_bot.slack.merge import deep_merge

MRKDWN_IN = ["pretext", "text", "fields"]


def normalize_newlines(text: str | None) -> str | None:
    r"""Replace each literal ``\n`` escape with a real newline."""
    if text is None:
        return None
    return text.replace("\\n", "\n")


def normalize_channel(channel: str | None) -> str | None:
    """Prefix bare channel names with ``#``.

    Names already starting with ``#`` or ``@`` are returned unchanged.  An
    empty or missing channel yields ``None`` (post to the bot's default).
    """
    if not channel:
        return None
    if channel[0] in ("#", "@"):
        return channel
    return f"#{channel}"


def _field(title: str, value: str | None, short: bool) -> dict[str, Any]:
    return {"title": title, "value": value or "", "short": short}


# Built-in field factories, keyed by payload name.
_BUILTIN_FIELDS: dict[
    DefaultPayload, Callable[[BuildContext, bool], dict[str, Any]]
] = {
    DefaultPayload.LANE: lambda ctx, _: _field("Lane", ctx.lane_name, True),
    DefaultPayload.TEST_RESULT: lambda _, success: _field(
        "Result", "Success" if success else "Error", True
    ),
    DefaultPayload.GIT_BRANCH: lambda ctx, _: _field("Git Branch", ctx.git_branch, True),
    DefaultPayload.GIT_AUTHOR: lambda ctx, _: _field("Git Author", ctx.git_author, True),
    DefaultPayload.LAST_GIT_COMMIT: lambda ctx, _: _field(
        "Git Commit", ctx.last_git_commit_message, False
    ),
    DefaultPayload.LAST_GIT_COMMIT_HASH: lambda ctx, _: _field(
        "Git Commit Hash", ctx.last_git_commit_hash, False
    ),
}


def build_default_fields(
    context: BuildContext,
    success: bool,
    default_payloads: list[DefaultPayload] | None = None,
) -> list[dict[str, Any]]:
    """Build the built-in fields allowed by *default_payloads*.

    Fields always come out in canonical order, whatever order the whitelist
    lists them in.

    Args:
        context: Build-environment facts.
        success: Whether the build succeeded.
        default_payloads: Whitelist of built-in fields. ``None`` includes all
            of them, an empty list includes none.

    Returns:
        List of ``{title, value, short}`` field dicts.
    """
    allowed = set(ALL_DEFAULT_PAYLOADS if default_payloads is None else default_payloads)
    return [
        _BUILTIN_FIELDS[payload](context, success)
        for payload in ALL_DEFAULT_PAYLOADS
        if payload in allowed
    ]


def _payload_value(value: Any) -> str:
    """Render a payload value: None is empty, booleans are lowercase."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_payload_fields(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Build one long field per payload entry, in insertion order."""
    return [
        {"title": str(title), "value": format_links(_payload_value(value)), "short": False}
        for title, value in payload.items()
    ]


def build_attachment(
    options: PostToSlackOptions,
    context: BuildContext | None = None,
) -> dict[str, Any]:
    """Build the Slack attachment for a notification.

    The generated attachment holds the message, pretext, a color for the
    build outcome, the built-in fields and the payload fields.
    ``attachment_properties`` is then deep-merged on top, so its ``fields``
    are appended after the generated ones and its scalars win.

    Args:
        options: The notification options.
        context: Build-environment facts. Defaults to an empty context.

    Returns:
        The attachment dict.
    """
    context = context or BuildContext()

    # Newline normalization must run before link formatting.
    message = format_links(normalize_newlines(options.message) or "")
    pretext = normalize_newlines(options.pretext)

    fields = build_default_fields(context, options.success, options.default_payloads)
    fields += build_payload_fields(options.payload)

    attachment: dict[str, Any] = {
        "fallback": message,
        "text": message,
        "pretext": pretext,
        "color": str(color_for_result(options.success)),
        "mrkdwn_in": list(MRKDWN_IN),
        "fields": fields,
    }

    return deep_merge(attachment, options.attachment_properties)
