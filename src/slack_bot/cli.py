"""Command-line entry point for posting a build notification to Slack.

Every flag is optional; anything not given on the command line falls back
to the ``FL_POST_TO_SLACK_*`` environment variables.  The exit code does
not depend on whether delivery succeeded, so a notification problem never
fails the pipeline step.

Usage::

    post-to-slack --message "App successfully released!" --channel releases
    python -m slack_bot.cli --failure --default-payloads git_branch,git_author
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import structlog

from slack_bot.actions.post_to_slack import PostToSlackAction
from slack_bot.config import load_options
from slack_bot.domain.errors import ConfigurationError
from slack_bot.environment import collect_build_context

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def configure_logging(production: bool = False, verbose: bool = False) -> None:
    """Configure structlog to write to stderr, leaving stdout to the pipeline.

    Production mode (*production=True*): timestamped JSON lines tagged with
    the service name.  Otherwise: short console lines, colored only when
    stderr is a terminal.

    Args:
        production: Emit JSON instead of console lines.
        verbose: Include DEBUG events; INFO and above otherwise.
    """
    processors: list[structlog.types.Processor] = [structlog.stdlib.add_log_level]

    if production:
        processors = [
            structlog.contextvars.merge_contextvars,
            *processors,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
        structlog.contextvars.bind_contextvars(service="post-to-slack")
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _json_object(raw: str) -> dict[str, Any]:
    """argparse type for flags that take a JSON object."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON: {exc.msg}"
        raise argparse.ArgumentTypeError(msg) from None
    if not isinstance(value, dict):
        msg = "expected a JSON object"
        raise argparse.ArgumentTypeError(msg)
    return value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the post-to-Slack command.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        description="Post a slack message to any #channel/@user using the Slack bot API"
    )

    parser.add_argument("--message", type=str, help="The message to display on Slack")
    parser.add_argument("--channel", type=str, help="#channel or @username")
    parser.add_argument(
        "--pretext",
        type=str,
        help="Optional text shown above the attachment block",
    )
    parser.add_argument(
        "--payload",
        type=_json_object,
        help='Extra fields as a JSON object, e.g. \'{"Built by": "Jenkins"}\'',
    )
    parser.add_argument(
        "--default-payloads",
        type=str,
        help=(
            "Comma-separated whitelist of built-in fields (lane, test_result, "
            "git_branch, git_author, last_git_commit, last_git_commit_hash). "
            "Pass an empty string to suppress them all"
        ),
    )
    parser.add_argument(
        "--attachment-properties",
        type=_json_object,
        help="JSON object deep-merged into the Slack attachment",
    )
    parser.add_argument(
        "--failure",
        action="store_true",
        help="Report the build as failed (red attachment, 'Error' result)",
    )
    parser.add_argument("--lane", type=str, help="Name of the running lane")
    parser.add_argument(
        "--api-token",
        type=str,
        help="Slack bot token (default: FL_POST_TO_SLACK_BOT_TOKEN or SLACK_API_TOKEN)",
    )
    parser.add_argument(
        "--production",
        action="store_true",
        help="Emit timestamped JSON logs instead of console lines",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Include debug events in the log output",
    )

    return parser


def options_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the option overrides actually given on the command line.

    Args:
        args: Parsed arguments from :func:`build_parser`.

    Returns:
        Keyword arguments for ``load_options``.
    """
    overrides: dict[str, Any] = {}
    for key in (
        "message",
        "channel",
        "pretext",
        "payload",
        "default_payloads",
        "attachment_properties",
        "api_token",
    ):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    if args.failure:
        overrides["success"] = False
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, post the notification, and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(production=args.production, verbose=args.verbose)

    try:
        options = load_options(**options_from_args(args))
        context = collect_build_context(lane_name=args.lane)
        PostToSlackAction.run(options, context=context)
    except ConfigurationError as exc:
        logger.error("post_to_slack_not_configured", option=exc.option, reason=exc.reason)
        return EXIT_CONFIG_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
