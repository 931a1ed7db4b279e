"""Shared pytest fixtures for the post-to-Slack test suite."""

import pytest
import structlog

from slack_bot.environment import BuildContext

_OPTION_ENV_VARS = (
    "FL_POST_TO_SLACK_BOT_TOKEN",
    "SLACK_API_TOKEN",
    "FL_POST_TO_SLACK_API_TOKEN",
    "FL_POST_TO_SLACK_CHANNEL",
    "FL_POST_TO_SLACK_PRETEXT",
    "FL_POST_TO_SLACK_MESSAGE",
    "FL_POST_TO_SLACK_PAYLOAD",
    "FL_POST_TO_SLACK_DEFAULT_PAYLOADS",
    "FL_POST_TO_SLACK_ATTACHMENT_PROPERTIES",
    "FL_POST_TO_SLACK_SUCCESS",
)


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    """Keep host env vars and any local .env file out of the options."""
    for name in _OPTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def build_context() -> BuildContext:
    """A fully populated build context for testing."""
    return BuildContext(
        lane_name="ios beta",
        git_branch="main",
        git_author="dev@example.com",
        last_git_commit_message="Bump version to 2.4.0",
        last_git_commit_hash="a1b2c3d",
    )
