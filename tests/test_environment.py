"""Tests for build-context collection from git.

subprocess.run is patched, so no git binary or repository is needed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from slack_bot.environment import BuildContext, collect_build_context

GIT_OUTPUT = {
    ("symbolic-ref", "--short", "HEAD"): "feature/login\n",
    ("log", "-1", "--format=%ae"): "dev@example.com\n",
    ("log", "-1", "--format=%B"): "Fix login crash\n\nCloses #12\n",
    ("log", "-1", "--format=%h"): "a1b2c3d\n",
}


def _fake_git(outputs: dict, failing: set | None = None):
    """Build a subprocess.run replacement serving canned git output."""
    failing = failing or set()

    def run(cmd, **kwargs):
        args = tuple(cmd[1:])
        if args in failing:
            raise subprocess.CalledProcessError(128, cmd, stderr="fatal")
        return subprocess.CompletedProcess(cmd, 0, stdout=outputs.get(args, ""), stderr="")

    return run


class TestCollectBuildContext:
    def test_collects_all_facts(self) -> None:
        with patch("slack_bot.environment.subprocess.run", side_effect=_fake_git(GIT_OUTPUT)):
            context = collect_build_context(lane_name="beta")

        assert context == BuildContext(
            lane_name="beta",
            git_branch="feature/login",
            git_author="dev@example.com",
            last_git_commit_message="Fix login crash\n\nCloses #12",
            last_git_commit_hash="a1b2c3d",
        )

    def test_runs_in_repo_path(self, tmp_path: Path) -> None:
        with patch(
            "slack_bot.environment.subprocess.run", side_effect=_fake_git(GIT_OUTPUT)
        ) as mock_run:
            collect_build_context(repo_path=tmp_path)

        assert mock_run.call_count == 4
        assert all(c.kwargs["cwd"] == tmp_path for c in mock_run.call_args_list)
        assert all(c.args[0][0] == "git" for c in mock_run.call_args_list)

    def test_detached_head_leaves_branch_unknown(self) -> None:
        failing = {("symbolic-ref", "--short", "HEAD")}
        with patch(
            "slack_bot.environment.subprocess.run", side_effect=_fake_git(GIT_OUTPUT, failing)
        ):
            context = collect_build_context()

        assert context.git_branch is None
        assert context.last_git_commit_hash == "a1b2c3d"

    def test_git_missing_yields_empty_context(self) -> None:
        with patch("slack_bot.environment.subprocess.run", side_effect=FileNotFoundError("git")):
            context = collect_build_context(lane_name="beta")

        assert context == BuildContext(lane_name="beta")

    def test_empty_output_is_unknown(self) -> None:
        with patch("slack_bot.environment.subprocess.run", side_effect=_fake_git({})):
            context = collect_build_context()

        assert context.git_author is None

    def test_undecodable_commit_message_leaves_fact_unknown(self) -> None:
        fake = _fake_git(GIT_OUTPUT)

        def run(cmd, **kwargs):
            if tuple(cmd[1:]) == ("log", "-1", "--format=%B"):
                raise UnicodeDecodeError("utf-8", b"Caf\xe9 fix", 3, 4, "invalid continuation byte")
            return fake(cmd, **kwargs)

        with patch("slack_bot.environment.subprocess.run", side_effect=run):
            context = collect_build_context(lane_name="beta")

        assert context.last_git_commit_message is None
        assert context.git_branch == "feature/login"
        assert context.git_author == "dev@example.com"
        assert context.last_git_commit_hash == "a1b2c3d"

    def test_output_decoded_leniently(self) -> None:
        with patch(
            "slack_bot.environment.subprocess.run", side_effect=_fake_git(GIT_OUTPUT)
        ) as mock_run:
            collect_build_context()

        for call in mock_run.call_args_list:
            assert call.kwargs["encoding"] == "utf-8"
            assert call.kwargs["errors"] == "replace"


def test_build_context_is_read_only() -> None:
    context = BuildContext(git_branch="main")

    with pytest.raises(ValidationError):
        context.git_branch = "other"  # type: ignore[misc]
