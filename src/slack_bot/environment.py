"""Build-environment facts used by the built-in attachment fields.

``BuildContext`` is a read-only snapshot passed explicitly into the
attachment builder, so formatting never touches git or global state.
``collect_build_context()`` fills it from the local git checkout.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger()


class BuildContext(BaseModel):
    """Facts about the current build, any of which may be unknown."""

    model_config = ConfigDict(frozen=True)

    lane_name: str | None = None
    git_branch: str | None = None
    git_author: str | None = None
    last_git_commit_message: str | None = None
    last_git_commit_hash: str | None = None


def _git(args: list[str], repo_path: Path | None) -> str | None:
    """Run a git command and return its stripped stdout, or None on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except (OSError, subprocess.CalledProcessError, UnicodeDecodeError) as exc:
        logger.debug("git_lookup_failed", args=args, error=str(exc))
        return None
    output = result.stdout.strip()
    return output or None


def collect_build_context(
    lane_name: str | None = None,
    repo_path: Path | None = None,
) -> BuildContext:
    """Collect git facts for the checkout at *repo_path*.

    Never raises: facts that cannot be determined (git missing, not a
    repository, detached HEAD) are left as ``None``.

    Args:
        lane_name: Name of the running lane, if any.
        repo_path: Repository directory. Defaults to the working directory.

    Returns:
        A populated ``BuildContext``.
    """
    return BuildContext(
        lane_name=lane_name,
        git_branch=_git(["symbolic-ref", "--short", "HEAD"], repo_path),
        git_author=_git(["log", "-1", "--format=%ae"], repo_path),
        last_git_commit_message=_git(["log", "-1", "--format=%B"], repo_path),
        last_git_commit_hash=_git(["log", "-1", "--format=%h"], repo_path),
    )
