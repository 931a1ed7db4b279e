"""Tests for domain enumerations."""

import pytest

from slack_bot.domain.types import (
    ALL_DEFAULT_PAYLOADS,
    AttachmentColor,
    DefaultPayload,
    color_for_result,
)


class TestDefaultPayloadEnum:
    """Tests for the DefaultPayload enum."""

    def test_has_exactly_six_members(self):
        assert len(DefaultPayload) == 6

    def test_canonical_order(self):
        assert [str(p) for p in ALL_DEFAULT_PAYLOADS] == [
            "lane",
            "test_result",
            "git_branch",
            "git_author",
            "last_git_commit",
            "last_git_commit_hash",
        ]

    def test_from_string(self):
        assert DefaultPayload("git_branch") == DefaultPayload.GIT_BRANCH

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            DefaultPayload("git_tag")


class TestColorForResult:
    """Tests for mapping build outcomes to attachment colors."""

    def test_success_is_good(self):
        assert color_for_result(True) == AttachmentColor.GOOD
        assert str(color_for_result(True)) == "good"

    def test_failure_is_danger(self):
        assert color_for_result(False) == AttachmentColor.DANGER
        assert str(color_for_result(False)) == "danger"
