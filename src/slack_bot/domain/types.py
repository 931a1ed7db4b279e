"""Domain enumerations for the post-to-Slack action."""

from enum import StrEnum


class DefaultPayload(StrEnum):
    """Built-in attachment fields derived from the build environment.

    Declaration order is the order the fields appear in the attachment.
    """

    LANE = "lane"
    TEST_RESULT = "test_result"
    GIT_BRANCH = "git_branch"
    GIT_AUTHOR = "git_author"
    LAST_GIT_COMMIT = "last_git_commit"
    LAST_GIT_COMMIT_HASH = "last_git_commit_hash"


class AttachmentColor(StrEnum):
    """Slack attachment colors for build outcomes."""

    GOOD = "good"
    DANGER = "danger"


ALL_DEFAULT_PAYLOADS: tuple[DefaultPayload, ...] = tuple(DefaultPayload)


def color_for_result(success: bool) -> AttachmentColor:
    """Return the attachment color for a build outcome."""
    return AttachmentColor.GOOD if success else AttachmentColor.DANGER
