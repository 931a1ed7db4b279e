"""Rewrite HTML and Markdown links into Slack's ``<url|label>`` markup."""

import re

_HTML_LINK = re.compile(
    r"<a\b[^>]*?href=['\"](?P<url>.+?)['\"][^>]*>(?P<label>.+?)</a>",
    re.IGNORECASE | re.DOTALL,
)

# [label](https://...) or [label](mailto:...)
_MARKDOWN_LINK = re.compile(
    r"\[(?P<label>[^\[\]]+?)\]\((?P<url>(?:https?://|mailto:)[^\s)]+)\)"
)


def _to_slack(match: re.Match[str]) -> str:
    return f"<{match.group('url')}|{match.group('label')}>"


def format_links(text: str) -> str:
    """Convert links in *text* to Slack markup.

    Bare URLs are left alone; Slack links them on its own.

    >>> format_links('See [the build](https://ci.example.com/42)')
    'See <https://ci.example.com/42|the build>'
    """
    text = _HTML_LINK.sub(_to_slack, text)
    return _MARKDOWN_LINK.sub(_to_slack, text)
