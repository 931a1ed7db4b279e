"""Build actions provided by this plugin."""

from slack_bot.actions.post_to_slack import OptionInfo, PostToSlackAction, post_to_slack

__all__ = ["OptionInfo", "PostToSlackAction", "post_to_slack"]
