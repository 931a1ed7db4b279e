"""Domain-specific exception classes for the post-to-Slack action."""


class SlackBotError(Exception):
    """Base class for all errors raised by the post-to-Slack action."""


class ConfigurationError(SlackBotError):
    """Raised when a required option is missing or invalid.

    Attributes:
        option: Name of the offending option. Its value is never included
            in the message, since options may hold secrets.
    """

    def __init__(self, option: str, reason: str) -> None:
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid option '{option}': {reason}")
