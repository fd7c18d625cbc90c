"""Exceptions raised by the menu parsing package."""

from typing import Optional


class MenuParseError(Exception):
    """Base class for menu parsing failures."""


class RuleConfigError(MenuParseError):
    """A rule table file is structurally invalid."""


class LLMUnavailableError(MenuParseError):
    """The chat-completion service is not configured or could not be reached."""


class LLMResponseError(MenuParseError):
    """The chat-completion service answered with an unusable payload."""

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response
