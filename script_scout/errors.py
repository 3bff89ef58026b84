"""Exception hierarchy shared by the crawler, the extractors and the CLI."""
from __future__ import annotations

__all__ = [
    "ScriptScoutError",
    "InputError",
    "TransientFetchError",
    "BrowserError",
    "NoScriptsFoundError",
]


class ScriptScoutError(Exception):
    """Base class for every error raised by ScriptScout."""


class InputError(ScriptScoutError, ValueError):
    """Empty or unparseable URL. Fatal for the invocation that supplied it."""


class TransientFetchError(ScriptScoutError):
    """Non-200 status or network failure; recovered at the fetch boundary."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserError(ScriptScoutError):
    """Headless browser launch, navigation or timeout failure."""


class NoScriptsFoundError(ScriptScoutError):
    """The DOM was inspected but yielded neither links nor inline code."""
