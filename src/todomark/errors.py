"""Exception classes for todomark.

Provides standardized exceptions for error handling throughout todomark.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from todomark.config import KeywordEntry


class TodomarkError(Exception):
    """Base exception for all todomark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(TodomarkError):
    """Keyword configuration cannot be turned into a matching pattern."""

    pass


class EmptyConfigError(ConfigError):
    """No usable keyword entries remain after sanitizing the configuration.

    Callers treat this as "no keywords configured": matching is disabled,
    nothing is reported to the end user.
    """

    def __init__(self, message: str = "no keywords configured") -> None:
        super().__init__(message)


class InvalidPatternError(ConfigError):
    """A keyword entry's pattern failed to compile.

    The whole pattern build fails; a single bad entry is never dropped,
    because the order of the alternation decides which keyword wins.
    """

    def __init__(self, entry: KeywordEntry, reason: str) -> None:
        """Initialize invalid pattern error.

        Args:
            entry: The offending keyword entry
            reason: Message from the regular expression compiler
        """
        self.entry = entry
        self.reason = reason
        super().__init__(f"Keyword pattern {entry.pattern!r}: {reason}")


class NoMoreMatchesError(TodomarkError):
    """Keyword navigation ran out of matches."""

    def __init__(self, message: str = "No more matches") -> None:
        super().__init__(message)
