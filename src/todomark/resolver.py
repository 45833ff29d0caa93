"""Map matched keyword text back to its configured style.

The compiled alternation reports which text matched, not which entry
produced it. The resolver recovers the entry by trying each entry's
pattern, in configuration order, as a full match against the text.
Matching is case-sensitive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from todomark.styles import Style, derive_style
from todomark.utils.logger import get_logger

if TYPE_CHECKING:
    from todomark.compiler import CompiledPattern
    from todomark.config import KeywordEntry

logger = get_logger(__name__)


class StyleResolver:
    """Resolves keyword text to a Style.

    Usage:
        >>> resolver = StyleResolver(compiled)
        >>> resolver.resolve("FIXME")
        Style(foreground='#cc9393', ..., bold=True, inherit='todomark')
    """

    __slots__ = ("compiled",)

    def __init__(self, compiled: CompiledPattern) -> None:
        self.compiled = compiled

    def entry_for(self, keyword_text: str) -> KeywordEntry | None:
        """First entry whose pattern fully matches ``keyword_text``."""
        for entry, matcher in zip(self.compiled.entries, self.compiled.matchers):
            if matcher.fullmatch(keyword_text) is not None:
                return entry
        return None

    def resolve(self, keyword_text: str) -> Style | None:
        """Style for ``keyword_text``, or None if no entry fully matches."""
        entry = self.entry_for(keyword_text)
        if entry is None:
            logger.debug("No keyword entry fully matches %r", keyword_text)
            return None
        return derive_style(entry.style, background=self.compiled.config.color_background)


__all__ = [
    "StyleResolver",
]
