"""Directional, bounded keyword search.

The matcher walks candidate occurrences of the compiled pattern from the
buffer's cursor and returns the first one lying in an accepted lexical
context: anywhere in a text-like buffer, otherwise only inside comments and
strings. Rejected candidates are stepped over, never returned.

Each iteration moves strictly past the previous candidate, so a search
performs at most ``len(buffer) + 1`` iterations. Supplying ``bound`` caps
the work further and is the way to keep latency predictable on very large
buffers.

Thread Safety:
    Matcher holds no per-search state; the cursor lives on the buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from todomark.compiler import KEYWORD_GROUP, KEYWORD_WITH_PUNCT_GROUP

if TYPE_CHECKING:
    import re

    from todomark.buffer import TextSource
    from todomark.compiler import CompiledPattern
    from todomark.context import ContextOracle


class Direction(Enum):
    """Scan direction."""

    FORWARD = auto()
    BACKWARD = auto()


@dataclass(frozen=True, slots=True)
class Match:
    """One keyword occurrence.

    Attributes:
        start: Start of the highlighted range (keyword start)
        end: End of the highlighted range (after trailing punctuation)
        keyword_start: Start of the bare keyword
        keyword_end: End of the bare keyword
        keyword_text: The bare keyword as it appears in the text
        trailing_punct: Punctuation consumed after the keyword, if any
    """

    start: int
    end: int
    keyword_start: int
    keyword_end: int
    keyword_text: str
    trailing_punct: str | None = None

    @classmethod
    def from_regex(cls, m: re.Match[str]) -> Match:
        """Build a Match from a match of a compiled keyword pattern."""
        start, end = m.span(KEYWORD_WITH_PUNCT_GROUP)
        kw_start, kw_end = m.span(KEYWORD_GROUP)
        punct = m.string[kw_end:end]
        return cls(
            start=start,
            end=end,
            keyword_start=kw_start,
            keyword_end=kw_end,
            keyword_text=m.group(KEYWORD_GROUP),
            trailing_punct=punct or None,
        )


class Matcher:
    """Finds keyword occurrences in accepted contexts.

    Usage:
        >>> matcher = Matcher(compiled, SpanContextOracle([(7, 20)]))
        >>> buf = TextBuffer("x = 1  # TODO: fix")
        >>> matcher.search(buf)
        Match(start=9, end=13, ...)

    A matcher built with ``compiled=None`` is disabled and never matches.
    """

    __slots__ = ("compiled", "oracle")

    def __init__(self, compiled: CompiledPattern | None, oracle: ContextOracle) -> None:
        self.compiled = compiled
        self.oracle = oracle

    @property
    def enabled(self) -> bool:
        return self.compiled is not None

    def accepts(self, offset: int) -> bool:
        """True if a match starting at ``offset`` is in an accepted context."""
        return self.oracle.is_text_like() or self.oracle.is_inside_comment_or_string(offset)

    def search(
        self,
        buffer: TextSource,
        direction: Direction = Direction.FORWARD,
        bound: int | None = None,
    ) -> Match | None:
        """Find the next accepted keyword from the buffer's cursor.

        Args:
            buffer: Text source; its cursor is the starting point
            direction: Scan direction
            bound: Forward: matches must end at or before it. Backward:
                matches must start at or after it.

        Returns:
            The accepted match, or None. The cursor is left at the returned
            match (its end going forward, its start going backward); when
            nothing is accepted it stays at the last rejected candidate.
        """
        if self.compiled is None:
            return None
        forward = direction is Direction.FORWARD
        if bound is not None and (bound < buffer.point if forward else bound > buffer.point):
            return None

        regex = self.compiled.regex
        for _ in range(len(buffer) + 1):
            before = buffer.point
            if forward:
                m = buffer.search_forward(regex, bound, keep_group=KEYWORD_GROUP)
            else:
                m = buffer.search_backward(regex, bound, keep_group=KEYWORD_GROUP)
            if m is None:
                return None
            if self.accepts(m.start(KEYWORD_WITH_PUNCT_GROUP)):
                return Match.from_regex(m)
            if buffer.point == before:
                # Empty candidate at the cursor; step over it
                if (forward and before >= len(buffer)) or (not forward and before == 0):
                    return None
                buffer.point = before + 1 if forward else before - 1
        return None


__all__ = [
    "Direction",
    "Match",
    "Matcher",
]
