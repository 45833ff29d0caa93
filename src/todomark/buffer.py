"""In-memory text buffer with a cursor.

The matcher needs random access to characters and regular expression
searches from an arbitrary offset in either direction. ``TextSource``
describes that surface; ``TextBuffer`` implements it over a ``str``.

Cursor conventions:
    - A forward search leaves the cursor at the end of the match.
    - A backward search leaves the cursor at the start of the match.
    - A failed search leaves the cursor where it was.
"""

from __future__ import annotations

import re
from typing import Protocol


class TextSource(Protocol):
    """Text with a movable cursor and directional regex search."""

    point: int

    def __len__(self) -> int: ...

    def char_at(self, offset: int) -> str:
        """Character at ``offset``, or ``""`` outside the buffer."""
        ...

    def looking_at(self, regex: re.Pattern[str]) -> re.Match[str] | None:
        """Match anchored at the cursor, without moving it."""
        ...

    def search_forward(
        self,
        regex: re.Pattern[str],
        bound: int | None = None,
        *,
        keep_group: int | None = None,
    ) -> re.Match[str] | None:
        """Find the next match starting at or after the cursor."""
        ...

    def search_backward(
        self,
        regex: re.Pattern[str],
        bound: int | None = None,
        *,
        keep_group: int | None = None,
    ) -> re.Match[str] | None:
        """Find the closest match starting before the cursor."""
        ...


class TextBuffer:
    """Mutable text with a cursor.

    Usage:
        >>> buf = TextBuffer("x = 1  # TODO: name")
        >>> buf.search_forward(re.compile("TODO"))
        <re.Match object; span=(9, 13), match='TODO'>
        >>> buf.point
        13

    Thread Safety:
        Not thread-safe. One buffer belongs to one editing loop.
    """

    __slots__ = ("_text", "_point")

    def __init__(self, text: str = "", point: int = 0) -> None:
        self._text = text
        self._point = 0
        self.point = point

    @property
    def text(self) -> str:
        return self._text

    @property
    def point(self) -> int:
        """Cursor offset, clamped to ``[0, len(text)]``."""
        return self._point

    @point.setter
    def point(self, offset: int) -> None:
        self._point = max(0, min(offset, len(self._text)))

    def __len__(self) -> int:
        return len(self._text)

    def char_at(self, offset: int) -> str:
        if 0 <= offset < len(self._text):
            return self._text[offset]
        return ""

    def looking_at(self, regex: re.Pattern[str]) -> re.Match[str] | None:
        return regex.match(self._text, self._point)

    def line_bounds(self, offset: int | None = None) -> tuple[int, int]:
        """Start and end offsets of the line containing ``offset`` (default: cursor).

        The end excludes the newline.
        """
        if offset is None:
            offset = self._point
        start = self._text.rfind("\n", 0, offset) + 1
        end = self._text.find("\n", offset)
        return start, len(self._text) if end == -1 else end

    def insert(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        self._text = self._text[: self._point] + text + self._text[self._point :]
        self._point += len(text)

    def search_forward(
        self,
        regex: re.Pattern[str],
        bound: int | None = None,
        *,
        keep_group: int | None = None,
    ) -> re.Match[str] | None:
        """Find the next match at or after the cursor.

        Args:
            regex: Compiled pattern
            bound: The match must end at or before this offset
            keep_group: A match crossing ``bound`` is cut at ``bound`` when
                this group's span survives the cut unchanged

        Returns:
            The match, with the cursor moved to its end, or None.
        """
        m = regex.search(self._text, self._point)
        if m is not None and bound is not None and m.end() > bound:
            m = _clip(regex, m, bound, keep_group)
        if m is None:
            return None
        self._point = m.end()
        return m

    def search_backward(
        self,
        regex: re.Pattern[str],
        bound: int | None = None,
        *,
        keep_group: int | None = None,
    ) -> re.Match[str] | None:
        """Find the match starting closest before the cursor.

        The match may not extend past the cursor. Boundary assertions see
        the whole text, so a match is never cut short at the cursor, except
        that with ``keep_group`` a match whose group ends at or before the
        cursor is cut there.

        Args:
            regex: Compiled pattern
            bound: The match must start at or after this offset
            keep_group: Group that must survive cutting at the cursor

        Returns:
            The match, with the cursor moved to its start, or None.
        """
        limit = 0 if bound is None else max(bound, 0)
        for start in range(self._point, limit - 1, -1):
            m = regex.match(self._text, start)
            if m is not None and m.end() > self._point:
                m = _clip(regex, m, self._point, keep_group)
            if m is not None:
                self._point = m.start()
                return m
        return None


def _clip(
    regex: re.Pattern[str], m: re.Match[str], limit: int, keep_group: int | None
) -> re.Match[str] | None:
    # Re-match with the text ending at limit; only a cut that leaves
    # keep_group where it was counts
    if keep_group is None or m.end(keep_group) > limit:
        return None
    clipped = regex.match(m.string, m.start(), limit)
    if clipped is None or clipped.span(keep_group) != m.span(keep_group):
        return None
    return clipped


__all__ = [
    "TextBuffer",
    "TextSource",
]
