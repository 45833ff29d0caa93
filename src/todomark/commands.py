"""Editor-style conveniences built on the matcher.

These are thin wrappers a host binds to its own commands: jump between
keywords, list every keyword occurrence, and insert a keyword comment at
the cursor.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from todomark.compiler import sanitize_entries
from todomark.errors import NoMoreMatchesError
from todomark.matcher import Direction, Match

if TYPE_CHECKING:
    from todomark.buffer import TextBuffer
    from todomark.compiler import CompiledPattern
    from todomark.config import KeywordConfig
    from todomark.context import ContextOracle
    from todomark.highlighter import KeywordHighlighter

_BLANK = frozenset(" \t")


def next_keyword(highlighter: KeywordHighlighter, buffer: TextBuffer, count: int = 1) -> Match | None:
    """Move the cursor to the start of the ``count``-th next keyword.

    A keyword under the cursor is skipped. A negative count moves backward.

    Returns:
        The last match reached, or None if the cursor was already at the end.

    Raises:
        NoMoreMatchesError: Fewer than ``count`` keywords follow the cursor.
    """
    if count < 0:
        return previous_keyword(highlighter, buffer, -count)
    match = None
    while count > 0 and buffer.point < len(buffer):
        if highlighter.compiled is not None:
            here = buffer.looking_at(highlighter.compiled.regex)
            if here is not None:
                buffer.point = here.end()
        match = highlighter.search(buffer, Direction.FORWARD)
        if match is None:
            raise NoMoreMatchesError()
        count -= 1
    if match is not None:
        buffer.point = match.start
    return match


def previous_keyword(highlighter: KeywordHighlighter, buffer: TextBuffer, count: int = 1) -> Match | None:
    """Move the cursor to the start of the ``count``-th previous keyword.

    A negative count moves forward.

    Raises:
        NoMoreMatchesError: Fewer than ``count`` keywords precede the cursor.
    """
    if count < 0:
        return next_keyword(highlighter, buffer, -count)
    match = None
    while count > 0 and buffer.point > 0:
        match = highlighter.search(buffer, Direction.BACKWARD)
        if match is None:
            raise NoMoreMatchesError()
        count -= 1
    return match


def occurrences(compiled: CompiledPattern | None, text: str) -> list[Match]:
    """Every occurrence of the keyword pattern in ``text``.

    Lexical context is ignored: keywords in code are listed too, so the
    result is a superset of what ``Matcher.search`` accepts.
    """
    if compiled is None:
        return []
    return [Match.from_regex(m) for m in compiled.regex.finditer(text)]


def literal_keywords(config: KeywordConfig) -> list[str]:
    """Keywords that can be inserted as typed (their pattern is plain text)."""
    return [e.pattern for e in sanitize_entries(config.entries) if e.is_literal]


def insert_keyword(
    buffer: TextBuffer,
    keyword: str,
    oracle: ContextOracle,
    comment_start: str,
    comment_end: str = "",
) -> None:
    """Insert ``keyword`` as an annotation at the cursor.

    - Inside a comment or string the keyword is inserted in place, padded
      with spaces where needed.
    - At the end of a line with code, a trailing comment is appended.
    - Otherwise a comment line is opened above the current line, at its
      indentation (or on the current line when it is blank).

    The cursor ends up after the inserted keyword, before any comment end.
    The oracle describes the buffer before insertion and is stale afterwards.

    Raises:
        ValueError: ``keyword`` is not literal text.
    """
    if not keyword or re.escape(keyword) != keyword:
        raise ValueError(f"Not a literal keyword: {keyword!r}")
    tail = comment_end
    before = buffer.char_at(buffer.point - 1)
    line_start, line_end = buffer.line_bounds()
    line = buffer.text[line_start:line_end]

    if oracle.is_inside_comment_or_string(buffer.point):
        pad_before = "" if before in _BLANK or buffer.point == line_start else " "
        pad_after = "" if buffer.char_at(buffer.point) in _BLANK | {"\n"} else " "
        buffer.insert(f"{pad_before}{keyword}:{pad_after}")
        return

    code_before = buffer.text[line_start : buffer.point].strip(" \t")
    if buffer.point == line_end and code_before:
        pad = "" if before in _BLANK else " "
        buffer.insert(f"{pad}{comment_start} {keyword}: ")
        _insert_keeping_point(buffer, tail)
        return

    if not line.strip(" \t"):
        buffer.point = line_end
        buffer.insert(f"{comment_start} {keyword}: ")
        _insert_keeping_point(buffer, tail)
        return

    indent = line[: len(line) - len(line.lstrip(" \t"))]
    buffer.point = line_start
    buffer.insert(f"{indent}{comment_start} {keyword}: ")
    _insert_keeping_point(buffer, f"{tail}\n")


def _insert_keeping_point(buffer: TextBuffer, text: str) -> None:
    point = buffer.point
    buffer.insert(text)
    buffer.point = point


__all__ = [
    "insert_keyword",
    "literal_keywords",
    "next_keyword",
    "occurrences",
    "previous_keyword",
]
