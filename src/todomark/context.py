"""Lexical context oracles.

The matcher only accepts keywords in annotation-bearing regions. Which
offsets qualify is answered by a ``ContextOracle``; todomark never lexes
source code itself. Two small oracles cover hosts that already know their
comment spans, and ``PygmentsContextOracle`` derives the spans from a
Pygments lexer for everyone else.

Usage:
    # Spans known to the host (e.g. from its own tokenizer)
    oracle = SpanContextOracle([(0, 18)])

    # Prose: every offset qualifies
    oracle = TextContextOracle()

    # Let Pygments find comments and strings
    oracle = PygmentsContextOracle.for_filename(source, "main.c")
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.token import Comment, String, _TokenType
from pygments.util import ClassNotFound

from todomark.config import DEFAULT_TEXT_KINDS
from todomark.utils.logger import get_logger

logger = get_logger(__name__)

# Pygments token families that carry annotations
ANNOTATION_TOKENS: tuple[_TokenType, ...] = (Comment, String)


@runtime_checkable
class ContextOracle(Protocol):
    """Answers lexical questions about one buffer.

    Contract:
        - MUST NOT raise for any offset within the buffer
        - Answers reflect the buffer text the oracle was built for
    """

    def is_inside_comment_or_string(self, offset: int) -> bool:
        """Return True if ``offset`` lies inside a comment or string."""
        ...

    def is_text_like(self) -> bool:
        """Return True if the buffer is prose, where every match is accepted."""
        ...


class SpanContextOracle:
    """Oracle over explicit comment/string spans.

    Spans are half-open ``(start, end)`` offsets; overlapping and adjacent
    spans are merged.
    """

    __slots__ = ("_starts", "_ends", "_text_like")

    def __init__(self, spans: Iterable[tuple[int, int]] = (), *, text_like: bool = False) -> None:
        merged: list[list[int]] = []
        for start, end in sorted(spans):
            if end <= start:
                continue
            if merged and start <= merged[-1][1]:
                merged[-1][1] = max(merged[-1][1], end)
            else:
                merged.append([start, end])
        self._starts = [s for s, _ in merged]
        self._ends = [e for _, e in merged]
        self._text_like = text_like

    @property
    def spans(self) -> list[tuple[int, int]]:
        """Merged spans in ascending order."""
        return list(zip(self._starts, self._ends))

    def is_inside_comment_or_string(self, offset: int) -> bool:
        i = bisect_right(self._starts, offset) - 1
        return i >= 0 and offset < self._ends[i]

    def is_text_like(self) -> bool:
        return self._text_like


class TextContextOracle:
    """Oracle for prose buffers: everything is annotation-bearing."""

    __slots__ = ()

    def is_inside_comment_or_string(self, offset: int) -> bool:
        return True

    def is_text_like(self) -> bool:
        return True


class PygmentsContextOracle(SpanContextOracle):
    """Oracle backed by a Pygments lexer.

    Comment and string tokens become the annotation spans. The buffer is
    text-like when any of the lexer's aliases is listed in ``text_kinds``.
    """

    __slots__ = ("lexer",)

    def __init__(
        self,
        text: str,
        lexer: Lexer,
        *,
        text_kinds: frozenset[str] = DEFAULT_TEXT_KINDS,
    ) -> None:
        self.lexer = lexer
        text_like = any(alias in text_kinds for alias in lexer.aliases)
        spans = [] if text_like else list(_annotation_spans(text, lexer))
        super().__init__(spans, text_like=text_like)

    @property
    def kind(self) -> str:
        """Primary alias of the lexer, e.g. ``"python"``."""
        return self.lexer.aliases[0] if self.lexer.aliases else self.lexer.name.lower()

    @classmethod
    def for_language(
        cls,
        text: str,
        language: str,
        *,
        text_kinds: frozenset[str] = DEFAULT_TEXT_KINDS,
    ) -> PygmentsContextOracle:
        """Build an oracle for a language name or alias.

        Unknown languages are treated as plain text.
        """
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug("No lexer for language %r, treating as text", language)
            lexer = TextLexer()
        return cls(text, lexer, text_kinds=text_kinds)

    @classmethod
    def for_filename(
        cls,
        text: str,
        filename: str,
        *,
        text_kinds: frozenset[str] = DEFAULT_TEXT_KINDS,
    ) -> PygmentsContextOracle:
        """Build an oracle for a file, choosing the lexer by file name.

        Unknown file types are treated as plain text.
        """
        try:
            lexer = get_lexer_for_filename(filename, text)
        except ClassNotFound:
            logger.debug("No lexer for file %r, treating as text", filename)
            lexer = TextLexer()
        return cls(text, lexer, text_kinds=text_kinds)


def _annotation_spans(text: str, lexer: Lexer) -> Iterable[tuple[int, int]]:
    for index, ttype, value in lexer.get_tokens_unprocessed(text):
        if value and any(ttype in family for family in ANNOTATION_TOKENS):
            yield index, index + len(value)


__all__ = [
    "ANNOTATION_TOKENS",
    "ContextOracle",
    "PygmentsContextOracle",
    "SpanContextOracle",
    "TextContextOracle",
]
