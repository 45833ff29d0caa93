"""
todomark — Keyword annotation matching for editors and linters

Finds TODO-style keywords in comments and strings (or anywhere in prose),
with prose word boundaries, optional trailing punctuation, and a style per
keyword. Built for incremental renderers: search from a cursor, in either
direction, up to a bound.

Quick Start:
    >>> from todomark import KeywordHighlighter, PygmentsContextOracle, TextBuffer
    >>> source = "x = 1  # TODO: rename\\n"
    >>> hl = KeywordHighlighter(oracle=PygmentsContextOracle.for_language(source, "python"))
    >>> [(h.start, h.end) for h in hl.highlights(TextBuffer(source))]
    [(9, 13)]

Custom Keywords:
    >>> from todomark import KeywordConfig, KeywordEntry
    >>> config = KeywordConfig(
    ...     entries=(KeywordEntry("TODO-NOW", "red"), KeywordEntry("TODO", "orange")),
    ...     punctuation=":!",
    ... )
    >>> hl = KeywordHighlighter(config, oracle)

Installation:
    pip install todomark
"""

from todomark.buffer import TextBuffer, TextSource
from todomark.charsets import DEFAULT_CLASSIFIER, WordClassifier
from todomark.commands import (
    insert_keyword,
    literal_keywords,
    next_keyword,
    occurrences,
    previous_keyword,
)
from todomark.compiler import CompiledPattern, PatternCache, compile_pattern
from todomark.config import DEFAULT_KEYWORDS, KeywordConfig, KeywordEntry
from todomark.context import (
    ContextOracle,
    PygmentsContextOracle,
    SpanContextOracle,
    TextContextOracle,
)
from todomark.errors import (
    ConfigError,
    EmptyConfigError,
    InvalidPatternError,
    NoMoreMatchesError,
    TodomarkError,
)
from todomark.highlighter import Highlight, KeywordHighlighter
from todomark.matcher import Direction, Match, Matcher
from todomark.resolver import StyleResolver
from todomark.styles import KEYWORD_STYLE, Style, derive_style

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CLASSIFIER",
    "DEFAULT_KEYWORDS",
    "KEYWORD_STYLE",
    "CompiledPattern",
    "ConfigError",
    "ContextOracle",
    "Direction",
    "EmptyConfigError",
    "Highlight",
    "InvalidPatternError",
    "KeywordConfig",
    "KeywordEntry",
    "KeywordHighlighter",
    "Match",
    "Matcher",
    "NoMoreMatchesError",
    "PatternCache",
    "PygmentsContextOracle",
    "SpanContextOracle",
    "Style",
    "StyleResolver",
    "TextBuffer",
    "TextContextOracle",
    "TextSource",
    "TodomarkError",
    "WordClassifier",
    "__version__",
    "compile_pattern",
    "derive_style",
    "insert_keyword",
    "literal_keywords",
    "next_keyword",
    "occurrences",
    "previous_keyword",
]
