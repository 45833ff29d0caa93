"""Keyword pattern compiler.

Turns a ``KeywordConfig`` into one regular expression that finds any
configured keyword, with prose word boundaries on both sides and an
optional run of trailing punctuation.

Compiled layout (group numbers are stable regardless of the groups used
inside keyword patterns):

    group 1: keyword plus trailing punctuation (the highlighted range)
    group 2: bare keyword (used to look up the style)

Thread Safety:
    CompiledPattern is frozen. A new one is built for every configuration;
    existing instances are never modified.

Example:
    >>> compiled = compile_pattern(KeywordConfig(entries=(KeywordEntry("TODO", "red"),)))
    >>> compiled.regex.search("# TODO: tidy").group(2)
    'TODO'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from todomark.charsets import DEFAULT_CLASSIFIER, QUESTION_MARK, WordClassifier
from todomark.config import SENTINEL_PATTERN, KeywordConfig, KeywordEntry
from todomark.errors import ConfigError, EmptyConfigError, InvalidPatternError
from todomark.utils.logger import get_logger

logger = get_logger(__name__)

KEYWORD_WITH_PUNCT_GROUP = 1
KEYWORD_GROUP = 2


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Matching artifact derived from a KeywordConfig.

    Attributes:
        regex: The combined keyword pattern
        config: Configuration it was built from
        entries: Entries that made it into the pattern, in order
        matchers: Per-entry patterns, parallel to ``entries``, used for
            full-match style lookup
        classifier: Word classifier baked into the boundaries
    """

    regex: re.Pattern[str]
    config: KeywordConfig
    entries: tuple[KeywordEntry, ...]
    matchers: tuple[re.Pattern[str], ...]
    classifier: WordClassifier = DEFAULT_CLASSIFIER


class PatternCache:
    """In-memory cache of compiled patterns keyed by configuration.

    Keys are the immutable (config, classifier) pair, so two sessions only
    ever share a CompiledPattern when their configurations are equal.
    Not thread-safe.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[KeywordConfig, WordClassifier], CompiledPattern] = {}

    def get(self, config: KeywordConfig, classifier: WordClassifier) -> CompiledPattern | None:
        """Return the cached pattern if present, else None."""
        return self._data.get((config, classifier))

    def put(self, compiled: CompiledPattern) -> None:
        """Store a compiled pattern."""
        self._data[(compiled.config, compiled.classifier)] = compiled

    def __len__(self) -> int:
        return len(self._data)


def sanitize_entries(entries: tuple[KeywordEntry, ...]) -> tuple[KeywordEntry, ...]:
    """Drop entries using the legacy ``"???"`` placeholder pattern."""
    kept = tuple(e for e in entries if e.pattern != SENTINEL_PATTERN)
    if len(kept) != len(entries):
        logger.debug("Ignoring %d placeholder keyword(s) %r", len(entries) - len(kept), SENTINEL_PATTERN)
    return kept


def build_regex_source(
    entries: tuple[KeywordEntry, ...] | list[KeywordEntry],
    config: KeywordConfig,
    classifier: WordClassifier = DEFAULT_CLASSIFIER,
) -> str:
    """Assemble the regular expression source for ``entries``.

    Args:
        entries: Keyword entries in match priority order
        config: Supplies punctuation settings
        classifier: Word classifier for the boundary assertions

    Returns:
        Pattern source with the group layout described in the module docstring.
    """
    word = classifier.word_class()
    start_of_word = f"(?<!{word})(?={word})"
    end_of_word = f"(?<={word})(?!{word})"
    # Tolerate the "TODO?" spelling: a lone "?" ending the word
    end_before_question = f"(?<={word})(?={re.escape(QUESTION_MARK)}(?!{word}))"
    alternation = "|".join(f"(?:{e.pattern})" for e in entries)
    source = f"{start_of_word}({alternation})(?:{end_of_word}|{end_before_question})"
    if config.punctuation:
        chars = "".join(re.escape(c) for c in dict.fromkeys(config.punctuation))
        source += f"[{chars}]" + ("+" if config.require_punctuation else "*")
    return f"({source})"


def compile_pattern(
    config: KeywordConfig,
    classifier: WordClassifier = DEFAULT_CLASSIFIER,
    *,
    cache: PatternCache | None = None,
) -> CompiledPattern:
    """Compile a keyword configuration.

    Args:
        config: Keyword configuration
        classifier: Word classifier for boundary assertions
        cache: Optional cache consulted before compiling

    Returns:
        A new (or cached) CompiledPattern.

    Raises:
        EmptyConfigError: No keywords remain after dropping placeholders
        InvalidPatternError: A keyword pattern does not compile
    """
    if cache is not None:
        cached = cache.get(config, classifier)
        if cached is not None:
            return cached

    entries = sanitize_entries(config.entries)
    if not entries:
        raise EmptyConfigError()

    matchers = []
    for entry in entries:
        try:
            matchers.append(re.compile(entry.pattern))
            re.compile(build_regex_source([entry], config, classifier))
        except re.error as e:
            raise InvalidPatternError(entry, str(e)) from e

    try:
        regex = re.compile(build_regex_source(entries, config, classifier))
    except re.error as e:
        # Entries compile alone but clash together (e.g. duplicate group names)
        raise _find_clash(entries, config, classifier, e) from e

    compiled = CompiledPattern(
        regex=regex,
        config=config,
        entries=entries,
        matchers=tuple(matchers),
        classifier=classifier,
    )
    if cache is not None:
        cache.put(compiled)
    return compiled


def _find_clash(
    entries: tuple[KeywordEntry, ...],
    config: KeywordConfig,
    classifier: WordClassifier,
    error: re.error,
) -> ConfigError:
    for i in range(2, len(entries) + 1):
        try:
            re.compile(build_regex_source(entries[:i], config, classifier))
        except re.error as e:
            return InvalidPatternError(entries[i - 1], str(e))
    return ConfigError(f"Keyword patterns do not combine: {error}")


__all__ = [
    "KEYWORD_GROUP",
    "KEYWORD_WITH_PUNCT_GROUP",
    "CompiledPattern",
    "PatternCache",
    "build_regex_source",
    "compile_pattern",
    "sanitize_entries",
]
