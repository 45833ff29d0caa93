"""Immutable keyword configuration for todomark.

A ``KeywordConfig`` is a plain value: build one, hand it to
``compile_pattern`` or a ``KeywordHighlighter``, and build a new one to
change anything. There is no module-level configuration to mutate.

Usage:
    config = KeywordConfig(
        entries=(KeywordEntry("TODO-NOW", "red"), KeywordEntry("TODO", "orange")),
        punctuation=":!",
    )

    # Or from external settings (YAML, JSON, pyproject tables, ...)
    config = KeywordConfig.from_dict({
        "keywords": {"TODO": "#cc9393", "FIXME": "#cc9393"},
        "punctuation": ":",
    })

Ordering:
    Entries are tried in order, both by the compiled alternation and when
    looking up a style. A keyword that is a prefix of a longer one must be
    listed after it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from todomark.styles import Style

# Legacy placeholder; as a pattern it makes searches practically unbounded
SENTINEL_PATTERN = "???"

# Prose buffer kinds (Pygments lexer aliases)
DEFAULT_TEXT_KINDS: frozenset[str] = frozenset({"text", "markdown", "md", "rst", "restructuredtext", "org"})


@dataclass(frozen=True, slots=True)
class KeywordEntry:
    """One highlightable marker.

    Attributes:
        pattern: Regular expression sub-pattern, usually a literal word
        style: Color string or full Style used to render matches
    """

    pattern: str
    style: str | Style

    @property
    def is_literal(self) -> bool:
        """True if the pattern matches only its own text."""
        return re.escape(self.pattern) == self.pattern


DEFAULT_KEYWORDS: tuple[KeywordEntry, ...] = (
    KeywordEntry("HOLD", "#d0bf8f"),
    KeywordEntry("TODO", "#cc9393"),
    KeywordEntry("NEXT", "#dca3a3"),
    KeywordEntry("THEM", "#dc8cc3"),
    KeywordEntry("PROG", "#7cb8bb"),
    KeywordEntry("OKAY", "#7cb8bb"),
    KeywordEntry("DONT", "#5f7f5f"),
    KeywordEntry("FAIL", "#8c5353"),
    KeywordEntry("DONE", "#afd8af"),
    KeywordEntry("NOTE", "#d0bf8f"),
    KeywordEntry("MAYBE", "#d0bf8f"),
    KeywordEntry("KLUDGE", "#d0bf8f"),
    KeywordEntry("HACK", "#d0bf8f"),
    KeywordEntry("TEMP", "#d0bf8f"),
    KeywordEntry("FIXME", "#cc9393"),
    KeywordEntry("XXXX*", "#cc9393"),
)


@dataclass(frozen=True, slots=True)
class KeywordConfig:
    """Immutable keyword configuration.

    Attributes:
        entries: Ordered keyword entries
        punctuation: Characters optionally highlighted right after a keyword
        require_punctuation: Only match keywords followed by punctuation
        text_kinds: Buffer kinds where matches are accepted anywhere. Only
            oracles built from this config see it, e.g. via
            ``KeywordHighlighter.oracle_for``
        color_background: Apply plain colors as background, not foreground

    """

    entries: tuple[KeywordEntry, ...] = DEFAULT_KEYWORDS
    punctuation: str = ""
    require_punctuation: bool = False
    text_kinds: frozenset[str] = field(default=DEFAULT_TEXT_KINDS)
    color_background: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> KeywordConfig:
        """Create KeywordConfig from dictionary.

        ``keywords`` may be a mapping of pattern to style (insertion order
        is kept) or a sequence of ``[pattern, style]`` pairs. A style given
        as a mapping is turned into a ``Style``. Unknown keys are ignored.

        Args:
            config_dict: Dictionary with config values

        Returns:
            New KeywordConfig instance

        Example:
            >>> config = KeywordConfig.from_dict({
            ...     "keywords": [["FIXME", "red"], ["TODO", "orange"]],
            ...     "punctuation": ":",
            ...     "unknown_key": "ignored",
            ... })
            >>> [e.pattern for e in config.entries]
            ['FIXME', 'TODO']

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "keywords" in config_dict:
            filtered["entries"] = _entries_from(config_dict["keywords"])
        elif "entries" in filtered:
            filtered["entries"] = _entries_from(filtered["entries"])
        if "text_kinds" in filtered:
            filtered["text_kinds"] = frozenset(filtered["text_kinds"])
        return cls(**filtered)

    def with_keyword(self, pattern: str, style: str | Style, *, index: int | None = None) -> KeywordConfig:
        """Return a copy with a keyword inserted at ``index`` (default: end)."""
        entries = list(self.entries)
        entry = KeywordEntry(pattern, style)
        if index is None:
            entries.append(entry)
        else:
            entries.insert(index, entry)
        return _replace_entries(self, entries)

    def without_keyword(self, pattern: str) -> KeywordConfig:
        """Return a copy without entries whose pattern equals ``pattern``."""
        return _replace_entries(self, [e for e in self.entries if e.pattern != pattern])


def _entries_from(value: Any) -> tuple[KeywordEntry, ...]:
    items: Iterable[Any] = value.items() if isinstance(value, Mapping) else value
    entries = []
    for item in items:
        if isinstance(item, KeywordEntry):
            entries.append(item)
            continue
        pattern, style = item
        if isinstance(style, Mapping):
            style = Style(**style)
        entries.append(KeywordEntry(str(pattern), style))
    return tuple(entries)


def _replace_entries(config: KeywordConfig, entries: list[KeywordEntry]) -> KeywordConfig:
    return replace(config, entries=tuple(entries))


__all__ = [
    "DEFAULT_KEYWORDS",
    "DEFAULT_TEXT_KINDS",
    "SENTINEL_PATTERN",
    "KeywordConfig",
    "KeywordEntry",
]
