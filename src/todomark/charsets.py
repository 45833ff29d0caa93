"""Word classification for keyword boundary matching.

Boundaries around keywords follow prose rules rather than Python's ``\\b``:
letters and digits are word characters, the underscore is not, and the
apostrophe and question mark are promoted to word characters so that a
trailing ``?`` fuses with the keyword instead of ending it.

The classification is baked into the compiled pattern as lookaround
assertions, so it is consulted once at compile time and never swapped
while a search runs.

Usage:
    from todomark.charsets import DEFAULT_CLASSIFIER

    if DEFAULT_CLASSIFIER.is_word_char(char):
        ...
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Punctuation that prose treats as part of a word
PROSE_WORD_PUNCTUATION: frozenset[str] = frozenset("'")

# Promoted so that "TODO?" reads as a single token
QUESTION_MARK = "?"


def _char_class(chars: frozenset[str]) -> str:
    return "[" + "".join(re.escape(c) for c in sorted(chars)) + "]"


@dataclass(frozen=True, slots=True)
class WordClassifier:
    """Decides which characters count as word characters.

    Alphanumeric characters (``str.isalnum``) are word characters by
    default. ``extra_word_chars`` promotes punctuation to word class,
    ``extra_non_word_chars`` demotes characters out of it; demotion wins
    when a character appears in both.

    Attributes:
        extra_word_chars: Characters added to the word class
        extra_non_word_chars: Characters removed from the word class

    Thread Safety:
        Frozen and stateless; safe to share.
    """

    extra_word_chars: frozenset[str] = PROSE_WORD_PUNCTUATION | {QUESTION_MARK}
    extra_non_word_chars: frozenset[str] = frozenset("_")

    def is_word_char(self, char: str) -> bool:
        """Return True if ``char`` is a word character."""
        if len(char) != 1:
            return False
        if char in self.extra_non_word_chars:
            return False
        if char in self.extra_word_chars:
            return True
        return char.isalnum()

    def word_class(self) -> str:
        """Regex fragment matching exactly one word character.

        The fragment is fixed-width, so it may be used inside lookbehind
        assertions.
        """
        alternatives = [r"[^\W_]"]
        extras = self.extra_word_chars - self.extra_non_word_chars
        if extras:
            alternatives.append(_char_class(extras))
        body = "|".join(alternatives)
        if self.extra_non_word_chars:
            return f"(?:(?!{_char_class(self.extra_non_word_chars)})(?:{body}))"
        return f"(?:{body})"


DEFAULT_CLASSIFIER: WordClassifier = WordClassifier()
