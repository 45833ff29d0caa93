"""Per-buffer highlighting session.

``KeywordHighlighter`` ties one keyword configuration, its compiled
pattern and one buffer's context oracle together. It is what a renderer
holds on to: ask it for matches from the cursor, or for every highlight in
a region.

Usage:
    >>> highlighter = KeywordHighlighter(config, oracle)
    >>> for hl in highlighter.highlights(TextBuffer(source), 0, 4096):
    ...     paint(hl.start, hl.end, hl.style)

Reconfiguring compiles a fresh pattern. If the new configuration is
invalid, the previous pattern stays in force.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from todomark.charsets import DEFAULT_CLASSIFIER, WordClassifier
from todomark.compiler import CompiledPattern, PatternCache, compile_pattern
from todomark.config import KeywordConfig
from todomark.context import PygmentsContextOracle, TextContextOracle
from todomark.errors import EmptyConfigError, InvalidPatternError
from todomark.matcher import Direction, Match, Matcher
from todomark.resolver import StyleResolver
from todomark.styles import Style
from todomark.utils.logger import get_logger

if TYPE_CHECKING:
    from todomark.buffer import TextSource
    from todomark.context import ContextOracle

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Highlight:
    """A range to paint and the style to paint it with."""

    start: int
    end: int
    style: Style


class KeywordHighlighter:
    """Keyword search and styling for one buffer.

    Attributes:
        config: Active keyword configuration
        oracle: Context oracle of the buffer
        compiled: Active compiled pattern, None when no keywords are configured

    Thread Safety:
        Not thread-safe. Use one instance per buffer.
    """

    __slots__ = ("config", "oracle", "classifier", "compiled", "_cache", "_matcher", "_resolver")

    def __init__(
        self,
        config: KeywordConfig | None = None,
        oracle: ContextOracle | None = None,
        *,
        classifier: WordClassifier = DEFAULT_CLASSIFIER,
        cache: PatternCache | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            config: Keyword configuration (default keywords if omitted)
            oracle: Context oracle (default: treat the buffer as prose)
            classifier: Word classifier for keyword boundaries
            cache: Optional pattern cache shared between sessions

        Raises:
            InvalidPatternError: A keyword pattern does not compile
        """
        self.config = config if config is not None else KeywordConfig()
        self.oracle = oracle if oracle is not None else TextContextOracle()
        self.classifier = classifier
        self._cache = cache
        self.compiled: CompiledPattern | None = None
        self._matcher = Matcher(None, self.oracle)
        self._resolver: StyleResolver | None = None
        self._install(self._compile(self.config))

    @property
    def enabled(self) -> bool:
        """False when no keywords are configured."""
        return self.compiled is not None

    def _compile(self, config: KeywordConfig) -> CompiledPattern | None:
        try:
            return compile_pattern(config, self.classifier, cache=self._cache)
        except EmptyConfigError:
            logger.debug("No keywords configured, highlighting disabled")
            return None

    def _install(self, compiled: CompiledPattern | None) -> None:
        self.compiled = compiled
        self._matcher = Matcher(compiled, self.oracle)
        self._resolver = StyleResolver(compiled) if compiled is not None else None

    def reconfigure(self, config: KeywordConfig) -> None:
        """Switch to a new configuration.

        Raises:
            InvalidPatternError: The new configuration does not compile. The
                previous configuration and pattern remain active.
        """
        try:
            compiled = self._compile(config)
        except InvalidPatternError as e:
            logger.warning("Keeping previous keywords: %s", e)
            raise
        self.config = config
        self._install(compiled)

    def set_oracle(self, oracle: ContextOracle) -> None:
        """Replace the context oracle, e.g. after the buffer was re-lexed."""
        self.oracle = oracle
        self._matcher = Matcher(self.compiled, oracle)

    def oracle_for(self, text: str, filename: str) -> PygmentsContextOracle:
        """Pygments oracle for a file, honouring this session's ``text_kinds``.

        The oracle is returned, not installed; pass it to ``set_oracle``.
        """
        return PygmentsContextOracle.for_filename(text, filename, text_kinds=self.config.text_kinds)

    def search(
        self,
        buffer: TextSource,
        direction: Direction = Direction.FORWARD,
        bound: int | None = None,
    ) -> Match | None:
        """Next accepted match from the buffer's cursor. See ``Matcher.search``."""
        return self._matcher.search(buffer, direction, bound)

    def style_for(self, match: Match) -> Style | None:
        """Style of ``match``, or None if no entry fully matches its keyword."""
        if self._resolver is None:
            return None
        return self._resolver.resolve(match.keyword_text)

    def highlights(self, buffer: TextSource, start: int = 0, end: int | None = None) -> Iterator[Highlight]:
        """Yield highlights for accepted matches within ``[start, end]``.

        Moves the buffer's cursor. Matches whose keyword has no resolvable
        style are skipped.
        """
        if end is None:
            end = len(buffer)
        buffer.point = start
        while (match := self.search(buffer, Direction.FORWARD, end)) is not None:
            if match.start == match.end:
                if match.end >= end:
                    break
                buffer.point = match.end + 1
                continue
            style = self.style_for(match)
            if style is None:
                logger.debug("Unstyled keyword %r at %d", match.keyword_text, match.start)
                continue
            yield Highlight(match.start, match.end, style)


__all__ = [
    "Highlight",
    "KeywordHighlighter",
]
