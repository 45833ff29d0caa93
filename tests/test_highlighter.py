"""Tests for per-buffer highlighting sessions."""

import logging

import pytest

from todomark import (
    Highlight,
    InvalidPatternError,
    KeywordConfig,
    KeywordEntry,
    KeywordHighlighter,
    PatternCache,
    PygmentsContextOracle,
    SpanContextOracle,
    TextBuffer,
    TextContextOracle,
    derive_style,
)

RED_BLUE = KeywordConfig(
    entries=(KeywordEntry("TODO", "red"), KeywordEntry("FIXME", "blue")),
    punctuation="!",
)


class TestEndToEnd:
    """Search, resolve and emit ranges for a renderer."""

    def test_c_comment_scenario(self) -> None:
        source = "int main(void) {\n    // TODO!! fix this\n}\n"
        oracle = PygmentsContextOracle.for_filename(source, "main.c")
        highlighter = KeywordHighlighter(RED_BLUE, oracle)
        highlights = list(highlighter.highlights(TextBuffer(source)))
        start = source.index("TODO")
        assert highlights == [Highlight(start, start + len("TODO!!"), derive_style("red"))]

    def test_code_occurrence_not_highlighted(self) -> None:
        source = "FIXME = 1  # FIXME: rename\n"
        oracle = PygmentsContextOracle.for_language(source, "python")
        highlighter = KeywordHighlighter(RED_BLUE, oracle)
        highlights = list(highlighter.highlights(TextBuffer(source)))
        assert [(h.start, h.style) for h in highlights] == [(13, derive_style("blue"))]

    def test_prose_highlights_everything(self) -> None:
        source = "FIXME first, then TODO!\n"
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        highlights = list(highlighter.highlights(TextBuffer(source)))
        assert [(h.start, h.end) for h in highlights] == [(0, 5), (18, 23)]

    def test_region(self) -> None:
        source = "TODO one TODO two TODO three"
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        highlights = list(highlighter.highlights(TextBuffer(source), 5, 17))
        assert [h.start for h in highlights] == [9]

    def test_region_end_cuts_punctuation_run(self) -> None:
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        highlights = list(highlighter.highlights(TextBuffer("# TODO!! x"), 0, 7))
        assert highlights == [Highlight(2, 7, derive_style("red"))]

    def test_unstyled_match_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        config = KeywordConfig(entries=(KeywordEntry("FOO(?=!)", "red"), KeywordEntry("TODO", "blue")))
        highlighter = KeywordHighlighter(config, TextContextOracle())
        with caplog.at_level(logging.DEBUG, logger="todomark"):
            highlights = list(highlighter.highlights(TextBuffer("FOO! TODO")))
        assert [h.start for h in highlights] == [5]
        assert any("FOO" in r.getMessage() for r in caplog.records)


class TestDefaults:
    """Defaults: standard keywords, prose oracle."""

    def test_default_session(self) -> None:
        highlighter = KeywordHighlighter()
        assert highlighter.enabled
        assert isinstance(highlighter.oracle, TextContextOracle)
        match = highlighter.search(TextBuffer("a HACK here"))
        assert match is not None
        assert match.keyword_text == "HACK"


class TestConfiguration:
    """Empty, invalid and changed configurations."""

    def test_empty_config_disables(self) -> None:
        highlighter = KeywordHighlighter(KeywordConfig(entries=()), TextContextOracle())
        assert highlighter.enabled is False
        assert highlighter.search(TextBuffer("TODO")) is None
        assert list(highlighter.highlights(TextBuffer("TODO"))) == []

    def test_sentinel_only_config_disables(self) -> None:
        config = KeywordConfig(entries=(KeywordEntry("???", "red"),))
        assert KeywordHighlighter(config).enabled is False

    def test_invalid_config_raises_on_construction(self) -> None:
        with pytest.raises(InvalidPatternError):
            KeywordHighlighter(KeywordConfig(entries=(KeywordEntry("[", "red"),)))

    def test_reconfigure_builds_new_pattern(self) -> None:
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        before = highlighter.compiled
        highlighter.reconfigure(RED_BLUE.with_keyword("NOTE", "green"))
        assert highlighter.compiled is not before
        assert highlighter.search(TextBuffer("NOTE")) is not None

    def test_failed_reconfigure_keeps_previous(self, caplog: pytest.LogCaptureFixture) -> None:
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        before = highlighter.compiled
        with caplog.at_level(logging.WARNING, logger="todomark"), pytest.raises(InvalidPatternError):
            highlighter.reconfigure(RED_BLUE.with_keyword("(", "green"))
        assert highlighter.compiled is before
        assert highlighter.config == RED_BLUE
        assert highlighter.search(TextBuffer("TODO")) is not None
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_reconfigure_to_empty_disables(self) -> None:
        highlighter = KeywordHighlighter(RED_BLUE, TextContextOracle())
        highlighter.reconfigure(KeywordConfig(entries=()))
        assert highlighter.enabled is False

    def test_sessions_with_distinct_configs_do_not_share(self) -> None:
        cache = PatternCache()
        a = KeywordHighlighter(RED_BLUE, cache=cache)
        b = KeywordHighlighter(RED_BLUE.with_keyword("NOTE", "green"), cache=cache)
        c = KeywordHighlighter(RED_BLUE, cache=cache)
        assert a.compiled is not b.compiled
        assert a.compiled is c.compiled

    def test_set_oracle(self) -> None:
        highlighter = KeywordHighlighter(RED_BLUE, SpanContextOracle())
        assert highlighter.search(TextBuffer("TODO")) is None
        highlighter.set_oracle(TextContextOracle())
        assert highlighter.search(TextBuffer("TODO")) is not None

    def test_oracle_for_uses_config_text_kinds(self) -> None:
        source = "TODO prose\n"
        prose = KeywordHighlighter(RED_BLUE)
        oracle = prose.oracle_for(source, "notes.txt")
        assert oracle.is_text_like()

        strict = KeywordHighlighter(KeywordConfig(entries=RED_BLUE.entries, text_kinds=frozenset()))
        oracle = strict.oracle_for(source, "notes.txt")
        assert not oracle.is_text_like()
        strict.set_oracle(oracle)
        assert list(strict.highlights(TextBuffer(source))) == []
