"""Tests for style resolution and style derivation."""

import logging

import pytest

from todomark import (
    KEYWORD_STYLE,
    KeywordConfig,
    KeywordEntry,
    Style,
    StyleResolver,
    compile_pattern,
    derive_style,
)
from todomark.styles import KEYWORD_STYLE_NAME


def _resolver(*entries: KeywordEntry, **kwargs: object) -> StyleResolver:
    return StyleResolver(compile_pattern(KeywordConfig(entries=entries, **kwargs)))  # type: ignore[arg-type]


class TestDeriveStyle:
    """Plain colors expand to styles inheriting the keyword base."""

    def test_color_becomes_foreground(self) -> None:
        style = derive_style("#cc9393")
        assert style.foreground == "#cc9393"
        assert style.background is None
        assert style.bold is KEYWORD_STYLE.bold
        assert style.inherit == KEYWORD_STYLE_NAME

    def test_color_as_background(self) -> None:
        style = derive_style("red", background=True)
        assert style.background == "red"
        assert style.foreground is None
        assert style.inherit == KEYWORD_STYLE_NAME

    def test_full_style_unmodified(self) -> None:
        custom = Style(foreground="green", underline=True)
        assert derive_style(custom) is custom
        assert derive_style(custom, background=True) is custom


class TestResolve:
    """First entry whose pattern fully matches wins."""

    def test_literal(self) -> None:
        resolver = _resolver(KeywordEntry("TODO", "red"), KeywordEntry("FIXME", "blue"))
        assert resolver.resolve("FIXME") == derive_style("blue")

    def test_order_decides_ambiguity(self) -> None:
        resolver = _resolver(KeywordEntry("TODO-NOW", "red"), KeywordEntry("TODO(-NOW)?", "blue"))
        assert resolver.resolve("TODO-NOW") == derive_style("red")
        assert resolver.resolve("TODO") == derive_style("blue")

    def test_full_match_not_prefix(self) -> None:
        resolver = _resolver(KeywordEntry("TODO", "red"), KeywordEntry("TODO-NOW", "blue"))
        assert resolver.resolve("TODO-NOW") == derive_style("blue")

    def test_regex_entry(self) -> None:
        resolver = _resolver(KeywordEntry("XXXX*", "red"))
        assert resolver.resolve("XXXXX") == derive_style("red")

    def test_case_sensitive(self) -> None:
        resolver = _resolver(KeywordEntry("TODO", "red"))
        assert resolver.resolve("todo") is None

    def test_full_style_entry(self) -> None:
        custom = Style(background="yellow")
        resolver = _resolver(KeywordEntry("NOTE", custom))
        assert resolver.resolve("NOTE") is custom

    def test_color_background_config(self) -> None:
        resolver = _resolver(KeywordEntry("TODO", "red"), color_background=True)
        assert resolver.resolve("TODO") == derive_style("red", background=True)

    def test_entry_for(self) -> None:
        entry = KeywordEntry("HACK", "red")
        resolver = _resolver(KeywordEntry("TODO", "red"), entry)
        assert resolver.entry_for("HACK") is entry
        assert resolver.entry_for("NOPE") is None

    def test_unresolvable_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        resolver = _resolver(KeywordEntry("TODO", "red"))
        with caplog.at_level(logging.DEBUG, logger="todomark"):
            assert resolver.resolve("DONE") is None
        assert any("DONE" in r.getMessage() for r in caplog.records)
