"""List keyword annotations in source files.

Usage:
    python -m todomark [--keyword PATTERN[=COLOR]]... [--punctuation CHARS]
                       [--require-punctuation] [--all] [-v] FILE...

Options:
    --keyword              Keyword pattern to look for (repeatable; replaces
                           the default keywords)
    --punctuation          Characters to report after a keyword
    --require-punctuation  Only report keywords followed by punctuation
    --all                  Report keywords in code too, not only in comments
                           and strings
    -v, --verbose          Log progress to stderr (repeat for debug output)

Each occurrence is printed as ``path:line:col: KEYWORD<punct>  line text``.
Exits 0 if anything was reported, 1 if nothing was, 2 on bad keywords or
unreadable files.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from todomark.buffer import TextBuffer
from todomark.commands import occurrences
from todomark.config import DEFAULT_KEYWORDS, KeywordConfig, KeywordEntry
from todomark.errors import ConfigError
from todomark.highlighter import KeywordHighlighter
from todomark.styles import KEYWORD_STYLE
from todomark.utils.logger import configure_logging


def _parse_keyword(value: str) -> KeywordEntry:
    pattern, sep, color = value.partition("=")
    return KeywordEntry(pattern, color if sep else KEYWORD_STYLE)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todomark", description="List keyword annotations in source files")
    parser.add_argument("files", nargs="+", type=Path, help="Files to scan")
    parser.add_argument(
        "--keyword",
        action="append",
        type=_parse_keyword,
        dest="keywords",
        metavar="PATTERN[=COLOR]",
        help="Keyword to look for (repeatable)",
    )
    parser.add_argument("--punctuation", default="", help="Characters to report after a keyword")
    parser.add_argument("--require-punctuation", action="store_true", help="Require punctuation after keywords")
    parser.add_argument("--all", action="store_true", help="Report keywords in code too")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (repeatable)")
    return parser


def _format(path: Path, text: str, span: tuple[int, int]) -> str:
    start, end = span
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", start)
    line = text[line_start : len(text) if line_end == -1 else line_end]
    lineno = text.count("\n", 0, start) + 1
    col = start - line_start + 1
    return f"{path}:{lineno}:{col}: {text[start:end]}  {line.strip()}"


def scan_file(
    highlighter: KeywordHighlighter, path: Path, text: str, *, include_code: bool = False
) -> list[tuple[int, int]]:
    """Highlighted ranges in one file's text."""
    if include_code:
        return [(m.start, m.end) for m in occurrences(highlighter.compiled, text)]
    highlighter.set_oracle(highlighter.oracle_for(text, path.name))
    return [(h.start, h.end) for h in highlighter.highlights(TextBuffer(text))]


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        configure_logging(args.verbose)
    config = KeywordConfig(
        entries=tuple(args.keywords) if args.keywords else DEFAULT_KEYWORDS,
        punctuation=args.punctuation,
        require_punctuation=args.require_punctuation,
    )
    try:
        highlighter = KeywordHighlighter(config)
    except ConfigError as e:
        print(f"todomark: {e}", file=sys.stderr)
        return 2

    status = 1
    for path in args.files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"todomark: {path}: {e}", file=sys.stderr)
            return 2
        for span in scan_file(highlighter, path, text, include_code=args.all):
            print(_format(path, text, span))
            status = 0
    return status


if __name__ == "__main__":
    sys.exit(main())
