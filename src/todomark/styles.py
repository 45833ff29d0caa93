"""Styles attached to highlighted keywords.

A keyword's style is either a plain color string or a full ``Style``.
Plain colors are expanded into a style that inherits the shared keyword
appearance (``KEYWORD_STYLE``) and substitutes the color; full styles are
used as given.

Example:
    >>> derive_style("#cc9393")
    Style(foreground='#cc9393', background=None, bold=True, ...)
"""

from __future__ import annotations

from dataclasses import dataclass, replace

KEYWORD_STYLE_NAME = "todomark"


@dataclass(frozen=True, slots=True)
class Style:
    """Renderable appearance of a highlighted range.

    Attributes:
        foreground: Foreground color (any color string the renderer accepts)
        background: Background color
        bold: Render in bold
        italic: Render in italics
        underline: Render underlined
        inherit: Name of the base style this one derives from
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    inherit: str | None = None


# Shared base appearance for every keyword given as a plain color
KEYWORD_STYLE: Style = Style(bold=True)


def derive_style(value: str | Style, *, background: bool = False) -> Style:
    """Turn a keyword's configured style value into a ``Style``.

    Args:
        value: A color string or a full Style
        background: Substitute the color as background instead of foreground

    Returns:
        ``value`` unchanged if it is already a Style, otherwise a style
        inheriting ``KEYWORD_STYLE`` with the color substituted.
    """
    if isinstance(value, Style):
        return value
    if background:
        return replace(KEYWORD_STYLE, background=value, inherit=KEYWORD_STYLE_NAME)
    return replace(KEYWORD_STYLE, foreground=value, inherit=KEYWORD_STYLE_NAME)


__all__ = [
    "KEYWORD_STYLE",
    "KEYWORD_STYLE_NAME",
    "Style",
    "derive_style",
]
