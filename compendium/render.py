"""Content renderers for ``contrib.render_content``.

Highlights definition text to self-contained HTML fragments with Pygments;
style colors are inlined so no separate stylesheet is needed.
Lexers are picked from the definition's file name.
"""

from __future__ import annotations

from collections.abc import Callable

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .definition import Definition

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, HtmlFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def decode_text(content: bytes) -> str:
    """Decode bytes using tolerant encoding fallback order.

    Attempts UTF-8 (dropping a leading BOM), then latin-1, which accepts
    every byte sequence.
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def normalize_style(style: str) -> str:
    """Validate a style name, falling back to ``DEFAULT_STYLE``."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> HtmlFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = HtmlFormatter(style=style, cssclass="highlight", noclasses=True)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_html(source: str, file_name: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` to an HTML fragment, plain text when no lexer matches."""
    formatter = _formatter_for_style(normalize_style(style))
    try:
        lexer = get_lexer_for_filename(file_name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, formatter)


def highlight_renderer(style: str = DEFAULT_STYLE) -> Callable[[Definition], bytes | None]:
    """Build a renderer turning each definition's text into highlighted HTML.

    Definitions without content render to ``None``.
    """

    def render(definition: Definition) -> bytes | None:
        if definition.content is None:
            return None
        source = decode_text(definition.content)
        return highlight_html(source, definition.path.file_name, style).encode("utf-8")

    return render


__all__ = [
    "DEFAULT_STYLE",
    "decode_text",
    "highlight_html",
    "highlight_renderer",
    "normalize_style",
]
