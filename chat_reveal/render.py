"""Map span lists to Rich renderables."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from .types import Span

SPAN_STYLES: dict[str, Style] = {
    "plain": Style(),
    "bold": Style(bold=True),
    "italic": Style(italic=True),
    "code": Style(color="magenta", bgcolor="grey23"),
    "strikethrough": Style(strike=True),
    "link": Style(underline=True, color="bright_blue"),
}


def span_style(span: Span) -> Style:
    style = SPAN_STYLES.get(span.kind, SPAN_STYLES["plain"])
    if span.kind == "link" and span.url:
        style = style + Style(link=span.url)
    return style


def spans_to_text(spans: list[Span], cursor: str | None = None) -> Text:
    """Build a Rich ``Text`` from *spans*, optionally followed by a cursor glyph."""
    text = Text()
    for span in spans:
        text.append(span.text, style=span_style(span))
    if cursor:
        text.append(cursor, style="blink")
    return text
