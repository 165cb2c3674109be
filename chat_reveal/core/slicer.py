"""Length, prefix-slicing and word-boundary helpers over span lists."""

from __future__ import annotations

from dataclasses import replace

from ..patterns import WHITESPACE_RUN_RE
from ..types import Span
from .tokenizer import plain_text, tokenize


def plain_length(spans: list[Span]) -> int:
    """Count of user-visible characters across *spans*."""
    return sum(len(span.text) for span in spans)


def slice_at(spans: list[Span], budget: int) -> list[Span]:
    """Return the prefix of *spans* holding at most *budget* visible chars.

    The last span may be truncated; it keeps its kind and url. A budget
    past the plain length returns every span.
    """
    if budget <= 0:
        return []

    visible: list[Span] = []
    remaining = budget
    for span in spans:
        if remaining <= 0:
            break
        length = len(span.text)
        if length <= remaining:
            visible.append(span)
            remaining -= length
        else:
            visible.append(replace(span, text=span.text[:remaining]))
            remaining = 0
    return visible


def word_boundaries(spans: list[Span]) -> list[int]:
    """Cumulative plain offsets at which each whitespace-delimited word ends.

    Strictly ascending. The last value is always the plain length, so a
    trailing whitespace run is covered by a final boundary.
    """
    text = plain_text(spans)
    boundaries: list[int] = []
    offset = 0
    for segment in WHITESPACE_RUN_RE.split(text):
        if not segment:
            continue
        offset += len(segment)
        if not segment.isspace():
            boundaries.append(offset)

    last = boundaries[-1] if boundaries else 0
    if offset > last:
        boundaries.append(offset)
    return boundaries


def render_complete(source: str) -> list[Span]:
    """Fully formed spans for a historical entry, bypassing any scheduler."""
    spans = tokenize(source)
    return slice_at(spans, plain_length(spans))
