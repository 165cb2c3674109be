"""Inline-markup tokenizer: raw text -> ordered, non-overlapping spans."""

from __future__ import annotations

from ..patterns import MARKUP_PATTERNS
from ..types import MarkupMatch, Span


def find_matches(source: str) -> list[MarkupMatch]:
    """Run every markup pattern over *source* and pool the hits.

    The pool is sorted by start offset. The sort is stable, so hits that
    start at the same offset keep pattern priority order.
    """
    matches: list[MarkupMatch] = []
    for kind, pattern in MARKUP_PATTERNS:
        for m in pattern.finditer(source):
            if kind == "link":
                span = Span(kind="link", text=m.group(1), url=m.group(2))
            else:
                span = Span(kind=kind, text=m.group(1))
            matches.append(MarkupMatch(start=m.start(), end=m.end(), span=span))
    matches.sort(key=lambda hit: hit.start)
    return matches


def tokenize(source: str) -> list[Span]:
    """Parse *source* into spans. First match wins on overlap.

    Unbalanced markup never completes a pattern and stays in a plain span.
    """
    if not source:
        return []

    spans: list[Span] = []
    pos = 0
    for hit in find_matches(source):
        if hit.start < pos:
            # overlaps an already consumed match
            continue
        if hit.start > pos:
            spans.append(Span(kind="plain", text=source[pos:hit.start]))
        spans.append(hit.span)
        pos = hit.end

    if pos < len(source):
        spans.append(Span(kind="plain", text=source[pos:]))
    return spans


def plain_text(spans: list[Span]) -> str:
    return "".join(span.text for span in spans)
