"""Regex patterns for inline markup, in priority order.

Kept in a standalone module so the tokenizer and the CLI ``tokens``
command share one definition.
"""

from __future__ import annotations

import re

# (kind, pattern). Order matters: for matches starting at the same offset
# the earlier pattern wins, and bold is scanned before italic.
MARKUP_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("bold", re.compile(r"\*\*(.+?)\*\*")),
    ("bold", re.compile(r"__(.+?)__")),
    # single delimiters that are not part of a double one
    ("italic", re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)")),
    ("italic", re.compile(r"(?<!_)_(?!_)(.+?)(?<!_)_(?!_)")),
    ("code", re.compile(r"`(.+?)`")),
    ("strikethrough", re.compile(r"~~(.+?)~~")),
    ("link", re.compile(r"\[(.+?)\]\((.+?)\)")),
]

WHITESPACE_RUN_RE = re.compile(r"(\s+)")

BLANK_LINE_RE = re.compile(r"\n\s*\n")
