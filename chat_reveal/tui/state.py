"""Reply sources and reply-script loading for the chat front ends."""

from __future__ import annotations

import json
import re
from pathlib import Path

import yaml

from ..types import MessageEntry

_SEPARATOR_RE = re.compile(r"^\s*---\s*$", re.MULTILINE)


class ScriptedReplySource:
    """Replies from a fixed script, in order. Repeats the last one when exhausted."""

    def __init__(self, replies: list[str]) -> None:
        if not replies:
            raise ValueError("ScriptedReplySource needs at least one reply")
        self._replies = list(replies)
        self._index = 0

    @property
    def remaining(self) -> int:
        return max(len(self._replies) - self._index, 0)

    def reply(self, text: str) -> str:
        idx = min(self._index, len(self._replies) - 1)
        self._index += 1
        return self._replies[idx]


class EchoReplySource:
    """Echo the user's text back with a little markup."""

    def reply(self, text: str) -> str:
        return f"You said: **{text}**\n\nTry `*italic*`, `~~strike~~` or a [link](https://example.com)."


def load_reply_script(path: str | Path) -> list[str]:
    """Load canned replies from JSON, YAML, or plain text.

    Supports:
    - **JSON / YAML**: a list of strings, or a mapping with a ``replies`` list
    - **Plain text**: replies separated by lines containing only ``---``;
      blank lines inside a reply separate its bubbles

    Returns a list of reply strings.
    """
    p = Path(path)
    text = p.read_text()

    data = None
    if p.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None
    elif p.suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            data = None

    if isinstance(data, dict) and "replies" in data:
        data = data["replies"]
    if isinstance(data, list):
        return [str(item).strip() for item in data if str(item).strip()]

    # Fall back to plain text
    return [part.strip() for part in _SEPARATOR_RE.split(text) if part.strip()]


def history_from_dicts(items: list[dict]) -> list[MessageEntry]:
    """Build historical entries from ``{"role", "content"}`` dicts."""
    return [
        MessageEntry(role=item.get("role", "assistant"), content=item.get("content", ""))
        for item in items
        if item.get("content")
    ]
