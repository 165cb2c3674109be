"""All dataclasses, Protocols, and type aliases for chat-reveal."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Literal, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------

SpanKind = Literal["plain", "bold", "italic", "code", "strikethrough", "link"]
RevealMode = Literal["character", "word"]

SPAN_KINDS: tuple[str, ...] = ("plain", "bold", "italic", "code", "strikethrough", "link")
REVEAL_MODES: tuple[str, ...] = ("character", "word")


@dataclass(frozen=True)
class Span:
    """A typed, contiguous run of visible text."""
    kind: SpanKind
    text: str
    url: str | None = None  # only for kind == "link"


@dataclass(frozen=True)
class MarkupMatch:
    """One pattern hit over the raw source string."""
    start: int
    end: int
    span: Span


# ---------------------------------------------------------------------------
# Reveal state
# ---------------------------------------------------------------------------

class RevealState(str, Enum):
    """Lifecycle of a message entry as seen by the rendering layer."""
    PENDING = "pending"
    REVEALING = "revealing"
    COMPLETE = "complete"


class SchedulerState(str, Enum):
    IDLE = "idle"
    REVEALING = "revealing"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------

@dataclass
class MessageEntry:
    """A unit in the visible conversation."""
    role: str  # "user", "assistant", "system"
    content: str
    reveal_state: RevealState = RevealState.PENDING
    remaining_blocks: list[str] = field(default_factory=list)
    is_sub_message: bool = False  # produced by chaining, rendered without a header
    is_loading: bool = False  # placeholder while a reply is pending
    visible_spans: list[Span] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_user(self) -> bool:
        return self.role == "user"

    @property
    def is_complete(self) -> bool:
        return self.reveal_state is RevealState.COMPLETE


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------

@runtime_checkable
class Timer(Protocol):
    def stop(self) -> None: ...


@runtime_checkable
class Clock(Protocol):
    """Anything that can arm a repeating timer.

    Textual widgets satisfy this protocol through ``Widget.set_interval``.
    """

    def set_interval(self, interval: float, callback: Callable[[], object]) -> Timer: ...


TickCallback = Callable[[list[Span]], None]
CompleteCallback = Callable[[], None]
EntryCallback = Callable[[MessageEntry], None]


# ---------------------------------------------------------------------------
# Replies
# ---------------------------------------------------------------------------

@runtime_checkable
class ReplySource(Protocol):
    def reply(self, text: str) -> str: ...


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class RevealConfig:
    """Cadence and granularity of progressive disclosure."""
    mode: RevealMode = "character"
    interval_ms: int = 30
    word_tick_multiplier: int = 4  # applied only in word mode
    animation_enabled: bool = True
    cursor: str = "▌"  # shown after the visible text while revealing

    @property
    def tick_seconds(self) -> float:
        interval = self.interval_ms
        if self.mode == "word":
            interval *= self.word_tick_multiplier
        return interval / 1000


@dataclass
class ChainConfig:
    """How one reply is split into sequential bubbles."""
    split_blocks: bool = True
    max_blocks: int = 12
    min_block_chars: int = 0  # shorter blocks merge into the previous one


@dataclass
class ChatRevealConfig:
    version: str = "1.0"
    reveal: RevealConfig = field(default_factory=RevealConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
