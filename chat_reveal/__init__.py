"""chat-reveal: inline chat markup with live-typing progressive reveal."""

from .config import load_config
from .core.chain import ChainScheduler
from .core.reveal import RevealScheduler
from .core.slicer import plain_length, slice_at, word_boundaries
from .core.tokenizer import tokenize
from .types import (
    ChatRevealConfig,
    MessageEntry,
    RevealConfig,
    RevealState,
    SchedulerState,
    Span,
)

__version__ = "0.1.0"

__all__ = [
    "tokenize",
    "plain_length",
    "slice_at",
    "word_boundaries",
    "RevealScheduler",
    "ChainScheduler",
    "load_config",
    "ChatRevealConfig",
    "MessageEntry",
    "RevealConfig",
    "RevealState",
    "SchedulerState",
    "Span",
]
