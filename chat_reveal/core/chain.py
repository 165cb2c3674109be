"""ChainScheduler: one logical reply revealed as a sequence of bubbles."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..types import (
    ChainConfig,
    Clock,
    EntryCallback,
    MessageEntry,
    RevealConfig,
    RevealMode,
    RevealState,
    SchedulerState,
    Span,
)
from .blocks import split_blocks
from .reveal import RevealScheduler
from .slicer import render_complete

logger = logging.getLogger(__name__)


class ChainScheduler:
    """Owns the ordered entries of one conversation and its single reveal.

    Only the most recent non-user entry is ever revealing. When it
    completes, the head of its ``remaining_blocks`` becomes a new
    sub-message entry with the tail as its own queue, and a new reveal
    starts for it. Each entry's completion dequeues at most once.
    """

    def __init__(
        self,
        clock: Clock,
        reveal_config: RevealConfig | None = None,
        chain_config: ChainConfig | None = None,
        *,
        on_entry_added: EntryCallback | None = None,
        on_entry_updated: EntryCallback | None = None,
        on_entry_complete: EntryCallback | None = None,
    ) -> None:
        self.clock = clock
        # private copies: toggles on this conversation must not leak out
        self.reveal_config = replace(reveal_config or RevealConfig())
        self.chain_config = replace(chain_config or ChainConfig())
        self.on_entry_added = on_entry_added
        self.on_entry_updated = on_entry_updated
        self.on_entry_complete = on_entry_complete

        self.entries: list[MessageEntry] = []
        self._active: RevealScheduler | None = None
        self._active_entry: MessageEntry | None = None
        self._chained: set[str] = set()
        self._draining = False
        self._next_source: MessageEntry | None = None

    @property
    def active_entry(self) -> MessageEntry | None:
        return self._active_entry

    @property
    def active_scheduler(self) -> RevealScheduler | None:
        return self._active

    @property
    def is_revealing(self) -> bool:
        return self._active is not None and self._active.state is SchedulerState.REVEALING

    # -- entry intake -------------------------------------------------------

    def push_entry(self, entry: MessageEntry, animate: bool = True) -> MessageEntry:
        """Append *entry*; assistant entries start revealing.

        User and system entries, loading placeholders, and anything pushed
        with ``animate=False`` render fully formed and never chain.
        """
        self._interrupt_active()
        if not entry.is_loading:
            self._drop_placeholders()
        self.entries.append(entry)
        self._notify(self.on_entry_added, entry)

        if entry.is_loading:
            return entry
        if entry.role != "assistant" or not animate:
            self._complete_static(entry)
            return entry

        self._start_reveal(entry)
        return entry

    def push_reply(self, text: str, animate: bool = True) -> MessageEntry:
        """Append an assistant reply, split into chained blocks if enabled."""
        first, rest = self._first_and_rest(text)
        return self.push_entry(
            MessageEntry(role="assistant", content=first, remaining_blocks=rest),
            animate=animate,
        )

    def load_history(self, entries: list[MessageEntry]) -> None:
        """Append historical entries. They are complete and never animate."""
        self._interrupt_active()
        self._drop_placeholders()
        for entry in entries:
            self.entries.append(entry)
            self._notify(self.on_entry_added, entry)
            self._complete_static(entry)

    def begin_pending(self) -> MessageEntry | None:
        """Show a loading placeholder when the last entry is from the user."""
        if not self.entries or not self.entries[-1].is_user:
            return None
        return self.push_entry(MessageEntry(role="assistant", content="", is_loading=True))

    def resolve_pending(self, text: str) -> MessageEntry:
        """Fill the loading placeholder with *text* and start revealing it.

        Only a placeholder that is still the last entry is reused; otherwise
        the reply is appended as a fresh entry.
        """
        placeholder = self.entries[-1] if self.entries and self.entries[-1].is_loading else None
        if placeholder is None:
            return self.push_reply(text)

        first, rest = self._first_and_rest(text)
        placeholder.content = first
        placeholder.remaining_blocks = rest
        placeholder.is_loading = False
        self._start_reveal(placeholder)
        return placeholder

    def update_content(self, entry: MessageEntry, text: str) -> None:
        """Replace an entry's source text.

        A revealing entry restarts from cursor 0 on its own scheduler; the
        old timer is stopped before the new one is armed.
        """
        if entry is self._active_entry and self._active is not None:
            if text == self._active.source:
                return
            entry.content = text
            entry.visible_spans = []
            self._active.set_source(text)
            if self._active is not None and self._active.state is SchedulerState.REVEALING:
                entry.reveal_state = RevealState.REVEALING
            return
        entry.content = text
        if entry.is_complete:
            entry.visible_spans = render_complete(text)
            self._notify(self.on_entry_updated, entry)

    # -- completion ---------------------------------------------------------

    def handle_complete(self, entry: MessageEntry) -> None:
        """Completion hook for *entry*; repeat notifications are no-ops.

        Blocks whose reveal finishes inside ``start()`` (animation off, empty
        text) are chained by the loop below rather than by re-entering this
        method, so the stack depth stays flat however many blocks are queued.
        """
        if entry.id in self._chained:
            logger.debug("Duplicate completion for entry %s ignored", entry.id)
            return
        self._chained.add(entry.id)

        entry.reveal_state = RevealState.COMPLETE
        if entry is self._active_entry:
            self._active = None
            self._active_entry = None
        self._notify(self.on_entry_complete, entry)

        if not entry.remaining_blocks:
            return
        if self._draining:
            self._next_source = entry
            return

        self._draining = True
        try:
            source: MessageEntry | None = entry
            while source is not None:
                self._next_source = None
                self._chain_next(source)
                source = self._next_source
        finally:
            self._draining = False
            self._next_source = None

    def _chain_next(self, source: MessageEntry) -> None:
        head, *tail = source.remaining_blocks
        logger.info("Chaining next block (%d more queued)", len(tail))
        self.push_entry(
            MessageEntry(
                role=source.role,
                content=head,
                remaining_blocks=list(tail),
                is_sub_message=True,
            )
        )

    # -- controls -----------------------------------------------------------

    def skip(self) -> None:
        """Finish the current bubble now. Queued blocks still chain."""
        if self._active is not None:
            self._active.skip()

    def set_animation_enabled(self, enabled: bool) -> None:
        self.reveal_config.animation_enabled = enabled
        if self._active is not None:
            self._active.set_animation_enabled(enabled)

    def set_mode(self, mode: RevealMode) -> None:
        """Reveal granularity for the next bubble; the current one keeps its own."""
        self.reveal_config.mode = mode

    def reset(self) -> None:
        """Tear down the active reveal and forget every entry."""
        self.close()
        self.entries.clear()
        self._chained.clear()

    def close(self) -> None:
        if self._active is not None:
            self._active.cancel()
        self._active = None
        self._active_entry = None

    # -- internals ----------------------------------------------------------

    def _first_and_rest(self, text: str) -> tuple[str, list[str]]:
        if self.chain_config.split_blocks:
            blocks = split_blocks(
                text,
                max_blocks=self.chain_config.max_blocks,
                min_block_chars=self.chain_config.min_block_chars,
            )
        else:
            blocks = [text] if text else []
        if not blocks:
            return "", []
        return blocks[0], blocks[1:]

    def _start_reveal(self, entry: MessageEntry) -> None:
        self._interrupt_active(keep=entry)
        entry.reveal_state = RevealState.PENDING
        entry.visible_spans = []
        scheduler = RevealScheduler.from_config(
            entry.content,
            self.reveal_config,
            clock=self.clock,
            on_tick=lambda visible: self._on_tick(entry, visible),
            on_complete=lambda: self.handle_complete(entry),
        )
        self._active = scheduler
        self._active_entry = entry
        scheduler.start()
        # a disabled or empty reveal has already completed synchronously
        if scheduler.state is SchedulerState.REVEALING:
            entry.reveal_state = RevealState.REVEALING

    def _on_tick(self, entry: MessageEntry, visible: list[Span]) -> None:
        entry.visible_spans = visible
        self._notify(self.on_entry_updated, entry)

    def _complete_static(self, entry: MessageEntry) -> None:
        entry.visible_spans = render_complete(entry.content)
        entry.reveal_state = RevealState.COMPLETE
        self._chained.add(entry.id)
        self._notify(self.on_entry_complete, entry)

    def _drop_placeholders(self) -> None:
        """Remove loading placeholders a newer entry has superseded."""
        stale = [e for e in self.entries if e.is_loading]
        if not stale:
            return
        logger.debug("Dropping %d stale loading placeholder(s)", len(stale))
        self.entries[:] = [e for e in self.entries if not e.is_loading]

    def _interrupt_active(self, keep: MessageEntry | None = None) -> None:
        """Finish a reveal that a newer entry is about to supersede.

        Its queued blocks are flushed as complete sub-messages so no
        content is lost.
        """
        entry = self._active_entry
        if self._active is None or entry is None:
            return
        self._active.cancel()
        self._active = None
        self._active_entry = None
        if entry is keep or entry.id in self._chained:
            return

        logger.debug("Interrupting reveal of entry %s", entry.id)
        self._complete_static(entry)
        blocks, entry.remaining_blocks = entry.remaining_blocks, []
        for block in blocks:
            sub = MessageEntry(role=entry.role, content=block, is_sub_message=True)
            self.entries.append(sub)
            self._notify(self.on_entry_added, sub)
            self._complete_static(sub)

    @staticmethod
    def _notify(callback: EntryCallback | None, entry: MessageEntry) -> None:
        if callback is not None:
            callback(entry)
