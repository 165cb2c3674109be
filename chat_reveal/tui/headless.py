"""Headless player: no TUI, same chain scheduler on a plain asyncio loop."""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..core.chain import ChainScheduler
from ..core.clock import AsyncioClock
from ..render import spans_to_text
from ..types import ChatRevealConfig, MessageEntry, RevealState


class HeadlessPlayer:
    """Play replies through a ``ChainScheduler`` and print them with Rich.

    The bubble being revealed is shown in a transient ``Live`` region;
    each bubble is printed permanently once it completes. Replies play
    strictly one after another: the next reply is pushed only after the
    previous one's last chained block has completed.
    """

    def __init__(
        self,
        config: ChatRevealConfig | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config or ChatRevealConfig()
        self.console = console or Console()
        self._live: Live | None = None
        self._reply_done: asyncio.Event | None = None

    def run(self, replies: list[str]) -> list[MessageEntry]:
        """Blocking wrapper around :meth:`play`."""
        return asyncio.run(self.play(replies))

    async def play(self, replies: list[str]) -> list[MessageEntry]:
        chain = ChainScheduler(
            AsyncioClock(),
            reveal_config=self.config.reveal,
            chain_config=self.config.chain,
            on_entry_updated=self._show_progress,
            on_entry_complete=self._print_entry,
        )
        with Live(Text(""), console=self.console, transient=True, auto_refresh=False) as live:
            self._live = live
            try:
                for reply in replies:
                    self._reply_done = asyncio.Event()
                    chain.push_reply(reply)
                    await self._reply_done.wait()
            finally:
                chain.close()
                self._live = None
        return chain.entries

    def _show_progress(self, entry: MessageEntry) -> None:
        if self._live is None or entry.reveal_state is not RevealState.REVEALING:
            return
        self._live.update(spans_to_text(entry.visible_spans, cursor=self.config.reveal.cursor), refresh=True)

    def _print_entry(self, entry: MessageEntry) -> None:
        if self._live is not None:
            self._live.update(Text(""), refresh=True)
        prefix = "  " if entry.is_sub_message else "[bold green]>[/bold green] "
        self.console.print(Text.from_markup(prefix) + spans_to_text(entry.visible_spans))
        if not entry.remaining_blocks and self._reply_done is not None:
            self._reply_done.set()
