"""RevealChatApp: Textual application wiring the chain scheduler into a chat view."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.timer import Timer
from textual.widgets import Footer

from ..config import load_config
from ..core.chain import ChainScheduler
from ..types import ChatRevealConfig, MessageEntry, ReplySource
from .state import EchoReplySource
from .widgets.chat_view import ChatView
from .widgets.input_box import InputBox

logger = logging.getLogger(__name__)


class RevealChatApp(App):
    """Interactive chat whose replies type themselves out bubble by bubble."""

    CSS = """
    #chat-area {
        height: 1fr;
    }
    #chat-view {
        height: 1fr;
        padding: 0 1;
    }
    #input-box {
        height: 5;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+s", "skip", "Skip", priority=True),
        Binding("ctrl+t", "toggle_animation", "Animation", priority=True),
        Binding("ctrl+w", "toggle_mode", "Word Mode", priority=True),
        Binding("ctrl+l", "clear_chat", "Clear", priority=True),
    ]

    def __init__(
        self,
        config_path: str | None = None,
        config: ChatRevealConfig | None = None,
        reply_source: ReplySource | None = None,
        history: list[MessageEntry] | None = None,
        reply_delay: float = 0.6,
    ) -> None:
        super().__init__()
        self._config_path = config_path
        self._config = config
        self.reply_source: ReplySource = reply_source or EchoReplySource()
        self._history: list[MessageEntry] = history or []
        self._reply_delay = reply_delay
        self._awaiting_reply = False
        self._reply_timer: Timer | None = None
        # bumped on clear so replies for a wiped conversation are discarded
        self._generation = 0
        self.chain: ChainScheduler | None = None

    @property
    def _chat_view(self) -> ChatView:
        return self.query_one("#chat-view", ChatView)

    def compose(self) -> ComposeResult:
        with Vertical(id="chat-area"):
            yield ChatView(id="chat-view")
            yield InputBox(id="input-box")
        yield Footer()

    def on_mount(self) -> None:
        if self._config is None:
            try:
                self._config = load_config(self._config_path)
            except Exception as e:
                self._config = ChatRevealConfig()
                self._chat_view.add_system_message(f"Config load failed: {e}")
                self._chat_view.add_system_message("Using default reveal settings.")

        chat_view = self._chat_view
        chat_view.cursor = self._config.reveal.cursor
        self.chain = ChainScheduler(
            clock=chat_view,
            reveal_config=self._config.reveal,
            chain_config=self._config.chain,
            on_entry_added=chat_view.show_entry,
            on_entry_updated=chat_view.update_entry,
            on_entry_complete=chat_view.complete_entry,
        )
        if self._history:
            self.chain.load_history(self._history)

        reveal = self._config.reveal
        chat_view.add_system_message(
            f"Reveal: {reveal.mode} mode, {reveal.interval_ms}ms, "
            f"animation {'on' if reveal.animation_enabled else 'off'}. "
            "Type a message and press Enter."
        )
        self.query_one("#input-box", InputBox).focus()

    def on_unmount(self) -> None:
        self._cancel_reply()
        if self.chain is not None:
            self.chain.close()

    def on_input_box_message_submitted(self, event: InputBox.MessageSubmitted) -> None:
        if self._awaiting_reply or self.chain is None:
            return
        self._send_message(event.text)

    def _send_message(self, text: str) -> None:
        self._awaiting_reply = True
        self.chain.push_entry(MessageEntry(role="user", content=text))
        self.chain.begin_pending()
        generation = self._generation
        if self._reply_delay > 0:
            self._reply_timer = self.set_timer(
                self._reply_delay, lambda: self._deliver_reply(text, generation)
            )
        else:
            self.call_later(self._deliver_reply, text, generation)

    def _cancel_reply(self) -> None:
        if self._reply_timer is not None:
            self._reply_timer.stop()
            self._reply_timer = None

    def _deliver_reply(self, user_text: str, generation: int) -> None:
        self._reply_timer = None
        if generation != self._generation or self.chain is None:
            logger.debug("Discarding reply for a cleared conversation")
            return
        try:
            reply = self.reply_source.reply(user_text)
        except Exception as e:
            logger.error("Reply source failed: %s", e)
            reply = f"~~No reply~~ ({e})"
        finally:
            self._awaiting_reply = False
        self.chain.resolve_pending(reply)

    def action_skip(self) -> None:
        """Finish the bubble that is currently typing."""
        if self.chain is not None:
            self.chain.skip()

    def action_toggle_animation(self) -> None:
        if self.chain is None:
            return
        enabled = not self.chain.reveal_config.animation_enabled
        self.chain.set_animation_enabled(enabled)
        self._chat_view.add_system_message(f"Animation {'ON' if enabled else 'OFF'}")

    def action_toggle_mode(self) -> None:
        """Switch between character and word reveal for the next bubble."""
        if self.chain is None:
            return
        mode = "word" if self.chain.reveal_config.mode == "character" else "character"
        self.chain.set_mode(mode)
        self._chat_view.add_system_message(f"Reveal mode: {mode}")

    def action_clear_chat(self) -> None:
        if self.chain is None:
            return
        self._cancel_reply()
        self._generation += 1
        self.chain.reset()
        self._awaiting_reply = False
        self._chat_view.reset()


def run_chat(
    config_path: str | None = None,
    reply_source: ReplySource | None = None,
    history: list[MessageEntry] | None = None,
) -> None:
    """Entry point for the TUI chat."""
    app = RevealChatApp(
        config_path=config_path,
        reply_source=reply_source,
        history=history,
    )
    app.run()
