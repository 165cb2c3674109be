"""Scrollable chat display driven by a ChainScheduler."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import RichLog

from ...render import spans_to_text
from ...types import MessageEntry, RevealState

_HEADERS = {
    "user": "[bold cyan]You:[/bold cyan] ",
    "assistant": "[bold green]Assistant:[/bold green] ",
}
TYPING_LINE = "[dim]Assistant is typing...[/dim]"


class ChatView(RichLog):
    """Displays chat entries with Rich styles, auto-scrolling.

    Completed entries are written once and kept for replay. The entry
    being revealed is redrawn on every tick by clearing the log and
    replaying the completed lines underneath it.

    The widget also serves as the reveal clock: ``set_interval`` is the
    Textual timer API the schedulers expect.
    """

    def __init__(self, cursor: str = "▌", **kwargs) -> None:
        super().__init__(markup=True, wrap=True, auto_scroll=True, **kwargs)
        self.cursor = cursor
        self._message_log: list[Text | str] = []
        self._live_entry: MessageEntry | None = None

    @property
    def live_entry(self) -> MessageEntry | None:
        return self._live_entry

    @property
    def message_log(self) -> list[Text | str]:
        return list(self._message_log)

    def _write_line(self, line: Text | str) -> None:
        """Write a line and track it for replay."""
        self._message_log.append(line)
        self.write(line)

    def _replay(self) -> None:
        self.clear()
        for line in self._message_log:
            self.write(line)

    @staticmethod
    def _render(entry: MessageEntry, cursor: str | None = None) -> Text:
        header = "" if entry.is_sub_message else _HEADERS.get(entry.role, "")
        line = Text.from_markup(header)
        line.append_text(spans_to_text(entry.visible_spans, cursor=cursor))
        if entry.role == "system":
            line.stylize("dim italic")
        return line

    def add_system_message(self, text: str) -> None:
        self._write_line(Text(text, style="dim italic"))
        self._write_line("")
        if self._live_entry is not None:
            self.update_entry(self._live_entry)

    # -- ChainScheduler hooks ------------------------------------------------

    def show_entry(self, entry: MessageEntry) -> None:
        """Entry appended to the conversation."""
        if entry.is_complete:
            return
        self._live_entry = entry
        if entry.is_loading:
            self._replay()
            self.write(TYPING_LINE)

    def update_entry(self, entry: MessageEntry) -> None:
        """Redraw the live entry with its latest visible spans."""
        if entry is not self._live_entry:
            return
        if entry.is_loading:
            self._replay()
            self.write(TYPING_LINE)
            return
        cursor = self.cursor if entry.reveal_state is RevealState.REVEALING else None
        self._replay()
        self.write(self._render(entry, cursor=cursor))

    def complete_entry(self, entry: MessageEntry) -> None:
        """Commit a fully revealed entry to the log."""
        if entry is self._live_entry:
            self._live_entry = None
            self._replay()
        self._write_line(self._render(entry))
        self._write_line("")

    def reset(self) -> None:
        self._message_log = []
        self._live_entry = None
        self.clear()
