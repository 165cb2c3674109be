"""Chat input: Enter submits, Ctrl+N inserts a newline, Ctrl+R recalls."""

from __future__ import annotations

from textual.binding import Binding
from textual.events import Key
from textual.message import Message
from textual.widgets import TextArea


class InputBox(TextArea):
    """Multi-line input. Enter submits the message."""

    class MessageSubmitted(Message):
        """Posted when the user submits a message."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    BINDINGS = [
        Binding("ctrl+n", "newline", "New Line"),
        Binding("ctrl+r", "recall", "Recall Last"),
    ]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._sent: list[str] = []

    @property
    def sent_messages(self) -> list[str]:
        return list(self._sent)

    def _on_key(self, event: Key) -> None:
        if event.key == "enter":
            event.prevent_default()
            event.stop()
            text = self.text.strip()
            if text:
                self._sent.append(text)
                self.post_message(self.MessageSubmitted(text))
                self.clear()

    def action_newline(self) -> None:
        """Insert a newline at the cursor."""
        self.insert("\n")

    def action_recall(self) -> None:
        """Put the last submitted message back in the box for editing."""
        if self._sent:
            self.load_text(self._sent[-1])
