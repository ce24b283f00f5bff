"""Textual paste editor used to collect logs interactively."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Footer, Static, TextArea

from .constants import ACCENT


class LogEditorApp(App[str]):
    """Full-screen editor: paste the log, then submit with ctrl+s."""

    CSS = """
    Screen {
        background: #020617;
        color: #e5e7eb;
    }

    #header {
        height: 3;
        padding: 0 2;
        border-bottom: solid #1f2937;
    }

    #log-input {
        height: 1fr;
        border: none;
    }
    """

    BINDINGS = [
        ("ctrl+s", "submit", "Decode"),
        ("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            yield Static(self._title_text(), id="title")
            yield Static("Paste your logs, then press ctrl+s", classes="subtle")
        yield TextArea(id="log-input")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#log-input", TextArea).focus()

    def action_submit(self) -> None:
        self.exit(self.query_one("#log-input", TextArea).text)

    def action_cancel(self) -> None:
        self.exit("")

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("decode", ACCENT),
            ("-sourcemap > Paste logs", "bold"),
        )
