from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static
from rich.text import Text

from services.music_library import MusicLibrary
from styles import COLOR_MUTED, COLOR_PRIMARY

logger = logging.getLogger(__name__)


class AddSongsScreen(ModalScreen[str | None]):
    """Modal screen asking for a file or directory of songs to add.

    Dismisses with the entered path on Enter, or None on Escape.
    """

    DEFAULT_CSS = """
    AddSongsScreen {
        align: center middle;
    }

    #add-songs-container {
        width: 60%;
        height: 60%;
        background: #1a1a1a;
        border: thick #ffd700;
        padding: 1 2;
    }

    #add-songs-input {
        margin-bottom: 1;
    }

    #add-songs-results {
        height: 1fr;
        border: round #555555;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("tab", "complete", "Complete", priority=True),
    ]

    def __init__(self, music_library: MusicLibrary, initial_query: str = "",
                 color: str = COLOR_PRIMARY) -> None:
        super().__init__()
        self.music_library = music_library
        self.initial_query = initial_query
        self.color = color
        self._results: list[str] = []

    def compose(self) -> ComposeResult:
        with Container(id="add-songs-container"):
            yield Label("enter-path-to-songs", id="add-songs-title")
            yield Input(value=self.initial_query, placeholder="~/Music", id="add-songs-input")
            with VerticalScroll(id="add-songs-results"):
                yield Static("", id="add-songs-results-list")

    def on_mount(self) -> None:
        self.query_one("#add-songs-container").styles.border = ("thick", self.color)
        self.call_after_refresh(self._focus_input)
        self._refresh_results(self.initial_query)

    def _focus_input(self) -> None:
        try:
            input_widget = self.query_one("#add-songs-input", Input)
            input_widget.focus()
            input_widget.cursor_position = len(input_widget.value)
        except Exception as e:
            logger.error(f"Failed to focus input: {e}")

    def _refresh_results(self, query: str) -> None:
        self._results = self.music_library.search(query)
        listing = Text("\n".join(self._results), style=f"{self.color} italic") if self._results \
            else Text("No matches", style=COLOR_MUTED)
        self.query_one("#add-songs-results-list", Static).update(listing)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_results(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)

    def action_complete(self) -> None:
        """Replace the query with the first search result."""
        if not self._results:
            return
        input_widget = self.query_one("#add-songs-input", Input)
        input_widget.value = self._results[0]
        input_widget.cursor_position = len(input_widget.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
