from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static
from rich.text import Text

from styles import COLOR_INACTIVE


class TrackListView(Container):
    """Titled list of track names, used for up-next and history."""

    DEFAULT_CSS = """
    TrackListView {
        border: round #ffd700;
        padding: 0 1;
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, title: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = title
        self._names: list[str] = []
        self._color = COLOR_INACTIVE

    def compose(self) -> ComposeResult:
        yield Static(self._render_names(self._names, COLOR_INACTIVE), classes="track-names")

    def _render_names(self, names: list[str], color: str) -> Text:
        if not names:
            return Text("(empty)", style=COLOR_INACTIVE)
        return Text("\n".join(names), style=f"{color} italic")

    def update_names(self, names: list[str], color: str) -> None:
        """Replace the listed names, skipping the redraw when nothing changed."""
        self.styles.border = ("round", color)
        if names == self._names and color == self._color:
            return
        self._names = list(names)
        self._color = color
        self.query_one(".track-names", Static).update(self._render_names(self._names, color))
