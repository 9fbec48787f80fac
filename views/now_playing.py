from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static
from rich.text import Text

from models.playback import PlaybackState
from models.track import Track, format_time
from styles import COLOR_MUTED, COLOR_PRIMARY

CONTROLS_HELP = (
    ("q", "quit"),
    ("n", "next"),
    ("b", "back"),
    ("p", "play/pause"),
    ("r", "restart song"),
    ("a", "add songs"),
    ("s", "shuffle"),
)


class NowPlayingView(Container):
    """Widget displaying the loaded track and the key controls."""

    DEFAULT_CSS = """
    NowPlayingView {
        border: round #ffd700;
        padding: 0 1;
        width: 1fr;
    }

    NowPlayingView #np-title {
        text-style: bold;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.border_title = "now-playing"
        self._title_widget: Static | None = None
        self._time_widget: Static | None = None
        self._state_widget: Static | None = None

    def compose(self) -> ComposeResult:
        """Compose the now playing view with track info and controls."""
        with Vertical():
            yield Static("No track playing", id="np-title")
            yield Static("--:--", id="np-time")
            yield Static("State: Stopped", id="np-state")
            yield Static(self._render_controls(COLOR_PRIMARY), id="np-controls")

    def on_mount(self) -> None:
        self._title_widget = self.query_one("#np-title", Static)
        self._time_widget = self.query_one("#np-time", Static)
        self._state_widget = self.query_one("#np-state", Static)

    def _render_controls(self, color: str) -> Text:
        result = Text("\n")
        for key, description in CONTROLS_HELP:
            result.append(f"{key}", style=f"{color} bold")
            result.append(f": {description}\n", style=COLOR_MUTED)
        return result

    def update_track(self, track: Track | None, duration: float | None,
                     state: PlaybackState, color: str) -> None:
        """Refresh the panel for the loaded track."""
        if self._title_widget is None:
            return

        self.styles.border = ("round", color)
        if track:
            self._title_widget.update(Text(track.name, style=color))
            self._time_widget.update(Text(format_time(duration), style=COLOR_MUTED))
        else:
            self._title_widget.update("No track playing")
            self._time_widget.update("--:--")

        self._state_widget.update(f"State: {state.value.capitalize()}")
        self.query_one("#np-controls", Static).update(self._render_controls(color))
