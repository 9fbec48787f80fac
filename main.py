from textual.app import App, ComposeResult
from textual.widgets import Footer
from textual.containers import Horizontal, Vertical
from textual.binding import Binding
import argparse
import logging
from pathlib import Path

from models.frequency import AnalyzerConfig
from models.playback import TickResult
from models.track import Track
from services.audio_player import AudioSink
from services.decoder import TrackLoadError
from services.music_library import MusicLibrary, search_dir
from services.navigator import PlaybackNavigator
from services.queue_store import QueueStore
from services.session import PlaybackSession
from styles import COLOR_PRIMARY, ui_color
from views import NowPlayingView, SpectrumView, TrackListView
from widgets import AddSongsScreen

log_dir = Path.home() / '.local' / 'share' / 'tickplay'
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / 'tickplay.log'

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_file)
    ]
)

logger = logging.getLogger(__name__)


class TickplayApp(App):
    """Terminal music player with a live spectrum visualizer."""

    CSS = """
    Screen {
        background: #1a1a1a;
    }

    #top-container {
        height: auto;
    }

    #lists-container {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "next_track", "Next"),
        Binding("b", "previous_track", "Back"),
        Binding("p", "play_pause", "Play/Pause"),
        Binding("r", "restart", "Restart"),
        Binding("a", "add_songs", "Add songs"),
        Binding("s", "shuffle", "Shuffle"),
    ]

    def __init__(self, navigator: PlaybackNavigator, use_default_color: bool = False,
                 config: AnalyzerConfig | None = None, session: PlaybackSession | None = None,
                 *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.config = config or AnalyzerConfig()
        self.music_library = MusicLibrary()
        self.use_default_color = use_default_color
        self.session = session or PlaybackSession(
            navigator,
            config=self.config,
            on_load_error=self._handle_load_error,
        )
        self.ui_color = COLOR_PRIMARY
        self._duration: float | None = None
        self.exited_cleanly = False

    @property
    def navigator(self) -> PlaybackNavigator:
        return self.session.navigator

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        with Vertical():
            with Horizontal(id="top-container"):
                yield SpectrumView(self.config.num_bars, id="spectrum")
                yield NowPlayingView(id="now_playing")
            with Horizontal(id="lists-container"):
                yield TrackListView("up-next", id="up-next")
                yield TrackListView("history", id="history")

        yield Footer()

    def on_mount(self) -> None:
        self.set_interval(self.config.tick_rate / 2, self._on_tick)
        self._start_next_track()

    def _handle_load_error(self, track: Track, error: TrackLoadError) -> None:
        self.notify(f"❌ Could not load {track.name}, skipping\n\n{error.reason[:80]}", severity="error", timeout=4)

    def _start_next_track(self) -> None:
        """Load the next playable track, or ask for more songs when the queue is empty."""
        track = self.session.load_next()
        if track is None:
            self.push_screen(
                AddSongsScreen(self.music_library, search_dir(), COLOR_PRIMARY),
                callback=self._handle_queue_refill
            )
            return

        self.ui_color = ui_color(track.name, self.use_default_color)
        self._duration = self.music_library.probe_duration(track)
        self._refresh_display()

    def _load_song_list(self, path: str) -> list[Track] | None:
        try:
            return self.music_library.load(Path(path))
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            self.notify(f"❌ Cannot read {path}\n\n{e.strerror or e}", severity="error", timeout=5)
            return None

    def _handle_queue_refill(self, path: str | None) -> None:
        """Handle the add-songs dialog shown when nothing is left to play."""
        if not path:
            logger.info("No more songs supplied, ending session")
            self._finish()
            return

        tracks = self._load_song_list(path)
        if tracks is None:
            self._start_next_track()
            return
        if not tracks:
            logger.info(f"No playable songs in {path}, ending session")
            self._finish()
            return

        self.session.enqueue(tracks)
        self._start_next_track()

    def _handle_add_songs(self, path: str | None) -> None:
        """Handle the add-songs dialog opened mid-song."""
        if path:
            tracks = self._load_song_list(path)
            if tracks is not None:
                self.session.insert_and_continue(tracks)
                self._start_next_track()
                return

        self.session.resume()

    def _on_tick(self) -> None:
        if self.session.now_playing is None:
            return

        try:
            result = self.session.tick()
        except Exception as e:
            logger.error(f"Error during tick: {type(e).__name__}: {e}", exc_info=True)
            return

        if result == TickResult.FINISHED:
            self._start_next_track()
        else:
            self._refresh_display()

    def _refresh_display(self) -> None:
        color = self.ui_color
        self.query_one("#spectrum", SpectrumView).update_bars(self.session.bars(), color)
        self.query_one("#now_playing", NowPlayingView).update_track(
            self.session.now_playing, self._duration, self.session.get_state(), color
        )
        self.query_one("#up-next", TrackListView).update_names(self.navigator.up_next_names(), color)
        self.query_one("#history", TrackListView).update_names(self.navigator.history_names(), color)

    def _finish(self) -> None:
        self.session.close()
        self.exited_cleanly = True
        self.exit()

    def action_quit(self) -> None:
        """Handle quit action for clean shutdown."""
        self._finish()

    def action_next_track(self) -> None:
        if self.session.now_playing is None:
            return
        self.session.advance()
        self._start_next_track()

    def action_previous_track(self) -> None:
        if self.session.now_playing is None:
            return
        self.session.rewind()
        self._start_next_track()

    def action_play_pause(self) -> None:
        self.session.toggle_pause()
        self._refresh_display()

    def action_restart(self) -> None:
        if self.session.now_playing is None:
            return
        if not self.session.restart():
            self._start_next_track()

    def action_add_songs(self) -> None:
        if self.session.now_playing is None:
            return
        self.session.pause()
        self.push_screen(
            AddSongsScreen(self.music_library, search_dir(), self.ui_color),
            callback=self._handle_add_songs
        )

    def action_shuffle(self) -> None:
        if self.session.now_playing is None:
            return
        self.session.shuffle()
        self._start_next_track()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tickplay",
        description="Play a queue of local audio files with a live spectrum visualizer."
    )
    parser.add_argument("-p", "--path", type=Path,
                        help="song file or directory of songs; defaults to the saved queue")
    parser.add_argument("-d", "--default-color", action="store_true",
                        help="use the default UI colour instead of one picked per song")
    return parser.parse_args(argv)


def load_initial_queue(path: Path | None, store: QueueStore) -> list[Track]:
    """Tracks to start with: the given path, or the queue saved last session."""
    if path is not None:
        return MusicLibrary().load(path)
    return store.load()


def main(argv=None):
    """Entry point for the tickplay application.

    Handles initialization errors and provides user-friendly error messages.
    """
    args = parse_args(argv)
    store = QueueStore()

    try:
        logger.info("=" * 60)
        logger.info("tickplay starting up")
        logger.info("=" * 60)

        navigator = PlaybackNavigator(load_initial_queue(args.path, store))
        AudioSink.init_mixer()
        app = TickplayApp(navigator, use_default_color=args.default_color)
        app.run()

        if app.exited_cleanly and navigator.pending:
            store.save(navigator.pending)
        else:
            print("nothing to write")

        logger.info("tickplay shut down cleanly")

    except OSError as e:
        logger.critical(f"Cannot load songs: {e}")
        print("\n❌ tickplay cannot start\n")
        print("No songs could be loaded from the given path or the saved queue.")
        print(f"{e}\n")
        exit(1)
    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ tickplay cannot start\n")
        print(f"{e}\n")
        print(f"Check {log_file} for more details.\n")
        exit(1)
    except KeyboardInterrupt:
        logger.info("tickplay interrupted by user")
        print("\n\nGoodbye! 👋\n")
        exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ tickplay encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {log_file} for more details.\n")
        exit(1)


if __name__ == "__main__":
    main()
