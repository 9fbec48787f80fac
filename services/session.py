from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

import numpy as np

from models.frequency import AnalyzerConfig
from models.playback import PlaybackState, TickResult
from models.track import Track
from services.audio_player import AudioSink
from services.decoder import DecodeStream, TrackLoadError
from services.music_library import has_supported_extension
from services.navigator import PlaybackNavigator, QueueEmptyError
from services.spectrum_analyzer import SpectrumAnalyzer

logger = logging.getLogger(__name__)

Loader = Callable[[Track], "tuple[SpectrumAnalyzer, AudioSink]"]


def open_track(track: Track, config: Optional[AnalyzerConfig] = None) -> tuple[SpectrumAnalyzer, AudioSink]:
    """Open the two independent decode streams for one track.

    The audio sink decodes and plays the file itself; the analyzer gets its
    own decode stream and never shares state with the sink.

    Raises:
        TrackLoadError: If the format is unsupported or either stream fails
    """
    if not has_supported_extension(track.path):
        raise TrackLoadError(track, "not a supported format")

    sink = AudioSink.open(track)
    try:
        stream = DecodeStream(track)
    except TrackLoadError:
        sink.stop()
        raise
    return SpectrumAnalyzer(stream, config), sink


class PlaybackSession:
    """Tick-driven orchestration of the navigator, analyzer and audio sink.

    The caller drives the session: `load_next()` whenever nothing is loaded,
    `tick()` once per frame, and the navigation methods in response to user
    commands. Any method that ends the current track drops the analyzer and
    sink, after which `now_playing` is None until the next `load_next()`.
    """

    def __init__(
        self,
        navigator: PlaybackNavigator,
        loader: Optional[Loader] = None,
        config: Optional[AnalyzerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        on_load_error: Callable[[Track, TrackLoadError], None] | None = None,
    ) -> None:
        self.navigator = navigator
        self.config = config or AnalyzerConfig()
        self.loader = loader or (lambda track: open_track(track, self.config))
        self.clock = clock
        self.on_load_error = on_load_error

        self.analyzer: SpectrumAnalyzer | None = None
        self.sink: AudioSink | None = None
        self._last_tick = 0.0

    @property
    def now_playing(self) -> Track | None:
        return self.navigator.now_playing

    def _open(self, track: Track) -> None:
        self.analyzer, self.sink = self.loader(track)
        self._last_tick = self.clock()

    def _unload(self) -> None:
        if self.sink is not None:
            self.sink.stop()
        if self.analyzer is not None:
            self.analyzer.close()
        self.sink = None
        self.analyzer = None

    def _report_load_error(self, track: Track, error: TrackLoadError) -> None:
        logger.warning(f"Could not load song, skipping: {error}")
        self.navigator.discard()
        if self.on_load_error:
            self.on_load_error(track, error)

    def load_next(self) -> Track | None:
        """Pop and load tracks until one opens.

        Tracks that fail to load are reported and dropped.

        Returns:
            The loaded track, or None if the queue ran out.
        """
        while True:
            try:
                track = self.navigator.pop_next()
            except QueueEmptyError:
                logger.debug("Queue empty, nothing to load")
                return None

            try:
                self._open(track)
            except TrackLoadError as e:
                self._report_load_error(track, e)
                continue

            logger.info(f"Now playing {track.name}")
            return track

    def tick(self) -> TickResult:
        """Run one frame: detect the end of the track, then sample if due."""
        if self.sink is None or self.analyzer is None:
            return TickResult.IDLE

        if self.sink.is_empty():
            logger.debug(f"Finished {self.now_playing.name}")
            self.navigator.advance()
            self._unload()
            return TickResult.FINISHED

        now = self.clock()
        elapsed = now - self._last_tick
        if not self.sink.is_paused() and elapsed >= self.config.tick_rate:
            self._last_tick = now
            self.analyzer.sample(int(elapsed * 1000))
            return TickResult.SAMPLED

        return TickResult.IDLE

    def pause(self) -> None:
        if self.sink is not None:
            self.sink.pause()

    def resume(self) -> None:
        """Resume playback without counting the paused time as played."""
        if self.sink is not None and self.sink.is_paused():
            self.sink.play()
            self._last_tick = self.clock()

    def toggle_pause(self) -> None:
        if self.is_paused():
            self.resume()
        else:
            self.pause()

    def is_paused(self) -> bool:
        return self.sink is not None and self.sink.is_paused()

    def get_state(self) -> PlaybackState:
        if self.sink is None:
            return PlaybackState.STOPPED
        return self.sink.get_state()

    def restart(self) -> bool:
        """Reopen the current track from the start.

        Returns:
            True if the track reloaded, False if it failed and was dropped.
        """
        track = self.navigator.restart()
        self._unload()
        try:
            self._open(track)
        except TrackLoadError as e:
            self._report_load_error(track, e)
            return False
        logger.info(f"Restarted {track.name}")
        return True

    def advance(self) -> None:
        self.navigator.advance()
        self._unload()

    def rewind(self) -> None:
        self.navigator.rewind()
        self._unload()

    def shuffle(self) -> None:
        self.navigator.shuffle()
        self._unload()

    def insert_and_continue(self, tracks: Iterable[Track]) -> None:
        self.navigator.insert_and_continue(tracks)
        self._unload()

    def enqueue(self, tracks: Iterable[Track]) -> None:
        self.navigator.enqueue(tracks)

    def bars(self) -> np.ndarray:
        """Current bar magnitudes, zeros while nothing is loaded."""
        if self.analyzer is None:
            return np.zeros(self.config.num_bars)
        return self.analyzer.bars()

    def close(self) -> None:
        """Stop playback and release the current track's streams."""
        self._unload()
