import logging
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from models.track import Track
from models.playback import PlaybackState
from services.decoder import TrackLoadError

logger = logging.getLogger(__name__)

MIXER_FREQUENCY = 44100
MIXER_CHANNELS = 2
MIXER_BUFFER = 512


class AudioSink:
    """Play-once output sink for a single track.

    Wraps pygame's music stream, which decodes the file on its own and plays
    it on the mixer's thread. The sink exposes no seek or position query;
    the only state read back is whether playback has finished.
    """

    _mixer_ready = False

    def __init__(self, track: Track):
        self.track = track
        self._state = PlaybackState.STOPPED

    @classmethod
    def init_mixer(cls) -> None:
        """Initialize the pygame mixer once per process.

        Raises:
            RuntimeError: If no audio output device is available
        """
        if cls._mixer_ready:
            return
        try:
            pygame.mixer.init(frequency=MIXER_FREQUENCY, size=-16, channels=MIXER_CHANNELS, buffer=MIXER_BUFFER)
        except pygame.error as e:
            logger.error(f"Failed to initialize audio mixer: {e}")
            raise RuntimeError(f"Audio output not available: {e}") from e
        cls._mixer_ready = True
        logger.info("Audio mixer initialized")

    @classmethod
    def open(cls, track: Track) -> "AudioSink":
        """Load a track and start playing it immediately.

        Raises:
            TrackLoadError: If pygame cannot open or play the file
        """
        cls.init_mixer()
        sink = cls(track)
        try:
            pygame.mixer.music.load(str(track.path))
            pygame.mixer.music.play()
        except pygame.error as e:
            raise TrackLoadError(track, str(e)) from e
        sink._state = PlaybackState.PLAYING
        return sink

    def play(self) -> None:
        """Resume playback from paused state."""
        if self._state == PlaybackState.PAUSED:
            pygame.mixer.music.unpause()
            self._state = PlaybackState.PLAYING

    def pause(self) -> None:
        if self._state == PlaybackState.PLAYING:
            pygame.mixer.music.pause()
            self._state = PlaybackState.PAUSED

    def stop(self) -> None:
        if self._state != PlaybackState.STOPPED:
            pygame.mixer.music.stop()
            self._state = PlaybackState.STOPPED

    def is_paused(self) -> bool:
        return self._state == PlaybackState.PAUSED

    def is_empty(self) -> bool:
        """True once the track has played to the end or the sink was stopped."""
        if self._state == PlaybackState.PAUSED:
            return False
        if self._state == PlaybackState.STOPPED:
            return True
        return not pygame.mixer.music.get_busy()

    def get_state(self) -> PlaybackState:
        return self._state
