from __future__ import annotations

import logging

import numpy as np
import soundfile as sf

from models.track import Track

logger = logging.getLogger(__name__)


class TrackLoadError(RuntimeError):
    """Raised when a track cannot be opened for decoding or playback."""

    def __init__(self, track: Track, reason: str):
        super().__init__(f"could not load {track.path}: {reason}")
        self.track = track
        self.reason = reason


class DecodeStream:
    """Private decode stream over one track, read frame by frame.

    Each read returns a float32 array shaped (frames, channels). A read that
    comes back shorter than requested means the file is exhausted.

    Attributes:
        track: Track being decoded
        sample_rate: Sample rate of the file in Hz
        channels: Number of interleaved channels
    """

    def __init__(self, track: Track):
        self.track = track
        try:
            self._file = sf.SoundFile(str(track.path), mode="r")
        except (RuntimeError, OSError, TypeError) as e:
            raise TrackLoadError(track, str(e)) from e

        self.sample_rate: int = self._file.samplerate
        self.channels: int = self._file.channels
        logger.debug(
            f"Opened decode stream for {track.name} "
            f"({self.sample_rate}Hz, {self.channels}ch)"
        )

    def read(self, frames: int) -> np.ndarray:
        """Read up to `frames` frames; empty once the file is exhausted."""
        if frames <= 0 or self._file.closed:
            return np.zeros((0, self.channels), dtype=np.float32)
        return self._file.read(frames, dtype="float32", always_2d=True)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> DecodeStream:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
