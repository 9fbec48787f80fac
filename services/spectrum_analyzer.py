import numpy as np
import logging
from typing import Optional, Protocol

from models.frequency import AnalyzerConfig

logger = logging.getLogger(__name__)

DRAIN_CHUNK_FRAMES = 65536


class SampleSource(Protocol):
    """Interleaved raw-sample source the analyzer drains."""
    sample_rate: int
    channels: int

    def read(self, frames: int) -> np.ndarray:
        ...


class ElapsedTimeClock:
    """Estimates how many frames the audio output has played.

    The output backend has no position query, so the estimate comes from
    wall-clock time alone and drifts whenever ticks run late.
    """

    def __init__(self, sample_rate: int):
        self.sample_rate = sample_rate

    def frames_for(self, elapsed_ms: int) -> int:
        return self.sample_rate * int(elapsed_ms) // 1000


def compute_spectrum(window: np.ndarray, sample_rate: int, freq_low: float,
                     freq_high: float) -> tuple[np.ndarray, np.ndarray]:
    """Forward FFT of a windowed buffer, restricted to a frequency range.

    Args:
        window: Windowed samples
        sample_rate: Sample rate in Hz
        freq_low: Lowest frequency to keep (inclusive)
        freq_high: Highest frequency to keep (inclusive)

    Returns:
        Tuple of (frequencies, magnitudes); magnitudes are divided by the
        window length
    """
    n = len(window)
    magnitude = np.abs(np.fft.rfft(window)) / n
    frequencies = np.fft.rfftfreq(n, d=1.0 / sample_rate)

    in_range = (frequencies >= freq_low) & (frequencies <= freq_high)
    return frequencies[in_range], magnitude[in_range]


def bucket_index(frequency, num_bars: int, freq_low: float, freq_high: float):
    """Map frequencies to bar indices, clamped into [0, num_bars).

    Works on scalars and arrays alike. A frequency equal to freq_high lands
    on the last bar instead of one past it.
    """
    raw = (np.asarray(frequency, dtype=np.float64) - freq_low) * num_bars / (freq_high - freq_low)
    index = np.clip(raw.astype(np.int64), 0, num_bars - 1)
    if index.ndim == 0:
        return int(index)
    return index


class SpectrumAnalyzer:
    """Spectrum analyzer over a private decode stream of the playing track.

    Each call to `sample` drains as many frames as the output should have
    played in the elapsed time, keeps the first channel of the earliest
    frames in a Hann-shaped window, and buckets the FFT of that window into
    display bars.

    Attributes:
        sample_rate: Sample rate of the source in Hz
        channels: Channel count of the source
        config: Analyzer configuration
        window_size: Samples per FFT window
    """

    def __init__(self, source: SampleSource, config: Optional[AnalyzerConfig] = None,
                 clock: Optional[ElapsedTimeClock] = None):
        """Initialize spectrum analyzer.

        Args:
            source: Raw-sample source, read one frame per channel group
            config: Analyzer configuration (default: creates new AnalyzerConfig)
            clock: Elapsed-time to frame-count estimator
                (default: ElapsedTimeClock at the source sample rate)
        """
        self.source = source
        self.sample_rate = int(source.sample_rate)
        self.channels = int(source.channels)
        self.config = config or AnalyzerConfig()
        self.clock = clock or ElapsedTimeClock(self.sample_rate)

        self._scratch = np.zeros(self.config.scratch_capacity(self.sample_rate), dtype=np.float32)
        self.window_size = min(self.config.window_size, len(self._scratch))
        self._hann_window = np.hanning(self.window_size)
        self._bars = np.zeros(self.config.num_bars, dtype=np.float64)
        self._frames_drained = 0

    def _drain(self, num_frames: int) -> int:
        """Consume `num_frames` frames, storing the first window's worth.

        Frames past the window are read and discarded so the read position
        keeps pace with elapsed time. Frames missing after the source runs
        dry stay zero.

        Returns:
            Number of frames actually read from the source
        """
        window = self._scratch[:self.window_size]
        window.fill(0.0)

        captured = self.source.read(min(num_frames, self.window_size))
        window[:len(captured)] = captured[:, 0]
        read = len(captured)

        remaining = num_frames - read
        exhausted = read < min(num_frames, self.window_size)
        while remaining > 0 and not exhausted:
            chunk = self.source.read(min(remaining, DRAIN_CHUNK_FRAMES))
            read += len(chunk)
            remaining -= len(chunk)
            exhausted = len(chunk) == 0

        self._frames_drained += read
        return read

    def sample(self, elapsed_ms: int) -> None:
        """Advance the analysis by the audio played in `elapsed_ms`.

        Args:
            elapsed_ms: Wall-clock milliseconds since the previous sample
        """
        num_frames = self.clock.frames_for(elapsed_ms)
        if num_frames <= 0:
            return

        self._drain(num_frames)

        windowed = self._scratch[:self.window_size] * self._hann_window
        frequencies, magnitudes = compute_spectrum(
            windowed, self.sample_rate, self.config.freq_low, self.config.freq_high
        )

        bars = np.zeros(self.config.num_bars, dtype=np.float64)
        indices = bucket_index(frequencies, self.config.num_bars,
                               self.config.freq_low, self.config.freq_high)
        np.add.at(bars, indices, magnitudes)
        self._bars = bars

    def bars(self) -> np.ndarray:
        """Bar magnitudes from the most recent sample, read-only."""
        view = self._bars.view()
        view.flags.writeable = False
        return view

    def close(self) -> None:
        """Release the decode stream."""
        close = getattr(self.source, "close", None)
        if close is not None:
            close()

    @property
    def frames_drained(self) -> int:
        """Total frames consumed from the source so far."""
        return self._frames_drained
