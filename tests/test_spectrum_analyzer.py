"""
Tests for the wall-clock driven spectrum analyzer
"""

import numpy as np
import pytest

from models.frequency import AnalyzerConfig
from services.spectrum_analyzer import (
    ElapsedTimeClock,
    SpectrumAnalyzer,
    bucket_index,
    compute_spectrum,
)


class FakeSource:
    """In-memory interleaved sample source"""

    def __init__(self, frames, sample_rate=44100):
        self.data = np.asarray(frames, dtype=np.float32)
        if self.data.ndim == 1:
            self.data = self.data.reshape(-1, 1)
        self.sample_rate = sample_rate
        self.channels = self.data.shape[1]
        self.position = 0
        self.closed = False

    def read(self, frames):
        chunk = self.data[self.position:self.position + frames]
        self.position += len(chunk)
        return chunk

    def close(self):
        self.closed = True


def sine(frequency, frames, sample_rate=44100):
    t = np.arange(frames) / sample_rate
    return np.sin(2 * np.pi * frequency * t)


def test_scratch_and_bars_allocation():
    analyzer = SpectrumAnalyzer(FakeSource(np.zeros(10)))

    assert analyzer.window_size == 2048
    assert len(analyzer._scratch) == 50 * 4 * 44100 // 1000
    assert analyzer.bars().shape == (48,)
    assert not analyzer.bars().any()


def test_window_shrinks_to_scratch_capacity():
    """Test that a low sample rate never windows past the scratch buffer"""
    analyzer = SpectrumAnalyzer(FakeSource(np.zeros(10), sample_rate=8000))

    assert analyzer.window_size == 1600


def test_elapsed_time_clock():
    clock = ElapsedTimeClock(44100)

    assert clock.frames_for(0) == 0
    assert clock.frames_for(50) == 2205
    assert clock.frames_for(1000) == 44100


def test_sample_drains_elapsed_frames():
    source = FakeSource(np.zeros((44100, 2)))
    analyzer = SpectrumAnalyzer(source)

    analyzer.sample(50)

    assert source.position == 2205
    assert analyzer.frames_drained == 2205


def test_sample_drains_beyond_window_in_chunks():
    source = FakeSource(np.zeros((200000, 1)))
    analyzer = SpectrumAnalyzer(source)

    analyzer.sample(3000)

    assert source.position == 132300


def test_sample_zero_elapsed_is_noop():
    source = FakeSource(sine(1000, 44100))
    analyzer = SpectrumAnalyzer(source)
    analyzer.sample(50)
    before = analyzer.bars().copy()

    analyzer.sample(0)

    assert source.position == 2205
    np.testing.assert_array_equal(analyzer.bars(), before)


def test_silence_gives_zero_bars():
    analyzer = SpectrumAnalyzer(FakeSource(np.zeros((44100, 2))))

    analyzer.sample(50)

    assert np.all(analyzer.bars() == 0.0)


def test_exhausted_source_pads_with_zeros():
    source = FakeSource(np.ones((100, 2)))
    analyzer = SpectrumAnalyzer(source)

    analyzer.sample(50)

    assert analyzer.frames_drained == 100
    assert np.all(analyzer._scratch[100:analyzer.window_size] == 0.0)
    assert np.all(np.isfinite(analyzer.bars()))

    analyzer.sample(50)
    assert np.all(analyzer.bars() == 0.0)


def test_left_channel_only():
    """Test that only the first channel of each frame reaches the window"""
    frames = 44100
    stereo = np.column_stack([sine(1000, frames), sine(3000, frames)])
    config = AnalyzerConfig()
    analyzer = SpectrumAnalyzer(FakeSource(stereo), config)

    analyzer.sample(50)
    bars = analyzer.bars()

    left_bar = bucket_index(1000.0, config.num_bars, config.freq_low, config.freq_high)
    right_bar = bucket_index(3000.0, config.num_bars, config.freq_low, config.freq_high)
    assert int(np.argmax(bars)) == left_bar
    assert bars[right_bar] < bars[left_bar] * 1e-3


def test_window_holds_earliest_frames():
    data = np.concatenate([np.full(2048, 0.5), np.full(4096, -0.5)])
    analyzer = SpectrumAnalyzer(FakeSource(data))

    analyzer.sample(100)

    np.testing.assert_allclose(analyzer._scratch[:2048], 0.5)


def test_bars_sum_all_bins_in_range():
    """Test that bins accumulate into their bucket rather than overwrite"""
    config = AnalyzerConfig(num_bars=4)
    samples = sine(440, 44100) + 0.5 * sine(2500, 44100)
    analyzer = SpectrumAnalyzer(FakeSource(samples), config)

    analyzer.sample(50)

    windowed = analyzer._scratch[:analyzer.window_size] * np.hanning(analyzer.window_size)
    _, magnitudes = compute_spectrum(windowed, 44100, config.freq_low, config.freq_high)
    assert analyzer.bars().sum() == pytest.approx(magnitudes.sum())


def test_bars_are_read_only():
    analyzer = SpectrumAnalyzer(FakeSource(np.zeros(10)))

    with pytest.raises(ValueError):
        analyzer.bars()[0] = 1.0


def test_bucket_index_edges_are_clamped():
    assert bucket_index(40.0, 4, 40.0, 5000.0) == 0
    assert bucket_index(5000.0, 4, 40.0, 5000.0) == 3
    assert bucket_index(2520.0, 4, 40.0, 5000.0) == 2
    assert bucket_index(10.0, 4, 40.0, 5000.0) == 0


def test_bucket_index_arrays():
    indices = bucket_index(np.array([40.0, 1280.0, 2520.0, 5000.0]), 4, 40.0, 5000.0)

    assert indices.tolist() == [0, 1, 2, 3]


def test_compute_spectrum_range_and_scaling():
    window = np.ones(2048)
    frequencies, magnitudes = compute_spectrum(window, 44100, 40.0, 5000.0)

    assert frequencies.min() >= 40.0
    assert frequencies.max() <= 5000.0
    assert len(frequencies) == len(magnitudes)

    dc_freqs, dc_mags = compute_spectrum(window, 44100, 0.0, 1.0)
    assert dc_freqs.tolist() == [0.0]
    assert dc_mags[0] == pytest.approx(1.0)


def test_close_releases_source():
    source = FakeSource(np.zeros(10))
    analyzer = SpectrumAnalyzer(source)

    analyzer.close()

    assert source.closed
