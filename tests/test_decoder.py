"""
Tests for the analyzer's private decode stream
"""

import numpy as np
import pytest
import soundfile as sf

from models.track import Track
from services.decoder import DecodeStream, TrackLoadError


@pytest.fixture
def stereo_wav(tmp_path):
    path = tmp_path / "tone.wav"
    frames = np.zeros((1000, 2), dtype=np.float32)
    frames[:, 0] = 0.25
    frames[:, 1] = -0.25
    sf.write(str(path), frames, 22050)
    return Track(path)


def test_stream_reports_format(stereo_wav):
    with DecodeStream(stereo_wav) as stream:
        assert stream.sample_rate == 22050
        assert stream.channels == 2


def test_read_returns_frames_by_channel(stereo_wav):
    with DecodeStream(stereo_wav) as stream:
        chunk = stream.read(600)
        assert chunk.shape == (600, 2)
        np.testing.assert_allclose(chunk[:, 0], 0.25, atol=1e-4)

        rest = stream.read(600)
        assert rest.shape == (400, 2)
        assert stream.read(10).shape[0] == 0


def test_read_after_close_is_empty(stereo_wav):
    stream = DecodeStream(stereo_wav)
    stream.close()

    assert stream.read(10).shape == (0, 2)


def test_undecodable_file_raises(tmp_path):
    path = tmp_path / "broken.mp3"
    path.write_bytes(b"definitely not audio")

    with pytest.raises(TrackLoadError) as excinfo:
        DecodeStream(Track(path))

    assert excinfo.value.track.path == path


def test_missing_file_raises(tmp_path):
    with pytest.raises(TrackLoadError):
        DecodeStream(Track(tmp_path / "missing.wav"))
