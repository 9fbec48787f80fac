"""
Tests for the persisted queue
"""

from pathlib import Path

from models.track import Track
from services.queue_store import QueueStore


def test_missing_queue_file_is_created(tmp_path):
    store = QueueStore(tmp_path / "config" / "songs.txt")

    assert store.load() == []
    assert store.path.exists()


def test_save_then_load_keeps_stack_order(tmp_path):
    store = QueueStore(tmp_path / "songs.txt")
    tracks = [Track(Path("/music/a.mp3")), Track(Path("/music/b song.flac"))]

    store.save(tracks)

    assert store.path.read_text() == "/music/a.mp3\n/music/b song.flac"
    assert store.load() == tracks


def test_blank_lines_are_skipped(tmp_path):
    path = tmp_path / "songs.txt"
    path.write_text("/music/a.mp3\n\n  \n/music/b.mp3\n")

    tracks = QueueStore(path).load()

    assert [t.name for t in tracks] == ["a", "b"]
