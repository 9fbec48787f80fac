import logging
from pathlib import Path
from typing import List, Optional, Sequence

from models.track import Track

logger = logging.getLogger(__name__)


class QueueStore:
    """Newline-separated list of pending track paths kept between sessions."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "tickplay"

    def __init__(self, path: Optional[Path] = None):
        self.path = path or self.DEFAULT_CONFIG_DIR / "songs.txt"

    def load(self) -> List[Track]:
        """Read the saved queue, creating an empty one if none exists.

        Returns:
            Tracks in stack order (last element plays first).

        Raises:
            OSError: If the file exists but cannot be read.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            text = self.path.read_text()
        except FileNotFoundError:
            self.path.touch()
            logger.info(f"Created empty queue file at {self.path}")
            return []

        tracks = [Track.from_path(line.strip()) for line in text.split("\n") if line.strip()]
        logger.info(f"Restored {len(tracks)} queued tracks from {self.path}")
        return tracks

    def save(self, tracks: Sequence[Track]) -> None:
        """Write the pending queue in stack order."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(str(track.path) for track in tracks))
        logger.info(f"Saved {len(tracks)} queued tracks to {self.path}")
