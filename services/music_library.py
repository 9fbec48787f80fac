import logging
import os
import re
from pathlib import Path
from typing import List, Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError

from models.track import Track

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 50


def has_supported_extension(path: Path) -> bool:
    """Check whether a path carries one of the supported audio extensions."""
    return path.suffix.lstrip(".") in MusicLibrary.SUPPORTED_FORMATS


def search_dir() -> str:
    """Starting point for the add-songs dialog.

    Uses MUSIC_HOME if set, then HOME, and an empty string otherwise.
    """
    for var in ("MUSIC_HOME", "HOME"):
        value = os.environ.get(var)
        if value:
            return value
    return ""


class MusicLibrary:
    """Service for turning filesystem paths into playable tracks."""

    SUPPORTED_FORMATS = frozenset({"mp3", "flac", "ogg", "wav", "aac"})

    def load(self, path: Path) -> List[Track]:
        """Resolve a file or directory into tracks in pop order.

        A directory yields its direct child files with a supported extension;
        a single file yields itself whatever its extension. The list is sorted
        by path and then reversed, so popping from the end plays the
        lexicographically first track first.

        Args:
            path: File or directory to load.

        Returns:
            List of Track objects, last element plays first.

        Raises:
            OSError: If the directory cannot be read.
        """
        path = Path(path).expanduser()

        if path.is_dir():
            paths = []
            with os.scandir(path) as entries:
                for entry in entries:
                    try:
                        is_file = entry.is_file()
                    except OSError as e:
                        logger.debug(f"Skipping {entry.path}: {e}")
                        continue
                    if is_file and has_supported_extension(Path(entry.path)):
                        paths.append(Path(entry.path))
        else:
            paths = [path]

        paths.sort()
        paths.reverse()
        logger.info(f"Loaded {len(paths)} tracks from {path}")
        return [Track(p) for p in paths]

    def search(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[str]:
        """List completion candidates for a partially typed path.

        If the query names a directory, every direct entry is a candidate.
        Otherwise the final path component is matched against the entries of
        its parent directory, case-insensitively unless it contains an
        uppercase letter.

        Args:
            query: Path typed so far.
            limit: Maximum number of candidates to return.

        Returns:
            Sorted list of matching paths as strings.
        """
        path = Path(query).expanduser()
        if query and path.is_dir():
            directory, pattern = path, ""
        else:
            directory, pattern = path.parent, path.name

        flags = 0 if any(c.isupper() for c in pattern) else re.IGNORECASE
        try:
            matcher = re.compile(pattern, flags)
        except re.error:
            matcher = re.compile(re.escape(pattern), flags)

        try:
            entries = sorted(directory.iterdir())
        except OSError:
            return []

        return [str(entry) for entry in entries if matcher.search(entry.name)][:limit]

    @staticmethod
    def probe_duration(track: Track) -> Optional[float]:
        """Read the track duration in seconds with mutagen.

        Returns:
            Duration in seconds, or None if the file has no readable info.
        """
        try:
            audio = MutagenFile(track.path)
        except (MutagenError, OSError) as e:
            logger.debug(f"Could not read duration of {track.path}: {e}")
            return None

        if audio is None or audio.info is None or not hasattr(audio.info, "length"):
            return None
        return float(audio.info.length)
