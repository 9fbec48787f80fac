from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Track:
    """A playable audio file: its path and the display name derived from it."""
    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> Track:
        return cls(Path(path))

    @property
    def name(self) -> str:
        """File stem shown in the UI."""
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")

    def __str__(self) -> str:
        return str(self.path)


def format_time(seconds: float | None) -> str:
    """Format seconds as M:SS, or --:-- when unknown."""
    if seconds is None or seconds < 0:
        return "--:--"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"
