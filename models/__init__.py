from .track import Track
from .playback import PlaybackState, TickResult
from .frequency import AnalyzerConfig

__all__ = ["Track", "PlaybackState", "TickResult", "AnalyzerConfig"]
