from enum import Enum


class PlaybackState(Enum):
    """Playback state of the loaded track."""
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


class TickResult(Enum):
    """What happened during one session tick."""
    IDLE = "idle"
    SAMPLED = "sampled"
    FINISHED = "finished"
