from .music_library import MusicLibrary
from .audio_player import AudioSink
from .decoder import DecodeStream, TrackLoadError
from .navigator import PlaybackNavigator, QueueEmptyError
from .queue_store import QueueStore
from .session import PlaybackSession
from .spectrum_analyzer import SpectrumAnalyzer

__all__ = [
    'MusicLibrary',
    'AudioSink',
    'DecodeStream',
    'TrackLoadError',
    'PlaybackNavigator',
    'QueueEmptyError',
    'QueueStore',
    'PlaybackSession',
    'SpectrumAnalyzer',
]
