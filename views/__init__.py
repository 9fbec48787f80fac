from .spectrum import SpectrumView
from .now_playing import NowPlayingView
from .track_list import TrackListView

__all__ = ["SpectrumView", "NowPlayingView", "TrackListView"]
