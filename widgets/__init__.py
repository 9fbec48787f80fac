from .add_songs_dialog import AddSongsScreen

__all__ = [
    "AddSongsScreen",
]
