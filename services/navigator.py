from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional

from models.track import Track

logger = logging.getLogger(__name__)

DISPLAY_LIMIT = 20


class QueueEmptyError(LookupError):
    """Raised when a track is requested from an empty pending queue."""


class PlaybackNavigator:
    """Queue and history bookkeeping for the session.

    Every track lives in exactly one of three places: the pending queue, the
    history, or the now-playing slot. Both containers are stacks whose top is
    the end of the list. Operations that end the current track move it out
    of the now-playing slot and leave the slot empty until the next
    `pop_next()`.
    """

    def __init__(self, pending: Iterable[Track] = (), history: Iterable[Track] = (),
                 rng: Optional[random.Random] = None):
        self.pending: List[Track] = list(pending)
        self.history: List[Track] = list(history)
        self.now_playing: Optional[Track] = None
        self._rng = rng or random.Random()

    def _take_now_playing(self) -> Track:
        if self.now_playing is None:
            raise RuntimeError("no track is loaded")
        track, self.now_playing = self.now_playing, None
        return track

    def pop_next(self) -> Track:
        """Move the top of the pending queue into the now-playing slot.

        Raises:
            QueueEmptyError: If there is nothing left to play.
            RuntimeError: If a track is already loaded.
        """
        if self.now_playing is not None:
            raise RuntimeError(f"{self.now_playing.name} is still loaded")
        if not self.pending:
            raise QueueEmptyError("queue empty")
        self.now_playing = self.pending.pop()
        return self.now_playing

    def enqueue(self, tracks: Iterable[Track]) -> None:
        """Push tracks on top of the pending queue, keeping their pop order."""
        self.pending.extend(tracks)

    def advance(self) -> None:
        """Finish the current track and record it in the history."""
        self.history.append(self._take_now_playing())

    def rewind(self) -> None:
        """Queue the current track again with the previous one ahead of it."""
        self.pending.append(self._take_now_playing())
        if self.history:
            self.pending.append(self.history.pop())

    def restart(self) -> Track:
        """Return the loaded track so the caller can reopen it.

        The queue and history are left untouched.
        """
        if self.now_playing is None:
            raise RuntimeError("no track is loaded")
        return self.now_playing

    def insert_and_continue(self, new_tracks: Iterable[Track]) -> None:
        """Slide new tracks under the queue and resume the current track first."""
        current = self._take_now_playing()
        self.pending[:0] = list(new_tracks)
        self.pending.append(current)

    def shuffle(self) -> None:
        """Return the current track to the queue and shuffle the whole queue."""
        self.pending.append(self._take_now_playing())
        self._rng.shuffle(self.pending)

    def discard(self) -> Optional[Track]:
        """Drop the loaded track without queueing it anywhere.

        Used for tracks that failed to load.
        """
        track, self.now_playing = self.now_playing, None
        if track is not None:
            logger.warning(f"Discarded track {track.path}")
        return track

    def up_next_names(self, limit: int = DISPLAY_LIMIT) -> List[str]:
        """Names of the pending tracks, next to play first."""
        return [track.name for track in reversed(self.pending)][:limit]

    def history_names(self, limit: int = DISPLAY_LIMIT) -> List[str]:
        """Names of previously played tracks, oldest first."""
        return [track.name for track in self.history[:limit]]

    def all_tracks(self) -> List[Track]:
        """Every track the navigator holds, across all three containers."""
        tracks = list(self.pending) + list(self.history)
        if self.now_playing is not None:
            tracks.append(self.now_playing)
        return tracks
