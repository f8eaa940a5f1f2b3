# core/navigation.py
from __future__ import annotations

from core.session import PlaybackSession
from core.tracklist import TrackList


class Navigator:
    """
    Next/previous over the current track list, resolved by the loaded track's id.
    No wraparound: both ends are no-ops, and so is a loaded track that is no
    longer part of the list (a newer search replaced it).
    """

    def __init__(self, session: PlaybackSession, tracks: TrackList):
        self.session = session
        self.tracks = tracks
        self.session.clipEnded.connect(self.next)

    def current_index(self) -> int:
        return self.tracks.index_of(self.session.loaded_track)

    def is_detached(self) -> bool:
        return self.session.loaded_track is not None and self.current_index() < 0

    def can_next(self) -> bool:
        i = self.current_index()
        return 0 <= i < len(self.tracks) - 1

    def can_previous(self) -> bool:
        return self.current_index() > 0

    def next(self) -> bool:
        if not self.can_next():
            return False
        self.session.select_track(self.tracks[self.current_index() + 1])
        return True

    def previous(self) -> bool:
        if not self.can_previous():
            return False
        self.session.select_track(self.tracks[self.current_index() - 1])
        return True
