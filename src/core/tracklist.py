# core/tracklist.py
from __future__ import annotations

from typing import Iterable, Iterator

from core.models import Track


class TrackList:
    """
    Ordered tracks of the last accepted search, plus the query that produced them.
    Replacement is wholesale; ids are only meaningful inside one snapshot.
    """

    def __init__(self):
        self._tracks: tuple[Track, ...] = ()
        self.query: str = ""

    def replace_with(self, tracks: Iterable[Track], query: str = "") -> None:
        self._tracks = tuple(tracks)
        self.query = query

    def index_of(self, track: Track | int | None) -> int:
        if track is None:
            return -1
        track_id = track.id if isinstance(track, Track) else int(track)
        for i, t in enumerate(self._tracks):
            if t.id == track_id:
                return i
        return -1

    def contains(self, track: Track | int | None) -> bool:
        return self.index_of(track) >= 0

    def get(self, track_id: int) -> Track | None:
        i = self.index_of(track_id)
        return self._tracks[i] if i >= 0 else None

    @property
    def tracks(self) -> tuple[Track, ...]:
        return self._tracks

    def is_empty(self) -> bool:
        return not self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __getitem__(self, index: int) -> Track:
        return self._tracks[index]
