# core/search.py
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Iterable

from PySide6.QtCore import QObject, Signal

from core.models import Track
from core.tracklist import TrackList

log = logging.getLogger(__name__)


class ViewState(Enum):
    INITIAL = auto()   # no query accepted yet
    LOADING = auto()
    RESULTS = auto()
    EMPTY = auto()     # "no tracks found"


class SearchCoordinator(QObject):
    """
    Hands out a generation number per submitted query and only lets the
    latest generation replace the track list. Older in-flight searches are
    superseded: whatever they return later is dropped.
    """

    viewStateChanged = Signal(object)  # ViewState
    resultsApplied = Signal(object)    # TrackList

    def __init__(self, tracks: TrackList):
        super().__init__()
        self.tracks = tracks
        self.view_state = ViewState.INITIAL
        self.pending_query: str = ""
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def submit(self, query: str) -> int | None:
        query = (query or "").strip()
        if not query:
            return None

        self._generation += 1
        self.pending_query = query
        self._set_view_state(ViewState.LOADING)
        log.info("Search #%d submitted: %r", self._generation, query)
        return self._generation

    def resolve(self, generation: int, tracks: Iterable[Track]) -> bool:
        if not self.is_current(generation):
            log.debug("Dropping superseded search #%d (latest is #%d)", generation, self._generation)
            return False

        self.tracks.replace_with(tracks, query=self.pending_query)
        log.info("Search #%d applied: %d track(s)", generation, len(self.tracks))
        self._set_view_state(ViewState.EMPTY if self.tracks.is_empty() else ViewState.RESULTS)
        self.resultsApplied.emit(self.tracks)
        return True

    def fail(self, generation: int, error: str = "") -> bool:
        if self.is_current(generation):
            log.warning("Search #%d failed: %s", generation, error)
        return self.resolve(generation, [])

    def _set_view_state(self, state: ViewState) -> None:
        if self.view_state != state:
            self.view_state = state
            self.viewStateChanged.emit(state)
