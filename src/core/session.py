# core/session.py
from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtCore import QObject, Signal

from core.models import Track
from core.sink import OutputSink
from core.utils import clamp_volume

log = logging.getLogger(__name__)

DEFAULT_VOLUME = 0.7


class PlaybackStatus(Enum):
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()


class LoadState(Enum):
    NONE = auto()
    PENDING = auto()
    READY = auto()
    FAILED = auto()


class PlaybackSession(QObject):
    """
    Which track is loaded into the output sink, whether it plays, and at what volume.

    IDLE -> select_track -> PLAYING <-> PAUSED (toggle_play_pause).
    The sink reports load completion through on_load_result() and clip end
    through on_clip_ended(); the latter re-emits clipEnded so navigation can advance.
    """

    trackChanged = Signal(object)       # Track | None
    statusChanged = Signal(object)      # PlaybackStatus
    volumeChanged = Signal(float, bool)  # volume, muted
    loadStateChanged = Signal(object)   # LoadState
    loadFailed = Signal(object, str)    # Track, message
    clipEnded = Signal()

    def __init__(self, sink: OutputSink, volume: float = DEFAULT_VOLUME):
        super().__init__()
        self.sink = sink

        self.loaded_track: Track | None = None
        self.status = PlaybackStatus.IDLE
        self.load_state = LoadState.NONE
        self.volume: float = clamp_volume(volume)
        self.is_muted: bool = False

        self._locator: str | None = None

        self.sink.set_volume(self.effective_volume)

    # ----------------------------
    # Derived state
    # ----------------------------

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.is_muted else self.volume

    def is_loaded(self, track: Track | None) -> bool:
        return track is not None and self.loaded_track is not None and self.loaded_track.id == track.id

    # ----------------------------
    # Transitions
    # ----------------------------

    def select_track(self, track: Track) -> None:
        if self.is_loaded(track):
            if self.load_state == LoadState.FAILED:
                # retry instead of toggling over nothing
                if track.preview_url:
                    self._load(track)
                return
            self.toggle_play_pause()
            return

        self.loaded_track = track
        self.trackChanged.emit(track)

        if not track.preview_url:
            log.warning("Track %s has no preview clip", track.id)
            self.sink.stop()
            self._locator = None
            self._set_load_state(LoadState.FAILED)
            self._set_status(PlaybackStatus.PAUSED)
            self.loadFailed.emit(track, "No preview available for this track.")
            return

        self._load(track)

    def _load(self, track: Track) -> None:
        log.debug("Loading preview for track %s: %s", track.id, track.preview_url)
        self._locator = track.preview_url
        self._set_load_state(LoadState.PENDING)
        self.sink.load(track.preview_url)
        if self.load_state == LoadState.FAILED:
            return  # the sink rejected the locator synchronously
        self._set_status(PlaybackStatus.PLAYING)
        self.sink.play()

    def toggle_play_pause(self) -> bool:
        if self.loaded_track is None or self.load_state == LoadState.FAILED:
            return False

        if self.is_playing:
            self.sink.pause()
            self._set_status(PlaybackStatus.PAUSED)
        else:
            self.sink.play()
            self._set_status(PlaybackStatus.PLAYING)
        return True

    def stop(self) -> None:
        self.sink.stop()
        self.loaded_track = None
        self._locator = None
        self._set_load_state(LoadState.NONE)
        self._set_status(PlaybackStatus.IDLE)
        self.trackChanged.emit(None)

    def set_volume(self, volume_0_to_1: float) -> None:
        self.volume = clamp_volume(volume_0_to_1)
        self._push_volume()

    def set_muted(self, muted: bool) -> None:
        self.is_muted = bool(muted)
        self._push_volume()

    def toggle_mute(self) -> None:
        self.set_muted(not self.is_muted)

    def adjust_volume(self, volume_0_to_1: float) -> None:
        # slider moved while muted: unmute first
        if self.is_muted:
            self.is_muted = False
        self.set_volume(volume_0_to_1)

    # ----------------------------
    # Sink events
    # ----------------------------

    def on_load_result(self, locator: str, ok: bool, message: str = "") -> None:
        if locator != self._locator or self.loaded_track is None:
            log.debug("Ignoring load result for stale locator %s", locator)
            return

        if ok:
            if self.load_state == LoadState.PENDING:
                self._set_load_state(LoadState.READY)
            return

        if self.load_state == LoadState.FAILED:
            return

        log.warning("Preview load failed for track %s: %s", self.loaded_track.id, message)
        self._set_load_state(LoadState.FAILED)
        self._set_status(PlaybackStatus.PAUSED)
        self.loadFailed.emit(self.loaded_track, message or "Could not load preview.")

    def on_clip_ended(self) -> None:
        if self.loaded_track is None:
            return
        self._set_status(PlaybackStatus.PAUSED)
        self.clipEnded.emit()

    # ----------------------------
    # Helpers
    # ----------------------------

    def _set_status(self, new_status: PlaybackStatus) -> None:
        if self.status != new_status:
            self.status = new_status
            self.statusChanged.emit(self.status)

    def _set_load_state(self, new_state: LoadState) -> None:
        if self.load_state != new_state:
            self.load_state = new_state
            self.loadStateChanged.emit(self.load_state)

    def _push_volume(self) -> None:
        self.sink.set_volume(self.effective_volume)
        self.volumeChanged.emit(self.volume, self.is_muted)
