# src/player/player.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core.utils import clamp_volume

log = logging.getLogger(__name__)


class Player(QObject):
    """
    Qt Multimedia output sink for preview clips (http(s) locators).

    load() returns immediately; the outcome arrives later as
    loadFinished(locator, ok, message) once Qt settles the media status.
    """

    loadFinished = Signal(str, bool, str)   # locator, ok, message
    ended = Signal()
    positionChanged = Signal(int)           # ms
    durationChanged = Signal(int)           # ms

    def __init__(self):
        super().__init__()

        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        self._locator: str = ""
        self._settled: bool = True

        # Qt signal forwarding
        self.media.positionChanged.connect(self.positionChanged.emit)
        self.media.durationChanged.connect(self.durationChanged.emit)
        self.media.mediaStatusChanged.connect(self._on_media_status)
        self.media.errorOccurred.connect(self._on_error)

    # ----------------------------
    # Qt backend handlers
    # ----------------------------

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status in (QMediaPlayer.MediaStatus.LoadedMedia, QMediaPlayer.MediaStatus.BufferedMedia):
            self._settle(True, "")
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._settle(False, self.media.errorString() or "Invalid media")
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.ended.emit()

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        log.warning("Media error for %s: %s", self._locator, message)
        # errors after a successful load are still reported, the session decides
        self._settled = False
        self._settle(False, message or "Playback error")

    def _settle(self, ok: bool, message: str) -> None:
        if self._settled:
            return
        self._settled = True
        self.loadFinished.emit(self._locator, ok, message)

    # ----------------------------
    # Sink API
    # ----------------------------

    def load(self, locator: str) -> None:
        self._locator = locator
        self._settled = False
        url = QUrl(locator)
        if self.media.source() == url:
            # setSource() with the current url is a no-op and emits no status
            self.media.setSource(QUrl())
        self.media.setSource(url)

    def play(self) -> None:
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    def stop(self) -> None:
        self.media.stop()

    def set_volume(self, volume_0_to_1: float) -> None:
        self.audio.setVolume(clamp_volume(volume_0_to_1))

    # convenient getters for UI
    def position_ms(self) -> int:
        return int(self.media.position())

    def duration_ms(self) -> int:
        return int(self.media.duration())

    def seek_ms(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))


class NullPlayer(QObject):
    """
    Stand-in sink used when Qt Multimedia could not be initialized:
    every load settles as a failure so the UI can say why nothing plays.
    """

    loadFinished = Signal(str, bool, str)
    ended = Signal()
    positionChanged = Signal(int)
    durationChanged = Signal(int)

    def __init__(self, reason: str = "No audio output available"):
        super().__init__()
        self.reason = reason

    def load(self, locator: str) -> None:
        self.loadFinished.emit(locator, False, self.reason)

    def play(self) -> None:
        pass

    def pause(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def set_volume(self, volume_0_to_1: float) -> None:
        pass

    def seek_ms(self, ms: int) -> None:
        pass
