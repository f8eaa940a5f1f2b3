# core/sink.py
from __future__ import annotations

from typing import Protocol


class OutputSink(Protocol):
    """
    What the playback session needs from an audio backend.

    Implementations report back asynchronously by calling
    PlaybackSession.on_load_result(locator, ok, message) once a load settles,
    and PlaybackSession.on_clip_ended() when the clip finishes.
    """

    def load(self, locator: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def set_volume(self, volume_0_to_1: float) -> None: ...
