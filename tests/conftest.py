import pytest
from PySide6.QtCore import QCoreApplication

from core.models import Track
from core.navigation import Navigator
from core.session import PlaybackSession
from core.tracklist import TrackList


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeSink:
    """Records every call; load outcomes are delivered by the test."""

    def __init__(self):
        self.calls = []
        self.volume = None

    def load(self, locator):
        self.calls.append(("load", locator))

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def stop(self):
        self.calls.append(("stop",))

    def set_volume(self, volume_0_to_1):
        self.volume = volume_0_to_1

    def loads(self):
        return [c[1] for c in self.calls if c[0] == "load"]


def make_track(track_id, title=None, preview=True):
    return Track(
        id=track_id,
        title=title or f"Track {track_id}",
        artist_name="Daft Punk",
        album_title="Discovery",
        preview_url=f"https://cdn.example/preview/{track_id}.mp3" if preview else "",
        duration_s=200 + track_id,
        cover_small=f"https://cdn.example/cover/{track_id}/56x56.jpg",
        cover_medium=f"https://cdn.example/cover/{track_id}/250x250.jpg",
    )


def make_tracks(n, start=1):
    return [make_track(i) for i in range(start, start + n)]


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def session(sink):
    return PlaybackSession(sink)


@pytest.fixture
def tracks():
    return TrackList()


@pytest.fixture
def navigator(session, tracks):
    return Navigator(session, tracks)
