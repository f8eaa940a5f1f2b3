import pytest

from conftest import FakeSink, make_track
from core.session import DEFAULT_VOLUME, LoadState, PlaybackSession, PlaybackStatus


def test_new_session_is_idle_and_pushes_volume(sink, session):
    assert session.status == PlaybackStatus.IDLE
    assert session.loaded_track is None
    assert session.load_state == LoadState.NONE
    assert not session.is_playing
    assert sink.volume == pytest.approx(DEFAULT_VOLUME)


def test_select_track_loads_and_plays(sink, session):
    t = make_track(1)
    changed = []
    session.trackChanged.connect(changed.append)

    session.select_track(t)

    assert session.loaded_track == t
    assert session.status == PlaybackStatus.PLAYING
    assert session.load_state == LoadState.PENDING
    assert sink.calls == [("load", t.preview_url), ("play",)]
    assert changed == [t]


def test_selecting_loaded_track_toggles_instead_of_reloading(sink, session):
    t = make_track(1)
    session.select_track(t)

    session.select_track(t)
    assert session.status == PlaybackStatus.PAUSED
    session.select_track(t)
    assert session.status == PlaybackStatus.PLAYING

    assert sink.loads() == [t.preview_url]
    assert sink.calls[-2:] == [("pause",), ("play",)]


def test_same_id_from_a_new_search_counts_as_loaded(sink, session):
    session.select_track(make_track(7, title="first"))
    session.select_track(make_track(7, title="same id, new snapshot"))

    assert len(sink.loads()) == 1
    assert session.status == PlaybackStatus.PAUSED


def test_toggle_play_pause_is_rejected_when_idle(sink, session):
    assert session.toggle_play_pause() is False
    assert session.status == PlaybackStatus.IDLE
    assert sink.calls == []


def test_status_signal_only_on_change(session):
    seen = []
    session.statusChanged.connect(seen.append)

    session.select_track(make_track(1))
    session.select_track(make_track(2))  # still PLAYING
    session.toggle_play_pause()

    assert seen == [PlaybackStatus.PLAYING, PlaybackStatus.PAUSED]


@pytest.mark.parametrize("volume", [0.0, 0.25, 0.5, 1.0])
def test_effective_volume_follows_mute(sink, session, volume):
    session.set_volume(volume)
    assert session.effective_volume == pytest.approx(volume)
    assert sink.volume == pytest.approx(volume)

    session.toggle_mute()
    assert session.is_muted
    assert session.effective_volume == 0.0
    assert sink.volume == 0.0
    assert session.volume == pytest.approx(volume)

    session.set_volume(volume)
    assert session.effective_volume == 0.0

    session.toggle_mute()
    assert sink.volume == pytest.approx(volume)


def test_set_volume_clamps(session):
    session.set_volume(1.7)
    assert session.volume == 1.0
    session.set_volume(-1)
    assert session.volume == 0.0


def test_adjust_volume_unmutes_first(sink, session):
    session.set_muted(True)
    seen = []
    session.volumeChanged.connect(lambda v, m: seen.append((v, m)))

    session.adjust_volume(0.4)

    assert not session.is_muted
    assert sink.volume == pytest.approx(0.4)
    assert seen == [(pytest.approx(0.4), False)]


def test_load_success_marks_ready(session):
    t = make_track(1)
    session.select_track(t)

    session.on_load_result(t.preview_url, True)

    assert session.load_state == LoadState.READY
    assert session.status == PlaybackStatus.PLAYING


def test_load_failure_is_observable(session):
    t = make_track(1)
    failures = []
    session.loadFailed.connect(lambda track, msg: failures.append((track, msg)))
    session.select_track(t)

    session.on_load_result(t.preview_url, False, "404 Not Found")

    assert session.load_state == LoadState.FAILED
    assert session.status == PlaybackStatus.PAUSED
    assert session.loaded_track == t
    assert failures == [(t, "404 Not Found")]


def test_stale_load_result_is_ignored(session):
    first, second = make_track(1), make_track(2)
    session.select_track(first)
    session.select_track(second)

    session.on_load_result(first.preview_url, False, "gone")

    assert session.load_state == LoadState.PENDING
    assert session.status == PlaybackStatus.PLAYING


def test_failure_is_reported_once(session):
    t = make_track(1)
    failures = []
    session.loadFailed.connect(lambda track, msg: failures.append(msg))
    session.select_track(t)

    session.on_load_result(t.preview_url, False, "first")
    session.on_load_result(t.preview_url, False, "second")

    assert failures == ["first"]


def test_track_without_preview_fails_and_stops_sink(sink, session):
    t = make_track(3, preview=False)
    failures = []
    session.loadFailed.connect(lambda track, msg: failures.append(track))

    session.select_track(t)

    assert sink.calls == [("stop",)]
    assert session.loaded_track == t
    assert session.load_state == LoadState.FAILED
    assert session.status == PlaybackStatus.PAUSED
    assert failures == [t]


def test_track_without_preview_silences_previous_clip(sink, session):
    playing = make_track(1)
    session.select_track(playing)

    session.select_track(make_track(2, preview=False))
    assert session.toggle_play_pause() is False

    assert sink.calls == [("load", playing.preview_url), ("play",), ("stop",)]
    assert session.status == PlaybackStatus.PAUSED


def test_reselecting_failed_track_retries_load(sink, session):
    t = make_track(1)
    session.select_track(t)
    session.on_load_result(t.preview_url, False, "404")

    session.select_track(t)

    assert sink.loads() == [t.preview_url, t.preview_url]
    assert session.load_state == LoadState.PENDING
    assert session.status == PlaybackStatus.PLAYING

    session.on_load_result(t.preview_url, True)
    assert session.load_state == LoadState.READY


def test_reselecting_track_without_preview_stays_failed(sink, session):
    t = make_track(4, preview=False)
    session.select_track(t)

    session.select_track(t)

    assert sink.loads() == []
    assert session.load_state == LoadState.FAILED
    assert session.status == PlaybackStatus.PAUSED


def test_toggle_is_rejected_after_failed_load(sink, session):
    t = make_track(1)
    session.select_track(t)
    session.on_load_result(t.preview_url, False, "404")
    calls = len(sink.calls)

    assert session.toggle_play_pause() is False

    assert session.status == PlaybackStatus.PAUSED
    assert len(sink.calls) == calls
    assert failures == [t]


class RejectingSink(FakeSink):
    def __init__(self):
        super().__init__()
        self.session = None

    def load(self, locator):
        super().load(locator)
        self.session.on_load_result(locator, False, "no output")


def test_synchronous_load_failure_does_not_start_playback():
    sink = RejectingSink()
    session = PlaybackSession(sink)
    sink.session = session

    session.select_track(make_track(1))

    assert session.load_state == LoadState.FAILED
    assert session.status == PlaybackStatus.PAUSED
    assert ("play",) not in sink.calls


def test_clip_end_pauses_and_signals(session):
    ended = []
    session.clipEnded.connect(lambda: ended.append(True))

    session.on_clip_ended()
    assert ended == []  # nothing loaded

    session.select_track(make_track(1))
    session.on_clip_ended()
    assert ended == [True]
    assert session.status == PlaybackStatus.PAUSED


def test_stop_returns_to_idle(sink, session):
    session.select_track(make_track(1))
    changed = []
    session.trackChanged.connect(changed.append)

    session.stop()

    assert session.loaded_track is None
    assert session.status == PlaybackStatus.IDLE
    assert session.load_state == LoadState.NONE
    assert sink.calls[-1] == ("stop",)
    assert changed == [None]
