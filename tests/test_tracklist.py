from conftest import make_track, make_tracks
from core.tracklist import TrackList


def test_replace_with_is_wholesale():
    tl = TrackList()
    tl.replace_with(make_tracks(3), query="first")
    tl.replace_with(make_tracks(2, start=50), query="second")

    assert [t.id for t in tl] == [50, 51]
    assert tl.query == "second"
    assert len(tl) == 2


def test_index_of_by_track_or_id():
    tl = TrackList()
    tl.replace_with(make_tracks(3))

    assert tl.index_of(tl[1]) == 1
    assert tl.index_of(3) == 2
    assert tl.index_of(make_track(2, title="other snapshot")) == 1
    assert tl.index_of(99) == -1
    assert tl.index_of(None) == -1


def test_contains_and_get():
    tl = TrackList()
    assert tl.is_empty()
    tl.replace_with(make_tracks(2))

    assert tl.contains(1)
    assert not tl.contains(5)
    assert tl.get(2).title == "Track 2"
    assert tl.get(5) is None


def test_snapshot_is_immutable_copy():
    source = make_tracks(2)
    tl = TrackList()
    tl.replace_with(source)
    source.append(make_track(9))

    assert len(tl) == 2
    assert isinstance(tl.tracks, tuple)
