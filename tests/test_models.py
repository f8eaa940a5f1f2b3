from core.models import Track
from core.utils import clamp_volume, fmt_duration, fmt_ms

DEEZER_ITEM = {
    "id": 3135556,
    "readable": True,
    "title": "Harder, Better, Faster, Stronger",
    "duration": 224,
    "preview": "https://cdnt-preview.dzcdn.net/api/1/1/a/b/c/0/abc.mp3",
    "artist": {"id": 27, "name": "Daft Punk"},
    "album": {
        "id": 302127,
        "title": "Discovery",
        "cover_small": "https://e-cdns-images.dzcdn.net/images/cover/x/56x56-000000-80-0-0.jpg",
        "cover_medium": "https://e-cdns-images.dzcdn.net/images/cover/x/250x250-000000-80-0-0.jpg",
    },
    "type": "track",
}


def test_from_api_maps_deezer_fields():
    t = Track.from_api(DEEZER_ITEM)

    assert t.id == 3135556
    assert t.title == "Harder, Better, Faster, Stronger"
    assert t.artist_name == "Daft Punk"
    assert t.album_title == "Discovery"
    assert t.preview_url.endswith("abc.mp3")
    assert t.duration_s == 224
    assert "56x56" in t.cover_small
    assert "250x250" in t.cover_medium


def test_from_api_tolerates_missing_nested_objects():
    t = Track.from_api({"id": "42", "title": "Loose", "duration": None})

    assert t.id == 42
    assert t.artist_name == ""
    assert t.album_title == ""
    assert t.preview_url == ""
    assert t.duration_s == 0
    assert t.cover_small is None
    assert t.cover_medium is None


def test_from_api_clamps_negative_duration():
    assert Track.from_api({"id": 1, "duration": -5}).duration_s == 0
    assert Track.from_api({"id": 1, "duration": "abc"}).duration_s == 0


def test_display_name():
    t = Track.from_api(DEEZER_ITEM)
    assert t.display_name() == "Daft Punk — Harder, Better, Faster, Stronger"
    assert Track.from_api({"id": 1, "title": "Solo"}).display_name() == "Solo"


def test_fmt_duration():
    assert fmt_duration(0) == "0:00"
    assert fmt_duration(30) == "0:30"
    assert fmt_duration(224) == "3:44"
    assert fmt_duration(3600) == "60:00"
    assert fmt_duration(None) == ""
    assert fmt_ms(61_500) == "1:01"


def test_clamp_volume():
    assert clamp_volume(-0.2) == 0.0
    assert clamp_volume(0.35) == 0.35
    assert clamp_volume(3) == 1.0
