# core/models.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class Track:
    id: int
    title: str
    artist_name: str
    album_title: str
    preview_url: str
    duration_s: int
    cover_small: str | None = None
    cover_medium: str | None = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> Track:
        """
        Build a Track from one item of a Deezer /search response.
        Nested artist/album objects may be missing on odd catalog entries.
        """
        artist = item.get("artist") or {}
        album = item.get("album") or {}

        try:
            duration = int(item.get("duration") or 0)
        except (TypeError, ValueError):
            duration = 0

        return cls(
            id=int(item["id"]),
            title=item.get("title") or "",
            artist_name=artist.get("name") or "",
            album_title=album.get("title") or "",
            preview_url=item.get("preview") or "",
            duration_s=max(0, duration),
            cover_small=album.get("cover_small") or None,
            cover_medium=album.get("cover_medium") or None,
        )

    def display_name(self) -> str:
        return f"{self.artist_name} — {self.title}" if self.artist_name else self.title
