from __future__ import annotations

import logging
import threading
from typing import Optional

import requests

from core.models import Track

log = logging.getLogger(__name__)

DEEZER_API = "https://api.deezer.com"
ALLORIGINS_RAW = "https://api.allorigins.win/raw"


class CatalogError(Exception):
    """Search request failed or the catalog answered with an error payload."""


class DeezerClient:
    def __init__(
        self,
        base_url: str = DEEZER_API,
        proxy_url: Optional[str] = ALLORIGINS_RAW,
        timeout_s: float = 15.0,
        limit: int | None = None,
        user_agent: str = "deezplay-pyside6/0.1",
    ):
        self.base_url = base_url.rstrip("/")
        self.proxy_url = (proxy_url or "").strip() or None
        self.timeout_s = timeout_s
        self.limit = limit
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        # search and cover workers share one Session from different QThreads
        self._http_lock = threading.Lock()

    def _get(self, url: str, **kwargs) -> requests.Response:
        with self._http_lock:
            return self.session.get(url, **kwargs)

    def _get_json(self, path: str, params: dict) -> dict:
        target = f"{self.base_url}{path}"

        if self.proxy_url:
            # relay expects the full target url (query included) in ?url=
            target = requests.Request("GET", target, params=params).prepare().url
            url, params = self.proxy_url, {"url": target}
        else:
            url = target

        try:
            r = self._get(url, params=params, timeout=self.timeout_s)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise CatalogError(f"Search request failed: {e}") from e
        except ValueError as e:
            raise CatalogError(f"Invalid JSON from catalog: {e}") from e

        if not isinstance(data, dict):
            raise CatalogError("Unexpected catalog response.")

        # Deezer reports quota/parameter problems with HTTP 200 + {"error": {...}}
        err = data.get("error")
        if err:
            msg = err.get("message") if isinstance(err, dict) else str(err)
            raise CatalogError(f"Catalog error: {msg}")

        return data

    def search(self, query: str) -> list[Track]:
        # GET /search?q=...[&limit=...]
        params: dict = {"q": query}
        if self.limit:
            params["limit"] = int(self.limit)

        data = self._get_json("/search", params)
        items = data.get("data") or []

        tracks: list[Track] = []
        for item in items:
            if not isinstance(item, dict) or item.get("id") is None:
                continue
            try:
                tracks.append(Track.from_api(item))
            except (TypeError, ValueError) as e:
                log.debug("Skipping malformed catalog item: %s", e)
        return tracks

    def fetch_bytes(self, url: str) -> bytes:
        try:
            r = self._get(url, timeout=self.timeout_s)
            r.raise_for_status()
        except requests.RequestException as e:
            raise CatalogError(f"Download failed: {e}") from e
        return r.content
