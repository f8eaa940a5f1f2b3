# ui/workers/cover_loader.py
from __future__ import annotations

import logging

from PySide6.QtCore import QThread, Signal

from core.catalog_client import CatalogError, DeezerClient

log = logging.getLogger(__name__)


class CoverLoader(QThread):
    loaded = Signal(int, bytes)   # track_id, image bytes
    failed = Signal(int, str)     # track_id, message

    def __init__(self, client: DeezerClient, track_id: int, url: str, parent=None):
        super().__init__(parent)
        self.client = client
        self.track_id = track_id
        self.url = url

    def run(self):
        try:
            data = self.client.fetch_bytes(self.url)
        except CatalogError as e:
            log.debug("Cover for track %s not loaded: %s", self.track_id, e)
            self.failed.emit(self.track_id, str(e))
            return
        self.loaded.emit(self.track_id, data)
