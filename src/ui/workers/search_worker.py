# ui/workers/search_worker.py
from __future__ import annotations

from PySide6.QtCore import QThread, Signal

from core.catalog_client import CatalogError, DeezerClient


class SearchWorker(QThread):
    # generation, list[Track], error message ("" when ok)
    finished_signal = Signal(int, object, str)

    def __init__(self, client: DeezerClient, generation: int, query: str, parent=None):
        super().__init__(parent)
        self.client = client
        self.generation = generation
        self.query = query

    def run(self):
        try:
            tracks = self.client.search(self.query)
            self.finished_signal.emit(self.generation, tracks, "")
        except CatalogError as e:
            self.finished_signal.emit(self.generation, [], str(e))
