# ui/models/track_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from core.models import Track
from core.utils import fmt_duration

MARK_PLAY = "▶"
MARK_PAUSE = "❚❚"

class TrackTableModel(QAbstractTableModel):
    HEADERS = ["", "Title", "Artist", "Album", "Duration"]

    def __init__(self, rows=()):
        super().__init__()
        self._rows: list[Track] = list(rows)
        self._now_playing_id: int | None = None
        self._is_playing = False

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def set_now_playing(self, track_id: int | None, is_playing: bool):
        self._now_playing_id = track_id
        self._is_playing = bool(is_playing)
        if self._rows:
            top = self.index(0, 0)
            bottom = self.index(len(self._rows) - 1, 0)
            self.dataChanged.emit(top, bottom, [Qt.DisplayRole])

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return self.HEADERS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                if row.id == self._now_playing_id:
                    return MARK_PAUSE if self._is_playing else MARK_PLAY
                return ""
            if col == 1:
                return row.title
            if col == 2:
                return row.artist_name
            if col == 3:
                return row.album_title
            if col == 4:
                return fmt_duration(row.duration_s)
        if role == Qt.ToolTipRole:
            return f"{row.display_name()}\n{row.album_title}"
        if role == Qt.UserRole:
            return row
        return None

    def track_at(self, row: int) -> Track | None:
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]

    def row_for_track_id(self, track_id: int) -> int:
        for i, r in enumerate(self._rows):
            if r.id == int(track_id):
                return i
        return -1
