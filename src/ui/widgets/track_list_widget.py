# ui/widgets/track_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal, Qt, QItemSelectionModel
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QMenu, QLabel, QStackedWidget

from ui.models.track_table_model import TrackTableModel
from core.models import Track
from core.search import ViewState

MSG_INITIAL = "Start by searching for your favorite music!"
MSG_LOADING = "Searching for tracks..."
MSG_EMPTY = "No tracks found. Try a different search!"


class TrackListWidget(QWidget):
    playTrack = Signal(object)    # Track

    def __init__(self, parent=None):
        super().__init__(parent)

        self.table = QTableView()
        self.model = TrackTableModel([])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)

        self.table.setColumnWidth(0, 36)
        self.table.setColumnWidth(1, 300)
        self.table.setColumnWidth(2, 200)
        self.table.setColumnWidth(3, 240)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setObjectName("TrackTable")

        self.table.verticalHeader().setDefaultSectionSize(26)

        # Double click -> play
        self.table.doubleClicked.connect(self._on_double_click)

        # Right-click context menu
        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)

        # Initial / loading / empty message
        self.message = QLabel(MSG_INITIAL)
        self.message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message.setObjectName("ListMessage")

        self.stack = QStackedWidget()
        self.stack.addWidget(self.message)
        self.stack.addWidget(self.table)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.stack)

        self._apply_styles()

    # -------------------------
    # External API
    # -------------------------
    def set_tracks(self, tracks):
        self.model.set_rows(tracks)

    def set_view_state(self, state: ViewState):
        if state == ViewState.RESULTS:
            self.stack.setCurrentWidget(self.table)
            return

        text = {
            ViewState.INITIAL: MSG_INITIAL,
            ViewState.LOADING: MSG_LOADING,
            ViewState.EMPTY: MSG_EMPTY,
        }[state]
        self.message.setText(text)
        self.stack.setCurrentWidget(self.message)

    def set_now_playing(self, track: Track | None, is_playing: bool = False):
        self.model.set_now_playing(track.id if track else None, is_playing)

        if track is None:
            self.table.clearSelection()
            return

        row = self.model.row_for_track_id(track.id)
        if row < 0:
            return  # loaded track belongs to an older search

        idx = self.model.index(row, 0)
        sm = self.table.selectionModel()
        if sm is None:
            return

        sm.setCurrentIndex(idx, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows)
        self.table.scrollTo(idx, QTableView.ScrollHint.EnsureVisible)

    def selected_track(self) -> Track | None:
        idx = self.table.currentIndex()
        if not idx.isValid():
            return None
        return self.model.track_at(idx.row())

    # -------------------------
    # UI Events
    # -------------------------
    def _on_double_click(self, index):
        if not index.isValid():
            return
        track = self.model.track_at(index.row())
        if track is not None:
            self.playTrack.emit(track)

    def _on_context_menu(self, pos):
        idx = self.table.indexAt(pos)
        if not idx.isValid():
            return

        track = self.model.track_at(idx.row())
        if track is None:
            return

        menu = QMenu(self)
        act_play = menu.addAction("Play / Pause")

        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen == act_play:
            self.playTrack.emit(track)

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#TrackTable {
            background-color: #020617;
            alternate-background-color: #030712;
            border: none;
            color: #e5e7eb;
            gridline-color: #020617;
            selection-background-color: rgba(168, 85, 247, 0.25);
            selection-color: #e5e7eb;
        }

        QHeaderView::section {
            background-color: #020617;
            color: #9ca3af;
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #111827;
            font-size: 11px;
            text-transform: uppercase;
            letter-spacing: 0.08em;
        }

        QTableView::item {
            padding: 4px 6px;
        }

        QLabel#ListMessage {
            color: #c4b5fd;
            font-size: 15px;
            background-color: #020617;
        }
        """)
