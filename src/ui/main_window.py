from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QLineEdit, QHBoxLayout, QToolButton, QStyle
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence

from ui.player_bar import PlayerBar
from ui.widgets.track_list_widget import TrackListWidget
from ui.widgets.toast import ToastManager
from ui.workers.search_worker import SearchWorker
from ui.workers.cover_loader import CoverLoader


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Deezer Music Player")
        self.resize(980, 640)
        self.app_state = app_state

        self.session = app_state.session
        self.search = app_state.search
        self.navigator = app_state.navigator

        # running QThreads must stay referenced until they finish
        self._workers = set()

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.toasts = ToastManager(self)
        self.app_state.notification.connect(self.toasts.show_notify)

        # --- Header ---
        self.lbl_header = QLabel("Deezer Music Player")
        self.lbl_header.setObjectName("Header")
        self.lbl_header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_sub = QLabel("Search and play millions of songs")
        self.lbl_sub.setObjectName("SubHeader")
        self.lbl_sub.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.layout.addWidget(self.lbl_header)
        self.layout.addWidget(self.lbl_sub)

        # --- Search bar ---
        top_bar = QHBoxLayout()

        self.search_box = QLineEdit()
        self.search_box.setObjectName("SearchBox")
        self.search_box.setPlaceholderText("Search for artists, songs, or albums...")
        self.search_box.returnPressed.connect(lambda: self.submit_search())
        top_bar.addWidget(self.search_box, stretch=1)

        self.btn_search = QToolButton()
        self.btn_search.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_FileDialogContentsView))
        self.btn_search.setToolTip("Search")
        self.btn_search.clicked.connect(lambda: self.submit_search())
        top_bar.addWidget(self.btn_search)

        self.layout.addLayout(top_bar)

        # --- Results ---
        self.track_list = TrackListWidget(self)
        self.track_list.playTrack.connect(self.session.select_track)
        self.layout.addWidget(self.track_list, 1)

        # --- PlayerBar (hidden until something is loaded) ---
        self.player_bar = PlayerBar(self.session, self.app_state.player, self)
        self.player_bar.set_prev_next_handlers(self.navigator.previous, self.navigator.next)
        self.player_bar.setVisible(False)
        self.layout.addWidget(self.player_bar)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Ctrl+Space"), self, activated=self.session.toggle_play_pause)
        QShortcut(QKeySequence("Ctrl+Right"), self, activated=self.navigator.next)
        QShortcut(QKeySequence("Ctrl+Left"), self, activated=self.navigator.previous)
        QShortcut(QKeySequence("Ctrl+M"), self, activated=self.session.toggle_mute)
        QShortcut(QKeySequence("Ctrl+L"), self, activated=self.search_box.setFocus)

        # --- Session / search signals ---
        self.session.trackChanged.connect(self._on_track_changed)
        self.session.statusChanged.connect(self._on_status_changed)
        self.session.loadFailed.connect(self._on_load_failed)
        self.search.viewStateChanged.connect(self._on_view_state)
        self.search.resultsApplied.connect(self._on_results)

        self.track_list.set_view_state(self.search.view_state)
        self.show_queued_notifications()

        self.setStyleSheet(self.styleSheet() + """
            QMainWindow, QWidget {
                background-color: #020617;
            }
            QLabel#Header {
                color: #e9d5ff;
                font-size: 26px;
                font-weight: 700;
            }
            QLabel#SubHeader {
                color: #a78bfa;
                font-size: 12px;
                margin-bottom: 8px;
            }
            QLineEdit#SearchBox {
                background: #0b1222;
                border: 1px solid #1f2937;
                border-radius: 16px;
                padding: 8px 14px;
                color: #e5e7eb;
            }
            QLineEdit#SearchBox:focus {
                border-color: #a855f7;
            }
            QToolButton {
                border: 1px solid transparent;
                background: transparent;
                padding: 6px;
                border-radius: 10px;
            }
            QToolButton:hover {
                background: #0b1222;
                border-color: #1f2937;
            }
            """)

    # ------------------ search ------------------
    def submit_search(self, query: str | None = None):
        if query is None:
            query = self.search_box.text()
        else:
            self.search_box.setText(query)

        generation = self.search.submit(query)
        if generation is None:
            return

        worker = SearchWorker(self.app_state.client, generation, self.search.pending_query, parent=self)
        worker.finished_signal.connect(self._on_search_finished)
        self._start_worker(worker)
        self.statusBar().showMessage("Searching for tracks...")

    def _on_search_finished(self, generation: int, tracks, error: str):
        if error:
            applied = self.search.fail(generation, error)
            if applied:
                self.app_state.notify(f"Search failed: {error}", "error")
        else:
            applied = self.search.resolve(generation, tracks)

        if applied:
            self.statusBar().showMessage(f"{len(self.search.tracks)} track(s) found", 4000)

    def _on_view_state(self, state):
        self.track_list.set_view_state(state)

    def _on_results(self, tracks):
        self.track_list.set_tracks(tracks)
        self.track_list.set_view_state(self.search.view_state)
        self._refresh_now_playing()

    # ------------------ playback ------------------
    def _on_track_changed(self, track):
        self.player_bar.setVisible(track is not None)
        self._refresh_now_playing()

        if track is not None and track.cover_small and self.app_state.client:
            loader = CoverLoader(self.app_state.client, track.id, track.cover_small, parent=self)
            loader.loaded.connect(self._on_cover_loaded)
            self._start_worker(loader)

    def _on_status_changed(self, _status):
        self._refresh_now_playing()

    def _on_cover_loaded(self, track_id: int, data: bytes):
        loaded = self.session.loaded_track
        if loaded is None or loaded.id != track_id:
            return  # a newer track took over the bar
        self.player_bar.set_cover(data)

    def _on_load_failed(self, track, message: str):
        self.app_state.notify(f"Could not play \"{track.title}\": {message}", "error")

    def _refresh_now_playing(self):
        self.track_list.set_now_playing(self.session.loaded_track, self.session.is_playing)
        self.player_bar.set_nav_enabled(self.navigator.can_previous(), self.navigator.can_next())

    # ------------------ helpers ------------------
    def _start_worker(self, worker):
        self._workers.add(worker)
        worker.finished.connect(self._reap_workers)
        worker.start()

    def _reap_workers(self):
        for worker in [w for w in self._workers if w.isFinished()]:
            self._workers.discard(worker)
            worker.deleteLater()

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self.toasts.show_notify(n)
        self.app_state.queued_notifications.clear()

    def closeEvent(self, event):
        if self.session.loaded_track is not None:
            self.session.stop()
        for worker in list(self._workers):
            worker.wait(2000)
        super().closeEvent(event)
