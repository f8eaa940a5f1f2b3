# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QLabel, QToolButton, QSlider
from PySide6.QtCore import QByteArray
from PySide6.QtSvg import QSvgRenderer

from core.session import PlaybackSession, PlaybackStatus
from core.utils import fmt_ms

COVER_SIZE = 48

def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


# Simple, clean icons (Material-ish)
SVG_PREV = "M6 18V6h2v12H6zm3.5-6L18 6v12l-8.5-6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"
SVG_VOLUME = (
    "M3 9v6h4l5 5V4L7 9H3zm13.5 3c0-1.77-1.02-3.29-2.5-4.03v8.05c1.48-.73 2.5-2.25 2.5-4.02z"
    "M14 3.23v2.06c2.89.86 5 3.54 5 6.71s-2.11 5.85-5 6.71v2.06c4.01-.91 7-4.49 7-8.77s-2.99-7.86-7-8.77z"
)
SVG_MUTED = (
    "M16.5 12c0-1.77-1.02-3.29-2.5-4.03v2.21l2.45 2.45c.03-.2.05-.41.05-.63z"
    "m2.5 0c0 .94-.2 1.82-.54 2.64l1.51 1.51C20.63 14.91 21 13.5 21 12c0-4.28-2.99-7.86-7-8.77v2.06c2.89.86 5 3.54 5 6.71z"
    "M4.27 3L3 4.27 7.73 9H3v6h4l5 5v-6.73l4.25 4.25c-.67.52-1.42.93-2.25 1.18v2.06"
    "c1.38-.31 2.63-.95 3.69-1.81L19.73 21 21 19.73l-9-9L4.27 3zM12 4L9.91 6.09 12 8.18V4z"
)

class PlayerBar(QWidget):
    def __init__(self, session: PlaybackSession, player=None, parent=None):
        super().__init__(parent)
        self.session = session
        self.player = player

        self._dragging = False

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        # --- now playing ---
        self.lbl_cover = QLabel()
        self.lbl_cover.setFixedSize(COVER_SIZE, COVER_SIZE)
        self.lbl_cover.setObjectName("Cover")

        self.lbl_title = QLabel("Nothing playing")
        self.lbl_title.setMinimumWidth(200)
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_title.setObjectName("NowPlaying")

        self.lbl_artist = QLabel("")
        self.lbl_artist.setObjectName("NowPlayingArtist")

        info = QVBoxLayout()
        info.setSpacing(2)
        info.addWidget(self.lbl_title)
        info.addWidget(self.lbl_artist)

        # --- buttons ---
        self.btn_prev = QToolButton()
        self.btn_prev.setObjectName("BtnPrev")
        self.btn_prev.setIcon(_svg_icon(SVG_PREV, 20))
        self.btn_prev.setIconSize(QSize(20, 20))
        self.btn_prev.setToolTip("Previous")

        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setIcon(_svg_icon(SVG_PLAY, 22))
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play/Pause")

        self.btn_next = QToolButton()
        self.btn_next.setObjectName("BtnNext")
        self.btn_next.setIcon(_svg_icon(SVG_NEXT, 20))
        self.btn_next.setIconSize(QSize(20, 20))
        self.btn_next.setToolTip("Next")

        self.btn_mute = QToolButton()
        self.btn_mute.setObjectName("BtnMute")
        self.btn_mute.setIconSize(QSize(18, 18))

        # --- time + progress ---
        self.lbl_time = QLabel("0:00")
        self.lbl_dur = QLabel("0:00")

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.setSingleStep(1000)
        self.slider.setPageStep(5000)

        # --- volume (0..100 on the slider, 0..1 in the session) ---
        self.volume = QSlider(Qt.Orientation.Horizontal)
        self.volume.setObjectName("Volume")
        self.volume.setRange(0, 100)
        self.volume.setFixedWidth(96)
        self.volume.setToolTip("Volume")

        root.addWidget(self.lbl_cover)
        root.addLayout(info, 1)
        root.addWidget(self.btn_prev)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_time)
        root.addWidget(self.slider, 2)
        root.addWidget(self.lbl_dur)
        root.addSpacing(6)
        root.addWidget(self.btn_mute)
        root.addWidget(self.volume)

        # --- signals ---
        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(self._on_slider_moved)

        self.volume.valueChanged.connect(self._on_volume_moved)
        self.btn_mute.clicked.connect(self.session.toggle_mute)
        self.btn_play.clicked.connect(self.session.toggle_play_pause)

        self.session.trackChanged.connect(self._on_track_changed)
        self.session.statusChanged.connect(self._on_status_changed)
        self.session.volumeChanged.connect(self._on_volume_changed)

        if self.player:
            self.player.positionChanged.connect(self._on_position)
            self.player.durationChanged.connect(self._on_duration)

        self._on_volume_changed(self.session.volume, self.session.is_muted)
        self._set_placeholder_cover()

        self.setObjectName("PlayerBar")
        self._apply_styles()

    def set_prev_next_handlers(self, prev_fn, next_fn):
        self.btn_prev.clicked.connect(prev_fn)
        self.btn_next.clicked.connect(next_fn)

    def set_nav_enabled(self, can_prev: bool, can_next: bool):
        self.btn_prev.setEnabled(bool(can_prev))
        self.btn_next.setEnabled(bool(can_next))

    def set_cover(self, data: bytes) -> bool:
        pm = QPixmap()
        if not pm.loadFromData(data):
            return False
        self.lbl_cover.setPixmap(
            pm.scaled(COVER_SIZE, COVER_SIZE, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )
        return True

    def _set_placeholder_cover(self):
        pm = QPixmap(COVER_SIZE, COVER_SIZE)
        pm.fill(Qt.transparent)
        self.lbl_cover.setPixmap(pm)

    # --- slider handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_moved(self, value: int):
        # show preview time while dragging
        self.lbl_time.setText(fmt_ms(value))

    def _on_slider_released(self):
        self._dragging = False
        if self.player:
            self.player.seek_ms(int(self.slider.value()))

    # --- volume handling ---
    def _on_volume_moved(self, value: int):
        self.session.adjust_volume(value / 100.0)

    def _on_volume_changed(self, volume: float, muted: bool):
        # a muted bar shows the slider at 0; the stored volume is untouched
        self.volume.blockSignals(True)
        self.volume.setValue(0 if muted else int(round(volume * 100)))
        self.volume.blockSignals(False)

        self.btn_mute.setIcon(_svg_icon(SVG_MUTED if muted else SVG_VOLUME, 18))
        self.btn_mute.setToolTip("Unmute" if muted else "Mute")

    # --- session updates ---
    def _on_track_changed(self, track):
        self._set_placeholder_cover()
        if track:
            self.lbl_title.setText(track.title or "Unknown")
            self.lbl_artist.setText(track.artist_name or "Unknown Artist")
        else:
            self.lbl_title.setText("Nothing playing")
            self.lbl_artist.setText("")
            self.slider.setValue(0)
            self.lbl_time.setText("0:00")
            self.lbl_dur.setText("0:00")
            self._set_playing(False)

    def _on_status_changed(self, status):
        self._set_playing(status == PlaybackStatus.PLAYING)

    def _set_playing(self, playing: bool):
        if playing:
            self.btn_play.setIcon(_svg_icon(SVG_PAUSE, 22))
            self.btn_play.setToolTip("Pause")
        else:
            self.btn_play.setIcon(_svg_icon(SVG_PLAY, 22))
            self.btn_play.setToolTip("Play")

    def _on_duration(self, ms: int):
        self.slider.setRange(0, max(0, int(ms)))
        self.lbl_dur.setText(fmt_ms(int(ms)))

    def _on_position(self, ms: int):
        if self._dragging:
            return
        self.lbl_time.setText(fmt_ms(int(ms)))
        self.slider.setValue(int(ms))

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#PlayerBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }

        QToolButton {
            border: 1px solid transparent;
            background: transparent;
            padding: 6px;
            border-radius: 10px;
            color: #e5e7eb;
        }
        QToolButton:hover {
            background: #0b1222;
            border-color: #1f2937;
            color: #c084fc;
        }
        QToolButton:pressed {
            background: #0f172a;
        }
        QToolButton:disabled {
            background: transparent;
            border-color: transparent;
        }

        /* Round play button */
        QToolButton#BtnPlay {
            background: qlineargradient(x1:0, y1:0, x2:1, y2:0, stop:0 #a855f7, stop:1 #ec4899);
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QToolButton#BtnPlay:hover {
            border-color: #c084fc;
        }

        QSlider::groove:horizontal {
            height: 4px;
            background: #0f172a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #c084fc;
        }
        QSlider::sub-page:horizontal {
            background: #c084fc;
            border-radius: 2px;
        }

        QLabel {
            color: #9ca3af;
            font-size: 11px;
        }
        QLabel#NowPlaying {
            color: #e5e7eb;
            font-size: 12px;
            font-weight: 600;
        }
        QLabel#NowPlayingArtist {
            color: #c4b5fd;
        }
        QLabel#Cover {
            background: #0b1222;
            border-radius: 6px;
        }
        """)
