import logging
import sys
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.catalog_client import DeezerClient
from core.config import load_config
from core.navigation import Navigator
from core.search import SearchCoordinator
from core.session import PlaybackSession
from core.state import AppState, Notify
from core.tracklist import TrackList
from player.player import NullPlayer, Player
from ui.main_window import MainWindow

log = logging.getLogger("deezplay")

def init_app_state() -> AppState:
    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    app_state = AppState(config)
    app_state.client = DeezerClient(
        base_url=config.api_base,
        proxy_url=config.cors_proxy,
        timeout_s=config.timeout_s,
        limit=config.result_limit,
    )

    try:
        app_state.player = Player()
    except Exception as e:
        log.exception("Audio output initialization failed")
        app_state.player = NullPlayer(f"Audio output unavailable: {e}")
        app_state.queued_notifications.append(
            Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")
        )

    app_state.tracks = TrackList()
    app_state.session = PlaybackSession(app_state.player, volume=config.volume)
    app_state.navigator = Navigator(app_state.session, app_state.tracks)
    app_state.search = SearchCoordinator(app_state.tracks)

    # sink -> session
    app_state.player.loadFinished.connect(app_state.session.on_load_result)
    app_state.player.ended.connect(app_state.session.on_clip_ended)

    log.info(
        "Catalog %s (relay: %s), volume %.2f",
        config.api_base, config.cors_proxy or "none", config.volume,
    )
    return app_state

def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    qt_app = QApplication(sys.argv)

    app_state = init_app_state()
    main_window = MainWindow(app_state)
    main_window.show()

    # python main.py daft punk
    initial_query = " ".join(qt_app.arguments()[1:]).strip()
    if initial_query:
        QTimer.singleShot(0, lambda: main_window.submit_search(initial_query))

    return qt_app.exec()

if __name__ == "__main__":
    raise SystemExit(main())
