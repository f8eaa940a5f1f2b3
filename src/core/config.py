# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from core.catalog_client import ALLORIGINS_RAW, DEEZER_API
from core.session import DEFAULT_VOLUME
from core.utils import clamp_volume

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    api_base: str = DEEZER_API
    cors_proxy: str | None = ALLORIGINS_RAW
    timeout_s: float = 15.0
    result_limit: int | None = None
    volume: float = DEFAULT_VOLUME
    log_level: str = "INFO"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not a number)", name, raw)
        return default


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not an integer)", name, raw)
        return default
    return value if value > 0 else default


def load_config() -> AppConfig:
    """
    DEEZPLAY_API_BASE, DEEZPLAY_CORS_PROXY (set empty to call the API directly),
    DEEZPLAY_TIMEOUT, DEEZPLAY_RESULT_LIMIT, DEEZPLAY_VOLUME, DEEZPLAY_LOG_LEVEL.
    """
    proxy = os.getenv("DEEZPLAY_CORS_PROXY", ALLORIGINS_RAW).strip() or None

    timeout_s = _float_env("DEEZPLAY_TIMEOUT", 15.0)
    if timeout_s <= 0:
        timeout_s = 15.0

    level = (os.getenv("DEEZPLAY_LOG_LEVEL") or "INFO").strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"

    return AppConfig(
        api_base=(os.getenv("DEEZPLAY_API_BASE") or DEEZER_API).strip(),
        cors_proxy=proxy,
        timeout_s=timeout_s,
        result_limit=_int_env("DEEZPLAY_RESULT_LIMIT", None),
        volume=clamp_volume(_float_env("DEEZPLAY_VOLUME", DEFAULT_VOLUME)),
        log_level=level,
    )
