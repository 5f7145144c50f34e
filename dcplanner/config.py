from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
DEFAULT_PORT = 8000


def _flag(name: str, default: str = "") -> bool:
    return str(os.getenv(name, default)).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class AppConfig:
    data_dir: str = "user_data"
    log_level: str = "INFO"
    port: int = DEFAULT_PORT
    debug: bool = False

    @property
    def settings_path(self) -> str:
        return os.path.join(self.data_dir, "settings.json")


def _port() -> int:
    raw = os.getenv("DCPLANNER_PORT")
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring DCPLANNER_PORT=%r: not an integer, using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def load_config() -> AppConfig:
    """Read application settings from ``DCPLANNER_*`` environment variables."""
    return AppConfig(
        data_dir=os.getenv("DCPLANNER_DATA_DIR", "user_data"),
        log_level=os.getenv("DCPLANNER_LOG_LEVEL", "INFO").upper(),
        port=_port(),
        debug=_flag("DCPLANNER_DEBUG"),
    )
