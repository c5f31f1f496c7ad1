"""
config.py: Runtime configuration loaded from the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .constants import SCREEN_HEIGHT, SCREEN_WIDTH

DB_FILE = "fullsend.db"


@dataclass(frozen=True)
class GameConfig:
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    fps: int = 60
    db_file: str = DB_FILE
    log_level: str = "info"
    log_file: Optional[str] = None
    mute: bool = False


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config() -> GameConfig:
    """Load configuration from .env and FULLSEND_* environment variables."""
    load_dotenv(find_dotenv(usecwd=True))

    return GameConfig(
        width=_positive_int("FULLSEND_WIDTH", SCREEN_WIDTH),
        height=_positive_int("FULLSEND_HEIGHT", SCREEN_HEIGHT),
        fps=_positive_int("FULLSEND_FPS", 60),
        db_file=os.environ.get("FULLSEND_DB_FILE", DB_FILE),
        log_level=os.environ.get("FULLSEND_LOG_LEVEL", "info"),
        log_file=os.environ.get("FULLSEND_LOG_FILE") or None,
        mute=os.environ.get("FULLSEND_MUTE", "false").lower() in ("1", "true", "yes"),
    )
