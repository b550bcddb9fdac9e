import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .schema import parse_threshold
from .similarity import DEFAULT_THRESHOLD

DEFAULT_DB_PATH = "data/catalog.db"


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def get_threshold() -> float:
    """Similarity threshold from BAKEHOUSE_SIMILARITY_THRESHOLD (default 0.7)."""
    raw = os.getenv("BAKEHOUSE_SIMILARITY_THRESHOLD")
    if raw is None or not raw.strip():
        return DEFAULT_THRESHOLD
    return parse_threshold(raw)


def get_db_path() -> Path:
    return Path(os.getenv("BAKEHOUSE_DB") or DEFAULT_DB_PATH)


def get_log_level() -> str:
    return (os.getenv("BAKEHOUSE_LOG_LEVEL") or "INFO").upper()


def get_log_dir() -> Optional[Path]:
    raw = os.getenv("BAKEHOUSE_LOG_DIR")
    return Path(raw) if raw else None
