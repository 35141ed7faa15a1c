"""
Runtime configuration for LyricDrill.

Settings come from the environment, optionally seeded from a .env file:
  LYRICDRILL_DATA_DIR     directory for the database (default: ~/.lyricdrill)
  LYRICDRILL_DB_PATH      SQLite file (default: <data_dir>/lyricdrill.db)
  LYRICDRILL_DB_TIMEOUT   seconds to wait on a locked database (default: 5)
  LYRICDRILL_LOG_LEVEL    logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_DATA_DIR = Path.home() / ".lyricdrill"
DEFAULT_DB_NAME = "lyricdrill.db"
DEFAULT_DB_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    db_timeout: float
    log_level: str


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional .env file; values already in the environment win

    Raises:
        ValueError: If LYRICDRILL_DB_TIMEOUT is not a non-negative number
    """
    load_dotenv(env_file)

    data_dir = Path(os.environ.get("LYRICDRILL_DATA_DIR") or DEFAULT_DATA_DIR).expanduser()
    db_path = Path(os.environ.get("LYRICDRILL_DB_PATH") or data_dir / DEFAULT_DB_NAME).expanduser()

    raw_timeout = os.environ.get("LYRICDRILL_DB_TIMEOUT")
    if raw_timeout:
        try:
            db_timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"LYRICDRILL_DB_TIMEOUT must be a number, got {raw_timeout!r}")
        if db_timeout < 0:
            raise ValueError(f"LYRICDRILL_DB_TIMEOUT must be >= 0, got {db_timeout}")
    else:
        db_timeout = DEFAULT_DB_TIMEOUT

    log_level = (os.environ.get("LYRICDRILL_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()

    return Settings(
        data_dir=data_dir,
        db_path=db_path,
        db_timeout=db_timeout,
        log_level=log_level,
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL):
    """Set up root logging in the project's format."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
