"""
Runtime settings read from the environment.

Values are looked up on every call so tests can patch ``os.environ``.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
# Backing file shipped beside the service
DATA_FILE = Path(__file__).resolve().parent / "data" / "libros.json"


def get_port() -> int:
    raw = os.environ.get("PORT", "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT %r, using %s", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_host() -> str:
    return os.environ.get("HOST", "").strip() or DEFAULT_HOST


def get_data_file() -> Path:
    """Return the backing file path (env ``LIBROS_DATA_FILE`` or the bundled one)."""
    env_path = os.environ.get("LIBROS_DATA_FILE", "").strip()
    if env_path:
        return Path(env_path)
    return DATA_FILE


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
