"""Logging utilities shared across the Qdrant memory adapter."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

_CONSOLE_LOG_FORMAT = "%(asctime)s | %(levelname).1s | %(name)s | %(message)s"
_FILE_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%H:%M:%S"
_DEFAULT_LOGGER_NAME = "qdrant_memory"

_CONFIGURED = False
_SESSION_LOG_PATH: Path | None = None


def setup_logging(level: str = "INFO", *, log_dir: str | Path | None = None) -> None:
    """Attach handlers to the package logger once and update its level on every call.

    A session log file is written only when ``log_dir`` or the ``LOG_DIR``
    environment variable names a directory.
    """
    global _CONFIGURED, _SESSION_LOG_PATH

    package_logger = logging.getLogger(_DEFAULT_LOGGER_NAME)
    package_logger.setLevel(_coerce_level(level))

    if _CONFIGURED:
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_CONSOLE_LOG_FORMAT, datefmt=_DATEFMT))
    handlers: list[logging.Handler] = [console_handler]

    target_dir = _resolve_log_dir(log_dir)
    if target_dir is not None:
        target_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        _SESSION_LOG_PATH = target_dir / f"qdrant_memory_{timestamp}.log"
        file_handler = logging.FileHandler(_SESSION_LOG_PATH, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        package_logger.addHandler(handler)
    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if not name:
        return logging.getLogger(_DEFAULT_LOGGER_NAME)
    if name == _DEFAULT_LOGGER_NAME or name.startswith(f"{_DEFAULT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_DEFAULT_LOGGER_NAME}.{name}")


def session_log_path() -> Path | None:
    """Expose the current session log path for diagnostics."""
    return _SESSION_LOG_PATH


def _resolve_log_dir(log_dir: str | Path | None) -> Path | None:
    if log_dir is None:
        env_dir = os.getenv("LOG_DIR")
        return Path(env_dir) if env_dir else None
    return Path(log_dir)


def _coerce_level(level: str) -> int:
    level_name = str(level).upper()
    named = logging.getLevelName(level_name)
    if isinstance(named, int):
        return named
    if level_name.isdigit():
        return int(level_name)
    return logging.INFO
