"""Logging utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> None:
    """Configure the root logger with a stream handler and an optional log file.

    Safe to call more than once: the level is reapplied, and a log file that already has
    a handler on the root logger is not attached again.

    Args:
        level: Level number, or a name such as ``"DEBUG"`` (case-insensitive).
        log_file: Also append records to this file, creating its directory if needed.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    level = _resolve_level(level)
    root = logging.getLogger()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig does nothing once the root logger has handlers
    root.setLevel(level)
    if log_file is None:
        return

    log_file = Path(log_file)
    target = os.path.abspath(log_file)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            handler.setLevel(level)
            return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
