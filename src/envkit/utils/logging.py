"""Logging configuration for the ``envkit`` logger tree.

Modules log through ``logging.getLogger("envkit.<area>")``; applications that want
those records (override hits, unset keys, unrecognized shapes, container
detection) call :func:`setup_logging` once, usually via ``envkit.setup_logging``.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from pathlib import Path
from typing import List, Optional

LOGGER_NAME = "envkit"
LOG_FILENAME = "envkit.log"
_CONSOLE_FORMAT = "%(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO, logs_dir: Optional[Path] = None) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``envkit`` logger.

    Args:
        level (int): Level applied to the logger and every handler.
        logs_dir (Optional[Path]): Directory receiving ``envkit.log``; console only when omitted.

    Returns:
        logging.Logger: The configured ``envkit`` logger.

    Side Effects / I/O:
        - Replaces (and closes) previously installed handlers unless called again with the
          same arguments.
        - Creates ``logs_dir`` when it does not exist.
    """
    logger = logging.getLogger(LOGGER_NAME)
    signature = (level, str(logs_dir) if logs_dir is not None else None)
    if getattr(logger, "_envkit_signature", None) == signature:
        return logger

    _reset_handlers(logger)
    logger.setLevel(level)
    logger.propagate = False
    for handler in _build_handlers(logs_dir):
        handler.setLevel(level)
        logger.addHandler(handler)

    logger._envkit_signature = signature  # type: ignore[attr-defined]
    return logger


def _build_handlers(logs_dir: Optional[Path]) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console]
    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logging.FileHandler(logs_dir / LOG_FILENAME, encoding="utf-8")
        log_file.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(log_file)
    return handlers


def _reset_handlers(logger: logging.Logger) -> None:
    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        with suppress(OSError, ValueError):
            handler.close()
