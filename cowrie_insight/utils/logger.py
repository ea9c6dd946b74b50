"""Shared logging setup for the parser, the aggregators and the pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

Level = Union[int, str]


def resolve_level(level: Level) -> int:
    """Accept ``logging`` constants or level names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def configure_logger(name: str, log_file: Optional[Path] = None, level: Level = logging.INFO) -> logging.Logger:
    """Return a logger with a stream handler and an optional file handler.

    Parameters
    ----------
    name:
        Module or component name for the logger namespace.
    log_file:
        Optional path for file logging. The parent directory is created if required.
        A logger keeps at most one file handler; a new path closes and replaces
        the previous one.
    level:
        Logging level or level name; defaults to ``logging.INFO``.
    """

    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))
    formatter = logging.Formatter(LOG_FORMAT)

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file).resolve()
        attached = False
        for handler in list(logger.handlers):
            if not isinstance(handler, logging.FileHandler):
                continue
            if Path(handler.baseFilename) == log_path:
                attached = True
                continue
            logger.removeHandler(handler)
            handler.close()
        if not attached:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
