"""
Centralized Logging Configuration
==================================
One logging setup shared by every StockPulse module.

Design Decisions:
- Built-in logging only; handlers are attached per module logger
- Console output on stderr so stdout carries only command output, plus a
  log file when LOGGING_CONFIG["log_file"] (env: STOCKPULSE_LOG_FILE) or an
  explicit path is given
- Level comes from LOGGING_CONFIG["level"] (env: STOCKPULSE_LOG_LEVEL) and
  can be changed at runtime with set_log_level()
- Format: timestamp | level | module | message

Usage:
    from stockpulse.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Computing alerts")
"""

import logging
import sys
import time
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from stockpulse.config import LOGGING_CONFIG

# Loggers created through get_logger, by name
_LOGGERS: Dict[str, logging.Logger] = {}


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = LOGGING_CONFIG.get("level", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt=LOGGING_CONFIG["format"],
        datefmt=LOGGING_CONFIG["datefmt"]
    ))
    logger.addHandler(handler)


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: Optional[Union[int, str]] = None
) -> logging.Logger:
    """
    Return the configured logger for a module.

    Parameters
    ----------
    name : str
        Logger name (typically __name__ of the calling module)
    log_file : str or Path, optional
        Extra file to log to (default: LOGGING_CONFIG["log_file"])
    level : int or str, optional
        Logging level (default: LOGGING_CONFIG["level"])

    Returns
    -------
    logging.Logger
        Logger with stderr console (and optional file) handlers

    Example
    -------
    >>> logger = get_logger(__name__)
    >>> logger.info("Reorder plan ready")
    2026-10-19 10:30:00 | INFO     | stockpulse.services.reorder_engine | Reorder plan ready
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    resolved = _resolve_level(level)
    logger.setLevel(resolved)
    _attach(logger, logging.StreamHandler(sys.stderr), resolved)

    log_file = log_file or LOGGING_CONFIG.get("log_file")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_path, encoding='utf-8'), resolved)

    logger.propagate = False
    _LOGGERS[name] = logger

    return logger


def set_log_level(level: Union[int, str]) -> int:
    """
    Change the level of every logger created by get_logger.

    Returns the numeric level applied.
    """
    resolved = _resolve_level(level)
    for logger in _LOGGERS.values():
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
    return resolved


def log_collection_info(logger: logging.Logger, name: str, records: Sequence) -> None:
    """
    Log the size of a loaded record collection; empty ones are a warning.
    """
    count = len(records)
    if count == 0:
        logger.warning(f"Collection '{name}' is empty")
    else:
        logger.info(f"Collection '{name}': {count:,} records")


class LogContext:
    """
    Log the start, end and duration of an operation.

    Failures are logged at ERROR and re-raised.

    Usage:
        with LogContext(logger, "Loading inventory dataset"):
            ...
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started = 0.0

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.log(self.level, f"Starting: {self.operation}")
        return self

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._started

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.logger.log(self.level, f"Completed: {self.operation} ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.operation} ({self.elapsed:.2f}s) - {exc_val}")
        return False
