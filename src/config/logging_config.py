# src/config/logging_config.py

"""Logging for shop_assistant runs.

A run is one process: a headless chat turn, a listing, a health check or
a TUI session.  Each run appends to ``logs/run_<launch time>.log``;
stderr only shows warnings so the CLI can print JSON answers on stdout.
Worker threads execute tool calls, hence the thread name in file records.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "shop_assistant"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(threadName)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_STDERR_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def run_log_path(logs_dir: Path, started: datetime | None = None) -> Path:
    """Path of the log file for a run started at *started* (default now)."""
    stamp = (started or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def _file_handler(path: Path) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(
        logging.Formatter(_STDERR_FORMAT, datefmt=_DATE_FORMAT)
    )
    return handler


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach the run's file and stderr handlers to ``shop_assistant``.

    Calling it again in the same process keeps the handlers already
    attached and returns the file they write to.

    Args:
        logs_dir: Directory for run logs, ``Settings.LOGS_DIR`` if omitted.

    Returns:
        Path of the file this run logs to.
    """
    project_logger = logging.getLogger(ROOT_LOGGER_NAME)
    project_logger.setLevel(logging.DEBUG)

    for handler in project_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = run_log_path(target_dir)

    project_logger.addHandler(_file_handler(log_file))
    project_logger.addHandler(_stderr_handler())
    project_logger.info("Run log opened at %s", log_file)
    return log_file
