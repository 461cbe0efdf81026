"""Centralized logging utilities for eml2pdf entry points."""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from eml2pdf.constants import DEFAULT_LOG_FILENAME, DEFAULT_LOG_RETENTION_DAYS

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(app)s] [%(name)s] %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class AppNameFilter(logging.Filter):
    """Attach the application name to every record as ``record.app``."""

    def __init__(self, app_name: str):
        super().__init__()
        self.app_name = app_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.app = self.app_name
        return True


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    log_dir: Optional[str] = None,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    app_name: Optional[str] = None,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names on the console.
    log_dir : str, optional
        Directory for a log file rotated at midnight. Created if missing.
    retention_days : int, default 7
        Number of rotated daily log files kept in ``log_dir``.
    app_name : str, optional
        Application name stamped on every record (``%(app)s``); defaults to
        "eml2pdf".

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    app_filter = AppNameFilter(app_name or "eml2pdf")
    detailed_formatter = logging.Formatter(TRACE_FORMAT, datefmt=DATE_FORMAT)
    console_formatter = detailed_formatter if trace_mode else logging.Formatter(SIMPLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(app_filter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(detailed_formatter)
            file_handler.addFilter(app_filter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    if log_dir:
        try:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            rotating_handler = TimedRotatingFileHandler(
                Path(log_dir) / DEFAULT_LOG_FILENAME,
                when="midnight",
                backupCount=retention_days,
                encoding="utf-8",
            )
            rotating_handler.setLevel(resolved_level)
            rotating_handler.setFormatter(detailed_formatter)
            rotating_handler.addFilter(app_filter)
            root_logger.addHandler(rotating_handler)
            root_logger.debug("Logging to directory: %s", log_dir)
        except OSError as exc:
            root_logger.warning("Could not create log directory %s: %s", log_dir, exc)

    return root_logger
