"""
Logging setup for the application.

The console shows the requested level with short component names. A log
file, when given, always records DEBUG (skipped cycles, incomplete hands,
expiries) so a session can be inspected after the fact.
"""

import os
import logging
import logging.handlers

# Chatty third-party loggers that drown out trigger events at DEBUG
_NOISY_LOGGERS = ("absl", "matplotlib", "PIL")

CONSOLE_FORMAT = "%(asctime)s  %(levelname)-5s  %(component)-14s %(message)s"
FILE_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)-7s] %(name)-40s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ComponentFilter(logging.Filter):
    """Adds `component`: the last dotted part of the logger name."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.component = record.name.rsplit(".", 1)[-1]
        return True


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(level="INFO", log_file=None, max_size_mb=5, backup_count=3):
    """
    Configure console (and optional rotating file) logging.

    Args:
        level: Console level name or number; unknown names fall back to INFO
        log_file: Path of a rotating DEBUG log, parent directories created
        max_size_mb: Size at which the log file rotates
        backup_count: Rotated files kept

    Returns:
        The root logger
    """
    console_level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    # Root must pass DEBUG records through when a file wants them
    root_logger.setLevel(min(console_level, logging.DEBUG) if log_file else console_level)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.addFilter(ComponentFilter())
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
