"""File-based debug logging for xcf.

Every module logs through the "xcf" logger. setup_logging()
attaches a file handler under the state directory once per
process; if the log cannot be opened, logging is a no-op.
"""
from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "xcf"
HANDLER_NAME = "xcf-file"
MAX_LOG_LINES = 1000


def get_logger() -> logging.Logger:
    """Return the shared xcf logger."""
    return logging.getLogger(LOGGER_NAME)


def owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    """Handlers attached by setup_logging, ignoring any others."""
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


def _truncate_log(log_file: Path) -> None:
    """Keep only the last MAX_LOG_LINES lines of an existing log."""
    if not log_file.exists():
        return
    try:
        # undecodable bytes from an interrupted write become U+FFFD
        lines = log_file.read_text(errors="replace").splitlines()
        if len(lines) > MAX_LOG_LINES:
            log_file.write_text(
                "\n".join(lines[-MAX_LOG_LINES:]) + "\n",
            )
    except OSError:
        pass


def setup_logging(log_file: Path) -> logging.Logger:
    """Set up file-based debug logging with line truncation."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # one file handler per process
    if owned_handlers(logger):
        return logger

    handler: logging.Handler
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _truncate_log(log_file)

        handler = logging.FileHandler(str(log_file))
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        handler.setFormatter(formatter)
    except OSError:
        # unwritable state dir: run without a log file
        handler = logging.NullHandler()

    handler.set_name(HANDLER_NAME)
    logger.addHandler(handler)
    return logger
