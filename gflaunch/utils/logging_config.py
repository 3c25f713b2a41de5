"""
Logging configuration for the launcher.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

VERBOSE_LOGGER = "gflaunch.verbose"
VERBOSE_FORMAT = "[%(asctime)s] %(message)s"
# short date, medium time
VERBOSE_DATEFMT = "%m/%d/%y %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    console_level: Optional[str] = None,
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        format_string: Custom format string
        console_level: Level of the stdout handler (default WARNING)

    Returns:
        Configured logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    # Clear existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setFormatter(logging.Formatter(format_string))
        fh.setLevel(getattr(logging, level.upper()))
        root.addHandler(fh)

    # Console handler (quiet by default)
    ch = logging.StreamHandler(sys.stdout)
    ch_level = console_level or "WARNING"
    ch.setLevel(getattr(logging, ch_level.upper()))
    ch.setFormatter(logging.Formatter(format_string))
    root.addHandler(ch)

    return logging.getLogger("gflaunch")


class _StdoutHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stdout`` is at emit time."""

    def __init__(self):
        super().__init__(sys.stdout)

    def emit(self, record):
        self.stream = sys.stdout
        super().emit(record)


def get_verbose_logger() -> logging.Logger:
    """Return the logger used for ``[date time] message`` diagnostics.

    It writes straight to stdout and does not propagate, so it is unaffected
    by setup_logging().
    """
    log = logging.getLogger(VERBOSE_LOGGER)
    if not log.handlers:
        handler = _StdoutHandler()
        handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt=VERBOSE_DATEFMT))
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)
        log.propagate = False
    return log
