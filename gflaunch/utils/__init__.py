"""
Utility modules for the launcher.
"""

from .logging_config import setup_logging, get_verbose_logger

__all__ = [
    "setup_logging",
    "get_verbose_logger",
]
