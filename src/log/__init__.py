"""
Logging module for the launcher.
This module sets up console logging and the append-only desktop log sink.
"""

from .setup import setup_logging
from .handler import (
    DesktopLogHandler,
    append_desktop_log,
    desktop_log_path,
    logs_dir_path,
    sidecar_log_path,
)

__all__ = [
    "setup_logging",
    "DesktopLogHandler",
    "append_desktop_log",
    "desktop_log_path",
    "logs_dir_path",
    "sidecar_log_path",
]
