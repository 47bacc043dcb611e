import logging
import sys

from src.local.config import effective_settings as config
from src.log.handler import DesktopLogHandler

class MainFormatter(logging.Formatter):
    """The console formatter used for every launcher log record."""

    def __init__(self):
        super().__init__(config.CONSOLE_LOG_FORMAT)

def setup_logging(console_level: int = logging.INFO) -> None:
    """
    Configures the root logger for the launcher.
    This sets up handlers for the console and the append-only desktop log,
    clearing any previously configured handlers to prevent duplication.

    :param console_level: The logging level for the console output (e.g., logging.INFO).
    """
    root_logger = logging.getLogger()
    # Set root level to lowest to capture all messages for handler filtering
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to prevent re-adding them on re-runs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(MainFormatter())
    root_logger.addHandler(console_handler)

    # --- Desktop Log Handler (best-effort, never raises) ---
    desktop_level = logging.getLevelName(str(config.DESKTOP_LOG_LEVEL).upper())
    if not isinstance(desktop_level, int):
        root_logger.warning(f"Unknown DESKTOP_LOG_LEVEL '{config.DESKTOP_LOG_LEVEL}'. Falling back to INFO.")
        desktop_level = logging.INFO
    desktop_handler = DesktopLogHandler(level=desktop_level)
    root_logger.addHandler(desktop_handler)
