import time
import logging
from pathlib import Path
from typing import Optional

from src.local.config import effective_settings as config


#* --- Log File Locations ---
def logs_dir_path() -> Path:
    """
    Returns the launcher's log directory, creating it if needed.

    :return pathlib.Path: The log directory.
    """
    log_dir = Path(config.LOGS_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir

def desktop_log_path() -> Path:
    """Returns the path of the supervisory event log."""
    return logs_dir_path() / config.DESKTOP_LOG_FILE

def sidecar_log_path() -> Path:
    """Returns the path of the sidecar's merged stdout/stderr log."""
    return logs_dir_path() / config.LOCAL_API_LOG_FILE


#* --- Desktop Log Sink ---
def format_log_line(level: str, message: str, timestamp: Optional[int] = None) -> str:
    """Renders one event as `[<unix-seconds>][<LEVEL>] <message>`."""
    if timestamp is None:
        timestamp = int(time.time())
    return f"[{timestamp}][{level.upper()}] {message}"

def append_desktop_log(level: str, message: str, log_path: Optional[Path] = None) -> None:
    """
    Appends a single event line to the desktop log.

    The file is opened, written and closed on every call so nothing is lost
    if the process dies. This function never raises: a logging failure must
    not take the launcher down with it.

    :param level: The event level (e.g., 'INFO', 'ERROR').
    :param message: The event message.
    :param log_path: Optional explicit log file; defaults to the desktop log.
    """
    try:
        path = log_path if log_path is not None else desktop_log_path()
        with open(path, "a", encoding="utf-8") as f:
            f.write(format_log_line(level, message) + "\n")
    except Exception:
        return


class DesktopLogHandler(logging.Handler):
    """
    A logging handler that forwards records to the append-only desktop log.

    Every record is written through `append_desktop_log`, so each emit is an
    independent open/append/close and failures stay silent.
    """
    def __init__(self, log_path: Optional[Path] = None, level: int = logging.INFO):
        """
        :param log_path: Optional explicit log file; defaults to the desktop log.
        :param level: The minimum level forwarded to the file.
        """
        super().__init__(level)
        self.log_path = log_path

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                message = f"{message} ({record.exc_info[1]!r})"
            append_desktop_log(record.levelname, message, self.log_path)
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        # Never print tracebacks to stderr for a failed diagnostic write.
        pass
