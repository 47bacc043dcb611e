import sys
import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from src.log.handler import logs_dir_path, sidecar_log_path

log = logging.getLogger(__name__)


class ShellOpenError(RuntimeError):
    """The OS file browser or default application could not be launched."""


def get_open_command(path: Path, platform: Optional[str] = None) -> List[str]:
    """Returns the command that reveals `path` with the platform's default handler."""
    platform = platform or sys.platform
    if platform == "win32":
        return ["explorer", str(path)]
    if platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]

def open_path_in_shell(path: Path) -> None:
    """
    Opens a file or folder with the OS default handler without waiting for it.

    :raises ShellOpenError: The opener could not be started.
    """
    try:
        subprocess.Popen(get_open_command(path), stdin=subprocess.DEVNULL,
                         stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        raise ShellOpenError(f"Failed to open {path}: {e}") from e

def open_logs_folder() -> Path:
    """Reveals the log directory and returns it."""
    log_dir = logs_dir_path()
    open_path_in_shell(log_dir)
    return log_dir

def open_sidecar_log_file() -> Path:
    """Opens the sidecar log, creating an empty one first if needed, and returns its path."""
    log_path = sidecar_log_path()
    if not log_path.exists():
        try:
            log_path.touch()
        except OSError as e:
            raise ShellOpenError(f"Failed to create sidecar log {log_path}: {e}") from e
    open_path_in_shell(log_path)
    return log_path
