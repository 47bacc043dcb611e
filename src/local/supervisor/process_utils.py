import os
import sys
import psutil
import logging
import subprocess
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional, Tuple

from src.local.config import effective_settings as config
from src.local.supervisor.errors import SidecarLogError, SpawnFailure

log = logging.getLogger(__name__)


#* --- Process Status ---
def pid_exists(pid: int) -> bool:
    """A wrapper for psutil.pid_exists for easy testing/mocking if needed."""
    return psutil.pid_exists(pid)

def get_proc_status_string(pid: int) -> str:
    """Gets a string representation of a process status."""
    if not pid_exists(pid):
        return "stopped"
    try:
        if psutil.Process(pid).status() == psutil.STATUS_ZOMBIE:
            return "zombie"
        return "running"
    except psutil.NoSuchProcess:
        return "stopped"
    except psutil.Error:
        return "unknown"


#* --- Process Creation ---
def _get_popen_creation_flags() -> Dict[str, Any]:
    """Returns platform-specific creation flags for subprocess.Popen."""
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NO_WINDOW}
    return {}

def build_sidecar_env(resource_root: Path, base_env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Returns the child's environment: the parent's plus the sidecar handoff variables.

    :param resource_root: The resolved resource root handed to the service.
    :param base_env: The environment to extend; defaults to `os.environ`.
    """
    env = dict(os.environ if base_env is None else base_env)
    env[config.ENV_LOCAL_API_PORT] = config.LOCAL_API_PORT
    env[config.ENV_LOCAL_API_RESOURCE_DIR] = str(resource_root)
    env[config.ENV_LOCAL_API_MODE] = config.LOCAL_API_MODE
    return env

def open_sidecar_log_handles(log_path: Path) -> Tuple[IO[bytes], IO[bytes]]:
    """
    Opens the sidecar log twice in append mode: one handle for stdout, one for stderr.

    :param log_path: The sidecar log file.
    :return: A (stdout, stderr) pair of binary file handles.
    """
    stdout_handle = None
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stdout_handle = open(log_path, "ab")
        stderr_handle = open(log_path, "ab")
    except OSError as e:
        if stdout_handle is not None:
            stdout_handle.close()
        raise SidecarLogError(log_path, e) from e
    return stdout_handle, stderr_handle

def spawn_sidecar(runtime: Path, script: Path, env: Dict[str, str], log_path: Path) -> subprocess.Popen:
    """
    Launches `<runtime> <script>` with stdout/stderr appended to the sidecar log.

    The parent's copies of the log handles are closed once the child holds them.

    :return subprocess.Popen: The running child.
    """
    stdout_handle, stderr_handle = open_sidecar_log_handles(log_path)
    try:
        return subprocess.Popen(
            [str(runtime), str(script)],
            stdin=subprocess.DEVNULL,
            stdout=stdout_handle,
            stderr=stderr_handle,
            env=env,
            **_get_popen_creation_flags(),
        )
    except (OSError, ValueError) as e:
        raise SpawnFailure(e) from e
    finally:
        stdout_handle.close()
        stderr_handle.close()


#* --- Process Termination ---
def kill_process(proc: subprocess.Popen, reap_timeout: float = 5.0) -> None:
    """
    Forcefully kills a child and reaps it. A child that already exited is fine.

    :param proc: The child to kill.
    :param reap_timeout: Seconds to wait for the OS to report the exit.
    """
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    except OSError as e:
        log.warning(f"Failed to kill process {proc.pid}: {e}")
    try:
        proc.wait(timeout=reap_timeout)
    except subprocess.TimeoutExpired:
        log.warning(f"Process {proc.pid} did not exit within {reap_timeout}s after kill.")
