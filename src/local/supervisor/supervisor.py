import os
import logging
import threading
import subprocess
from pathlib import Path
from typing import Optional

from src.local.config import effective_settings as config
from src.log.handler import sidecar_log_path
from src.local.supervisor import paths, process_utils
from src.local.supervisor.errors import RuntimeNotFound, SidecarLogError, SidecarScriptMissing
from src.local.supervisor.runtime import RuntimeLocator, get_runtime_locator

log = logging.getLogger(__name__)


class SidecarSupervisor:
    """
    Owns the single local API sidecar process.

    The child handle lives in one slot guarded by a lock: `start` fills it at
    most once and `stop` always empties it. Both hold the lock while spawning
    or killing, since these are rare one-shot lifecycle events.
    """

    def __init__(
        self,
        build_mode: Optional[str] = None,
        source_dir: Optional[Path] = None,
        resource_dir: Optional[Path] = None,
        locator: Optional[RuntimeLocator] = None,
        log_path: Optional[Path] = None,
    ) -> None:
        """
        :param build_mode: 'development' or 'packaged'; detected when omitted.
        :param source_dir: The development source directory holding 'sidecar/'.
        :param resource_dir: The packaged resource directory; detected when omitted.
        :param locator: The runtime locator; chosen for the host platform when omitted.
        :param log_path: The sidecar log file; defaults to `local-api.log` in the log dir.
        """
        self.build_mode = build_mode or paths.detect_build_mode()
        self.source_dir = Path(source_dir) if source_dir is not None else Path(config.SOURCE_DIR)
        self.resource_dir = Path(resource_dir) if resource_dir is not None else None
        self.locator = locator or get_runtime_locator()
        self.log_path = Path(log_path) if log_path is not None else None

        self._lock = threading.Lock()
        self._child: Optional[subprocess.Popen] = None

    #* --- Read-only views ---
    @property
    def is_running(self) -> bool:
        """True while the slot holds a child (whether or not it is still alive)."""
        with self._lock:
            return self._child is not None

    @property
    def pid(self) -> Optional[int]:
        with self._lock:
            return self._child.pid if self._child is not None else None

    def status(self) -> str:
        """Returns 'running', 'zombie', 'stopped' or 'unknown' for the held child."""
        pid = self.pid
        if pid is None:
            return "stopped"
        return process_utils.get_proc_status_string(pid)

    def resolve_paths(self) -> paths.SidecarPaths:
        return paths.resolve_sidecar_paths(self.build_mode, self.source_dir, self.resource_dir)

    #* --- Lifecycle ---
    def start(self) -> None:
        """
        Starts the sidecar unless one is already held.

        :raises SidecarScriptMissing: The entry script does not exist.
        :raises RuntimeNotFound: No Node.js executable was found.
        :raises SidecarLogError: The sidecar log could not be opened.
        :raises SpawnFailure: The OS refused to create the process.
        """
        with self._lock:
            if self._child is not None:
                return

            sidecar_paths = self.resolve_paths()
            if not os.path.exists(sidecar_paths.script_path):
                raise SidecarScriptMissing(sidecar_paths.script_path)

            runtime = self.locator.locate()
            if runtime is None:
                raise RuntimeNotFound(self.locator.override_env)

            log_path = self.log_path
            if log_path is None:
                try:
                    log_path = sidecar_log_path()
                except OSError as e:
                    raise SidecarLogError(Path(config.LOGS_DIR) / config.LOCAL_API_LOG_FILE, e) from e
            log.info(
                f"starting local API sidecar script={sidecar_paths.script_path} "
                f"resource_root={sidecar_paths.resource_root} log={log_path}"
            )
            log.info(f"resolved node binary={runtime}")

            env = process_utils.build_sidecar_env(sidecar_paths.resource_root)
            child = process_utils.spawn_sidecar(runtime, sidecar_paths.script_path, env, log_path)

            log.info(f"local API sidecar started pid={child.pid}")
            self._child = child

    def stop(self) -> None:
        """Kills the held sidecar, if any, and empties the slot."""
        with self._lock:
            child, self._child = self._child, None
            if child is None:
                return
            process_utils.kill_process(child)
            log.info("local API sidecar stopped")
