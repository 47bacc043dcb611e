import sys
import atexit
import signal
import logging
import threading
from typing import TYPE_CHECKING

from src.log.handler import append_desktop_log
from src.local.supervisor.errors import SidecarError

if TYPE_CHECKING:
    from .supervisor import SidecarSupervisor

log = logging.getLogger(__name__)


class LauncherLifecycle:
    """
    Connects application lifecycle events to the sidecar supervisor.

    Setup starts the sidecar without ever aborting the launcher; the first
    exit event stops it and later exit events are ignored.
    """

    def __init__(self, supervisor: "SidecarSupervisor") -> None:
        self.supervisor = supervisor
        self.shutdown_requested = threading.Event()
        self._exit_lock = threading.Lock()
        self._exited = False

    def on_setup(self) -> bool:
        """
        Starts the sidecar. Failures are logged and reported, never raised.

        :return: True if the sidecar is running after the call.
        """
        try:
            self.supervisor.start()
            return True
        except SidecarError as e:
            self._report_start_failure(str(e))
        except Exception as e:
            self._report_start_failure(f"{type(e).__name__}: {e}")
        return False

    def _report_start_failure(self, reason: str) -> None:
        # Exactly one stderr line per failure.
        message = f"local API sidecar failed to start: {reason}"
        append_desktop_log("ERROR", message)
        print(f"[launcher] {message}", file=sys.stderr)

    def on_exit(self) -> None:
        """Stops the sidecar the first time any exit event fires."""
        with self._exit_lock:
            if self._exited:
                return
            self._exited = True
        self.shutdown_requested.set()
        try:
            self.supervisor.stop()
        except Exception as e:
            log.error(f"local API sidecar failed to stop cleanly: {e}", exc_info=True)

    def _handle_signal(self, signum, frame) -> None:
        log.info(f"Received signal {signum}. Shutting down.")
        self.shutdown_requested.set()

    def install_exit_hooks(self) -> None:
        """Registers `on_exit` with atexit and SIGINT/SIGTERM (main thread only)."""
        atexit.register(self.on_exit)
        if threading.current_thread() is not threading.main_thread():
            log.debug("Not on the main thread; skipping signal handler installation.")
            return
        for signame in ("SIGINT", "SIGTERM"):
            signum = getattr(signal, signame, None)
            if signum is not None:
                signal.signal(signum, self._handle_signal)

    def run_forever(self, poll_interval: float = 0.5) -> None:
        """Runs setup, blocks until shutdown is requested, then exits."""
        self.install_exit_hooks()
        self.on_setup()
        try:
            while not self.shutdown_requested.wait(poll_interval):
                pass
        except KeyboardInterrupt:
            log.info("Launcher interrupted by user.")
        finally:
            self.on_exit()
