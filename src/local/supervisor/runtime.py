"""
Discovery of the Node.js runtime used to execute the sidecar script.

One locator per platform family; `get_runtime_locator` picks the right one
once, based on the platform tag.
"""
import os
import sys
import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple

from src.local.config import effective_settings as config

log = logging.getLogger(__name__)


def _is_file(candidate: Path) -> bool:
    """Like Path.is_file, but any OSError (EACCES, ENAMETOOLONG, ...) means "not here"."""
    return os.path.isfile(candidate)


class RuntimeLocator:
    """Finds a runtime binary: explicit override, then PATH, then common locations."""

    binary_name: str = "node"
    common_locations: Tuple[str, ...] = ()

    def __init__(self, override_env: Optional[str] = None, common_locations: Optional[Iterable[str]] = None):
        self.override_env = override_env or config.NODE_BINARY_ENV
        if common_locations is not None:
            self.common_locations = tuple(common_locations)

    def locate(self, environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
        """
        Returns the first existing runtime binary, or None.

        :param environ: The environment to read the override and PATH from.
        :return: The absolute path of the runtime, or None if nothing matched.
        """
        environ = os.environ if environ is None else environ

        explicit = self._from_override(environ)
        if explicit is not None:
            return explicit

        on_path = self._from_search_path(environ.get("PATH", ""))
        if on_path is not None:
            return on_path

        return self._from_common_locations()

    def _from_override(self, environ: Mapping[str, str]) -> Optional[Path]:
        value = environ.get(self.override_env)
        if not value:
            return None
        candidate = Path(value)
        if _is_file(candidate):
            log.debug(f"Using runtime from {self.override_env}: {candidate}")
            return candidate.absolute()
        log.warning(f"{self.override_env} points at '{candidate}', which does not exist. Ignoring it.")
        return None

    def _from_search_path(self, search_path: str) -> Optional[Path]:
        for directory in search_path.split(os.pathsep):
            if not directory:
                continue
            candidate = Path(directory) / self.binary_name
            if _is_file(candidate):
                return candidate.absolute()
        return None

    def _from_common_locations(self) -> Optional[Path]:
        for location in self.common_locations:
            candidate = Path(location)
            if _is_file(candidate):
                return candidate
        return None


class PosixRuntimeLocator(RuntimeLocator):
    """macOS, Linux and other Unix-like systems."""

    binary_name = "node"
    common_locations = config.POSIX_NODE_LOCATIONS


class WindowsRuntimeLocator(RuntimeLocator):
    binary_name = "node.exe"
    common_locations = config.WINDOWS_NODE_LOCATIONS


def get_runtime_locator(platform: Optional[str] = None) -> RuntimeLocator:
    """
    Returns the locator for a platform tag (defaults to `sys.platform`).

    :param platform: A `sys.platform` style tag, e.g. 'win32', 'darwin', 'linux'.
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WindowsRuntimeLocator()
    return PosixRuntimeLocator()
