"""Exceptions raised while bringing up the local API sidecar."""

from pathlib import Path


class SidecarError(RuntimeError):
    """Base class for every sidecar start failure."""


class SidecarScriptMissing(SidecarError):
    """The sidecar entry script does not exist at the resolved path."""

    def __init__(self, script_path: Path):
        self.script_path = script_path
        super().__init__(f"Local API sidecar script missing at {script_path}")


class RuntimeNotFound(SidecarError):
    """No Node.js executable could be discovered."""

    def __init__(self, override_env: str):
        self.override_env = override_env
        super().__init__(f"Node.js executable not found. Install Node 18+ or set {override_env}")


class SidecarLogError(SidecarError):
    """The sidecar log file could not be opened for the child's output."""

    def __init__(self, log_path: Path, cause: Exception):
        self.log_path = log_path
        super().__init__(f"Failed to open local API log {log_path}: {cause}")


class SpawnFailure(SidecarError):
    """The operating system refused to create the sidecar process."""

    def __init__(self, cause: Exception):
        super().__init__(f"Failed to launch local API: {cause}")
