"""
The Supervisor package.
Manages the lifecycle of the local API sidecar process.

This package contains the SidecarSupervisor class and its helper modules,
which together resolve the sidecar's files, find a Node.js runtime, and
start and stop the single child process.
"""
from .errors import SidecarError, SidecarScriptMissing, RuntimeNotFound, SidecarLogError, SpawnFailure
from .paths import SidecarPaths, resolve_sidecar_paths
from .runtime import RuntimeLocator, get_runtime_locator
from .supervisor import SidecarSupervisor
from .lifecycle import LauncherLifecycle

__all__ = [
    'SidecarSupervisor',
    'LauncherLifecycle',
    'SidecarPaths',
    'resolve_sidecar_paths',
    'RuntimeLocator',
    'get_runtime_locator',
    'SidecarError',
    'SidecarScriptMissing',
    'RuntimeNotFound',
    'SidecarLogError',
    'SpawnFailure',
]
