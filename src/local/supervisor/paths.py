import sys
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Union

from src.local.config import effective_settings as config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidecarPaths:
    """Where the sidecar entry script and its resource tree live for one launch."""
    script_path: Path
    resource_root: Path


def detect_build_mode() -> str:
    """
    Returns the active build mode.

    An explicit `WORLD_MONITOR_BUILD_MODE` wins; otherwise a frozen
    (bundled) interpreter means a packaged build.
    """
    if config.BUILD_MODE in (config.BUILD_MODE_DEVELOPMENT, config.BUILD_MODE_PACKAGED):
        return config.BUILD_MODE
    if config.BUILD_MODE:
        log.warning(f"Unknown build mode '{config.BUILD_MODE}'. Detecting from the interpreter instead.")
    return config.BUILD_MODE_PACKAGED if getattr(sys, "frozen", False) else config.BUILD_MODE_DEVELOPMENT


def default_resource_dir() -> Path:
    """
    Returns the directory holding bundled resources in a packaged build.

    Uses the configured override, then the bundler's extraction directory,
    then the directory of the running executable.
    """
    if config.RESOURCE_DIR_OVERRIDE:
        return Path(config.RESOURCE_DIR_OVERRIDE).resolve()
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    try:
        return Path(sys.executable).resolve().parent
    except (OSError, RuntimeError):
        return Path(".").resolve()


def _packaged_resource_root(resource_dir: Path) -> Path:
    """Probes the direct layout, then the lifted `_up_` layout."""
    if (resource_dir / config.API_DIR_NAME).exists():
        return resource_dir
    lifted_root = resource_dir / config.LIFTED_DIR_NAME
    if (lifted_root / config.API_DIR_NAME).exists():
        return lifted_root
    return resource_dir


def resolve_sidecar_paths(
    build_mode: str,
    source_dir: Union[str, Path],
    resource_dir: Optional[Union[str, Path]] = None,
) -> SidecarPaths:
    """
    Computes the sidecar script path and the resource root for a build mode.

    Only existence checks are performed; nothing is created and a missing
    script is left for the caller to report.

    :param build_mode: 'development' or 'packaged'.
    :param source_dir: The source checkout directory holding 'sidecar/'.
    :param resource_dir: The bundled resource directory of a packaged build.
    :return SidecarPaths: The resolved paths.
    """
    if build_mode == config.BUILD_MODE_DEVELOPMENT:
        source_dir = Path(source_dir).resolve()
        script_path = source_dir / config.SIDECAR_DIR_NAME / config.SIDECAR_SCRIPT_NAME
        return SidecarPaths(script_path=script_path, resource_root=source_dir.parent)

    if build_mode == config.BUILD_MODE_PACKAGED:
        resource_dir = Path(resource_dir).resolve() if resource_dir is not None else default_resource_dir()
        script_path = resource_dir / config.SIDECAR_DIR_NAME / config.SIDECAR_SCRIPT_NAME
        return SidecarPaths(script_path=script_path, resource_root=_packaged_resource_root(resource_dir))

    raise ValueError(f"Unknown build mode '{build_mode}'.")
