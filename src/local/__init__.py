"""
Local package for the World Monitor desktop launcher.

This package provides the merged launcher configuration through the
effective_settings object, plus the sidecar supervisor and its collaborators.
"""

from .config import effective_settings

__all__ = ["effective_settings"]
