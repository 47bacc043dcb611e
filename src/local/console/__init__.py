"""
This module initializes the console package, exposing command execution
and help output for the launcher's command line.
"""

from .process import execute_command
from .handler import print_help

__all__ = ["execute_command", "print_help"]
