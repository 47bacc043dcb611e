import logging
from typing import List

from src.local.supervisor import LauncherLifecycle, SidecarSupervisor
from src.local.console.handler import (
    display_status,
    handle_cache_command,
    handle_config_command,
    handle_open_logs_command,
    handle_open_sidecar_log_command,
    handle_secrets_command,
    print_help,
)

log = logging.getLogger(__name__)


def run_launcher() -> None:
    """Runs the launcher in the foreground until it is asked to exit."""
    lifecycle = LauncherLifecycle(SidecarSupervisor())
    lifecycle.run_forever()


def execute_command(command: str, args: List[str]) -> bool:
    """
    Executes a single console command.

    :param command: The main command string (e.g., 'run', 'secrets').
    :param args: A list of arguments for the command.
    :return bool: True if the command was recognised, False otherwise.
    """
    log.debug(f"Executing command: {command}, args: {args}")
    command_map = {
        "run": run_launcher,
        "status": display_status,
        "logs": handle_open_logs_command,
        "sidecar-log": handle_open_sidecar_log_command,
        "secrets": lambda: handle_secrets_command(args),
        "cache": lambda: handle_cache_command(args),
        "config": lambda: handle_config_command(args),
        "help": print_help,
    }

    if command not in command_map:
        log.info(f"Unknown command: '{command}'. Type 'help' for a list of commands.")
        return False

    command_map[command]()
    return True
