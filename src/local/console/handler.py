import sys
import logging
from typing import List

from src.local.config import effective_settings as config
from src.local.cache import CacheError, PersistentCache
from src.local.secrets import SecretVault, SecretVaultError
from src.local.shell import ShellOpenError, open_logs_folder, open_sidecar_log_file
from src.local.status_client import fetch_local_status
from src.log.handler import desktop_log_path, sidecar_log_path

log = logging.getLogger(__name__)


#* --- Log Reveal ---
def handle_open_logs_command() -> None:
    """Reveals the log directory in the OS file browser."""
    try:
        path = open_logs_folder()
        print(f"Opened {path}")
    except ShellOpenError as e:
        log.error(f"open logs folder failed: {e}")
        print(f"[launcher] open logs folder failed: {e}", file=sys.stderr)

def handle_open_sidecar_log_command() -> None:
    """Opens the local API log with the default application."""
    try:
        path = open_sidecar_log_file()
        print(f"Opened {path}")
    except ShellOpenError as e:
        log.error(f"open sidecar log failed: {e}")
        print(f"[launcher] open sidecar log failed: {e}", file=sys.stderr)


#* --- Status ---
def display_status() -> None:
    """Shows where the logs live and whether the local API answers on its port."""
    print("\n--- Launcher Status ---")
    print(f"  Desktop log : {desktop_log_path()}")
    print(f"  Sidecar log : {sidecar_log_path()}")

    status = fetch_local_status(config.LOCAL_API_HOST, config.LOCAL_API_PORT)
    if status is None:
        print(f"  Local API   : UNREACHABLE on {config.LOCAL_API_HOST}:{config.LOCAL_API_PORT}")
    else:
        print(f"  Local API   : RUNNING on {config.LOCAL_API_HOST}:{config.LOCAL_API_PORT}")
        for key in ("mode", "apiDir", "routes"):
            if key in status:
                print(f"    {key:<10}: {status[key]}")
    print("-----------------------\n")


#* --- Secrets ---
def _secrets_help():
    print("\nSecrets Command Help:")
    print("  secrets list               - List the secret names that can be stored.")
    print("  secrets get KEY            - Show whether KEY is stored (value is masked).")
    print("  secrets set KEY VALUE      - Store VALUE under KEY in the system keychain.")
    print("  secrets delete KEY         - Remove KEY from the system keychain.")

def handle_secrets_command(args: List[str], vault: SecretVault = None) -> None:
    """
    Handles all sub-commands for the 'secrets' command-line interface.

    :param args: A list of string arguments following the 'secrets' command.
    :param vault: The vault to operate on; the default keychain vault when omitted.
    """
    vault = vault or SecretVault()
    sub_command = args[0].lower() if args else "list"

    try:
        if sub_command == "list":
            for key in vault.list_supported_keys():
                print(f"  {key}")
        elif sub_command == "get" and len(args) == 2:
            value = vault.get(args[1])
            print(f"{args[1]} = {'<not set>' if value is None else '*' * min(len(value), 8)}")
        elif sub_command == "set" and len(args) >= 3:
            vault.set(args[1], " ".join(args[2:]))
            print(f"Secret '{args[1]}' stored.")
        elif sub_command == "delete" and len(args) == 2:
            vault.delete(args[1])
            print(f"Secret '{args[1]}' deleted.")
        else:
            _secrets_help()
    except SecretVaultError as e:
        log.error(f"secrets {sub_command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)


#* --- Cache ---
def handle_cache_command(args: List[str], cache: PersistentCache = None) -> None:
    """
    Handles 'cache get KEY' and 'cache set KEY JSON'.

    :param args: A list of string arguments following the 'cache' command.
    :param cache: The cache to operate on; the default cache file when omitted.
    """
    cache = cache or PersistentCache()
    sub_command = args[0].lower() if args else ""

    try:
        if sub_command == "get" and len(args) == 2:
            value = cache.read_entry(args[1])
            print("<not set>" if value is None else value)
        elif sub_command == "set" and len(args) >= 3:
            cache.write_entry(args[1], " ".join(args[2:]))
            print(f"Cache entry '{args[1]}' written.")
        else:
            print("Usage: cache get KEY | cache set KEY JSON")
    except CacheError as e:
        log.error(f"cache {sub_command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)


#* --- Config ---
def _config_show():
    """Displays the current values of the modifiable settings."""
    print("\n--- Current Launcher Configuration ---")
    print(f"(Overrides file: {config.OVERRIDES_JSON_PATH})")
    for key in sorted(config.MODIFIABLE_SETTINGS):
        print(f"  {key} = {getattr(config, key, 'N/A')}")
    print("--------------------------------------\n")

def handle_config_command(args: List[str]) -> None:
    """
    Handles all sub-commands for the 'config' command-line interface.

    :param args: A list of string arguments following the 'config' command.
    """
    sub_command = args[0].lower() if args else "show"

    if sub_command == "show":
        _config_show()
    elif sub_command == "set" and len(args) >= 3:
        key, value_str = args[1].upper(), " ".join(args[2:])
        if config.update_setting(key, value_str):
            print(f"Configuration '{key}' saved. Restart the launcher to apply it.")
        else:
            print(f"Failed to update configuration for '{key}'. Check logs for details.")
    else:
        print("Usage: config show | config set KEY VALUE")
        print(f"Modifiable settings: {', '.join(sorted(config.MODIFIABLE_SETTINGS))}")


def print_help() -> None:
    """Prints the list of console commands."""
    print("\nAvailable commands:")
    print("  run                        - Start the launcher and the local API sidecar (default).")
    print("  status                     - Show log locations and whether the local API answers.")
    print("  logs                       - Open the logs folder.")
    print("  sidecar-log                - Open the local API log file.")
    print("  secrets <sub-command>      - Manage stored API keys ('secrets help').")
    print("  cache get|set ...          - Read or write persistent cache entries.")
    print("  config show|set ...        - Show or change modifiable settings.")
    print("  help                       - Show this message.\n")
