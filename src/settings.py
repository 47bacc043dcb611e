"""
This module contains the configuration settings for the World Monitor desktop launcher.
It defines paths, sidecar constants, logging settings and the secret allowlist.
It is used throughout the application to ensure consistent settings and paths.
"""

import os
import sys
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=False)

#* --- Application Identity ---
APP_NAME = "world-monitor"
APP_DISPLAY_NAME = "World Monitor"

#* --- Core Paths ---
BASE_DIR = pathlib.Path(__file__).resolve().parent.parent  # Project Root
# Directory that holds 'sidecar/' in a development checkout.
SOURCE_DIR = pathlib.Path(os.getenv("WORLD_MONITOR_SOURCE_DIR", BASE_DIR / "src-tauri")).resolve()
# Directory that holds bundled resources in a packaged build. Empty means "detect".
RESOURCE_DIR_OVERRIDE = os.getenv("WORLD_MONITOR_RESOURCE_DIR", "")

_USER_ROOT = pathlib.Path.home() / f".{APP_NAME}"
LOGS_DIR = pathlib.Path(os.getenv("WORLD_MONITOR_LOG_DIR", _USER_ROOT / "logs"))
DATA_DIR = pathlib.Path(os.getenv("WORLD_MONITOR_DATA_DIR", _USER_ROOT / "data"))

#* --- Build Mode ---
BUILD_MODE_DEVELOPMENT = "development"
BUILD_MODE_PACKAGED = "packaged"
BUILD_MODE = os.getenv("WORLD_MONITOR_BUILD_MODE", "").lower()  # Empty means "detect"

#* --- Log Files ---
DESKTOP_LOG_FILE = "desktop.log"
LOCAL_API_LOG_FILE = "local-api.log"
CONSOLE_LOG_FORMAT = "%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s"

#* --- Local API Sidecar ---
LOCAL_API_HOST = "127.0.0.1"
LOCAL_API_PORT = "46123"
LOCAL_API_MODE = "tauri-sidecar"
SIDECAR_DIR_NAME = "sidecar"
SIDECAR_SCRIPT_NAME = "local-api-server.mjs"
API_DIR_NAME = "api"
LIFTED_DIR_NAME = "_up_"

# Environment handed to the sidecar at launch
ENV_LOCAL_API_PORT = "LOCAL_API_PORT"
ENV_LOCAL_API_RESOURCE_DIR = "LOCAL_API_RESOURCE_DIR"
ENV_LOCAL_API_MODE = "LOCAL_API_MODE"

#* --- Runtime Binary Discovery ---
NODE_BINARY_ENV = "LOCAL_API_NODE_BIN"
POSIX_NODE_LOCATIONS = (
    "/opt/homebrew/bin/node",
    "/usr/local/bin/node",
    "/usr/bin/node",
    "/opt/local/bin/node",
)
WINDOWS_NODE_LOCATIONS = (
    r"C:\Program Files\nodejs\node.exe",
    r"C:\Program Files (x86)\nodejs\node.exe",
)

#* --- Secret Vault ---
KEYRING_SERVICE = APP_NAME
SUPPORTED_SECRET_KEYS = (
    "GROQ_API_KEY",
    "OPENROUTER_API_KEY",
    "FRED_API_KEY",
    "EIA_API_KEY",
    "CLOUDFLARE_API_TOKEN",
    "ACLED_ACCESS_TOKEN",
    "WINGBITS_API_KEY",
    "WS_RELAY_URL",
    "VITE_OPENSKY_RELAY_URL",
    "OPENSKY_CLIENT_ID",
    "OPENSKY_CLIENT_SECRET",
    "AISSTREAM_API_KEY",
    "VITE_WS_RELAY_URL",
)

#* --- Persistent Files ---
CACHE_FILE_PATH = DATA_DIR / "persistent-cache.json"
OVERRIDES_JSON_PATH = DATA_DIR / "overrides.json"

#* --- MODIFIABLE SETTINGS (Changeable at runtime via 'config' command) ---
MODIFIABLE_SETTINGS = {
    "VERBOSE_LOGGING",
    "DESKTOP_LOG_LEVEL",
}

#* --- Default Values for Modifiable Settings ---
VERBOSE_LOGGING = os.getenv("WORLD_MONITOR_VERBOSE", "False").lower() in ('true', '1', 't')
DESKTOP_LOG_LEVEL = os.getenv("WORLD_MONITOR_DESKTOP_LOG_LEVEL", "INFO").upper()

#* --- Platform ---
IS_FROZEN = bool(getattr(sys, "frozen", False))
