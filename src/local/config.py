import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import src.settings as default_settings

log = logging.getLogger(__name__)


class MergedSettings:
    """
    A singleton class that merges default settings with JSON/env overrides.

    This class provides a unified, attribute-based access point for all
    launcher configuration. It follows a clear precedence:
    1. Base values from `settings.py`.
    2. Overrides from `.env` file (handled by `python-dotenv` in settings.py).
    3. Overrides from `overrides.json` for settings in `MODIFIABLE_SETTINGS`.
    """

    def __init__(self, overrides_path: Optional[Path] = None) -> None:
        """Initializes the settings object by loading defaults and overrides."""
        self.OVERRIDES_JSON_PATH: Path = overrides_path or default_settings.OVERRIDES_JSON_PATH

        self._load_defaults()
        self._load_overrides()

    def _load_defaults(self) -> None:
        """Loads all uppercase attributes from the settings.py module as defaults."""
        for key in dir(default_settings):
            if key.isupper() and key != "OVERRIDES_JSON_PATH":
                setattr(self, key, getattr(default_settings, key))

    def _load_overrides(self) -> None:
        """
        Loads and applies settings from the `overrides.json` file.

        Only keys listed in `MODIFIABLE_SETTINGS` are applied.
        """
        if not self.OVERRIDES_JSON_PATH.exists():
            return

        try:
            with self.OVERRIDES_JSON_PATH.open('r') as f:
                overrides = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.error(f"Failed to load or parse overrides file '{self.OVERRIDES_JSON_PATH}': {e}")
            return

        if not isinstance(overrides, dict):
            log.error(f"Overrides file '{self.OVERRIDES_JSON_PATH}' does not contain a JSON object. Ignoring.")
            return

        log.info(f"Loading runtime configuration overrides from {self.OVERRIDES_JSON_PATH}")
        for key, value in overrides.items():
            if not hasattr(self, key):
                log.warning(f"Override setting '{key}' not found in default settings. Ignoring.")
                continue
            if key not in self.MODIFIABLE_SETTINGS:
                log.warning(f"Attempted to override non-modifiable setting '{key}'. Ignoring.")
                continue

            original_value = getattr(self, key)
            if isinstance(original_value, Path):
                setattr(self, key, Path(value))
            else:
                setattr(self, key, value)
            log.debug(f"Overridden setting: {key} = {value}")

    def update_setting(self, key: str, value: Any) -> bool:
        """
        Coerces and applies a single modifiable setting, then persists it.

        :param key: The setting name (case-insensitive).
        :param value: The new value, usually a string from the console.
        :return: True if the setting was updated and saved.
        """
        key = key.upper()
        if key not in self.MODIFIABLE_SETTINGS:
            log.warning(f"Rejected config update: Setting '{key}' is not modifiable.")
            return False

        original_value = getattr(self, key, None)
        try:
            if isinstance(original_value, bool):
                new_value = str(value).lower() in ('true', '1', 't', 'yes', 'y')
            elif original_value is not None:
                new_value = type(original_value)(value)
            else:
                new_value = value
        except (ValueError, TypeError) as e:
            log.error(f"Config update failed: Could not convert value '{value}' for key '{key}'. Error: {e}")
            return False

        setattr(self, key, new_value)
        self.save_overrides({k: getattr(self, k) for k in self.MODIFIABLE_SETTINGS})
        log.info(f"Setting '{key}' updated to '{new_value}'. Restart the launcher to apply it.")
        return True

    def save_overrides(self, overrides_to_save: Dict[str, Any]) -> None:
        """
        Saves the provided dictionary of settings to the overrides JSON file.

        Only keys present in `MODIFIABLE_SETTINGS` are persisted.

        :param overrides_to_save: A dictionary of settings to persist.
        """
        filtered_overrides = {
            key: value
            for key, value in overrides_to_save.items()
            if key in self.MODIFIABLE_SETTINGS
        }

        if not filtered_overrides:
            log.warning("No modifiable settings provided to save.")
            return

        try:
            self.OVERRIDES_JSON_PATH.parent.mkdir(parents=True, exist_ok=True)
            with self.OVERRIDES_JSON_PATH.open('w') as f:
                json.dump(filtered_overrides, f, indent=4)
            log.info(f"Configuration overrides saved to {self.OVERRIDES_JSON_PATH}")
        except IOError as e:
            log.error(f"Failed to write to overrides file '{self.OVERRIDES_JSON_PATH}': {e}")

# Create a singleton instance to be imported by other modules
effective_settings = MergedSettings()
