import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from src.local.config import effective_settings as config

log = logging.getLogger(__name__)


class CacheError(RuntimeError):
    """A cache entry could not be read, parsed or written."""


class PersistentCache:
    """
    A JSON object on disk mapping string keys to JSON values.

    A missing, unreadable-as-JSON or non-object file reads as empty.
    """

    def __init__(self, cache_path: Optional[Path] = None) -> None:
        self.cache_path = Path(cache_path) if cache_path is not None else Path(config.CACHE_FILE_PATH)

    def _load_root(self) -> Dict[str, Any]:
        if not self.cache_path.exists():
            return {}
        try:
            contents = self.cache_path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheError(f"Failed to read cache store {self.cache_path}: {e}") from e
        try:
            root = json.loads(contents)
        except json.JSONDecodeError:
            log.warning(f"Cache store {self.cache_path} is not valid JSON. Treating it as empty.")
            return {}
        return root if isinstance(root, dict) else {}

    def read_entry(self, key: str) -> Optional[Any]:
        """
        Returns the value stored under `key`, or None.

        :raises CacheError: The cache file exists but cannot be read.
        """
        return self._load_root().get(key)

    def write_entry(self, key: str, payload: str) -> None:
        """
        Stores a JSON-encoded payload under `key`.

        :param key: The cache key.
        :param payload: A JSON document as text.
        :raises CacheError: The payload is not JSON or the file cannot be written.
        """
        try:
            value = json.loads(payload)
        except (json.JSONDecodeError, TypeError) as e:
            raise CacheError(f"Invalid cache payload JSON: {e}") from e

        root = self._load_root()
        root[key] = value

        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(json.dumps(root, indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheError(f"Failed to write cache store {self.cache_path}: {e}") from e
