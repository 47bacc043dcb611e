"""
Secret storage backed by the system keychain.

Only the names in `SUPPORTED_SECRET_KEYS` may be stored; everything is kept
under the launcher's keyring service name.
"""
import logging
from typing import List, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from src.local.config import effective_settings as config

log = logging.getLogger(__name__)


class SecretVaultError(RuntimeError):
    """The keychain backend failed."""


class UnsupportedSecretKey(SecretVaultError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unsupported secret key: {key}")


class SecretVault:
    """Get/set/delete access to the allowlisted secrets."""

    def __init__(self, service: Optional[str] = None, allowed_keys=None):
        self.service = service or config.KEYRING_SERVICE
        self.allowed_keys = tuple(allowed_keys if allowed_keys is not None else config.SUPPORTED_SECRET_KEYS)

    def list_supported_keys(self) -> List[str]:
        return list(self.allowed_keys)

    def _check_key(self, key: str) -> None:
        if key not in self.allowed_keys:
            raise UnsupportedSecretKey(key)

    def get(self, key: str) -> Optional[str]:
        """
        Reads a secret.

        :param key: An allowlisted secret name.
        :return: The stored value, or None if nothing is stored.
        :raises UnsupportedSecretKey: The key is not allowlisted.
        :raises SecretVaultError: The keychain could not be read.
        """
        self._check_key(key)
        try:
            return keyring.get_password(self.service, key)
        except KeyringError as e:
            raise SecretVaultError(f"Failed to read keyring secret: {e}") from e

    def set(self, key: str, value: str) -> None:
        self._check_key(key)
        try:
            keyring.set_password(self.service, key, value)
        except KeyringError as e:
            raise SecretVaultError(f"Failed to write keyring secret: {e}") from e
        log.info(f"Stored secret '{key}' in the system keychain.")

    def delete(self, key: str) -> None:
        """Deletes a secret. Deleting a secret that is not stored succeeds."""
        self._check_key(key)
        try:
            keyring.delete_password(self.service, key)
        except PasswordDeleteError:
            log.debug(f"Secret '{key}' was not stored; nothing to delete.")
            return
        except KeyringError as e:
            raise SecretVaultError(f"Failed to delete keyring secret: {e}") from e
        log.info(f"Deleted secret '{key}' from the system keychain.")
