from __future__ import annotations

import json
from pathlib import Path

import keyring
import keyring.backend
import pytest
from keyring.errors import PasswordDeleteError

from src.local import shell
from src.local.cache import CacheError, PersistentCache
from src.local.secrets import SecretVault, UnsupportedSecretKey


class MemoryKeyring(keyring.backend.KeyringBackend):
    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.store = {}

    def get_password(self, service, username):
        return self.store.get((service, username))

    def set_password(self, service, username, password):
        self.store[(service, username)] = password

    def delete_password(self, service, username):
        if (service, username) not in self.store:
            raise PasswordDeleteError("not found")
        del self.store[(service, username)]


@pytest.fixture
def memory_keyring():
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    try:
        yield backend
    finally:
        keyring.set_keyring(previous)


#* --- Secret vault ---
def test_vault_round_trip(memory_keyring: MemoryKeyring) -> None:
    vault = SecretVault()

    assert vault.get("GROQ_API_KEY") is None
    vault.set("GROQ_API_KEY", "gsk-123")
    assert vault.get("GROQ_API_KEY") == "gsk-123"
    assert memory_keyring.store[("world-monitor", "GROQ_API_KEY")] == "gsk-123"

    vault.delete("GROQ_API_KEY")
    vault.delete("GROQ_API_KEY")
    assert vault.get("GROQ_API_KEY") is None


def test_vault_rejects_unlisted_keys(memory_keyring: MemoryKeyring) -> None:
    vault = SecretVault()

    with pytest.raises(UnsupportedSecretKey, match="Unsupported secret key: AWS_SECRET"):
        vault.set("AWS_SECRET", "x")
    assert memory_keyring.store == {}


def test_vault_lists_allowlist() -> None:
    keys = SecretVault().list_supported_keys()

    assert len(keys) == 13
    assert "OPENSKY_CLIENT_SECRET" in keys


#* --- Persistent cache ---
def test_cache_missing_file_reads_none(tmp_path: Path) -> None:
    assert PersistentCache(tmp_path / "cache.json").read_entry("anything") is None


def test_cache_write_merges_entries() -> None:
    cache = PersistentCache()

    cache.write_entry("feeds", '{"count": 3}')
    cache.write_entry("theme", '"dark"')

    assert cache.read_entry("feeds") == {"count": 3}
    assert cache.read_entry("theme") == "dark"
    assert json.loads(cache.cache_path.read_text()) == {"feeds": {"count": 3}, "theme": "dark"}


def test_cache_corrupt_file_is_replaced(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("[1, 2", encoding="utf-8")
    cache = PersistentCache(path)

    assert cache.read_entry("k") is None
    cache.write_entry("k", "1")
    assert json.loads(path.read_text()) == {"k": 1}


def test_cache_rejects_invalid_payload(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text('{"keep": true}', encoding="utf-8")

    with pytest.raises(CacheError, match="Invalid cache payload JSON"):
        PersistentCache(path).write_entry("k", "{not json")
    assert json.loads(path.read_text()) == {"keep": True}


#* --- Shell reveal actions ---
def test_open_command_per_platform(tmp_path: Path) -> None:
    assert shell.get_open_command(tmp_path, "win32")[0] == "explorer"
    assert shell.get_open_command(tmp_path, "darwin")[0] == "open"
    assert shell.get_open_command(tmp_path, "linux") == ["xdg-open", str(tmp_path)]


def test_open_sidecar_log_creates_file(monkeypatch: pytest.MonkeyPatch) -> None:
    opened = []
    monkeypatch.setattr(shell, "open_path_in_shell", opened.append)

    path = shell.open_sidecar_log_file()

    assert path.exists() and path.name == "local-api.log"
    assert opened == [path]


def test_open_failure_raises_shell_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*args, **kwargs):
        raise FileNotFoundError("xdg-open")

    monkeypatch.setattr(shell.subprocess, "Popen", refuse)

    with pytest.raises(shell.ShellOpenError, match="Failed to open"):
        shell.open_path_in_shell(tmp_path)
