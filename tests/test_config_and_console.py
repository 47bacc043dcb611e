from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from src.local import status_client
from src.local.cache import PersistentCache
from src.local.config import MergedSettings
from src.local.console import execute_command
from src.local.console.handler import handle_cache_command
from src.local.supervisor.process_utils import build_sidecar_env


def test_overrides_apply_only_modifiable_settings(tmp_path: Path) -> None:
    overrides = tmp_path / "overrides.json"
    overrides.write_text(json.dumps({
        "VERBOSE_LOGGING": True,
        "LOCAL_API_PORT": "9999",
        "NOT_A_SETTING": 1,
    }), encoding="utf-8")

    settings = MergedSettings(overrides_path=overrides)

    assert settings.VERBOSE_LOGGING is True
    assert settings.LOCAL_API_PORT == "46123"
    assert not hasattr(settings, "NOT_A_SETTING")


def test_malformed_overrides_are_ignored(tmp_path: Path) -> None:
    overrides = tmp_path / "overrides.json"
    overrides.write_text("{broken", encoding="utf-8")

    assert MergedSettings(overrides_path=overrides).LOCAL_API_PORT == "46123"


def test_update_setting_coerces_and_persists(tmp_path: Path) -> None:
    overrides = tmp_path / "data" / "overrides.json"
    settings = MergedSettings(overrides_path=overrides)

    assert settings.update_setting("verbose_logging", "yes") is True
    assert settings.update_setting("LOCAL_API_PORT", "1") is False

    assert settings.VERBOSE_LOGGING is True
    assert json.loads(overrides.read_text())["VERBOSE_LOGGING"] is True


def test_sidecar_env_adds_handoff_variables(tmp_path: Path) -> None:
    env = build_sidecar_env(tmp_path, base_env={"PATH": "/bin", "LOCAL_API_MODE": "stale"})

    assert env == {
        "PATH": "/bin",
        "LOCAL_API_PORT": "46123",
        "LOCAL_API_RESOURCE_DIR": str(tmp_path),
        "LOCAL_API_MODE": "tauri-sidecar",
    }


def test_unknown_console_command() -> None:
    assert execute_command("launch-missiles", []) is False


def test_cache_command_reports_invalid_json(capsys: pytest.CaptureFixture[str]) -> None:
    cache = PersistentCache()

    handle_cache_command(["set", "k", "{oops"], cache=cache)
    handle_cache_command(["set", "k", "[1,", "2]"], cache=cache)
    handle_cache_command(["get", "k"], cache=cache)

    captured = capsys.readouterr()
    assert "Invalid cache payload JSON" in captured.err
    assert captured.out.strip().splitlines()[-1] == "[1, 2]"


def test_local_status_unreachable_is_none(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*args, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(status_client.requests, "get", refuse)

    assert status_client.fetch_local_status("127.0.0.1", "46123") is None
