from __future__ import annotations

import sys
import logging
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.local.config import effective_settings  # noqa: E402
from src.log.handler import DesktopLogHandler  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Points every launcher-owned file at a per-test directory."""
    logs_dir = tmp_path / "logs"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(effective_settings, "LOGS_DIR", logs_dir)
    monkeypatch.setattr(effective_settings, "DATA_DIR", data_dir)
    monkeypatch.setattr(effective_settings, "CACHE_FILE_PATH", data_dir / "persistent-cache.json")
    monkeypatch.setattr(effective_settings, "OVERRIDES_JSON_PATH", data_dir / "overrides.json")
    monkeypatch.delenv("LOCAL_API_NODE_BIN", raising=False)
    return tmp_path


@pytest.fixture
def desktop_log(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    """Routes INFO+ records into a desktop log file for the duration of a test."""
    caplog.set_level(logging.INFO)
    log_path = tmp_path / "logs" / "desktop.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = DesktopLogHandler(log_path=log_path)
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        yield log_path
    finally:
        root.removeHandler(handler)
