from __future__ import annotations

import re
import logging
from pathlib import Path

from src.log.handler import (
    DesktopLogHandler,
    append_desktop_log,
    desktop_log_path,
    format_log_line,
    sidecar_log_path,
)

LINE_RE = re.compile(r"^\[\d+\]\[[A-Z_]+\] .*$")


def test_append_writes_formatted_lines_and_appends(tmp_path: Path) -> None:
    log_path = tmp_path / "desktop.log"

    append_desktop_log("info", "first event", log_path)
    append_desktop_log("ERROR", "second event", log_path)

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(LINE_RE.match(line) for line in lines)
    assert lines[0].endswith("[INFO] first event")
    assert lines[1].endswith("[ERROR] second event")


def test_append_defaults_to_desktop_log_in_log_dir() -> None:
    append_desktop_log("INFO", "hello")

    path = desktop_log_path()
    assert path.name == "desktop.log"
    assert path.read_text(encoding="utf-8").strip().endswith("[INFO] hello")
    assert sidecar_log_path().parent == path.parent


def test_append_swallows_open_failures(tmp_path: Path) -> None:
    # A directory cannot be opened for appending.
    append_desktop_log("INFO", "lost", tmp_path)


def test_format_log_line_uses_given_timestamp() -> None:
    assert format_log_line("warning", "msg", timestamp=1700000000) == "[1700000000][WARNING] msg"


def test_handler_forwards_records(tmp_path: Path) -> None:
    log_path = tmp_path / "desktop.log"
    logger = logging.getLogger("tests.desktop_handler")
    logger.setLevel(logging.DEBUG)
    handler = DesktopLogHandler(log_path=log_path, level=logging.INFO)
    logger.addHandler(handler)
    try:
        logger.debug("too quiet")
        logger.warning("sidecar %s", "missing")
    finally:
        logger.removeHandler(handler)

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("[WARNING] sidecar missing")


def test_handler_never_raises_on_unwritable_target(tmp_path: Path) -> None:
    logger = logging.getLogger("tests.desktop_handler_broken")
    handler = DesktopLogHandler(log_path=tmp_path)
    logger.addHandler(handler)
    try:
        logger.error("goes nowhere")
    finally:
        logger.removeHandler(handler)
