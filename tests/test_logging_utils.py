"""Tests for log configuration and the logger-backed install log."""

import logging
import re

import pytest

from workstation_installer import logging_utils
from workstation_installer.logging_utils import LoggerInstallLog, configure_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for attr in ("_workstation_log_path",):
        if hasattr(root, attr):
            delattr(root, attr)
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    for attr in ("_workstation_log_path",):
        if hasattr(root, attr):
            delattr(root, attr)


def test_lines_are_timestamped_and_appended(tmp_path, clean_root_logger):
    log_file = tmp_path / "install_log.txt"
    log_file.write_text("[2024-01-01T00:00:00+0000] previous run\n", encoding="utf-8")

    actual = configure_logging(log_path=str(log_file), also_console=False)
    LoggerInstallLog().append("git is already installed.")
    for h in clean_root_logger.handlers:
        h.flush()

    assert actual == str(log_file)
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[2024-01-01T00:00:00+0000] previous run"
    assert re.match(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}\] git is already installed\.$", lines[-1])


def test_second_call_is_a_no_op(tmp_path, clean_root_logger):
    first = configure_logging(log_path=str(tmp_path / "a.txt"), also_console=False)
    count = len(clean_root_logger.handlers)
    second = configure_logging(log_path=str(tmp_path / "b.txt"), also_console=False)
    assert second == first
    assert len(clean_root_logger.handlers) == count


def test_falls_back_to_temp_dir(tmp_path, monkeypatch, clean_root_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(logging_utils.tempfile, "gettempdir", lambda: str(tmp_path))

    actual = configure_logging(log_path=str(blocker / "install_log.txt"), also_console=False)
    assert actual == str(tmp_path / "install_log.txt")


def test_install_log_forwards_level():
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    lg = logging.getLogger("workstation_installer.test_capture")
    lg.setLevel(logging.DEBUG)
    lg.propagate = False
    lg.addHandler(Capture())

    LoggerInstallLog(lg).append("WARNING: steam may have failed", level=logging.WARNING)
    assert records[0].levelno == logging.WARNING
    assert records[0].getMessage() == "WARNING: steam may have failed"
