from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

DEFAULT_LOG_PATH = "install_log.txt"
INSTALL_LOGGER_NAME = "workstation_installer.install"

LOG_FORMAT = logging.Formatter(fmt="[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(log_path: str) -> tuple[logging.Handler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, mode="a", encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path(tempfile.gettempdir()) / Path(log_path).name)
        return logging.FileHandler(fallback, mode="a", encoding="utf-8"), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send every record to an append-only `[timestamp] message` file (plus console).

    Installs handlers on the root logger once; later calls return the path
    chosen the first time. An unwritable log path falls back to the temp dir.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if getattr(root, "_workstation_log_path", None):
        return root._workstation_log_path  # type: ignore[attr-defined]

    file_handler, chosen_path = _open_log_file(log_path)
    handlers: list[logging.Handler] = [file_handler]
    if also_console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setFormatter(LOG_FORMAT)
        root.addHandler(h)
    root._workstation_log_path = chosen_path  # type: ignore[attr-defined]

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path


class InstallLog(Protocol):
    """Where the orchestrator reports progress, warnings and errors."""

    def append(self, message: str, *, level: int = logging.INFO) -> None:
        ...


class LoggerInstallLog:
    """InstallLog backed by a logging.Logger (file + console once configured)."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(INSTALL_LOGGER_NAME)

    def append(self, message: str, *, level: int = logging.INFO) -> None:
        self._logger.log(level, message)
