"""Pytest configuration and fixtures."""

import logging
import threading

import pytest

from workstation_installer.lib.command import CommandError
from workstation_installer.orchestrator import InstallationOrchestrator


class FakeRunner:
    """CommandRunner double: records every argv, answers from a table.

    `responses` maps an argv tuple to stdout. `fail` is a predicate on the
    argv tuple; when it returns True the call raises CommandError.
    """

    def __init__(self, responses=None, fail=None):
        self.responses = dict(responses or {})
        self.fail = fail or (lambda argv: False)
        self.calls = []
        self.envs = []
        self._lock = threading.Lock()

    def run(self, argv, *, env=None):
        key = tuple(argv)
        with self._lock:
            self.calls.append(key)
            self.envs.append(env)
        if self.fail(key):
            raise CommandError(list(argv), 1, "simulated failure")
        return self.responses.get(key, "")

    def calls_starting_with(self, *prefix):
        return [c for c in self.calls if c[: len(prefix)] == prefix]


class MemoryInstallLog:
    """In-memory InstallLog recorder."""

    def __init__(self):
        self.entries = []

    def append(self, message, *, level=logging.INFO):
        self.entries.append((level, message))

    @property
    def messages(self):
        return [m for _, m in self.entries]

    def warnings(self):
        return [m for lvl, m in self.entries if lvl >= logging.WARNING]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def install_log():
    return MemoryInstallLog()


@pytest.fixture
def exits():
    return []


@pytest.fixture
def make_orchestrator(install_log, exits):
    """Factory for an orchestrator wired to fakes (no real commands, no exit)."""

    def _make(runner, **kwargs):
        kwargs.setdefault("platform", "win32")
        kwargs.setdefault("input_fn", lambda prompt: "n")
        kwargs.setdefault("exit_fn", exits.append)
        return InstallationOrchestrator(runner, install_log, **kwargs)

    return _make
