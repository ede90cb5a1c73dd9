from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.drivers import DRIVER_METHODS, WINDOWS_UPDATE
from .logging_utils import DEFAULT_LOG_PATH
from .packages import DEFAULT_PACKAGES, PackageRequest, parse_packages


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or DEFAULT_LOG_PATH)

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def parallel(self) -> bool:
        return bool(self.raw.get("parallel", False))

    @property
    def max_workers(self) -> int:
        return int(self.raw.get("max_workers") or 8)

    @property
    def restart_prompt(self) -> bool:
        return bool(self.raw.get("restart_prompt", True))

    @property
    def command_timeout_s(self) -> Optional[float]:
        v = self._section("commands").get("timeout_s")
        return float(v) if v is not None else None

    @property
    def fail_on_stderr(self) -> bool:
        return bool(self._section("commands").get("fail_on_stderr", False))

    @property
    def default_distribution(self) -> str:
        return str(self._section("subsystem").get("default_distribution") or "Ubuntu")

    @property
    def driver_method(self) -> str:
        return str(self._section("drivers").get("method") or WINDOWS_UPDATE)

    @property
    def packages(self) -> List[PackageRequest]:
        items = self.raw.get("packages")
        if items is None:
            return list(DEFAULT_PACKAGES)
        return parse_packages(items)

    def with_overrides(self, **overrides: Any) -> "ProvisionConfig":
        """Copy with top-level keys replaced; None values are ignored."""
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return ProvisionConfig(raw=raw)


def _validate(raw: Dict[str, Any]) -> None:
    method = ((raw.get("drivers") or {}).get("method")) or WINDOWS_UPDATE
    if method not in DRIVER_METHODS:
        raise ValueError(f"drivers.method must be one of {', '.join(DRIVER_METHODS)}, got {method!r}")
    pkgs = raw.get("packages")
    if pkgs is not None and not isinstance(pkgs, list):
        raise ValueError("packages must be a list")


def load_config(path: Optional[str]) -> ProvisionConfig:
    if path is None:
        return ProvisionConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("provisioning config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("provisioning config must contain a mapping/object")

    _validate(raw)
    return ProvisionConfig(raw=raw)
