from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class PackageRequest:
    """A package to install or upgrade through the package manager.

    Modifiers are fields, not part of the identifier: `prerelease` selects the
    prerelease channel and `extra_args` are passed through to the manager.
    """

    name: str
    prerelease: bool = False
    extra_args: Tuple[str, ...] = ()

    def manager_flags(self) -> list[str]:
        flags: list[str] = []
        if self.prerelease:
            flags.append("--pre")
        flags.extend(self.extra_args)
        return flags

    def __str__(self) -> str:
        return self.name


def P(name: str, **kwargs: Any) -> PackageRequest:
    return PackageRequest(name=name, **kwargs)


DEFAULT_PACKAGES: Tuple[PackageRequest, ...] = (
    P("python"),
    P("vscode"),
    P("androidstudio"),
    P("git"),
    P("nodejs"),
    P("7zip"),
    P("googlechrome"),
    P("firefox"),
    P("dotnetfx"),
    P("docker-desktop"),
    P("anaconda3"),
    P("tesseract"),
    P("utorrent"),
    P("epicgameslauncher"),
    P("steam"),
    P("mongodb", prerelease=True),
    P("mongodb-compass"),
    P("winrar"),
    P("discord"),
    P("obs-studio"),
    P("postman"),
    P("telegram"),
    P("libreoffice-fresh"),
    # Development, productivity and cloud tooling
    P("awscli"),
    P("azure-cli"),
    P("terraform"),
    P("slack"),
    P("notepadplusplus"),
    P("figma"),
    P("zoom"),
    P("postgresql"),
    P("mysql"),
    P("gimp"),
    P("blender"),
    P("vagrant"),
    P("powershell-core"),
    P("gh"),
    P("dbeaver"),
    P("sqlite"),
)


def parse_package(item: Any) -> PackageRequest:
    """Build a PackageRequest from a config entry (string or mapping)."""

    if isinstance(item, PackageRequest):
        return item
    if isinstance(item, str):
        name = item.strip()
        if not name:
            raise ValueError("Package name must not be empty")
        return PackageRequest(name=name)
    if isinstance(item, dict):
        name = str(item.get("name") or "").strip()
        if not name:
            raise ValueError(f"Package entry missing name: {item!r}")
        args = item.get("args") or []
        if not isinstance(args, list):
            raise ValueError(f"Package {name}: args must be a list")
        return PackageRequest(
            name=name,
            prerelease=bool(item.get("prerelease", False)),
            extra_args=tuple(str(a) for a in args),
        )
    raise ValueError(f"Unsupported package entry: {item!r}")


def parse_packages(items: Iterable[Any]) -> List[PackageRequest]:
    return [parse_package(i) for i in items]


def dedup_packages(packages: Sequence[PackageRequest]) -> List[PackageRequest]:
    # First entry per name wins, order preserved.
    seen: set[str] = set()
    out: List[PackageRequest] = []
    for p in packages:
        key = p.name.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(p)
    return out
