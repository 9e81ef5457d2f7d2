"""Manifest and lock file reader."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from lockstep.config import CheckConfig
from lockstep.errors import ParseError

_PACKAGES_PREFIX = "node_modules/"


@dataclass(frozen=True)
class Project:
    """Declared ranges and locked versions for one project root."""

    root: Path
    manifest: dict[str, str]
    lock: dict[str, str]


def _read_json_object(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ParseError(str(path), f"expected an object, got {type(data).__name__}")
    return data


def read_manifest(path: str | Path) -> dict[str, str]:
    """Return runtime and development dependencies, sorted by name.

    A name declared in both sections keeps its development range.
    """
    data = _read_json_object(Path(path))
    declared = {
        **(data.get("dependencies") or {}),
        **(data.get("devDependencies") or {}),
    }
    return {name: declared[name] for name in sorted(declared)}


def read_lock(path: str | Path) -> dict[str, str]:
    """Return the exact locked version of every top-level package.

    Reads the ``packages`` table (lockfileVersion 2 and 3) when present,
    otherwise the legacy ``dependencies`` table.
    Workspace link entries are locked at their target's version.
    """
    data = _read_json_object(Path(path))
    locked: dict[str, str] = {}

    packages = data.get("packages")
    if isinstance(packages, dict):
        for key, entry in packages.items():
            if not key.startswith(_PACKAGES_PREFIX):
                continue
            name = key[len(_PACKAGES_PREFIX):]
            # nested installs like node_modules/a/node_modules/b
            if f"/{_PACKAGES_PREFIX}" in f"/{name}":
                continue
            if not isinstance(entry, dict):
                continue
            if entry.get("link"):
                # workspace link; the version lives on the link target
                target = packages.get(entry.get("resolved", "")) or {}
                locked[name] = target.get("version", "")
            elif "version" in entry:
                locked[name] = entry["version"]
        return locked

    for name, entry in (data.get("dependencies") or {}).items():
        if isinstance(entry, dict) and "version" in entry:
            locked[name] = entry["version"]
    return locked


def load_project(root: str | Path, config: CheckConfig | None = None) -> Project:
    """Read the manifest and lock file of a project.

    Raises:
        OSError: If either file is missing or unreadable.
        ParseError: If either file is not a JSON object.
    """
    config = config or CheckConfig()
    root = Path(root)
    return Project(
        root=root,
        manifest=read_manifest(root / config.manifest_file),
        lock=read_lock(root / config.lock_file),
    )
