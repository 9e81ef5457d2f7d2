"""Install tree — what is actually on disk for each dependency."""

from __future__ import annotations

import json
import os
from pathlib import Path

from lockstep.models.dependency import Absent, Installed, InstalledState, Linked

DESCRIPTOR = "package.json"


class InstallTree:
    """Reads package descriptors and links under a modules directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        # scoped names (@scope/pkg) map onto a nested directory
        return self.root.joinpath(*name.split("/"))

    def state(self, name: str) -> InstalledState:
        """Return the installed state of ``name``.

        A symlink is reported as linked without reading its descriptor. A
        descriptor that cannot be read or parsed, or that has no version,
        counts as absent.
        """
        path = self.path_for(name)
        if path.is_symlink():
            try:
                target = str(path.resolve())
            except (OSError, RuntimeError):
                # circular link
                target = os.readlink(path)
            return Linked(target=target)

        try:
            with open(path / DESCRIPTOR, encoding="utf-8") as f:
                descriptor = json.load(f)
        except (OSError, ValueError):
            return Absent()

        if not isinstance(descriptor, dict) or not isinstance(descriptor.get("version"), str):
            return Absent()

        return Installed(version=descriptor["version"], peers=_peer_requirements(descriptor))

    def probe(self, name: str) -> None:
        """Stat the descriptor of ``name``.

        Raises:
            FileNotFoundError: If the package is not installed.
            OSError: For any other failure to reach the descriptor.
        """
        os.stat(self.path_for(name) / DESCRIPTOR)


def _peer_requirements(descriptor: dict) -> dict[str, bool]:
    peers = descriptor.get("peerDependencies") or {}
    meta = descriptor.get("peerDependenciesMeta") or {}
    requirements = {}
    for peer in peers:
        peer_meta = meta.get(peer)
        optional = peer_meta.get("optional", False) if isinstance(peer_meta, dict) else False
        requirements[peer] = bool(optional)
    return requirements
