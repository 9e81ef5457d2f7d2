"""Plan builder — one full reconciliation pass over the manifest."""

from __future__ import annotations

from typing import Callable

from lockstep.errors import ManifestLockInconsistency
from lockstep.models.dependency import (
    Condition,
    Finding,
    InstalledState,
    LinkedFound,
    MismatchFound,
    MissingFound,
    NotLocked,
    Plan,
)
from lockstep.project.installed import InstallTree
from lockstep.project.reader import Project
from lockstep.reconcile.classifier import classify
from lockstep.reconcile.peers import audit_peers


def build_plan(
    manifest: dict[str, str],
    lock: dict[str, str],
    inspect: Callable[[str], InstalledState],
    probe: Callable[[str], None],
) -> Plan:
    """Reconcile every declared dependency, in name order.

    Args:
        manifest: Declared name -> version range.
        lock: Locked name -> exact version.
        inspect: Returns the installed state of a name.
        probe: Peer probe, see :func:`audit_peers`.

    Raises:
        ManifestLockInconsistency: A declared dependency has no lock entry.
    """
    installs: list[tuple[str, str]] = []
    errors: set[str] = set()
    findings: list[Finding] = []

    for name in sorted(manifest):
        state = inspect(name)
        condition = classify(name, lock, state)

        if condition is Condition.UNLOCKED:
            raise ManifestLockInconsistency(NotLocked(name=name))

        needed = lock[name]
        if condition is Condition.MATCHED:
            peer_findings = audit_peers(name, state, manifest, probe)
            findings.extend(peer_findings)
            errors.update(f.peer for f in peer_findings)
        elif condition is Condition.MISMATCHED:
            installs.append((name, needed))
            findings.append(MismatchFound(name=name, installed=state.version, needed=needed))
        elif condition is Condition.LINKED:
            findings.append(LinkedFound(name=name, target=state.target))
        else:
            installs.append((name, needed))
            findings.append(MissingFound(name=name, needed=needed))

    return Plan(installs=tuple(installs), errors=frozenset(errors), findings=tuple(findings))


def plan_project(project: Project, modules_dir: str) -> Plan:
    """Build the plan for a loaded project against its install tree on disk."""
    tree = InstallTree(project.root / modules_dir)
    return build_plan(project.manifest, project.lock, tree.state, tree.probe)
