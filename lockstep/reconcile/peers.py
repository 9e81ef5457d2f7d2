"""Peer dependency auditor.

Peers are reported, never installed: an undeclared peer has no locked
version to install.
"""

from __future__ import annotations

from typing import Callable, Iterable

from lockstep.models.dependency import Finding, Installed, PeerError, PeerMissing


def audit_peers(
    name: str,
    installed: Installed,
    declared: Iterable[str],
    probe: Callable[[str], None],
) -> list[Finding]:
    """Check the required peers of a matched install.

    Args:
        name: The dependency whose peers are audited.
        installed: Its installed state, carrying peer requirements.
        declared: Names declared in the manifest; these are checked on
            their own and skipped here.
        probe: Raises ``FileNotFoundError`` when a peer is not installed,
            or another ``OSError`` when it cannot be checked.
    """
    declared = set(declared)
    findings: list[Finding] = []

    for peer, optional in installed.peers.items():
        if optional or peer in declared:
            continue
        try:
            probe(peer)
        except FileNotFoundError:
            findings.append(PeerMissing(name=name, peer=peer))
        except OSError as e:
            findings.append(PeerError(name=name, peer=peer, detail=str(e)))

    return findings
