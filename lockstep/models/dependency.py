"""Dependency model — installed states, findings, and the remediation plan.

Everything here is an immutable value. A reconciliation pass builds these
from scratch; nothing survives between passes except the install directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Severity(Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


# ── Installed state ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Installed:
    """A readable package descriptor that declares a version."""

    version: str
    peers: dict[str, bool] = field(default_factory=dict)
    """Peer dependency name -> optional flag."""


@dataclass(frozen=True)
class Linked:
    """The install path is a symlink; no version comparison is done."""

    target: str


@dataclass(frozen=True)
class Absent:
    """Neither a real installation nor a link exists."""


InstalledState = Union[Installed, Linked, Absent]


class Condition(Enum):
    UNLOCKED = "unlocked"
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    LINKED = "linked"
    MISSING = "missing"


# ── Findings ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MismatchFound:
    name: str
    installed: str
    needed: str
    severity = Severity.WARN

    def message(self) -> str:
        return (
            f"Version mismatch for {self.name}, version {self.installed} "
            f"is installed but version {self.needed} is needed"
        )


@dataclass(frozen=True)
class MissingFound:
    name: str
    needed: str
    severity = Severity.WARN

    def message(self) -> str:
        return f"{self.name} is not installed, but found in lock file."


@dataclass(frozen=True)
class LinkedFound:
    name: str
    target: str
    severity = Severity.INFO

    def message(self) -> str:
        return f"{self.name} is currently linked at {self.target}"


@dataclass(frozen=True)
class PeerMissing:
    name: str
    peer: str
    severity = Severity.WARN

    def message(self) -> str:
        return (
            f"{self.name} requires {self.peer} but is not installed, you must do this "
            "yourself, because I can't determine the version you need"
        )


@dataclass(frozen=True)
class PeerError:
    name: str
    peer: str
    detail: str
    severity = Severity.ERROR

    def message(self) -> str:
        return self.detail


@dataclass(frozen=True)
class NotLocked:
    name: str
    severity = Severity.ERROR

    def message(self) -> str:
        return f"{self.name} declared but not locked"


Finding = Union[MismatchFound, MissingFound, LinkedFound, PeerMissing, PeerError, NotLocked]


# ── Plan ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Plan:
    """The result of one reconciliation pass."""

    installs: tuple[tuple[str, str], ...] = ()
    errors: frozenset[str] = frozenset()
    findings: tuple[Finding, ...] = ()

    @property
    def tokens(self) -> list[str]:
        """Install list as ``name@version`` arguments for the installer."""
        return [f"{name}@{version}" for name, version in self.installs]

    @property
    def is_clean(self) -> bool:
        return not self.installs and not self.errors

    def summary(self) -> str:
        if self.is_clean:
            return "All packages up-to-date"
        return f"{len(self.installs)} to install, {len(self.errors)} with errors"
