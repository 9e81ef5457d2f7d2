"""Exceptions raised by lockstep."""

from __future__ import annotations


class LockstepError(Exception):
    """Base exception for all lockstep errors."""


class ParseError(LockstepError, ValueError):
    """Raised when a manifest or lock file is not a valid JSON object."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path}: {reason}")


class ConfigError(LockstepError):
    """Raised when a lockstep.yaml file is malformed."""


class ManifestLockInconsistency(LockstepError):
    """Raised when a declared dependency has no entry in the lock file."""

    def __init__(self, finding):
        self.finding = finding
        super().__init__(finding.message())


class ConvergenceError(LockstepError):
    """Raised when a recheck still finds packages that need installing."""

    def __init__(self, installs: tuple[tuple[str, str], ...]):
        self.installs = installs
        tokens = " ".join(f"{name}@{version}" for name, version in installs)
        super().__init__(f"Packages still out of date: {tokens}")


class InstallerFailure(LockstepError):
    """Raised when the external installer cannot start or exits non-zero."""

    def __init__(self, command: list[str], returncode: int | None, detail: str = ""):
        self.command = command
        self.returncode = returncode
        self.detail = detail
        if returncode is None:
            msg = f"Could not run installer '{command[0]}': {detail}"
        else:
            msg = f"Installer '{' '.join(command)}' exited with status {returncode}"
        super().__init__(msg)
