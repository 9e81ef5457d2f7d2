"""State classifier — condition of a declared dependency."""

from __future__ import annotations

from lockstep.models.dependency import (
    Condition,
    Installed,
    InstalledState,
    Linked,
)


def classify(name: str, lock: dict[str, str], state: InstalledState) -> Condition:
    """Classify one declared dependency against its lock entry and install state."""
    if name not in lock:
        return Condition.UNLOCKED
    if isinstance(state, Installed):
        if state.version == lock[name]:
            return Condition.MATCHED
        return Condition.MISMATCHED
    if isinstance(state, Linked):
        return Condition.LINKED
    return Condition.MISSING
