"""Remediation executor — check, prompt, install, and recheck once.

State machine::

    CHECKING  --no issues-------------------> DONE
    CHECKING  --errors present--------------> HALTED
    CHECKING  --installs, authorized--------> PROMPTING
    CHECKING  --installs, unauthorized------> REJECTED
    PROMPTING --declined--------------------> DONE
    PROMPTING --confirmed-------------------> INSTALLING
    INSTALLING -----------------------------> RECHECKING
    RECHECKING -----------------------------> CHECKING (unauthorized)

A recheck is never authorized, so there is at most one install per run.
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Callable

import click

from lockstep.config import CheckConfig, load_config
from lockstep.errors import ConvergenceError, InstallerFailure, ManifestLockInconsistency
from lockstep.installer import run_installer
from lockstep.models.dependency import Plan
from lockstep.project.reader import load_project
from lockstep.reconcile.plan import plan_project
from lockstep.report import ConsoleReporter, Reporter

EXIT_INCONSISTENT = 1


class State(Enum):
    CHECKING = "checking"
    DONE = "done"
    HALTED = "halted"
    PROMPTING = "prompting"
    REJECTED = "rejected"
    INSTALLING = "installing"
    RECHECKING = "rechecking"


def confirm_prompt(message: str) -> bool:
    return click.confirm(message, default=True)


class Remediator:
    """Runs reconciliation passes for one project and applies the fix."""

    def __init__(
        self,
        project_dir: str | Path = ".",
        config: CheckConfig | None = None,
        reporter: Reporter | None = None,
        confirm: Callable[[str], bool] | None = None,
        installer: Callable[..., int] | None = None,
    ):
        self.project_dir = Path(project_dir)
        self.config = config or load_config(self.project_dir)
        self.reporter = reporter or ConsoleReporter()
        self.confirm = confirm or confirm_prompt
        self.installer = installer or run_installer
        self.history: list[State] = []

    def check(self) -> Plan:
        """Run one reconciliation pass and return its plan without reporting it."""
        project = load_project(self.project_dir, self.config)
        return plan_project(project, self.config.modules_dir)

    def run(self, authorized: bool = True) -> State:
        """Drive the state machine to DONE or HALTED.

        Args:
            authorized: Whether the user may be prompted to install. Rechecks
                always run unauthorized.

        Raises:
            ManifestLockInconsistency: A declared dependency is not locked.
            ConvergenceError: Installs are needed on an unauthorized pass.
            InstallerFailure: The installer could not run or exited non-zero.
        """
        state = State.CHECKING
        rechecking = False
        plan = Plan()

        while True:
            self.history.append(state)

            if state is State.CHECKING:
                if authorized:
                    self.reporter.info("Checking for outdated packages")
                plan = self.check()
                state = self._after_check(plan, authorized, rechecking)
            elif state is State.PROMPTING:
                state = State.INSTALLING if self.confirm(self.config.prompt_message) else State.DONE
            elif state is State.INSTALLING:
                self._install(plan)
                state = State.RECHECKING
            elif state is State.RECHECKING:
                self.reporter.info("Re-checking for outdated packages")
                authorized, rechecking = False, True
                state = State.CHECKING
            elif state is State.REJECTED:
                raise ConvergenceError(plan.installs)
            else:
                return state

    def _after_check(self, plan: Plan, authorized: bool, rechecking: bool) -> State:
        for finding in plan.findings:
            self.reporter.finding(finding)

        if plan.errors:
            self.reporter.error(f"Found {len(plan.errors)} packages with errors:")
            for name in sorted(plan.errors):
                self.reporter.error(name)
            return State.HALTED

        if not plan.installs:
            if not authorized or rechecking:
                self.reporter.info("All packages up-to-date")
            return State.DONE

        return State.PROMPTING if authorized else State.REJECTED

    def _install(self, plan: Plan) -> None:
        command = self.config.installer
        tokens = plan.tokens
        self.reporter.info(f"Running {' '.join(command)} for {' '.join(tokens)}")

        returncode = self.installer(command, tokens, self.project_dir, self.reporter.error)
        if returncode != 0:
            raise InstallerFailure([*command, *tokens], returncode)

        self.reporter.info("Installed missing packages")


def check_packages(
    project_dir: str | Path = ".",
    authorized: bool = True,
    config: CheckConfig | None = None,
    reporter: Reporter | None = None,
    confirm: Callable[[str], bool] | None = None,
    installer: Callable[..., int] | None = None,
) -> State:
    """Run the check as a pre-flight step of a larger process.

    Exits the process with status 1 when a declared dependency is not
    locked, and with status 0 when peer errors halt remediation. Any other
    failure is raised to the caller.
    """
    reporter = reporter or ConsoleReporter()
    remediator = Remediator(project_dir, config, reporter, confirm, installer)
    try:
        state = remediator.run(authorized)
    except ManifestLockInconsistency as e:
        reporter.finding(e.finding)
        sys.exit(EXIT_INCONSISTENT)

    if state is State.HALTED:
        sys.exit(0)
    return state
