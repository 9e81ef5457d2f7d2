"""Console reporting — leveled output for findings and status lines."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape

from lockstep.models.dependency import Finding, LinkedFound, MismatchFound, Severity


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def finding(self, finding: Finding) -> None: ...


def render(finding: Finding) -> str:
    """Render a finding as rich markup, with versions and link targets in bold."""
    if isinstance(finding, MismatchFound):
        return (
            f"Version mismatch for {escape(finding.name)}, version "
            f"[bold]{escape(finding.installed)}[/] is installed but version "
            f"[bold]{escape(finding.needed)}[/] is needed"
        )
    if isinstance(finding, LinkedFound):
        return (
            f"[white]{escape(finding.name)} is currently linked at "
            f"[bold]{escape(finding.target)}[/][/]"
        )
    return escape(finding.message())


class ConsoleReporter:
    """Writes info to stdout and warnings and errors to stderr."""

    def __init__(self, out: Console | None = None, err: Console | None = None):
        self.out = out or Console(highlight=False)
        self.err = err or Console(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        self.out.print(escape(message), soft_wrap=True)

    def error(self, message: str) -> None:
        self.err.print(f"[red]{escape(message)}[/]", soft_wrap=True)

    def finding(self, finding: Finding) -> None:
        text = render(finding)
        if finding.severity is Severity.INFO:
            self.out.print(text, soft_wrap=True)
        elif finding.severity is Severity.WARN:
            self.err.print(f"[yellow]{text}[/]", soft_wrap=True)
        else:
            self.err.print(f"[red]{text}[/]", soft_wrap=True)
