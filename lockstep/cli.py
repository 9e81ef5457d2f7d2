"""lockstep CLI — the main entry point for the dependency pre-flight check."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lockstep import __version__

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """lockstep — keep dependencies in step.

    Compare a project's declared dependencies, its lock file, and what is
    actually installed, then offer to install whatever is missing or out
    of date.
    """


def _load_config_or_exit(project_dir: str):
    from lockstep.config import load_config
    from lockstep.errors import ConfigError

    try:
        return load_config(project_dir)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        sys.exit(1)


def _print_skipped(config):
    console.print(
        f"[dim]{config.env_var}={config.production_value}, skipping dependency check.[/]"
    )


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("project_dir", default=".")
@click.option("--yes", "-y", is_flag=True, help="Install without asking")
@click.option("--no-fix", is_flag=True, help="Report only; never prompt or install")
@click.option("--ignore-env", is_flag=True, help="Run even in a production environment")
def check(project_dir: str, yes: bool, no_fix: bool, ignore_env: bool):
    """Check dependencies and offer to install what is missing.

    PROJECT_DIR is the directory holding the manifest and lock file.
    """
    from lockstep.config import CheckConfig
    from lockstep.errors import ConvergenceError, LockstepError
    from lockstep.gate import should_skip
    from lockstep.reconcile.executor import check_packages

    if not ignore_env and should_skip(CheckConfig()):
        _print_skipped(CheckConfig())
        return

    config = _load_config_or_exit(project_dir)

    if not ignore_env and should_skip(config):
        _print_skipped(config)
        return

    confirm = (lambda _message: True) if yes else None

    try:
        check_packages(project_dir, authorized=not no_fix, config=config, confirm=confirm)
    except ConvergenceError as e:
        console.print(f"\n[red]Not in step:[/] {escape(str(e))}")
        sys.exit(1)
    except (LockstepError, OSError) as e:
        console.print(f"\n[red]Check failed:[/] {escape(str(e))}")
        sys.exit(1)


# ── Plan ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("project_dir", default=".")
def plan(project_dir: str):
    """Show what a check would install, without prompting or installing."""
    from lockstep.errors import LockstepError, ManifestLockInconsistency
    from lockstep.project.reader import load_project
    from lockstep.reconcile.plan import plan_project
    from lockstep.report import ConsoleReporter

    config = _load_config_or_exit(project_dir)
    reporter = ConsoleReporter()

    try:
        project = load_project(project_dir, config)
        result = plan_project(project, config.modules_dir)
    except ManifestLockInconsistency as e:
        reporter.finding(e.finding)
        sys.exit(1)
    except (LockstepError, OSError) as e:
        console.print(f"[red]Could not build plan:[/] {escape(str(e))}")
        sys.exit(1)

    for finding in result.findings:
        reporter.finding(finding)

    if result.is_clean:
        console.print(f"\n[green]OK[/] {result.summary()}")
        return

    if result.installs:
        table = Table(title=f"Install Plan ({len(result.installs)} packages)")
        table.add_column("Package", style="cyan")
        table.add_column("Version", style="green")
        table.add_column("Installed")
        for name, version in result.installs:
            table.add_row(escape(name), escape(version), _installed_version(result, name))
        console.print()
        console.print(table)

    if result.errors:
        console.print(f"\n[red]Errors ({len(result.errors)}):[/]")
        for name in sorted(result.errors):
            console.print(f"  [red]x[/] {escape(name)}")
        console.print("[yellow]Errors must be fixed by hand; nothing will be installed.[/]")


def _installed_version(result, name: str) -> str:
    from lockstep.models.dependency import MismatchFound

    for finding in result.findings:
        if isinstance(finding, MismatchFound) and finding.name == name:
            return escape(finding.installed)
    return "[dim]-[/]"


if __name__ == "__main__":
    main()
