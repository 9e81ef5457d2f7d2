"""Tests for console reporting."""

from io import StringIO

from rich.console import Console

from lockstep.models.dependency import (
    LinkedFound,
    MismatchFound,
    MissingFound,
    NotLocked,
    PeerError,
)
from lockstep.report import ConsoleReporter, render


def _reporter(**console_kwargs):
    out = Console(file=StringIO(), highlight=False, **console_kwargs)
    err = Console(file=StringIO(), highlight=False, **console_kwargs)
    return ConsoleReporter(out, err), out.file, err.file


def test_info_findings_go_to_stdout():
    reporter, out, err = _reporter()
    reporter.finding(LinkedFound(name="a", target="/work/a"))
    reporter.info("Checking for outdated packages")

    assert out.getvalue().splitlines() == [
        "a is currently linked at /work/a",
        "Checking for outdated packages",
    ]
    assert err.getvalue() == ""


def test_warn_and_error_findings_go_to_stderr():
    reporter, out, err = _reporter()
    reporter.finding(MissingFound(name="a", needed="1.2.0"))
    reporter.finding(PeerError(name="a", peer="b", detail="Permission denied"))
    reporter.finding(NotLocked(name="c"))
    reporter.error("Found 1 packages with errors:")

    assert out.getvalue() == ""
    assert err.getvalue().splitlines() == [
        "a is not installed, but found in lock file.",
        "Permission denied",
        "c declared but not locked",
        "Found 1 packages with errors:",
    ]


def test_long_entries_stay_on_one_line():
    reporter, _, err = _reporter()
    reporter.finding(
        MismatchFound(
            name="@some-scope/a-rather-long-package-name",
            installed="1.0.0-beta.12",
            needed="1.0.0-rc.3",
        )
    )
    assert len(err.getvalue().splitlines()) == 1


def test_markup_in_names_is_escaped():
    reporter, out, err = _reporter()
    reporter.finding(MissingFound(name="[x]", needed="1.0.0"))
    reporter.info("[bold]literal[/bold]")

    assert "[x] is not installed" in err.getvalue()
    assert "[bold]literal[/bold]" in out.getvalue()


def test_render_bolds_versions():
    markup = render(MismatchFound(name="a", installed="1.1.0", needed="1.2.0"))
    assert "[bold]1.1.0[/]" in markup
    assert "[bold]1.2.0[/]" in markup

    reporter, _, err = _reporter(force_terminal=True, color_system="standard")
    reporter.finding(MismatchFound(name="a", installed="1.1.0", needed="1.2.0"))
    assert "\x1b[1" in err.getvalue()
