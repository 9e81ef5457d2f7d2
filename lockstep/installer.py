"""External installer — one batched install command, run to completion."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

from lockstep.errors import InstallerFailure


def run_installer(
    command: list[str],
    tokens: list[str],
    cwd: str | Path,
    on_output: Callable[[str], None] | None = None,
) -> int:
    """Run ``command`` with every ``name@version`` token appended.

    Stderr is streamed line by line to ``on_output`` as it arrives; stdout is
    left attached to the terminal. Waits for exit without a timeout.

    Returns:
        The installer's exit status.

    Raises:
        InstallerFailure: If the installer executable cannot be started.
    """
    argv = [*command, *tokens]
    try:
        proc = subprocess.Popen(
            argv,
            cwd=cwd,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        raise InstallerFailure(argv, None, str(e)) from e

    try:
        for line in proc.stderr:
            line = line.rstrip()
            if line and on_output:
                on_output(line)
    finally:
        proc.stderr.close()
        returncode = proc.wait()

    return returncode
