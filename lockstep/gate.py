"""Environment gate — skip the pre-flight check in production."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, TypeVar

from lockstep.config import CheckConfig, load_config
from lockstep.reconcile.executor import check_packages
from lockstep.report import Reporter

T = TypeVar("T")


def should_skip(config: CheckConfig, environ: dict | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(config.env_var) == config.production_value


def with_package_check(
    value: T,
    project_dir: str | Path = ".",
    config: CheckConfig | None = None,
    reporter: Reporter | None = None,
    confirm: Callable[[str], bool] | None = None,
    installer: Callable[..., int] | None = None,
) -> T:
    """Check dependencies, then hand ``value`` back unchanged.

    Meant to wrap the configuration object of a larger process, e.g.
    ``settings = with_package_check(settings)``. Does nothing when the
    environment marks this as a production run.
    """
    if config is None:
        # the default gate holds even when lockstep.yaml is unreadable
        if should_skip(CheckConfig()):
            return value
        config = load_config(project_dir)
    if should_skip(config):
        return value

    check_packages(
        project_dir,
        authorized=True,
        config=config,
        reporter=reporter,
        confirm=confirm,
        installer=installer,
    )
    return value
