"""Configuration — where the manifest, lock file, and installs live.

Defaults match an npm project. A ``lockstep.yaml`` at the project root (or
the file named by ``$LOCKSTEP_CONFIG``) overrides any of them::

    lock_file: npm-shrinkwrap.json
    installer: ["npm", "install", "--no-audit"]
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from lockstep.errors import ConfigError

CONFIG_FILE = "lockstep.yaml"
CONFIG_ENV_VAR = "LOCKSTEP_CONFIG"


@dataclass(frozen=True)
class CheckConfig:
    manifest_file: str = "package.json"
    lock_file: str = "package-lock.json"
    modules_dir: str = "node_modules"
    installer: list[str] = field(default_factory=lambda: ["npm", "install"])
    env_var: str = "NODE_ENV"
    production_value: str = "production"
    prompt_message: str = "Want to auto-install packages?"


def load_config(project_dir: str | Path = ".", environ: dict | None = None) -> CheckConfig:
    """Load configuration for a project, falling back to defaults.

    Args:
        project_dir: Project root; ``lockstep.yaml`` is looked up here.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: If the file is not a mapping or has unknown keys.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV_VAR)
    path = Path(override) if override else Path(project_dir) / CONFIG_FILE

    if not path.is_file():
        return CheckConfig()

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return CheckConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(CheckConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")

    for key, value in data.items():
        if key == "installer":
            data[key] = _parse_installer(value, path)
        elif not isinstance(value, str):
            raise ConfigError(f"'{key}' in {path} must be a string")

    return replace(CheckConfig(), **data)


def _parse_installer(value, path: Path) -> list[str]:
    if isinstance(value, str):
        command = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        command = list(value)
    else:
        raise ConfigError(f"'installer' in {path} must be a string or a list of strings")
    if not command:
        raise ConfigError(f"'installer' in {path} must not be empty")
    return command
