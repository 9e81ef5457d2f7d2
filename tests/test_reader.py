"""Tests for the manifest and lock file reader."""

import json
import tempfile
from pathlib import Path

import pytest

from lockstep.config import CheckConfig
from lockstep.errors import ParseError
from lockstep.project.reader import load_project, read_lock, read_manifest


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


def test_manifest_unions_runtime_and_dev_sorted():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package.json",
            {
                "dependencies": {"zod": "^3.0.0", "@babel/core": "^7.0.0"},
                "devDependencies": {"jest": "^29.0.0"},
            },
        )
        manifest = read_manifest(path)
        assert list(manifest) == ["@babel/core", "jest", "zod"]
        assert manifest["jest"] == "^29.0.0"


def test_manifest_dev_range_wins_on_duplicate():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package.json",
            {"dependencies": {"a": "^1.0.0"}, "devDependencies": {"a": "^2.0.0"}},
        )
        assert read_manifest(path) == {"a": "^2.0.0"}


def test_manifest_without_dependencies_is_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(Path(tmpdir) / "package.json", {"name": "app"})
        assert read_manifest(path) == {}


def test_legacy_lock_dependencies_table():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package-lock.json",
            {"lockfileVersion": 1, "dependencies": {"a": {"version": "1.2.0"}}},
        )
        assert read_lock(path) == {"a": "1.2.0"}


def test_packages_table_skips_root_and_nested_entries():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package-lock.json",
            {
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "app", "version": "0.0.1"},
                    "node_modules/a": {"version": "1.2.0"},
                    "node_modules/@scope/b": {"version": "2.0.0"},
                    "node_modules/a/node_modules/c": {"version": "0.1.0"},
                },
            },
        )
        assert read_lock(path) == {"a": "1.2.0", "@scope/b": "2.0.0"}


def test_packages_table_preferred_over_dependencies():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package-lock.json",
            {
                "packages": {"node_modules/a": {"version": "2.0.0"}},
                "dependencies": {"a": {"version": "1.0.0"}},
            },
        )
        assert read_lock(path) == {"a": "2.0.0"}


def test_workspace_link_takes_target_version():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(
            Path(tmpdir) / "package-lock.json",
            {
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "app", "workspaces": ["packages/*"]},
                    "node_modules/foo": {"resolved": "packages/foo", "link": True},
                    "node_modules/bar": {"resolved": "packages/bar", "link": True},
                    "packages/foo": {"name": "foo", "version": "0.4.0"},
                },
            },
        )
        assert read_lock(path) == {"foo": "0.4.0", "bar": ""}


def test_invalid_json_raises_parse_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "package.json"
        path.write_text("{not json")
        with pytest.raises(ParseError) as exc:
            read_manifest(path)
        assert "package.json" in str(exc.value)


def test_non_object_document_raises_parse_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(Path(tmpdir) / "package-lock.json", ["a"])
        with pytest.raises(ParseError):
            read_lock(path)


def test_missing_file_raises_oserror():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(OSError):
            load_project(tmpdir)


def test_load_project_uses_configured_file_names():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write(root / "package.json", {"dependencies": {"a": "^1.0.0"}})
        _write(root / "npm-shrinkwrap.json", {"dependencies": {"a": {"version": "1.2.0"}}})

        project = load_project(root, CheckConfig(lock_file="npm-shrinkwrap.json"))
        assert project.manifest == {"a": "^1.0.0"}
        assert project.lock == {"a": "1.2.0"}
