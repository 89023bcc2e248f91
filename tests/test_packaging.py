"""Consistency checks between the Nix flake and pyproject metadata."""
from __future__ import annotations

import re
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _flake() -> str:
    return (ROOT / "flake.nix").read_text(encoding="utf-8")


def _pyproject() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)


def test_project_name_and_version():
    project = _pyproject()["project"]
    assert project["name"] == "music_selection"
    assert project["version"] == "0.1.0"
    assert project["license"] == {"text": "MIT"}


def test_flake_package_metadata():
    flake = _flake()
    assert 'pname = "music_selection";' in flake
    assert 'version = "0.1.0";' in flake
    assert "license = licenses.mit;" in flake
    assert "maintainers = [ ];" in flake


def test_flake_defines_one_package_and_one_shell():
    flake = _flake()
    assert "flake-utils.lib.eachDefaultSystem" in flake
    assert len(re.findall(r"^\s*packages\.default\s*=", flake, re.MULTILINE)) == 1
    assert len(re.findall(r"^\s*devShells\.default\s*=", flake, re.MULTILINE)) == 1


def test_dev_shell_greeting():
    assert 'echo "Music selection development environment"' in _flake()


def test_console_script():
    assert _pyproject()["project"]["scripts"]["music_selection"] == "cli.main:run"


def test_dev_entry_module_not_installed():
    """`src/main.py` is a development entry only; the console script is enough."""
    setuptools_cfg = _pyproject()["tool"]["setuptools"]
    assert "py-modules" not in setuptools_cfg
    assert (ROOT / "src" / "main.py").is_file()
