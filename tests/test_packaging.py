"""Tests for project packaging metadata."""


import tomllib
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_pyproject_declares_console_scripts_and_no_ledger_readme() -> None:
    """Both entry points are installed and no design notes ship as the readme."""
    project = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8"))["project"]

    assert project["scripts"] == {
        "cadence": "cadence_check.cli:main",
        "cadence-check": "cadence_check.server:main",
    }
    assert project.get("readme") != "DESIGN.md"
