"""
Smoke tests for package structure and availability.

Scope
-----
These tests check that the package and its top-level modules import cleanly,
and that `scripts/smoke.py` runs end to end on its built-in samples.
"""

from __future__ import annotations

import importlib
import runpy
import sys
from pathlib import Path
from typing import Any

from cardharvest import __version__
from cardharvest.core.settings import load_settings

SMOKE_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "smoke.py"


def test_package_importable() -> None:
    """Ensure the top-level package can be imported."""
    mod = importlib.import_module("cardharvest")
    assert mod is not None


def test_version_is_set() -> None:
    """Ensure the package exposes a valid version string."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_extractors_package_reexports_pipelines() -> None:
    """Both pipelines should be reachable from `cardharvest.extractors`."""
    extractors = importlib.import_module("cardharvest.extractors")
    assert callable(extractors.extract_from_document)
    assert callable(extractors.segment_text)


def test_cli_module_exposes_app() -> None:
    """
    Ensure the CLI module exposes the Typer 'app' object.

    The presence of 'app' is required for the entry point defined in
    pyproject.toml (`cardharvest.cli:app`).
    """
    cli = importlib.import_module("cardharvest.cli")
    assert hasattr(cli, "app"), "cardharvest.cli must expose an 'app' Typer object."


def test_smoke_script_reports_environment_and_samples(monkeypatch: Any, capsys: Any) -> None:
    """The smoke script prints the configured environment, then both sample runs."""
    monkeypatch.setenv("CARDHARVEST_ENV", "test")
    monkeypatch.setattr(sys, "argv", ["smoke.py"])
    load_settings.cache_clear()

    runpy.run_path(str(SMOKE_SCRIPT), run_name="__main__")

    out = capsys.readouterr().out
    assert "Environment: test" in out
    assert "Title: Cell Biology" in out
    assert "3 cards, 1 need review" in out
