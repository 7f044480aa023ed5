# tests/test_cli.py
"""
Tests for the cardharvest command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `set`, `cards` and `--help` work.
2.  **Argument Validation**: Typer's `exists=True` checks for input files.
3.  **Pipeline Integration**: real extraction on small fixture files, plus a
    patched loader to check error handling.
4.  **Output**: JSON printing and `--output` export.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cardharvest.cli import app

PAGE = """
<html><head><title>Anatomy | Flashcards</title></head><body>
<div class="SetPageTerms-term">
  <span class="SetPageTerm-wordText">Femur</span>
  <span class="SetPageTerm-definitionText">Thigh   bone</span>
</div>
</body></html>
"""


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    """Invoking --help should print usage instructions and exit 0."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "cardharvest" in result.output
    assert "set" in result.output
    assert "cards" in result.output


def test_set_fails_on_missing_file(runner: CliRunner) -> None:
    """Typer should enforce `exists=True` for the input file argument."""
    result = runner.invoke(app, ["set", "ghost.html"])
    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_set_renders_table(runner: CliRunner, tmp_path: Path) -> None:
    """A page with a recognised layout is rendered with its title and terms."""
    page = tmp_path / "anatomy.html"
    page.write_text(PAGE, encoding="utf-8")

    result = runner.invoke(app, ["set", str(page)])

    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert "Anatomy" in result.output
    assert "Femur" in result.output
    assert "1 terms" in result.output


def test_set_json_export_is_sanitized_unless_raw(runner: CliRunner, tmp_path: Path) -> None:
    """`--output` writes JSON; whitespace cleanup is skipped with `--raw`."""
    page = tmp_path / "anatomy.html"
    page.write_text(PAGE, encoding="utf-8")
    out = tmp_path / "set.json"

    result = runner.invoke(app, ["set", str(page), "--json", "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["title"] == "Anatomy"
    assert data["terms"] == [{"term": "Femur", "definition": "Thigh bone"}]

    result = runner.invoke(app, ["set", str(page), "--raw", "--output", str(out)])
    assert result.exit_code == 0, result.output
    raw = json.loads(out.read_text(encoding="utf-8"))
    assert raw["terms"][0]["definition"] == "Thigh   bone"


def test_set_without_data_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    """A page with no flashcard data is reported and exits with code 1."""
    page = tmp_path / "blog.html"
    page.write_text("<html><body><p>hello</p></body></html>", encoding="utf-8")

    result = runner.invoke(app, ["set", str(page)])

    assert result.exit_code == 1
    assert "No flashcard data detected" in result.output


def test_cards_segments_text_file(runner: CliRunner, tmp_path: Path) -> None:
    """Cards are rendered and unresolved answers are counted."""
    notes = tmp_path / "notes.txt"
    notes.write_text("Q: Capital of France?\nA: Paris\n2. Explain entropy\n", encoding="utf-8")

    result = runner.invoke(app, ["cards", str(notes)])

    assert result.exit_code == 0, result.output
    assert "Paris" in result.output
    assert "2 cards" in result.output
    assert "1 need review" in result.output


def test_cards_json_output(runner: CliRunner, tmp_path: Path) -> None:
    """`--output` writes the cards as a JSON list."""
    notes = tmp_path / "notes.txt"
    notes.write_text("1. Define osmosis   Movement of water\n", encoding="utf-8")
    out = tmp_path / "cards.json"

    result = runner.invoke(app, ["cards", str(notes), "--json", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {"question": "Define osmosis", "answer": "Movement of water"}
    ]


def test_cards_handles_loader_errors(runner: CliRunner, tmp_path: Path) -> None:
    """Unsupported or unreadable documents exit with code 1 and a message."""
    page = tmp_path / "page.html"
    page.write_text("<html></html>", encoding="utf-8")

    result = runner.invoke(app, ["cards", str(page)])
    assert result.exit_code == 1
    assert "Could not read" in result.output

    pdf = tmp_path / "broken.pdf"
    pdf.write_bytes(b"not a pdf")
    with patch("cardharvest.cli.load_text", side_effect=RuntimeError("corrupt PDF")):
        result = runner.invoke(app, ["cards", str(pdf)])
    assert result.exit_code == 1
    assert "corrupt PDF" in result.output


def test_set_reports_terms_emptied_by_cleanup(runner: CliRunner, tmp_path: Path) -> None:
    """A hit whose only term is invisible characters gets its own message."""
    page = tmp_path / "invisible.html"
    page.write_text(PAGE.replace("Femur", "\u200b\u200b"), encoding="utf-8")

    result = runner.invoke(app, ["set", str(page)])

    assert result.exit_code == 1
    assert "empty after cleanup" in result.output
    assert "No flashcard data detected" not in result.output

    result = runner.invoke(app, ["set", str(page), "--raw", "--json"])
    assert result.exit_code == 0, result.output
