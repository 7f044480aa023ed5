# src/cardharvest/cli.py
"""
cardharvest Command Line Interface (CLI).

A thin terminal front end over the two extraction pipelines, built with
`typer` and `rich`. It reads a file, runs the matching pipeline and either
renders a table or prints JSON.

Usage
-----
    # Recover a flashcard set from a saved web page
    $ cardharvest set saved_page.html

    # Segment a PDF (or TXT/DOCX) into question/answer cards
    $ cardharvest cards notes.pdf --json --output cards.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cardharvest.core.contracts.cards import CardPair, ExtractionResult
from cardharvest.extractors.document_text import load_text
from cardharvest.extractors.html_extractor import extract_outcome
from cardharvest.extractors.sanitizer import sanitize_result
from cardharvest.extractors.text_segmenter import segment_text

# Ensure env vars (like LOG_LEVEL) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="cardharvest: Turn flashcard pages and study notes into cards.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Rendering & I/O
# --------------------------------------------------------------------------- #


def _render_set(result: ExtractionResult) -> None:
    """Render an extracted set as a two-column table."""
    table = Table(title=escape(result.title), show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Term", style="bold")
    table.add_column("Definition")
    for i, pair in enumerate(result.terms, start=1):
        table.add_row(str(i), escape(pair.term), escape(pair.definition))
    console.print(table)


def _render_cards(cards: list[CardPair]) -> None:
    """Render segmented cards, highlighting the ones that need review."""
    table = Table(show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Question", style="bold")
    table.add_column("Answer")
    for i, card in enumerate(cards, start=1):
        answer = escape(card.answer)
        if card.needs_review:
            answer = f"[yellow]{answer}[/yellow]"
        table.add_row(str(i), escape(card.question), answer)
    console.print(table)


def _emit_json(payload: Any, as_json: bool, output: Path | None) -> None:
    """Print ``payload`` as JSON and/or write it to ``output``."""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if as_json:
        console.print_json(text)
    if output is not None:
        output.write_text(text, encoding="utf-8")
    if output is not None and not as_json:
        console.print(
            Panel(
                f"Saved to: [link=file://{output}]{output}[/link]",
                title="Export",
                border_style="green",
            )
        )


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #

InputFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to the input file.",
    ),
]
JsonFlag = Annotated[bool, typer.Option("--json", "-j", help="Print the result as JSON.")]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result as JSON to this path."),
]


@app.command("set")  # type: ignore[misc]
def set_command(
    file: InputFile,
    as_json: JsonFlag = False,
    raw: Annotated[
        bool,
        typer.Option("--raw", help="Skip whitespace / invisible-character cleanup."),
    ] = False,
    output: OutputOption = None,
) -> None:
    """
    Recover a flashcard set (title + term/definition pairs) from an HTML page.
    """
    html = file.read_text(encoding="utf-8", errors="replace")
    outcome = extract_outcome(html)
    if not raw:
        outcome = outcome.map(sanitize_result)

    result = outcome.value_or_none()
    if result is None:
        console.print(f"[bold red]❌ No flashcard data detected in {file.name}[/bold red]")
        raise typer.Exit(code=1)
    if not result.terms:
        console.print(
            f"[bold red]❌ Every term in {file.name} was empty after cleanup.[/bold red] "
            "Rerun with --raw to see the extracted text."
        )
        raise typer.Exit(code=1)

    if not as_json:
        _render_set(result)
        console.print(f"\n[bold green]✅ {len(result.terms)} terms[/bold green]")
    _emit_json(result.model_dump(), as_json, output)


@app.command("cards")  # type: ignore[misc]
def cards_command(
    file: InputFile,
    as_json: JsonFlag = False,
    output: OutputOption = None,
) -> None:
    """
    Segment a TXT, MD, PDF or DOCX document into question/answer cards.
    """
    try:
        text = load_text(file)
    except Exception as e:
        console.print(f"[bold red]❌ Could not read {file.name}:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    cards = segment_text(text)
    if not as_json:
        _render_cards(cards)
        pending = sum(1 for card in cards if card.needs_review)
        console.print(f"\n[bold green]✅ {len(cards)} cards[/bold green] ({pending} need review)")
    _emit_json([card.model_dump() for card in cards], as_json, output)


if __name__ == "__main__":
    app()
