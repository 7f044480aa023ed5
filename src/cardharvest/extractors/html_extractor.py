"""Flashcard-set extractor for saved web pages.

Given the HTML of a flashcard-set page, recover the set title and its ordered
term/definition pairs. Sites ship their data in several competing shapes and
switch between them from release to release, so no single parser is reliable.
We therefore run a *strategy chain*:

1. **Embedded state** - the JSON application state in ``#__NEXT_DATA__``,
   searched with :mod:`cardharvest.core.tree_search`.
2. **Structural rows** - known row / term / definition CSS selectors, newest
   layout first.
3. **Inline script assignment** - a ``window.Quizlet.setPageData = {...};``
   statement inside a ``<script>``.
4. **Linked data** - a schema.org ``LearningResource`` in an
   ``application/ld+json`` block.

The first strategy that yields at least one pair wins; results are never
merged across strategies. Every strategy runs behind a guard: any exception
inside it is logged and counted as a miss, so a malformed JSON blob can never
abort the whole extraction.

Implementation Notes
--------------------
- HTML parsing is an injected collaborator (``parse_html``). The default
  builds a :class:`bs4.BeautifulSoup` with the configured tree builder.
- Extraction returns ``None`` when nothing is found. Callers must treat that
  as "no flashcard data in this page", which is different from a set that
  happens to be empty.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable
from typing import Any

from bs4 import BeautifulSoup, Tag

from cardharvest.core.contracts.cards import ExtractionResult, TermPair
from cardharvest.core.outcome import Miss, Outcome, hit, miss
from cardharvest.core.settings import get_logger, load_settings
from cardharvest.core.tree_search import find_terms_in_object, find_title_in_object

logger = get_logger("cardharvest.html_extractor")

HtmlParser = Callable[[str], BeautifulSoup]
Strategy = Callable[[BeautifulSoup], Outcome[ExtractionResult]]

EMBEDDED_STATE_ID = "__NEXT_DATA__"

#: Row selectors, newest known layout first. Only the first one that matches
#: anything is used.
ROW_SELECTORS: tuple[str, ...] = (
    ".SetPageTerms-term",
    ".StudiableItem",
    ".TermRows-termRow",
    'div[aria-label="Term"]',
)
TERM_SELECTORS: tuple[str, ...] = (
    ".SetPageTerm-wordText",
    ".TermText",
    ".StudiableItem-term",
    ".TermContent-side--word",
)
DEFINITION_SELECTORS: tuple[str, ...] = (
    ".SetPageTerm-definitionText",
    ".DefinitionText",
    ".StudiableItem-definition",
    ".TermContent-side--definition",
)

PAGE_DATA_MARKER = "window.Quizlet.setPageData"
_PAGE_DATA_RE = re.compile(r"window\.Quizlet\.setPageData\s*=\s*({.*});")

LINKED_DATA_SELECTOR = 'script[type="application/ld+json"]'
LINKED_DATA_TYPE = "LearningResource"


# ===========================================================================
# Helpers
# ===========================================================================


def _default_parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, load_settings().html_parser)


def _default_title() -> str:
    return load_settings().default_title


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return (value if isinstance(value, str) else str(value)).strip()


def _keep_complete(pairs: Iterable[TermPair]) -> list[TermPair]:
    """Trim both sides and drop pairs missing a term or a definition."""
    kept: list[TermPair] = []
    for pair in pairs:
        term, definition = _clean(pair.term), _clean(pair.definition)
        if term and definition:
            kept.append(TermPair(term=term, definition=definition))
    return kept


def _first_text(row: Tag, selectors: Iterable[str]) -> str:
    """Return the first non-empty trimmed text matched by ``selectors`` in ``row``."""
    for selector in selectors:
        element = row.select_one(selector)
        if element is None:
            continue
        text = element.get_text().strip()
        if text:
            return text
    return ""


def _result(title: str | None, terms: list[TermPair], source: str) -> Outcome[ExtractionResult]:
    if not terms:
        return miss(f"{source}: no terms")
    return hit(ExtractionResult(title=title or _default_title(), terms=terms))


# ===========================================================================
# Strategies
# ===========================================================================


def from_embedded_state(soup: BeautifulSoup) -> Outcome[ExtractionResult]:
    """Strategy 1: search the JSON application state for a term list."""
    element = soup.find(id=EMBEDDED_STATE_ID)
    if element is None:
        return miss("embedded-state: element not found")

    data = json.loads(element.get_text() or "{}")
    terms = _keep_complete(find_terms_in_object(data))
    return _result(find_title_in_object(data), terms, "embedded-state")


def from_structural_rows(soup: BeautifulSoup) -> Outcome[ExtractionResult]:
    """Strategy 2: scrape rows using the known layout selectors."""
    rows: list[Tag] = []
    for selector in ROW_SELECTORS:
        rows = soup.select(selector)
        if rows:
            break
    if not rows:
        return miss("structural-rows: no row selector matched")

    terms: list[TermPair] = []
    for row in rows:
        term = _first_text(row, TERM_SELECTORS)
        definition = _first_text(row, DEFINITION_SELECTORS)
        if term and definition:
            terms.append(TermPair(term=term, definition=definition))

    title_tag = soup.find("title")
    title = title_tag.get_text().split("|")[0].strip() if title_tag is not None else ""
    return _result(title, terms, "structural-rows")


def from_inline_script(soup: BeautifulSoup) -> Outcome[ExtractionResult]:
    """Strategy 3: parse the object literal assigned to the page-data global."""
    script_text = ""
    for script in soup.find_all("script"):
        text = script.get_text()
        if PAGE_DATA_MARKER in text:
            script_text = text
            break
    if not script_text:
        return miss("inline-script: marker not found")

    match = _PAGE_DATA_RE.search(script_text)
    if match is None:
        return miss("inline-script: assignment not matched")

    data = json.loads(match.group(1))
    term_map = data.get("termIdToTermsMap")
    if not isinstance(term_map, dict):
        return miss("inline-script: no term map")

    terms = _keep_complete(
        TermPair(term=_clean(entry.get("word")), definition=_clean(entry.get("definition")))
        for entry in term_map.values()
        if isinstance(entry, dict)
    )
    set_info = data.get("set")
    title = set_info.get("title") if isinstance(set_info, dict) else None
    return _result(title if isinstance(title, str) else None, terms, "inline-script")


def from_linked_data(soup: BeautifulSoup) -> Outcome[ExtractionResult]:
    """Strategy 4: read a schema.org LearningResource from JSON-LD blocks."""
    for script in soup.select(LINKED_DATA_SELECTOR):
        try:
            data = json.loads(script.get_text() or "{}")
        except json.JSONDecodeError as exc:
            logger.warning("Skipping malformed JSON-LD block: %s", exc)
            continue

        if not isinstance(data, dict) or data.get("@type") != LINKED_DATA_TYPE:
            continue
        parts = data.get("hasPart")
        if not isinstance(parts, list):
            continue

        terms = _keep_complete(
            TermPair(term=_clean(part.get("name")), definition=_clean(part.get("text")))
            for part in parts
            if isinstance(part, dict)
        )
        if terms:
            name = data.get("name")
            return _result(name if isinstance(name, str) else None, terms, "linked-data")

    return miss("linked-data: no usable LearningResource block")


#: The chain, in priority order.
STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("embedded-state", from_embedded_state),
    ("structural-rows", from_structural_rows),
    ("inline-script", from_inline_script),
    ("linked-data", from_linked_data),
)


# ===========================================================================
# Chain
# ===========================================================================


def _guarded(name: str, strategy: Strategy, soup: BeautifulSoup) -> Outcome[ExtractionResult]:
    """Run one strategy; any exception becomes a logged miss."""
    try:
        outcome = strategy(soup)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Strategy %s failed: %s", name, exc)
        return miss(f"{name}: {type(exc).__name__}: {exc}")

    if outcome.is_hit():
        logger.info("Strategy %s found %d terms", name, len(outcome.unwrap().terms))
    else:
        logger.debug("Strategy %s missed", name)
    return outcome


def run_strategies(
    soup: BeautifulSoup,
    strategies: Iterable[tuple[str, Strategy]] = STRATEGIES,
) -> Outcome[ExtractionResult]:
    """Run ``strategies`` in order and return the first hit.

    On a total miss the returned :class:`~cardharvest.core.outcome.Miss`
    carries every strategy's reason joined with ``"; "``.
    """
    reasons: list[str] = []
    for name, strategy in strategies:
        outcome = _guarded(name, strategy, soup)
        if outcome.is_hit():
            return outcome
        if isinstance(outcome, Miss):
            reasons.append(outcome.reason)
    return miss("; ".join(reasons) or "no strategies configured")


def extract_outcome(
    html: str,
    *,
    parse_html: HtmlParser | None = None,
) -> Outcome[ExtractionResult]:
    """Parse ``html`` and run the strategy chain, keeping the miss reasons."""
    parser = parse_html or _default_parse_html
    try:
        soup = parser(html)
    except Exception as exc:  # noqa: BLE001
        logger.error("Could not parse document: %s", exc)
        return miss(f"parse: {type(exc).__name__}: {exc}")
    return run_strategies(soup)


def extract_from_document(
    html: str,
    *,
    parse_html: HtmlParser | None = None,
) -> ExtractionResult | None:
    """Recover a flashcard set from an HTML document.

    Parameters
    ----------
    html:
        Raw HTML source of the page.
    parse_html:
        Optional parser turning the source into a BeautifulSoup tree. Defaults
        to BeautifulSoup with the configured tree builder.

    Returns
    -------
    ExtractionResult | None
        The set found by the first successful strategy (always with at least
        one term), or ``None`` when no strategy found anything.
    """
    return extract_outcome(html, parse_html=parse_html).value_or_none()


__all__ = [
    "STRATEGIES",
    "extract_from_document",
    "extract_outcome",
    "from_embedded_state",
    "from_inline_script",
    "from_linked_data",
    "from_structural_rows",
    "run_strategies",
]
