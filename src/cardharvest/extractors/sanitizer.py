"""Cleanup for imported term pairs and set titles.

Every side gets :func:`~cardharvest.core.text.normalize_raw_text` and
:func:`~cardharvest.core.text.normalize_line_spaces`. Terms are also run
through :func:`~cardharvest.extractors.mcq.canonicalize_mcq_front`, so a
multiple-choice question keeps its options one per line however the page
packed them.
"""

from __future__ import annotations

from collections.abc import Iterable

from cardharvest.core.contracts.cards import ExtractionResult, TermPair
from cardharvest.core.text import normalize_line_spaces, normalize_raw_text
from cardharvest.extractors.mcq import canonicalize_mcq_front


def sanitize_term(pair: TermPair) -> TermPair:
    """Return a cleaned copy of ``pair``."""
    return TermPair(
        term=canonicalize_mcq_front(normalize_raw_text(pair.term or "")),
        definition=normalize_line_spaces(normalize_raw_text(pair.definition or "")),
    )


def sanitize_terms(pairs: Iterable[TermPair]) -> list[TermPair]:
    """Clean every pair, keeping order; pairs left empty on either side are dropped."""
    cleaned = (sanitize_term(pair) for pair in pairs)
    return [pair for pair in cleaned if pair.term and pair.definition]


def sanitize_result(result: ExtractionResult) -> ExtractionResult:
    """Return ``result`` with a cleaned title and cleaned terms."""
    title = normalize_line_spaces(normalize_raw_text(result.title)) or result.title
    return ExtractionResult(title=title, terms=sanitize_terms(result.terms))


__all__ = [
    "normalize_line_spaces",
    "normalize_raw_text",
    "sanitize_result",
    "sanitize_term",
    "sanitize_terms",
]
