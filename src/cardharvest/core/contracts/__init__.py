"""Typed contracts shared by the extractors, the CLI and tests."""

from __future__ import annotations

from .cards import ANSWER_NOT_DETECTED, CardPair, ExtractionResult, TermPair

__all__ = ["ANSWER_NOT_DETECTED", "CardPair", "ExtractionResult", "TermPair"]
