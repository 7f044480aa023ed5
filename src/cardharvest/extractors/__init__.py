"""Extraction pipelines: HTML flashcard sets and plain-text card lists."""

from __future__ import annotations

from .html_extractor import extract_from_document
from .text_segmenter import process_block, segment_text

__all__ = ["extract_from_document", "process_block", "segment_text"]
