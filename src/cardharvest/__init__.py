"""cardharvest: recover flashcard data from web pages and study documents.

Two pipelines live in :mod:`cardharvest.extractors`:

- :func:`~cardharvest.extractors.html_extractor.extract_from_document` turns a
  flashcard-set web page into an :class:`ExtractionResult`.
- :func:`~cardharvest.extractors.text_segmenter.segment_text` turns plain text
  (typically converted from a PDF) into question/answer cards.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
