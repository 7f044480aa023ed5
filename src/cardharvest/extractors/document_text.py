"""Document-to-text loading for the card segmenter.

The segmenter only understands plain text with line breaks. This module is
the conversion step in front of it: it turns a file on disk into that text.

Formats
-------
TXT / MD
    Read as UTF-8.
PDF
    Page texts from ``pdfplumber``, one page after another, joined with
    newlines. Empty pages are skipped. Column layouts tend to survive as runs
    of spaces, which the segmenter's column split relies on.
DOCX
    Non-empty paragraphs from ``python-docx``, one per line.

HTML pages are *not* handled here; they go through
:func:`cardharvest.extractors.html_extractor.extract_from_document`.

Errors are raised, not swallowed: a missing file raises
:class:`FileNotFoundError` and an unsupported suffix raises
:class:`ValueError`.
"""

from __future__ import annotations

from pathlib import Path

import pdfplumber
from docx import Document

from cardharvest.core.settings import get_logger

logger = get_logger("cardharvest.document_text")

TEXT_SUFFIXES = frozenset({".txt", ".md"})
PDF_SUFFIXES = frozenset({".pdf"})
DOCX_SUFFIXES = frozenset({".docx"})


def _normalize_path(path: str | Path) -> Path:
    """Normalize a filesystem path and ensure it exists.

    Raises
    ------
    FileNotFoundError
        If the provided path does not exist.
    """
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Input path does not exist: {p}")
    return p


def text_from_pdf(path: str | Path) -> str:
    """Return the text of every non-empty page of a PDF, in page order."""
    pdf_path = _normalize_path(path)
    pages: list[str] = []

    with pdfplumber.open(pdf_path) as pdf:
        for page_index, page in enumerate(pdf.pages, start=1):
            text = (page.extract_text() or "").strip()
            if not text:
                logger.debug("Skipping empty PDF page %d of %s", page_index, pdf_path.name)
                continue
            pages.append(text)

    return "\n".join(pages)


def text_from_docx(path: str | Path) -> str:
    """Return the non-empty paragraphs of a Word document, one per line."""
    document = Document(str(_normalize_path(path)))
    paragraphs = ((p.text or "").strip() for p in document.paragraphs)
    return "\n".join(p for p in paragraphs if p)


def load_text(path: str | Path) -> str:
    """Load ``path`` as plain text, choosing the reader by file suffix.

    Parameters
    ----------
    path:
        A ``.txt``, ``.md``, ``.pdf`` or ``.docx`` file.

    Returns
    -------
    str
        The document text with line breaks preserved.
    """
    p = _normalize_path(path)
    suffix = p.suffix.lower()

    if suffix in TEXT_SUFFIXES:
        return p.read_text(encoding="utf-8")
    if suffix in PDF_SUFFIXES:
        return text_from_pdf(p)
    if suffix in DOCX_SUFFIXES:
        return text_from_docx(p)
    raise ValueError(f"Unsupported document type '{suffix}' for {p.name}")


__all__ = ["load_text", "text_from_docx", "text_from_pdf"]
