"""Question/answer segmentation for plain study text.

Text converted from PDFs or copied from documents has no reliable structure,
but card lists usually follow one of a handful of conventions: numbered
items, ``Q:``/``A:`` markers, or a two-column layout that survives as a wide
run of spaces. This module cuts such text into cards in two passes.

Block building
--------------
One forward pass over the non-empty, trimmed lines. The only state is the
block currently being collected:

- ``1. ...`` / ``1: ...`` or ``Q: ...`` / ``Question 3. ...`` closes the
  current block and opens a new one (prefix removed);
- ``A: ...`` / ``Ans. ...`` / ``Answer: ...`` is appended to the current
  block rewritten as ``Answer: ...``;
- anything else is appended to the current block.

An answer line always lands in the current block, opening one if needed, so
an answer-first fragment still becomes a card. Any other line seen before the
first block opens is dropped.

Block resolution
----------------
:func:`process_block` turns a block into exactly one :class:`CardPair`:

1. split at the first in-line answer marker;
2. otherwise split at runs of 3+ whitespace characters (last part is the
   answer);
3. otherwise keep the whole block as the question and use
   :data:`~cardharvest.core.contracts.cards.ANSWER_NOT_DETECTED`.

The segmenter never drops a non-empty block: an unresolvable block becomes a
card flagged for review instead.
"""

from __future__ import annotations

import re

from cardharvest.core.contracts.cards import ANSWER_NOT_DETECTED, CardPair

_NUMBERED_START = re.compile(r"^\d+[.:]\s+")
_QUESTION_START = re.compile(r"^(Q|Question)\s*\d*[:.]\s+", flags=re.IGNORECASE)
_ANSWER_START = re.compile(r"^(A|Ans|Answer)\s*[:.]\s+", flags=re.IGNORECASE)
_INLINE_ANSWER = re.compile(r"\s+(A|Ans|Answer)[:.]\s+", flags=re.IGNORECASE)
_COLUMN_GAP = re.compile(r"\s{3,}")

ANSWER_PREFIX = "Answer: "


def _clean_lines(text: str) -> list[str]:
    """Split on newlines, trim, and drop empty lines."""
    lines = (line.strip() for line in (text or "").split("\n"))
    return [line for line in lines if line]


def _split_on_marker(full_text: str) -> CardPair | None:
    match = _INLINE_ANSWER.search(full_text)
    if match is None:
        return None
    question = full_text[: match.start()].strip()
    answer = full_text[match.end() :].strip()
    if question and answer:
        return CardPair(question=question, answer=answer)
    return None


def _split_on_columns(full_text: str) -> CardPair | None:
    parts = _COLUMN_GAP.split(full_text)
    if len(parts) < 2:
        return None
    *question_parts, answer = parts
    return CardPair(question=" ".join(question_parts), answer=answer)


def process_block(lines: list[str]) -> CardPair | None:
    """Resolve one block of lines into a card.

    Parameters
    ----------
    lines:
        Trimmed lines belonging to one card; joined with single spaces.

    Returns
    -------
    CardPair | None
        Exactly one card for a non-empty block, ``None`` for an empty one.

    Examples
    --------
    >>> process_block(["What is 2 + 2?", "Answer: 4"])
    CardPair(question='What is 2 + 2?', answer='4')
    >>> process_block(["Define osmosis   Water movement"]).answer
    'Water movement'
    >>> process_block(["Lonely line"]).needs_review
    True
    >>> process_block([]) is None
    True
    """
    full_text = " ".join(lines)
    if not full_text.strip():
        return None

    return (
        _split_on_marker(full_text)
        or _split_on_columns(full_text)
        or CardPair(question=full_text, answer=ANSWER_NOT_DETECTED)
    )


def _opens_block(line: str) -> bool:
    return bool(_NUMBERED_START.match(line) or _QUESTION_START.match(line))


def _strip_opening(line: str) -> str:
    without_number = _NUMBERED_START.sub("", line, count=1)
    return _QUESTION_START.sub("", without_number, count=1).strip()


def segment_text(raw_text: str) -> list[CardPair]:
    """Cut ``raw_text`` into question/answer cards, one per detected block.

    Parameters
    ----------
    raw_text:
        Plain text with line breaks, e.g. the output of
        :func:`cardharvest.extractors.document_text.load_text`.

    Returns
    -------
    list[CardPair]
        Cards in reading order. Empty when no block was ever opened.
    """
    cards: list[CardPair] = []
    current: list[str] = []

    def flush() -> None:
        card = process_block(current)
        if card is not None:
            cards.append(card)

    for line in _clean_lines(raw_text):
        if _opens_block(line):
            flush()
            current = [_strip_opening(line)]
        elif _ANSWER_START.match(line):
            current.append(ANSWER_PREFIX + _ANSWER_START.sub("", line, count=1).strip())
        elif current:
            current.append(line)

    flush()
    return cards


__all__ = ["ANSWER_PREFIX", "process_block", "segment_text"]
