"""Multiple-choice question fronts.

Flashcard sets exported from study sites often store a multiple-choice
question as the term, with its options either on their own lines or packed
onto the question line (``"Largest planet? A. Mars B. Jupiter"``). This module
recognises those shapes and rewrites them to one canonical layout: the stem on
the first line, then one ``"A. option"`` line per option.

Labels
------
An option label is one letter or a one- or two-digit number followed by
``)``, ``.``, ``:`` or ``-``, or a letter in parentheses: ``A)``, ``(b)``,
``C.``, ``1)``, ``2.``. Letters count from ``A = 1``, numbers count as
themselves.

A run of labels only counts as an option list when it starts at 1 and goes
up one at a time (:func:`_best_sequence`). Repeated or smaller labels inside
the run are skipped, a jump ends it, and at least two options are required.
Ordinary terms therefore pass through unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from cardharvest.core.text import normalize_line_spaces, normalize_raw_text

_SPACE_RUN = re.compile(r"\s+")
_EDGE_QUOTES = re.compile(r"^[\"'\u201c\u201d\u2018\u2019\s]+|[\"'\u201c\u201d\u2018\u2019\s]+$")

_INLINE_MARKER = re.compile(
    r"(^|[\s\"'\u201c\u201d\u2018\u2019)\]}.?!:;,]|(?<=[a-zA-Z0-9]))"
    r"(?:\(?([A-Za-z])\)|([A-Za-z])[).:-]|([0-9]{1,2})[).:-])\s*"
)
_LINE_MARKER = re.compile(
    r"^\s*(?:[-*\u2022]\s*)?"
    r"(?:\(?([A-Za-z])\)|([A-Za-z])[).:-]|([0-9]{1,2})[).:-])\s*(.*)\s*$"
)
_BARE_LETTER = re.compile(r"^\s*([A-Za-z])\s*$")

# Break before any label that follows sentence punctuation.
_AFTER_PUNCTUATION = re.compile(r"([?.!])\s*(\(?[A-Za-z]\)|[A-Za-z][).:-]|[0-9]{1,2}[).:-])\s*")
# Break before a second-or-later label that follows a word.
_AFTER_WORD = re.compile(
    r"([A-Za-z0-9\"'])(\s+)(\(?[B-Za-z]\)|[B-Z][).:-]|[b-z][).:-]|(?:1[0-9]|[2-9])[).:-])(\s*)"
)


@dataclass(frozen=True)
class ParsedMcq:
    """A recognised multiple-choice question.

    ``labels[i]`` is the lower-cased label that introduced ``options[i]``.
    ``stem`` may be empty when the caller allowed a missing stem.
    """

    stem: str
    options: tuple[str, ...]
    labels: tuple[str, ...]


@dataclass(frozen=True)
class _Marker:
    position: int
    label: str
    order: int
    width: int = 0
    text: str = ""


def clean_mcq_text(value: str) -> str:
    """Flatten ``value`` to one line and trim surrounding quotes.

    >>> clean_mcq_text(' "Which\\u00a0one?\\n" ')
    'Which one?'
    """
    flat = _SPACE_RUN.sub(" ", normalize_raw_text(value))
    return _EDGE_QUOTES.sub("", flat).strip()


def _label_order(label: str) -> int:
    if label.isdigit():
        return int(label)
    upper = label.upper()
    if len(upper) == 1 and "A" <= upper <= "Z":
        return ord(upper) - ord("A") + 1
    return -1


def _best_sequence(markers: Sequence[_Marker]) -> list[_Marker]:
    """Return the longest 1, 2, 3... run of markers, or ``[]`` if shorter than two."""
    if len(markers) < 2:
        return []

    best: list[_Marker] = []
    for start, first in enumerate(markers):
        if first.order != 1:
            continue
        run = [first]
        expected = 2
        for marker in markers[start + 1 :]:
            if marker.order == expected:
                run.append(marker)
                expected += 1
            elif marker.order < expected:
                continue
            else:
                break
        if len(run) > len(best):
            best = run
    return best if len(best) >= 2 else []


def _build(stem: str, labelled: list[tuple[str, str]]) -> ParsedMcq | None:
    kept = [(label, option) for label, option in labelled if option]
    if len(kept) < 2:
        return None
    return ParsedMcq(
        stem=stem,
        options=tuple(option for _, option in kept),
        labels=tuple(label for label, _ in kept),
    )


def _lines(value: str, *, drop_blank: bool) -> list[str]:
    lines = [line.strip() for line in normalize_raw_text(value).split("\n")]
    return [line for line in lines if line] if drop_blank else lines


# ===========================================================================
# Parsers
# ===========================================================================


def parse_inline_labeled_mcq(value: str) -> ParsedMcq | None:
    """Parse a question whose options share its line: ``"Stem? A) x B) y"``.

    The stem is required here.
    """
    text = _SPACE_RUN.sub(" ", normalize_raw_text(value)).strip()
    if not text:
        return None

    markers: list[_Marker] = []
    for match in _INLINE_MARKER.finditer(text):
        boundary = match.group(1) or ""
        label = (match.group(2) or match.group(3) or match.group(4) or "").lower()
        order = _label_order(label)
        if label and order > 0:
            markers.append(
                _Marker(
                    position=match.start() + len(boundary),
                    label=label,
                    order=order,
                    width=len(match.group(0)) - len(boundary),
                )
            )

    run = _best_sequence(markers)
    if not run:
        return None
    stem = text[: run[0].position].strip()
    if not stem:
        return None

    labelled: list[tuple[str, str]] = []
    for i, marker in enumerate(run):
        end = run[i + 1].position if i + 1 < len(run) else len(text)
        labelled.append((marker.label, clean_mcq_text(text[marker.position + marker.width : end])))
    return _build(stem, labelled)


def parse_line_labeled_mcq(value: str, *, allow_missing_stem: bool = False) -> ParsedMcq | None:
    """Parse one option per line; unlabelled lines continue the option above."""
    lines = _lines(value, drop_blank=False)
    if not any(lines):
        return None

    markers: list[_Marker] = []
    for i, line in enumerate(lines):
        match = _LINE_MARKER.match(line)
        if match is None:
            continue
        label = (match.group(1) or match.group(2) or match.group(3) or "").lower()
        order = _label_order(label)
        if label and order > 0:
            markers.append(
                _Marker(position=i, label=label, order=order, text=clean_mcq_text(match.group(4)))
            )

    run = _best_sequence(markers)
    if not run:
        return None
    stem = clean_mcq_text(" ".join(lines[: run[0].position]))
    if not stem and not allow_missing_stem:
        return None

    labelled: list[tuple[str, str]] = []
    for i, marker in enumerate(run):
        end = run[i + 1].position if i + 1 < len(run) else len(lines)
        continuation = [clean_mcq_text(line) for line in lines[marker.position + 1 : end]]
        parts = [part for part in (marker.text, *continuation) if part]
        labelled.append((marker.label, clean_mcq_text(" ".join(parts))))
    return _build(stem, labelled)


def parse_bare_letter_mcq(value: str, *, allow_missing_stem: bool = False) -> ParsedMcq | None:
    """Parse options introduced by a lone letter on its own line.

    A lone letter counts as a label only when the next line is option text,
    not another lone letter.
    """
    lines = _lines(value, drop_blank=True)
    if len(lines) < 3:
        return None

    markers: list[_Marker] = []
    for i, (line, following) in enumerate(zip(lines, lines[1:], strict=False)):
        match = _BARE_LETTER.match(line)
        if match is None or _BARE_LETTER.match(following):
            continue
        label = match.group(1).lower()
        order = _label_order(label)
        if order > 0:
            markers.append(_Marker(position=i, label=label, order=order))

    run = _best_sequence(markers)
    if not run:
        return None
    stem = clean_mcq_text(" ".join(lines[: run[0].position]))
    if not stem and not allow_missing_stem:
        return None

    labelled: list[tuple[str, str]] = []
    for i, marker in enumerate(run):
        end = run[i + 1].position if i + 1 < len(run) else len(lines)
        option_lines = [clean_mcq_text(line) for line in lines[marker.position + 1 : end]]
        labelled.append((marker.label, " ".join(line for line in option_lines if line)))
    return _build(stem, labelled)


def parse_labeled_mcq(value: str, *, allow_missing_stem: bool = False) -> ParsedMcq | None:
    """Try the line, bare-letter and inline parsers in that order."""
    return (
        parse_line_labeled_mcq(value, allow_missing_stem=allow_missing_stem)
        or parse_bare_letter_mcq(value, allow_missing_stem=allow_missing_stem)
        or parse_inline_labeled_mcq(value)
    )


# ===========================================================================
# Canonical form
# ===========================================================================


def insert_packed_option_breaks(value: str) -> str:
    """Put packed option labels on their own lines.

    >>> insert_packed_option_breaks("Pick one? A) red B) blue")
    'Pick one?\\nA) red\\nB) blue'
    """
    broken = _AFTER_PUNCTUATION.sub(r"\1\n\2 ", value)
    return _AFTER_WORD.sub(r"\1\n\3 ", broken)


def _display_label(label: str) -> str:
    return f"{label}." if label.isdigit() else f"{label.upper()}."


def format_mcq(parsed: ParsedMcq) -> str:
    """Render ``parsed`` as a stem line followed by one labelled line per option."""
    lines = [clean_mcq_text(parsed.stem)]
    lines.extend(
        f"{_display_label(label)} {clean_mcq_text(option)}"
        for label, option in zip(parsed.labels, parsed.options, strict=True)
    )
    return normalize_line_spaces("\n".join(lines))


def canonicalize_mcq_front(front: str) -> str:
    """Rewrite a multiple-choice term to its canonical layout.

    The text is parsed as-is first, then again after
    :func:`insert_packed_option_breaks`. Text that is not a multiple-choice
    question only has its whitespace normalised.

    Examples
    --------
    >>> canonicalize_mcq_front("Largest planet? a) Mars b) Jupiter")
    'Largest planet?\\nA. Mars\\nB. Jupiter'
    >>> canonicalize_mcq_front("Mitochondria")
    'Mitochondria'
    """
    parsed = parse_labeled_mcq(front, allow_missing_stem=True)
    if parsed is None:
        parsed = parse_labeled_mcq(insert_packed_option_breaks(front), allow_missing_stem=True)
    if parsed is None:
        return normalize_line_spaces(front)
    return format_mcq(parsed)


__all__ = [
    "ParsedMcq",
    "canonicalize_mcq_front",
    "clean_mcq_text",
    "format_mcq",
    "insert_packed_option_breaks",
    "parse_bare_letter_mcq",
    "parse_inline_labeled_mcq",
    "parse_labeled_mcq",
    "parse_line_labeled_mcq",
]
