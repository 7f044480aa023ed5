"""Line-ending, invisible-character and whitespace normalisation.

Text copied out of web pages carries non-breaking spaces, zero-width joiners,
byte-order marks and tabs that render fine but break search and duplicate
detection. These helpers remove them without changing the wording.
"""

from __future__ import annotations

import re

_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u200e\u200f\u2060\ufeff]")
_SPACE_RUN = re.compile(r"\s+")


def normalize_raw_text(value: str) -> str:
    """Normalise line endings and strip invisible characters.

    >>> normalize_raw_text("a\\u00a0b\\u200b\\tc\\r\\n")
    'a b c'
    """
    value = value.replace("\r\n", "\n").replace("\u00a0", " ")
    value = _ZERO_WIDTH.sub("", value)
    return value.replace("\t", " ").strip()


def normalize_line_spaces(value: str) -> str:
    """Collapse whitespace inside each line and drop blank lines.

    >>> normalize_line_spaces("  a   b \\n\\n  c ")
    'a b\\nc'
    """
    lines = (_SPACE_RUN.sub(" ", line).strip() for line in value.split("\n"))
    return "\n".join(line for line in lines if line).strip()


__all__ = ["normalize_line_spaces", "normalize_raw_text"]
