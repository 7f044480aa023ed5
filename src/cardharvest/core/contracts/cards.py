"""Card contracts produced by the extraction pipelines.

Three Pydantic v2 models describe everything the extractors hand back:

- `TermPair`        : one term/definition flashcard recovered from a web page.
- `ExtractionResult`: a titled, ordered list of `TermPair` objects.
- `CardPair`        : one question/answer card segmented out of plain text.

Notes
-----
- Position in the owning list is the only identity a pair has; order mirrors
  the order in which the source presented the cards.
- `CardPair.answer` may hold :data:`ANSWER_NOT_DETECTED`. That value means
  "a human should fill this in", not "the card is broken".
- The models themselves accept empty strings. Filtering empty pairs is the
  extractors' job so that the tree search can stay length-preserving.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

#: Placeholder answer for blocks whose answer could not be located.
ANSWER_NOT_DETECTED = "[Answer not detected - please edit]"


class TermPair(BaseModel):
    """A term and its definition."""

    term: str = Field(description="Front of the card.")
    definition: str = Field(description="Back of the card.")


class ExtractionResult(BaseModel):
    """A flashcard set recovered from a document."""

    title: str = Field(description="Set title, or the configured placeholder.")
    terms: list[TermPair] = Field(default_factory=list, description="Pairs in source order.")


class CardPair(BaseModel):
    """A question and its (possibly undetected) answer."""

    question: str
    answer: str

    @property
    def needs_review(self) -> bool:
        """Return True when the answer is the "not detected" placeholder."""
        return self.answer == ANSWER_NOT_DETECTED


__all__ = ["ANSWER_NOT_DETECTED", "CardPair", "ExtractionResult", "TermPair"]
