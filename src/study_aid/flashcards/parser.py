"""Extract question/answer flashcards from loosely formatted model output.

Summaries come back with a free-text ``flashcards`` field that usually looks
like::

    Q: What is photosynthesis? A: Conversion of light into chemical energy.
    Q: Where does it happen?
    A: In the chloroplasts.

Parsing is best effort. A strict pass looks for ``Q:``/``A:`` markers; when
that finds nothing, a lenient pass treats blank-line separated blocks as
cards and matches the markers case-insensitively. Anything unrecognizable
yields an empty list so callers can show the raw text instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

__all__ = [
    "FlashcardPair",
    "parse_flashcards",
    "summary_points",
]

# The question stays on the line of its ``Q:`` marker; the answer runs until a
# line that starts with ``Q:`` or the end of the text.
_PAIR_RE = re.compile(r"Q:\s*(.*?)\s*A:\s*([\s\S]*?)(?=\nQ:|\s*\Z)")
_BLANK_LINES_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)*")
_DASH_RE = re.compile(r"^- ")
_STAR_RE = re.compile(r"^\* ")


@dataclass(frozen=True)
class FlashcardPair:
    question: str
    answer: str


def parse_flashcards(raw: str) -> List[FlashcardPair]:
    """Return the flashcards found in ``raw`` in order of appearance."""
    if not isinstance(raw, str) or not raw:
        return []
    text = raw.replace("\r\n", "\n").replace("\r", "\n")

    cards = [
        FlashcardPair(match.group(1).strip(), match.group(2).strip())
        for match in _PAIR_RE.finditer(text)
    ]
    if cards or not _BLANK_LINES_RE.search(text):
        return cards
    return _parse_blocks(text)


def _parse_blocks(text: str) -> List[FlashcardPair]:
    cards: List[FlashcardPair] = []
    for block in _BLANK_LINES_RE.split(text):
        lowered = block.lower()
        q_index = lowered.find("q:")
        if q_index == -1:
            continue
        a_index = lowered.find("a:", q_index + 2)
        if a_index == -1:
            continue
        question = block[q_index + 2 : a_index].strip()
        answer = block[a_index + 2 :].strip()
        if question and answer:
            cards.append(FlashcardPair(question, answer))
    return cards


def summary_points(summary: str) -> List[str]:
    """Split a bullet-point summary into display lines.

    Leading ``- `` / ``* `` markers and blank lines are dropped.
    """
    if not isinstance(summary, str):
        return []
    points: List[str] = []
    for line in summary.splitlines():
        point = _STAR_RE.sub("", _DASH_RE.sub("", line.strip()))
        if point:
            points.append(point)
    return points
