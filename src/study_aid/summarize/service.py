"""Summaries and flashcards generated from document text."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

from study_aid.core.ai import (
    AIRequestError,
    chat_completion_content,
    extract_json_payload,
    load_client,
)
from study_aid.flashcards.parser import (
    FlashcardPair,
    parse_flashcards,
    summary_points,
)

__all__ = [
    "Summary",
    "SummarizationError",
    "summarize_document",
    "read_summary",
    "write_summary",
]

_SYSTEM_PROMPT = (
    "You are a study assistant. You condense course material into short "
    "summaries and flashcards."
)

_USER_PROMPT = """\
Summarize the following document as concise bullet points highlighting the
main topics, one point per line starting with "- ".

Then write flashcards covering the key concepts. Put each flashcard on its own
line in the form "Q: <question> A: <answer>".

Respond with a JSON object: {{"summary": str, "flashcards": str}}

Document:
{text}
"""


class SummarizationError(RuntimeError):
    """Raised when a summary cannot be produced or loaded."""


@dataclass(frozen=True)
class Summary:
    summary: str
    flashcards: str

    def points(self) -> List[str]:
        return summary_points(self.summary)

    def cards(self) -> List[FlashcardPair]:
        return parse_flashcards(self.flashcards)

    def to_dict(self) -> dict[str, str]:
        return {"summary": self.summary, "flashcards": self.flashcards}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Summary":
        summary = data.get("summary") if isinstance(data, Mapping) else None
        if not isinstance(summary, str) or not summary.strip():
            raise SummarizationError("summary must be a non-empty string")
        flashcards = data.get("flashcards", "")
        if isinstance(flashcards, list):
            # Some models return one string or one object per card.
            flashcards = "\n".join(_card_line(item) for item in flashcards)
        if not isinstance(flashcards, str):
            raise SummarizationError("flashcards must be a string")
        return cls(summary=summary.strip(), flashcards=flashcards.strip())


def _card_line(item: Any) -> str:
    if isinstance(item, Mapping):
        question = str(item.get("question", item.get("q", ""))).strip()
        answer = str(item.get("answer", item.get("a", ""))).strip()
        return f"Q: {question} A: {answer}"
    return str(item)


def summarize_document(
    text: str,
    *,
    client: object = None,
    model: str = "gpt-4o-mini",
    temperature: float = 0.2,
    max_tokens: int = 1500,
    logger: Optional[logging.Logger] = None,
) -> Summary:
    """Return the summary and flashcards for ``text``."""

    log = logger or logging.getLogger(__name__)
    if not isinstance(text, str) or not text.strip():
        raise SummarizationError("No document text to summarize.")

    resolved_client = client
    if resolved_client is None:
        try:
            resolved_client = load_client()
        except RuntimeError as exc:
            raise SummarizationError(str(exc)) from exc
    log.info(
        "Requesting summary",
        extra={"model": model, "content_chars": len(text)},
    )
    try:
        raw = chat_completion_content(
            resolved_client,
            model=model,
            system_prompt=_SYSTEM_PROMPT,
            user_prompt=_USER_PROMPT.format(text=text.strip()),
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except AIRequestError as exc:
        log.error("Summary request failed", extra={"reason": str(exc)})
        raise SummarizationError(str(exc)) from exc

    payload = extract_json_payload(raw)
    if not isinstance(payload, dict):
        log.error("Summary response was not a JSON object")
        raise SummarizationError(
            "The model response did not contain a JSON summary."
        )
    summary = Summary.from_dict(payload)
    log.info(
        "Generated summary",
        extra={
            "points": len(summary.points()),
            "flashcards": len(summary.cards()),
        },
    )
    return summary


def write_summary(path: Path, summary: Summary) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(summary.to_dict(), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return target


def read_summary(path: Path) -> Summary:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SummarizationError(
            f"Could not load summary {path}: {exc}"
        ) from exc
    return Summary.from_dict(data)
