"""Document summarization into key points and flashcards."""

from __future__ import annotations

from .service import (
    Summary,
    SummarizationError,
    read_summary,
    summarize_document,
    write_summary,
)

__all__ = [
    "Summary",
    "SummarizationError",
    "read_summary",
    "summarize_document",
    "write_summary",
]
