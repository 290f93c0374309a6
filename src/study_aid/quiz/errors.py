"""Error types raised by quiz sessions and the quiz generator."""

from __future__ import annotations

__all__ = [
    "QuizError",
    "ValidationError",
    "InvalidStateError",
    "OutOfRangeError",
    "QuizRequestError",
    "QuizGenerationError",
]


class QuizError(RuntimeError):
    """Base class for quiz failures."""


class ValidationError(QuizError):
    """A question set or question record is malformed."""


class InvalidStateError(QuizError):
    """An operation was attempted in the wrong session phase."""


class OutOfRangeError(QuizError):
    """A question or option index falls outside the valid bounds."""


class QuizRequestError(QuizError):
    """Quiz generation parameters were rejected before calling the provider."""


class QuizGenerationError(QuizError):
    """The provider failed or returned no usable questions."""
