"""State of a single quiz attempt.

``QuizSession`` owns the answers, the position and the phase of one attempt
at a fixed list of multiple-choice questions. Operations either succeed
completely or raise without touching state, so a UI can render the session
after every call without reconciling partial updates.

Lifecycle::

    ANSWERING --submit()/advance() on last question--> SUBMITTED

A submitted session is never reopened; ``retake()`` hands back a fresh
session over the same questions and leaves the finished one inspectable.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

from .errors import InvalidStateError, OutOfRangeError, ValidationError

__all__ = [
    "Phase",
    "QuizQuestion",
    "QuestionResult",
    "QuizSession",
]


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Phase(Enum):
    ANSWERING = "answering"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class QuizQuestion:
    """Immutable multiple-choice question."""

    text: str
    options: tuple[str, ...]
    correct_option_index: int

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]

    def to_dict(self) -> dict[str, object]:
        return {
            "text": self.text,
            "options": list(self.options),
            "correct_option_index": self.correct_option_index,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QuizQuestion":
        """Build a question from a stored record or a generator payload.

        Accepts ``text``/``correct_option_index`` as written by ``to_dict``
        and ``question``/``correctAnswerIndex`` as produced by the model.
        Only field types are checked here; option count and index range are
        enforced when a session is built.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("question record must be a mapping")
        text = data.get("text", data.get("question"))
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("question text must be a non-empty string")
        options = data.get("options")
        if isinstance(options, (str, bytes)) or not isinstance(
            options, Sequence
        ):
            raise ValidationError("options must be a list of strings")
        if not all(isinstance(option, str) for option in options):
            raise ValidationError("options must be a list of strings")
        index = data.get(
            "correct_option_index", data.get("correctAnswerIndex")
        )
        if not _is_index(index):
            raise ValidationError("correct option index must be an integer")
        return cls(
            text=text.strip(),
            options=tuple(option.strip() for option in options),
            correct_option_index=index,
        )


@dataclass(frozen=True)
class QuestionResult:
    """Outcome of one question after submission."""

    question_index: int
    question: QuizQuestion
    selected_option_index: Optional[int]
    is_correct: bool

    @property
    def selected_option(self) -> Optional[str]:
        if self.selected_option_index is None:
            return None
        return self.question.options[self.selected_option_index]


def _validate_questions(
    questions: Sequence[QuizQuestion],
) -> tuple[QuizQuestion, ...]:
    frozen = tuple(questions)
    if not frozen:
        raise ValidationError("a quiz needs at least one question")
    for position, question in enumerate(frozen):
        if not isinstance(question, QuizQuestion):
            raise ValidationError(
                f"question {position} is not a QuizQuestion"
            )
        if len(question.options) < 2:
            raise ValidationError(
                f"question {position} needs at least 2 options, "
                f"got {len(question.options)}"
            )
        if not _is_index(question.correct_option_index):
            raise ValidationError(
                f"question {position} has non-integer correct option index "
                f"{question.correct_option_index!r}"
            )
        if not 0 <= question.correct_option_index < len(question.options):
            raise ValidationError(
                f"question {position} has correct option index "
                f"{question.correct_option_index} outside "
                f"[0, {len(question.options)})"
            )
    return frozen


class QuizSession:
    """Controller for one attempt at an ordered set of questions."""

    def __init__(self, questions: Sequence[QuizQuestion]) -> None:
        self._questions = _validate_questions(questions)
        self._answers: dict[int, int] = {}
        self._current_index = 0
        self._phase = Phase.ANSWERING
        self._score: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"QuizSession(questions={len(self._questions)}, "
            f"current_index={self._current_index}, "
            f"answered={len(self._answers)}, phase={self._phase.value})"
        )

    @property
    def questions(self) -> tuple[QuizQuestion, ...]:
        return self._questions

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> QuizQuestion:
        return self._questions[self._current_index]

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def answers(self) -> Mapping[int, int]:
        return MappingProxyType(dict(self._answers))

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def score(self) -> int:
        """Number of correct answers; only available once submitted."""
        if self._score is None:
            raise InvalidStateError("score is only available after submit()")
        return self._score

    def is_answered(self, question_index: int) -> bool:
        return question_index in self._answers

    def progress_fraction(self) -> float:
        return (self._current_index + 1) / len(self._questions)

    def record_answer(
        self, question_index: int, selected_option_index: int
    ) -> None:
        """Select an option for a question, replacing any earlier choice."""
        self._require_answering("record an answer")
        if not _is_index(question_index) or not _is_index(
            selected_option_index
        ):
            raise OutOfRangeError(
                f"indexes must be integers, got {question_index!r} and "
                f"{selected_option_index!r}"
            )
        if not 0 <= question_index < len(self._questions):
            raise OutOfRangeError(
                f"question index {question_index} outside "
                f"[0, {len(self._questions)})"
            )
        options = self._questions[question_index].options
        if not 0 <= selected_option_index < len(options):
            raise OutOfRangeError(
                f"option index {selected_option_index} outside "
                f"[0, {len(options)}) for question {question_index}"
            )
        self._answers[question_index] = selected_option_index

    def advance(self) -> bool:
        """Move to the next question, submitting from the last one.

        Forward navigation is gated on the current question being answered;
        an unanswered question leaves the session untouched and returns
        ``False``.
        """
        self._require_answering("advance")
        if self._current_index not in self._answers:
            return False
        if self._current_index < len(self._questions) - 1:
            self._current_index += 1
        else:
            self.submit()
        return True

    def submit(self) -> int:
        """Score the attempt and close it.

        Repeated calls return the stored score.
        """
        if self._phase is Phase.SUBMITTED:
            return self.score
        self._score = sum(
            1
            for index, question in enumerate(self._questions)
            if self._answers.get(index) == question.correct_option_index
        )
        self._phase = Phase.SUBMITTED
        return self._score

    def retake(self) -> "QuizSession":
        return QuizSession(self._questions)

    def results(self) -> list[QuestionResult]:
        """Per-question outcomes for reviewing a submitted attempt."""
        if self._phase is not Phase.SUBMITTED:
            raise InvalidStateError(
                "results are only available after submit()"
            )
        results: list[QuestionResult] = []
        for index, question in enumerate(self._questions):
            selected = self._answers.get(index)
            results.append(
                QuestionResult(
                    question_index=index,
                    question=question,
                    selected_option_index=selected,
                    is_correct=selected == question.correct_option_index,
                )
            )
        return results

    def _require_answering(self, action: str) -> None:
        if self._phase is not Phase.ANSWERING:
            raise InvalidStateError(f"cannot {action} after submission")
