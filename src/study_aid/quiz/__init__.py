from .errors import (
    QuizError,
    ValidationError,
    InvalidStateError,
    OutOfRangeError,
    QuizRequestError,
    QuizGenerationError,
)
from .session import Phase, QuizQuestion, QuestionResult, QuizSession
from .generator import generate_quiz, read_quiz, write_quiz
from .view import QuizRunResult, parse_session_command, run_quiz

__all__ = [
    "QuizError",
    "ValidationError",
    "InvalidStateError",
    "OutOfRangeError",
    "QuizRequestError",
    "QuizGenerationError",
    "Phase",
    "QuizQuestion",
    "QuestionResult",
    "QuizSession",
    "generate_quiz",
    "read_quiz",
    "write_quiz",
    "QuizRunResult",
    "parse_session_command",
    "run_quiz",
]
