import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..core.ai import (
    AIRequestError,
    chat_completion_content,
    extract_json_payload,
    load_client,
)
from .errors import QuizGenerationError, QuizRequestError, ValidationError
from .session import QuizQuestion, QuizSession

MIN_QUESTIONS = 1
MAX_QUESTIONS = 20

_SYSTEM_PROMPT = (
    "You are an expert quiz generator. You write clear multiple-choice "
    "questions with exactly one correct answer."
)


def _build_quiz_prompt(content: str, num_questions: int) -> str:
    schema_line = (
        '{"quiz": [{"question": str, "options": [str, ...], '
        '"correctAnswerIndex": int}]}'
    )
    return (
        "Generate a multiple-choice quiz from the provided content. The quiz "
        "should have the specified number of questions.\n\n"
        f"Content:\n{content.strip()}\n\n"
        f"Number of Questions: {num_questions}\n\n"
        "Ensure that the correctAnswerIndex is a valid index within the "
        "options array for each question.\n\n"
        "Output a JSON object that satisfies the following schema:\n"
        f"{schema_line}"
    )


def _quiz_records(payload: Any) -> List[Any]:
    if isinstance(payload, dict):
        payload = payload.get("quiz")
    return payload if isinstance(payload, list) else []


def _build_questions(
    records: Sequence[Any],
    *,
    limit: int,
    logger: logging.Logger,
) -> List[QuizQuestion]:
    questions: List[QuizQuestion] = []
    for position, record in enumerate(records):
        if len(questions) >= limit:
            break
        try:
            question = QuizQuestion.from_dict(record)
            # Session construction enforces option count and index range.
            QuizSession([question])
        except ValidationError as exc:
            logger.warning(
                "Skipped invalid quiz record",
                extra={"position": position, "reason": str(exc)},
            )
            continue
        questions.append(question)
    return questions


def generate_quiz(
    content: str,
    num_questions: int,
    *,
    client: object = None,
    model: str = "gpt-4o-mini",
    temperature: float = 0.2,
    max_tokens: int = 1500,
    logger: Optional[logging.Logger] = None,
) -> List[QuizQuestion]:
    """Ask the model for ``num_questions`` questions about ``content``.

    The count is checked locally (1-20) before any request is made. Records
    the model gets wrong are dropped; if none survive the call fails with
    ``QuizGenerationError``. Returns at most ``num_questions`` questions.
    """
    log = logger or logging.getLogger(__name__)
    if (
        isinstance(num_questions, bool)
        or not isinstance(num_questions, int)
        or not MIN_QUESTIONS <= num_questions <= MAX_QUESTIONS
    ):
        raise QuizRequestError(
            f"Number of questions must be between {MIN_QUESTIONS} and "
            f"{MAX_QUESTIONS}, got {num_questions!r}."
        )
    if not isinstance(content, str) or not content.strip():
        raise QuizRequestError("No content available to generate a quiz from.")

    resolved_client = client
    if resolved_client is None:
        try:
            resolved_client = load_client()
        except RuntimeError as exc:
            raise QuizGenerationError(str(exc)) from exc
    log.info(
        "Requesting quiz",
        extra={
            "model": model,
            "num_questions": num_questions,
            "content_chars": len(content),
        },
    )
    try:
        raw = chat_completion_content(
            resolved_client,
            model=model,
            system_prompt=_SYSTEM_PROMPT,
            user_prompt=_build_quiz_prompt(content, num_questions),
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except AIRequestError as exc:
        log.error("Quiz request failed", extra={"reason": str(exc)})
        raise QuizGenerationError(str(exc)) from exc

    records = _quiz_records(extract_json_payload(raw))
    if not records:
        log.error("Quiz response was not a JSON quiz payload")
        raise QuizGenerationError(
            "The model response did not contain a JSON quiz."
        )
    questions = _build_questions(records, limit=num_questions, logger=log)
    if not questions:
        raise QuizGenerationError("The model returned no valid questions.")
    log.info(
        "Generated quiz",
        extra={"requested": num_questions, "received": len(questions)},
    )
    return questions


def write_quiz(path: Path, questions: Sequence[QuizQuestion]) -> None:
    """Persist questions as JSON lines, one question per line."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        for question in questions:
            fh.write(json.dumps(question.to_dict(), ensure_ascii=False))
            fh.write("\n")


def read_quiz(path: Path) -> List[QuizQuestion]:
    """Load questions written by ``write_quiz``.

    Blank lines are ignored; a line that is not a valid question raises
    ``ValidationError`` naming the line number.
    """
    questions: List[QuizQuestion] = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except ValueError as exc:
                raise ValidationError(
                    f"{path}:{lineno}: invalid JSON ({exc})"
                ) from exc
            try:
                questions.append(QuizQuestion.from_dict(record))
            except ValidationError as exc:
                raise ValidationError(f"{path}:{lineno}: {exc}") from exc
    return questions
