"""CLI entry points for generating and taking quizzes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console

from study_aid.config import (
    MAX_QUESTIONS,
    MIN_QUESTIONS,
    ConfigOverrides,
    StudyAidConfigError,
    load_config,
)
from study_aid.core.logging import configure_logger
from study_aid.documents import DocumentError, extract_text
from study_aid.summarize.service import SummarizationError, read_summary

from .errors import QuizError, ValidationError
from .generator import generate_quiz, read_quiz, write_quiz
from .session import QuizSession
from .view import InputProvider, run_quiz

ClientFactory = Callable[[], Any]


def _question_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected an integer, got '{value}'"
        ) from exc
    if not MIN_QUESTIONS <= count <= MAX_QUESTIONS:
        raise argparse.ArgumentTypeError(
            f"number of questions must be between {MIN_QUESTIONS} and "
            f"{MAX_QUESTIONS}"
        )
    return count


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="study-aid quiz",
        description="Generate multiple-choice quizzes and take them.",
    )
    sub = parser.add_subparsers(dest="action", required=True)

    gen = sub.add_parser(
        "generate",
        help="Generate a quiz from a saved summary or a document.",
    )
    gen.add_argument(
        "source",
        type=Path,
        help=(
            "Summary JSON from `study-aid summarize` (its summary text is "
            "used) or a PDF/text/Markdown document."
        ),
    )
    gen.add_argument(
        "--num",
        type=_question_count,
        help="Number of questions (1-20, defaults to the config value).",
    )
    gen.add_argument(
        "--out",
        type=Path,
        help="Quiz JSONL path (defaults to the workspace quizzes directory).",
    )
    gen.add_argument("--model", help="Override the OpenAI chat model.")
    gen.add_argument("--config", type=Path, help="Path to a TOML config.")
    gen.add_argument(
        "--workspace", type=Path, help="Override the workspace root."
    )
    gen.add_argument("--log-level", help="Set the logging level.")
    gen.add_argument(
        "--verbose", action="store_true", help="Mirror logs to stderr."
    )

    start = sub.add_parser("start", help="Take a quiz interactively.")
    start.add_argument("quiz", type=Path, help="Quiz JSONL file.")
    return parser


def _load_content(source: Path, max_chars: int) -> str:
    if source.suffix.lower() == ".json":
        return read_summary(source).summary
    return extract_text(source, max_chars=max_chars)


def _cmd_generate(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    console: Console,
    client_factory: ClientFactory | None,
) -> int:
    try:
        loaded = load_config(
            config_path=args.config,
            overrides=ConfigOverrides(
                model=args.model,
                num_questions=args.num,
                log_level=args.log_level,
            ),
            workspace_path=args.workspace,
        )
    except StudyAidConfigError as exc:
        parser.error(str(exc))
    config = loaded.config

    logger, log_path = configure_logger(
        "study_aid.quiz",
        log_dir=loaded.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    logger.debug("quiz generate invoked", extra={"source": str(args.source)})

    try:
        content = _load_content(args.source, config.max_chars)
        with console.status("Generating quiz..."):
            questions = generate_quiz(
                content,
                config.num_questions,
                client=client_factory() if client_factory else None,
                model=config.ai.model,
                temperature=config.ai.temperature,
                max_tokens=config.ai.max_tokens,
                logger=logger,
            )
    except (DocumentError, SummarizationError, QuizError) as exc:
        logger.error("Quiz generation failed", extra={"reason": str(exc)})
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    target = args.out or (
        loaded.layout.path_for("quizzes") / f"{args.source.stem}.jsonl"
    )
    try:
        write_quiz(target, questions)
    except OSError as exc:
        logger.error("Could not save quiz", extra={"reason": str(exc)})
        sys.stderr.write(f"Error: could not write {target}: {exc}\n")
        return 1
    logger.info(
        "Saved quiz",
        extra={"path": str(target), "questions": len(questions)},
    )
    console.print(f"Wrote {len(questions)} question(s) -> {target}")
    console.print(f"Logs: {log_path}", style="dim")
    return 0


def _cmd_start(
    args: argparse.Namespace,
    console: Console,
    input_provider: InputProvider,
) -> int:
    try:
        questions = read_quiz(args.quiz)
        session = QuizSession(questions)
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"Error: could not read {args.quiz}: {exc}\n")
        return 1
    except ValidationError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    run_quiz(session, console, input_provider)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    console: Console | None = None,
    input_provider: InputProvider | None = None,
    client_factory: ClientFactory | None = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    out = console or Console()

    if args.action == "generate":
        return _cmd_generate(args, parser, out, client_factory)
    if args.action == "start":
        provider = input_provider or (lambda: out.input("> "))
        return _cmd_start(args, out, provider)
    parser.print_help()  # pragma: no cover - argparse enforces the choices
    return 2


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
