"""CLI entry point that summarizes a document into points and flashcards."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console

from study_aid.config import (
    ConfigOverrides,
    StudyAidConfigError,
    load_config,
)
from study_aid.core.logging import configure_logger
from study_aid.documents import DocumentError, extract_text
from study_aid.flashcards.view import render_flashcards, render_summary_points

from .service import SummarizationError, summarize_document, write_summary

ClientFactory = Callable[[], Any]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="study-aid summarize",
        description=(
            "Summarize a PDF, text or Markdown document into key points and "
            "flashcards."
        ),
    )
    parser.add_argument("path", type=Path, help="Document to summarize.")
    parser.add_argument(
        "--out",
        type=Path,
        help=(
            "Where to save the summary JSON (defaults to the workspace "
            "summaries directory)."
        ),
    )
    parser.add_argument(
        "--model", help="Override the OpenAI chat model for this run."
    )
    parser.add_argument("--config", type=Path, help="Path to a TOML config.")
    parser.add_argument(
        "--workspace", type=Path, help="Override the workspace root."
    )
    parser.add_argument(
        "--log-level", help="Set the logging level (defaults to INFO)."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    console: Console | None = None,
    client_factory: ClientFactory | None = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    out = console or Console()

    try:
        loaded = load_config(
            config_path=args.config,
            overrides=ConfigOverrides(
                model=args.model, log_level=args.log_level
            ),
            workspace_path=args.workspace,
        )
    except StudyAidConfigError as exc:
        parser.error(str(exc))
    config = loaded.config

    logger, log_path = configure_logger(
        "study_aid.summarize",
        log_dir=loaded.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    logger.debug("summarize CLI invoked", extra={"source": str(args.path)})

    try:
        text = extract_text(args.path, max_chars=config.max_chars)
        with out.status("Summarizing..."):
            summary = summarize_document(
                text,
                client=client_factory() if client_factory else None,
                model=config.ai.model,
                temperature=config.ai.temperature,
                max_tokens=config.ai.max_tokens,
                logger=logger,
            )
    except (DocumentError, SummarizationError) as exc:
        logger.error("Summarize failed", extra={"reason": str(exc)})
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    render_summary_points(out, summary.points())
    render_flashcards(out, summary.cards(), summary.flashcards)

    target = args.out or (
        loaded.layout.path_for("summaries") / f"{args.path.stem}.json"
    )
    try:
        saved = write_summary(target, summary)
    except OSError as exc:
        logger.error("Could not save summary", extra={"reason": str(exc)})
        sys.stderr.write(f"Error: could not write {target}: {exc}\n")
        return 1
    logger.info("Saved summary", extra={"path": str(saved)})
    out.print(f"\nSaved summary -> {saved}")
    out.print(f"Logs: {log_path}", style="dim")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
