"""CLI entry point that renders flashcards from text or a saved summary."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console

from study_aid.summarize.service import SummarizationError, read_summary

from .parser import parse_flashcards
from .view import render_flashcards


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="study-aid flashcards",
        description=(
            "Parse Q:/A: flashcards from a text file or a saved summary JSON "
            "and display them."
        ),
    )
    parser.add_argument(
        "path",
        type=Path,
        help=(
            "Flashcard text file, or a summary JSON written by "
            "`study-aid summarize`."
        ),
    )
    return parser


def _read_raw(path: Path) -> str:
    if path.suffix.lower() == ".json":
        return read_summary(path).flashcards
    return path.read_text(encoding="utf-8", errors="replace")


def main(
    argv: Sequence[str] | None = None, *, console: Console | None = None
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    out = console or Console()

    try:
        raw = _read_raw(args.path)
    except (OSError, SummarizationError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    cards = parse_flashcards(raw)
    render_flashcards(out, cards, raw)
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
