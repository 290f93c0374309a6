"""Rich rendering for summary points and flashcards."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .parser import FlashcardPair


def render_summary_points(console: Console, points: Sequence[str]) -> None:
    console.print()
    console.rule(Text("Key Summary Points", style="bold cyan"))
    if not points:
        console.print(Text("No summary points available.", style="dim"))
        return
    for point in points:
        console.print(Text.assemble(("• ", "cyan"), point))


def render_flashcards(
    console: Console,
    cards: Sequence[FlashcardPair],
    raw: str = "",
) -> None:
    """Render parsed cards, or the raw text when parsing found none."""

    console.print()
    console.rule(Text("Flashcards", style="bold cyan"))
    if cards:
        table = Table(box=box.SIMPLE, expand=True, show_lines=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Question", style="bold", overflow="fold")
        table.add_column("Answer", overflow="fold")
        for index, card in enumerate(cards, start=1):
            table.add_row(str(index), card.question, card.answer)
        console.print(table)
        return
    if raw.strip():
        console.print(
            Text("Could not parse flashcards. Raw content:", style="yellow")
        )
        console.print(Panel(Text(raw.strip()), border_style="dim"))
        return
    console.print(
        Text("No flashcards generated or available.", style="dim")
    )
