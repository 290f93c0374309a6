"""Rich-powered console loop for taking a quiz.

The loop renders the current question of a :class:`QuizSession`, reads one
command per prompt, applies it to the session and re-renders. After
submission it shows the results and offers a retake, which continues with a
fresh session over the same questions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .errors import QuizError
from .session import Phase, QuizSession

InputProvider = Callable[[], str]
ExitAction = Literal["submitted", "quit"]


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["select", "next", "submit", "quit", "retake"]
    option_index: int | None = None


@dataclass(frozen=True)
class QuizRunResult:
    """Return value from ``run_quiz``.

    ``session`` is the last attempt; ``attempts`` holds every attempt in
    order, including retaken ones.
    """

    session: QuizSession
    exit_action: ExitAction
    attempts: list[QuizSession] = field(default_factory=list)


def option_label(index: int) -> str:
    return chr(ord("A") + index) if index < 26 else str(index + 1)


def parse_session_command(
    raw: str | None, option_count: int
) -> SessionCommand | None:
    """Parse console input into a command.

    Options are chosen by letter (``a``) or 1-based number (``1``).
    Returns ``None`` for blank or unrecognized input.
    """

    if raw is None:
        return None
    text = raw.strip().lower()
    if not text:
        return None
    if text in {"n", "next"}:
        return SessionCommand("next")
    if text in {"s", "submit"}:
        return SessionCommand("submit")
    if text in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if text in {"r", "retake"}:
        return SessionCommand("retake")
    if text.isascii() and text.isdecimal():
        index = int(text) - 1
    elif len(text) == 1 and text.isalpha():
        index = ord(text) - ord("a")
    else:
        return None
    if 0 <= index < option_count:
        return SessionCommand("select", index)
    return None


def run_quiz(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
) -> QuizRunResult:
    """Drive ``session`` interactively until the user quits."""

    attempts = [session]
    exit_action: ExitAction = "quit"
    while True:
        if session.phase is Phase.SUBMITTED:
            render_results(console, session)
            console.print(Text("Commands: r (retake), q (quit)", style="dim"))
        else:
            render_question(console, session)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            break
        option_count = len(session.current_question.options)
        command = parse_session_command(raw, option_count)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            if session.phase is Phase.ANSWERING:
                console.print(
                    "\n[bold yellow]Ending session without submission.[/]"
                )
            break
        if command.type == "retake":
            if session.phase is not Phase.SUBMITTED:
                console.print("[red]Submit the quiz before retaking it.[/]")
                continue
            session = session.retake()
            attempts.append(session)
            console.print("[bold]Starting a new attempt.[/]")
            continue
        try:
            _apply_command(command, session, console)
        except QuizError as exc:
            console.print(f"[red]{exc}[/red]")

    if session.phase is Phase.SUBMITTED:
        exit_action = "submitted"
    return QuizRunResult(session, exit_action, attempts)


def _apply_command(
    command: SessionCommand,
    session: QuizSession,
    console: Console,
) -> None:
    if command.type == "select" and command.option_index is not None:
        session.record_answer(session.current_index, command.option_index)
        label = option_label(command.option_index)
        console.print(f"Selected [bold]{label}[/].")
    elif command.type == "next":
        if not session.advance():
            console.print("[red]Choose an answer before moving on.[/]")
    elif command.type == "submit":
        session.submit()


def render_question(console: Console, session: QuizSession) -> None:
    question = session.current_question
    position = session.current_index + 1
    total = session.total_questions
    header = Text.assemble(
        ("Test Your Knowledge", "bold cyan"),
        (f"  Question {position} of {total}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(
        ProgressBar(
            total=total,
            completed=session.progress_fraction() * total,
            width=40,
        )
    )
    console.print(Text(f"{position}. {question.text}", style="bold"))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("Key", justify="center", style="cyan")
    table.add_column("Option")
    selected = session.answers.get(session.current_index)
    for index, option in enumerate(question.options):
        marker = "•" if index == selected else " "
        row_text = Text(marker + " ")
        option_text = Text(option)
        if index == selected:
            option_text.stylize("bold green")
        row_text += option_text
        table.add_row(option_label(index), row_text)
    console.print(table)

    action = "n (next)" if position < total else "n (submit answers)"
    console.print(
        Text(
            f"Answered {session.answered_count}/{total} | Commands: "
            f"option letter or number, {action}, submit, quit",
            style="dim",
        )
    )


def render_results(console: Console, session: QuizSession) -> None:
    """Show the score and each question with the correct answer marked."""

    console.print()
    console.rule(Text("Quiz Results", style="bold magenta"))
    console.print(
        Text(
            f"You scored {session.score} out of {session.total_questions}.",
            style="bold",
        )
    )
    for result in session.results():
        question = result.question
        lines = Text()
        for index, option in enumerate(question.options):
            if index == question.correct_option_index:
                line = Text(f"✔ {option}", style="green")
            elif index == result.selected_option_index:
                line = Text(f"✘ {option}", style="red")
            else:
                line = Text(f"  {option}")
            if index == result.selected_option_index:
                line.append(" (Your answer)", style="dim")
            lines.append(line)
            lines.append("\n")
        if not result.is_correct and result.selected_option_index is not None:
            lines.append(
                f"Correct answer: {question.correct_option}", style="green"
            )
        elif result.selected_option_index is None:
            lines.append("Not answered.", style="yellow")
        lines.rstrip()
        border = "green" if result.is_correct else "red"
        console.print(
            Panel(
                lines,
                title=f"{result.question_index + 1}. {question.text}",
                title_align="left",
                border_style=border,
            )
        )
