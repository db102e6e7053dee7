"""Rich-powered line loop driving a :class:`QuizSession`.

Each line read from ``input_provider`` is routed by the session's mode:
menu lines select a collection, guess lines are graded. Ctrl-C while
guessing returns to the menu; Ctrl-C at the menu or end of input ends the
run. Environment errors raised by the session (no player, empty
collection) propagate to the caller.
"""

from __future__ import annotations

from typing import Callable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .session import (
    GuessOutcome,
    MenuError,
    MenuQuit,
    Mode,
    QuizSession,
    QuizStats,
    SelectionOutcome,
)

InputProvider = Callable[[], str]

PROMPT = "» "

_WELCOME = (
    "Select a set of sounds from the menu by typing its number.\n\n"
    "A sound will play. Type the note or chord it corresponds to. If the "
    "sample holds several notes, separate them with semicolons.\n\n"
    "For [bold]C#[/] type [yellow]C#[/]. For an [bold]A major (open)[/] "
    "chord, [yellow]A major (open)[/], [yellow]A major open[/] and "
    "[yellow]A major/open[/] all count. For the sequence "
    "[bold]A, B, A, D[/] type [yellow]A;B;A;D[/].\n\n"
    "Press Enter on an empty line to hear the sound again, Ctrl-C to go "
    "back to the menu."
)


def console_input_provider(console: Console) -> InputProvider:
    def _provider() -> str:
        return console.input(PROMPT)

    return _provider


def run_shell(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
) -> int:
    """Run the interactive loop until the learner leaves; return exit code 0."""

    render_welcome(console)
    render_menu(console, session)
    while True:
        try:
            raw = input_provider()
        except KeyboardInterrupt:
            if session.cancel():
                console.print()
                render_menu(console, session)
                continue
            break
        except (EOFError, StopIteration):
            break

        if session.mode is Mode.MENU:
            result = session.handle_menu(raw)
            if isinstance(result, MenuQuit):
                break
            if isinstance(result, MenuError):
                console.print(f"[yellow]{result.message}[/]")
                continue
            render_selection(console, result)
        else:
            render_guess(console, session.submit_guess(raw))

    render_goodbye(console, session.stats())
    return 0


def render_welcome(console: Console) -> None:
    console.print(
        Panel(
            _WELCOME,
            title="Welcome to [bold]Ear Trainer[/]",
            border_style="cyan",
        )
    )


def render_menu(console: Console, session: QuizSession) -> None:
    console.print()
    console.print("[bold white]Please select a collection[/]")
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("#", justify="right", style="bold white")
    table.add_column("Collection", style="yellow")
    for idx, name in enumerate(session.collections, start=1):
        table.add_row(str(idx), Text(name))
    console.print(table)


def render_selection(console: Console, outcome: SelectionOutcome) -> None:
    console.print()
    console.print(
        Text.assemble(
            "You will now be tested on ",
            (outcome.collection, "bold"),
            "…",
        )
    )
    console.print("The possible answers are")
    for answer in outcome.answers:
        console.print(f"\t{answer}", markup=False)
    _render_prompt(console)


def render_guess(console: Console, outcome: GuessOutcome) -> None:
    if outcome.verdict == "replay":
        console.print("[dim]Playing the sound again.[/]")
        _render_prompt(console)
        return
    if outcome.verdict == "correct":
        console.print("[green]✓[/]")
        stats = outcome.stats
        console.print(
            f"[green]{stats.first_try_correct}/{stats.trials} trials correct "
            "on the first try[/]"
        )
        _render_prompt(console)
        return
    console.print("[red]✕[/]")
    if outcome.verdict == "revealed":
        answer = Text("The correct answer was ", style="yellow")
        answer.append(outcome.answer or "", style="bold yellow")
        console.print(answer)
        console.print("\nLet’s try another one…")
        _render_prompt(console)


def render_goodbye(console: Console, stats: QuizStats) -> None:
    if stats.trials:
        table = Table(
            title="Session summary",
            show_header=False,
            box=box.MINIMAL_DOUBLE_HEAD,
        )
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Sounds played", str(stats.trials))
        table.add_row("Sounds answered", str(stats.answered))
        table.add_row("Guesses", str(stats.guesses))
        table.add_row("Correct on first try", str(stats.first_try_correct))
        table.add_row("First-try rate", f"{stats.first_try_rate * 100:.1f}%")
        console.print(table)
    console.print("Good-bye from Ear Trainer")


def _render_prompt(console: Console) -> None:
    console.print("Please identify the mystery sound")
