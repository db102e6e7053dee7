"""Report which audio players the quiz can use on this machine."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .core import configure_logger, load_settings
from .playback import PlayerProbe, PlayerResolver, PlayerUnavailableError


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ear-trainer players",
        description="Check the audio player candidates in priority order",
    )
    p.add_argument(
        "--player",
        action="append",
        dest="players",
        metavar="NAME",
        help="Player command to try before the built-in list (repeatable)",
    )
    p.add_argument("--verbose", action="store_true", default=None)
    return p


def render_probes(
    console: Console, probes: Sequence[PlayerProbe], selected: Optional[str]
) -> None:
    table = Table(title="Audio players", box=box.SIMPLE)
    table.add_column("Priority", justify="right")
    table.add_column("Command", style="bold")
    table.add_column("Status")
    for idx, probe in enumerate(probes, start=1):
        if probe.name == selected:
            status = Text("selected", style="bold green")
        elif probe.found:
            status = Text("available", style="green")
        elif probe.error:
            status = Text(f"error: {probe.error}", style="red")
        else:
            status = Text("not found", style="dim")
        table.add_row(str(idx), probe.name, status)
    console.print(table)


def run_doctor(
    resolver: PlayerResolver, console: Optional[Console] = None
) -> int:
    console = console or Console()
    probes = resolver.probe_all()
    selected = next((probe.name for probe in probes if probe.found), None)
    render_probes(console, probes, selected)
    if selected is None:
        exc = PlayerUnavailableError(resolver.candidates)
        console.print(Text(str(exc), style="red"))
        return exc.exit_code
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = load_settings(verbose=args.verbose)
    configure_logger("ear_trainer", verbose=settings.verbose)
    return run_doctor(PlayerResolver.with_preferred(args.players))
