import argparse
import logging
import random
from pathlib import Path
from typing import Mapping, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core import (
    EarTrainerError,
    configure_logger,
    list_audio_files,
    list_collections,
    load_settings,
)
from ..playback import PlayerResolver
from .session import QuizSession
from .shell import InputProvider, console_input_provider, run_shell

logger = logging.getLogger(__name__)


def _add_root_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        help="Directory holding one sub-directory per collection "
        "(defaults to $EAR_TRAINER_HOME or ~/ear-trainer)",
    )


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Trace diagnostics to stderr (same as EAR_TRAINER_DEBUG=1)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write JSON log lines to this file",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ear-trainer quiz",
        description="Identify notes and chords played from your collections",
    )
    _add_root_argument(p)
    p.add_argument(
        "--player",
        action="append",
        dest="players",
        metavar="NAME",
        help="Player command to try before the built-in list (repeatable)",
    )
    p.add_argument(
        "--seed",
        type=int,
        help="Seed the sample picker for a reproducible order",
    )
    _add_logging_arguments(p)
    return p


def build_collections_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ear-trainer collections",
        description="List the collections available under the quiz root",
    )
    _add_root_argument(p)
    _add_logging_arguments(p)
    return p


def run_quiz(
    args: argparse.Namespace,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
    resolver: Optional[PlayerResolver] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Run an interactive quiz and return the process exit code."""
    settings = load_settings(env, root=args.root, verbose=args.verbose)
    configure_logger(
        "ear_trainer", verbose=settings.verbose, log_file=args.log_file
    )
    console = console or Console()
    resolver = resolver or PlayerResolver.with_preferred(args.players)
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        session = QuizSession.open(settings.root, resolver, rng=rng)
        provider = input_provider or console_input_provider(console)
        return run_shell(session, console, provider)
    except EarTrainerError as exc:
        logger.debug("Quiz ended: %s", exc)
        console.print(Text(str(exc), style="red"))
        return exc.exit_code


def run_collections(
    args: argparse.Namespace,
    *,
    console: Optional[Console] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Print each collection with its number of playable files."""
    settings = load_settings(env, root=args.root, verbose=args.verbose)
    configure_logger(
        "ear_trainer", verbose=settings.verbose, log_file=args.log_file
    )
    console = console or Console()
    try:
        names = list_collections(settings.root)
        counts = [len(list_audio_files(settings.root / n)) for n in names]
    except EarTrainerError as exc:
        console.print(Text(str(exc), style="red"))
        return exc.exit_code

    console.print(Text(f"Collections in {settings.root}", style="bold"))
    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Collection", style="yellow")
    table.add_column("Files", justify="right")
    for idx, (name, count) in enumerate(zip(names, counts), start=1):
        table.add_row(
            str(idx), Text(name), str(count) if count else "[red]0[/]"
        )
    console.print(table)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    raise SystemExit(run_quiz(args))


def collections_main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_collections_parser()
    args = parser.parse_args(argv)
    raise SystemExit(run_collections(args))
