from ._main import build_arg_parser
from .answers import display_label, equivalent, label_for, normalize
from .session import (
    MAX_ATTEMPTS,
    EmptyCollectionError,
    EmptyPoolError,
    GuessOutcome,
    MenuError,
    MenuQuit,
    Mode,
    QuizSession,
    QuizState,
    QuizStats,
    SelectionOutcome,
    select_next_target,
)
from .shell import run_shell

__all__ = [
    "build_arg_parser",
    "display_label",
    "equivalent",
    "label_for",
    "normalize",
    "MAX_ATTEMPTS",
    "EmptyCollectionError",
    "EmptyPoolError",
    "GuessOutcome",
    "MenuError",
    "MenuQuit",
    "Mode",
    "QuizSession",
    "QuizState",
    "QuizStats",
    "SelectionOutcome",
    "select_next_target",
    "run_shell",
]
