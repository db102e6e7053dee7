"""Exception hierarchy shared across ear_trainer commands."""

from __future__ import annotations

__all__ = ["EarTrainerError"]


class EarTrainerError(RuntimeError):
    """Base class for environment failures that end a command.

    ``exit_code`` is the process status the command entry points use when
    the error reaches them.
    """

    exit_code = 1
