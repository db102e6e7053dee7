"""Core shared helpers for ear_trainer commands."""

from __future__ import annotations

from .errors import EarTrainerError
from .files import (
    AUDIO_EXTENSIONS,
    CollectionUnreadableError,
    QuizRootEmptyError,
    QuizRootMissingError,
    list_audio_files,
    list_collections,
)
from .logging import JsonLogFormatter, configure_logger
from .settings import (
    DEBUG_ENV,
    ROOT_ENV,
    Settings,
    load_settings,
)

__all__ = [
    "EarTrainerError",
    "AUDIO_EXTENSIONS",
    "CollectionUnreadableError",
    "QuizRootEmptyError",
    "QuizRootMissingError",
    "list_audio_files",
    "list_collections",
    "configure_logger",
    "JsonLogFormatter",
    "DEBUG_ENV",
    "ROOT_ENV",
    "Settings",
    "load_settings",
]
