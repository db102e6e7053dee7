"""Collection and audio file discovery under the quiz root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .errors import EarTrainerError

__all__ = [
    "AUDIO_EXTENSIONS",
    "CollectionUnreadableError",
    "QuizRootEmptyError",
    "QuizRootMissingError",
    "list_audio_files",
    "list_collections",
]

AUDIO_EXTENSIONS = frozenset({"mp3", "mp4", "wav", "ogg"})

logger = logging.getLogger(__name__)


class QuizRootMissingError(EarTrainerError):
    """Raised when the quiz root directory does not exist."""

    exit_code = 1

    def __init__(self, root: Path) -> None:
        super().__init__(f"No collections directory found at {root}")
        self.root = root


class QuizRootEmptyError(EarTrainerError):
    """Raised when the quiz root exists but holds no collections."""

    exit_code = 2

    def __init__(self, root: Path) -> None:
        super().__init__(f"The collections directory {root} is empty")
        self.root = root


class CollectionUnreadableError(EarTrainerError):
    """Raised when a collection directory cannot be listed."""

    exit_code = 3

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read collection {path}: {reason}")
        self.path = path


def list_collections(root: Path) -> List[str]:
    """Return the collection directory names under ``root`` sorted by name.

    Hidden entries are skipped. A missing root raises
    :class:`QuizRootMissingError`; a root without collections raises
    :class:`QuizRootEmptyError`.
    """
    root = Path(root)
    if not root.is_dir():
        raise QuizRootMissingError(root)
    names = sorted(
        child.name
        for child in root.iterdir()
        if child.is_dir() and not child.name.startswith(".")
    )
    logger.debug("Collections under %s: %s", root, names)
    if not names:
        raise QuizRootEmptyError(root)
    return names


def list_audio_files(collection: Path) -> List[Path]:
    """Return absolute paths of playable files directly inside ``collection``.

    Symlinks are not followed, so each path keeps the entry's own name.
    """
    path = Path(collection)
    try:
        children = list(path.iterdir())
    except OSError as exc:
        raise CollectionUnreadableError(
            path, exc.strerror or str(exc)
        ) from exc
    files = sorted(
        (
            child.absolute()
            for child in children
            if _is_audio_file(child)
        ),
        key=lambda p: p.name.lower(),
    )
    logger.debug("Files in collection %s: %s", path.name, [f.name for f in files])
    return files


def _is_audio_file(path: Path) -> bool:
    suffix = path.suffix.lower().lstrip(".")
    return path.is_file() and suffix in AUDIO_EXTENSIONS
