"""External audio player discovery and fire-and-forget playback.

The quiz never decodes audio itself. Instead it looks for one of a handful
of well-known command-line players on ``PATH`` and hands each sample to it.
Discovery walks the candidate list in priority order and stops at the first
executable found; the outcome, including "nothing found", is remembered by
the :class:`PlayerResolver` so the filesystem is probed at most once.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from .core.errors import EarTrainerError

__all__ = [
    "DEFAULT_PLAYERS",
    "AudioPlayer",
    "PlaybackTask",
    "PlayerProbe",
    "PlayerResolver",
    "PlayerUnavailableError",
]

DEFAULT_PLAYERS: tuple[str, ...] = (
    "mplayer",
    "afplay",
    "mpg123",
    "mpg321",
    "play",
)

logger = logging.getLogger(__name__)


class ProcessHandle(Protocol):
    """The subset of :class:`subprocess.Popen` used by playback tasks."""

    def poll(self) -> Optional[int]: ...

    def wait(self, timeout: Optional[float] = None) -> int: ...


ExistsCheck = Callable[[str], bool]
Spawner = Callable[[Sequence[str]], ProcessHandle]


class PlayerUnavailableError(EarTrainerError):
    """Raised when none of the candidate players can be found."""

    exit_code = 4

    def __init__(self, candidates: Sequence[str]) -> None:
        names = ", ".join(candidates) or "(none)"
        super().__init__(f"No supported audio player found (tried: {names})")
        self.candidates = tuple(candidates)


@dataclass(frozen=True)
class PlayerProbe:
    """Result of checking a single candidate executable."""

    name: str
    found: bool
    error: str | None = None


class PlaybackTask:
    """Handle on a dispatched playback.

    Creating the task only means the player process was started. Use
    :meth:`done` to poll or :meth:`wait` to block until playback ends.
    """

    def __init__(self, command: str, path: Path, process: ProcessHandle):
        self.command = command
        self.path = path
        self._process = process

    def done(self) -> bool:
        return self._process.poll() is not None

    def wait(self, timeout: Optional[float] = None) -> int:
        return self._process.wait(timeout=timeout)

    def __repr__(self) -> str:
        state = "done" if self.done() else "running"
        return f"PlaybackTask({self.command!r}, {str(self.path)!r}, {state})"


class AudioPlayer:
    """A resolved player command able to play files."""

    def __init__(self, command: str, spawn: Spawner):
        self.command = command
        self._spawn = spawn

    def play_file(self, path: Path) -> PlaybackTask:
        argv = [self.command, str(path)]
        logger.debug("Dispatch %s", " ".join(argv))
        process = self._spawn(argv)
        return PlaybackTask(self.command, Path(path), process)


def which_exists(name: str) -> bool:
    return shutil.which(name) is not None


def spawn_detached(argv: Sequence[str]) -> ProcessHandle:
    return subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


_UNRESOLVED = object()


class PlayerResolver:
    """Find and memoize the first available player among ``candidates``."""

    def __init__(
        self,
        candidates: Sequence[str] = DEFAULT_PLAYERS,
        *,
        exists: ExistsCheck = which_exists,
        spawn: Spawner = spawn_detached,
    ) -> None:
        self.candidates: tuple[str, ...] = tuple(candidates)
        self._exists = exists
        self._spawn = spawn
        self._outcome: object = _UNRESOLVED

    @classmethod
    def with_preferred(
        cls,
        preferred: Optional[Sequence[str]],
        **kwargs,
    ) -> "PlayerResolver":
        """Build a resolver probing ``preferred`` names before the defaults."""
        ordered: list[str] = []
        for name in [*(preferred or ()), *DEFAULT_PLAYERS]:
            if name and name not in ordered:
                ordered.append(name)
        return cls(ordered, **kwargs)

    @property
    def resolved(self) -> bool:
        return self._outcome is not _UNRESOLVED

    def resolve(self) -> AudioPlayer:
        """Return the playback capability, probing on first use only.

        Raises :class:`PlayerUnavailableError` when every candidate was
        passed over; the same error is raised again on later calls.
        """
        if self._outcome is _UNRESOLVED:
            self._outcome = self._search()
        if isinstance(self._outcome, PlayerUnavailableError):
            raise PlayerUnavailableError(self._outcome.candidates)
        return self._outcome  # type: ignore[return-value]

    def probe_all(self) -> list[PlayerProbe]:
        """Check every candidate without affecting the memoized outcome."""
        return [self._probe(name) for name in self.candidates]

    def _search(self) -> AudioPlayer | PlayerUnavailableError:
        for name in self.candidates:
            logger.debug("Look for player %s", name)
            if self._probe(name).found:
                logger.debug("Found player %s", name)
                return AudioPlayer(name, self._spawn)
            logger.debug("Did not find player %s", name)
        return PlayerUnavailableError(self.candidates)

    def _probe(self, name: str) -> PlayerProbe:
        try:
            return PlayerProbe(name, bool(self._exists(name)))
        except Exception as exc:
            logger.debug("Probe for %s failed: %s", name, exc)
            return PlayerProbe(name, False, str(exc))
