"""Quiz session state machine.

A session alternates between two modes. In ``MENU`` mode the learner picks a
collection by its 1-based menu number; in ``GUESS`` mode every submitted line
is graded against the label of the sample currently playing. Each sample
allows ``MAX_ATTEMPTS`` graded guesses before the answer is revealed and a
new sample is drawn at random from the collection.

The session performs no rendering. Every operation returns an outcome value
that the shell turns into console output, which keeps the state transitions
testable without a terminal.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Literal, Optional, Sequence, Union

from ..core.errors import EarTrainerError
from ..core.files import list_audio_files, list_collections
from ..playback import PlaybackTask, PlayerResolver
from .answers import equivalent, label_for, normalize

__all__ = [
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
]

MAX_ATTEMPTS = 3
QUIT_WORDS = frozenset({"q", "quit", "exit"})

logger = logging.getLogger(__name__)

Verdict = Literal["correct", "wrong", "revealed", "replay"]
FileLister = Callable[[Path], List[Path]]


class Mode(str, Enum):
    MENU = "menu"
    GUESS = "guess"


class EmptyCollectionError(EarTrainerError):
    """Raised when the selected collection holds no playable files."""

    exit_code = 3

    def __init__(self, collection: str) -> None:
        super().__init__(f"No playable files found in collection '{collection}'")
        self.collection = collection


class EmptyPoolError(ValueError):
    """Raised when a target is requested from an empty pool."""


@dataclass
class QuizState:
    """Mutable state of one quiz run."""

    mode: Mode = Mode.MENU
    current_pool: List[Path] = field(default_factory=list)
    current_target: Optional[Path] = None
    attempts_on_current: int = 0
    total_trials: int = 0
    answered_trials: int = 0
    total_guesses: int = 0
    first_try_correct: int = 0


@dataclass(frozen=True)
class QuizStats:
    """Score snapshot. ``answered`` counts samples solved or revealed."""

    trials: int
    guesses: int
    first_try_correct: int
    answered: int = 0

    @property
    def first_try_rate(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.first_try_correct / self.answered


@dataclass(frozen=True)
class MenuError:
    """An unusable menu entry; the session stays in menu mode."""

    raw: str
    choices: int

    @property
    def message(self) -> str:
        return f"Invalid selection; please choose a number 1-{self.choices}"


@dataclass(frozen=True)
class MenuQuit:
    """The learner asked to leave from the menu."""


@dataclass(frozen=True)
class SelectionOutcome:
    """A collection was selected and its first sample dispatched."""

    collection: str
    answers: List[str]
    playback: PlaybackTask


@dataclass(frozen=True)
class GuessOutcome:
    """Result of handling one line in guess mode.

    ``answer`` carries the display label once it may be shown, that is for
    ``correct`` and ``revealed`` verdicts. ``playback`` is the task for the
    next sample after an advance, or the replay of the current one.
    """

    verdict: Verdict
    guess: str
    attempt: int
    stats: QuizStats
    answer: Optional[str] = None
    first_try: bool = False
    playback: Optional[PlaybackTask] = None

    @property
    def advanced(self) -> bool:
        return self.verdict in ("correct", "revealed")


MenuResult = Union[SelectionOutcome, MenuError, MenuQuit]


def select_next_target(
    pool: Sequence[Path], rng: Optional[random.Random] = None
) -> Path:
    """Pick a target uniformly at random, with replacement."""
    if not pool:
        raise EmptyPoolError("Cannot select a target from an empty pool")
    chooser = rng or random
    return chooser.choice(list(pool))


class QuizSession:
    """Drive menu selection, grading and scoring for one quiz run."""

    def __init__(
        self,
        root: Path,
        collections: Sequence[str],
        resolver: PlayerResolver,
        *,
        rng: Optional[random.Random] = None,
        list_files: FileLister = list_audio_files,
    ) -> None:
        self.root = Path(root)
        self.collections: List[str] = list(collections)
        self.resolver = resolver
        self.state = QuizState()
        self._rng = rng or random.Random()
        self._list_files = list_files

    @classmethod
    def open(
        cls,
        root: Path,
        resolver: PlayerResolver,
        *,
        rng: Optional[random.Random] = None,
    ) -> "QuizSession":
        """Create a session for the collections found under ``root``.

        Propagates :class:`QuizRootMissingError` and
        :class:`QuizRootEmptyError` from collection discovery.
        """
        return cls(root, list_collections(root), resolver, rng=rng)

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def stats(self) -> QuizStats:
        return QuizStats(
            trials=self.state.total_trials,
            guesses=self.state.total_guesses,
            first_try_correct=self.state.first_try_correct,
            answered=self.state.answered_trials,
        )

    def handle_menu(self, raw: str) -> MenuResult:
        """Interpret a menu line: a collection number or a quit word."""
        self._require(Mode.MENU)
        text = raw.strip()
        if text.lower() in QUIT_WORDS:
            return MenuQuit()
        if not (text.isascii() and text.isdigit()):
            return MenuError(text, len(self.collections))
        index = int(text)
        if not 1 <= index <= len(self.collections):
            return MenuError(text, len(self.collections))
        return self.select_collection(index)

    def select_collection(self, index: int) -> SelectionOutcome:
        """Enter guess mode on the ``index``-th (1-based) collection."""
        self._require(Mode.MENU)
        if not 1 <= index <= len(self.collections):
            raise IndexError(f"Collection number out of range: {index}")
        name = self.collections[index - 1]
        files = self._list_files(self.root / name)
        if not files:
            raise EmptyCollectionError(name)

        state = self.state
        state.current_pool = list(files)
        state.attempts_on_current = 0
        state.mode = Mode.GUESS
        answers = sorted({label_for(path) for path in files})
        logger.debug("Selected collection %s (%d files)", name, len(files))
        return SelectionOutcome(name, answers, self._advance())

    def submit_guess(self, raw: str) -> GuessOutcome:
        """Grade ``raw`` against the current target.

        A blank line is not a guess: nothing is counted and the current
        sample is played again.
        """
        self._require(Mode.GUESS)
        state = self.state
        guess = raw.strip()
        if not normalize(guess):
            return GuessOutcome(
                verdict="replay",
                guess=guess,
                attempt=state.attempts_on_current,
                stats=self.stats(),
                playback=self._present(),
            )

        state.total_guesses += 1
        state.attempts_on_current += 1
        attempt = state.attempts_on_current
        target = state.current_target
        assert target is not None
        answer = label_for(target)

        if equivalent(guess, answer):
            first_try = attempt == 1
            if first_try:
                state.first_try_correct += 1
            state.answered_trials += 1
            stats = self.stats()
            playback = self._advance()
            return GuessOutcome(
                verdict="correct",
                guess=guess,
                attempt=attempt,
                stats=stats,
                answer=answer,
                first_try=first_try,
                playback=playback,
            )

        if attempt >= MAX_ATTEMPTS:
            state.answered_trials += 1
            stats = self.stats()
            playback = self._advance()
            return GuessOutcome(
                verdict="revealed",
                guess=guess,
                attempt=attempt,
                stats=stats,
                answer=answer,
                playback=playback,
            )

        return GuessOutcome(
            verdict="wrong",
            guess=guess,
            attempt=attempt,
            stats=self.stats(),
        )

    def cancel(self) -> bool:
        """Abandon the current question and return to the menu.

        Returns ``False`` when already at the menu, which means the caller
        should end the run.
        """
        state = self.state
        if state.mode is not Mode.GUESS:
            return False
        logger.debug("Back out of guess mode to menu mode")
        state.mode = Mode.MENU
        state.current_pool = []
        state.current_target = None
        state.attempts_on_current = 0
        return True

    def _advance(self) -> PlaybackTask:
        state = self.state
        target = select_next_target(state.current_pool, self._rng)
        state.current_target = target
        state.attempts_on_current = 0
        state.total_trials += 1
        logger.debug("Selected file %s (answer: %s)", target, label_for(target))
        return self._present()

    def _present(self) -> PlaybackTask:
        target = self.state.current_target
        assert target is not None
        return self.resolver.resolve().play_file(target)

    def _require(self, mode: Mode) -> None:
        if self.state.mode is not mode:
            raise RuntimeError(
                f"Operation requires {mode.value} mode, "
                f"session is in {self.state.mode.value} mode"
            )
