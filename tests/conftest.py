from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import QuizRootBuilder  # noqa: E402

from ear_trainer.core.settings import DEBUG_ENV, ROOT_ENV  # noqa: E402


@pytest.fixture
def quiz_root(tmp_path: Path) -> QuizRootBuilder:
    """Provide a quiz-root builder bound to pytest's per-test tmp directory."""

    return QuizRootBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    monkeypatch.delenv(ROOT_ENV, raising=False)
    yield
    logger = logging.getLogger("ear_trainer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
