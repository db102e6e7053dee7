"""Shared testing fixtures for the ear_trainer test suite."""

from .player import (  # noqa: F401
    FakeExists,
    FakeProcess,
    FakeSpawner,
    make_resolver,
)
from .workspace import QuizRootBuilder, build_tree  # noqa: F401

__all__ = [
    "FakeExists",
    "FakeProcess",
    "FakeSpawner",
    "QuizRootBuilder",
    "build_tree",
    "make_resolver",
]
