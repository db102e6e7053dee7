from __future__ import annotations

from pathlib import Path

import pytest

from ear_trainer.quiz.answers import (
    display_label,
    equivalent,
    label_for,
    normalize,
)


def test_normalize_examples() -> None:
    assert normalize("C#") == "c#"
    assert normalize("A Major/Open") == "a major open"
    assert normalize("  D   b ") == "d b"


def test_normalize_keeps_flat_sign() -> None:
    assert normalize("B♭ minor") == "b♭ minor"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "C#",
        "C#!",
        "A major (open)",
        "--E--",
        "a;b;a;d",
        "Ünïcödé chord",
        "B♭/D♭",
        "\tG7\n",
    ],
)
def test_normalize_is_idempotent(text: str) -> None:
    once = normalize(text)
    assert normalize(once) == once


def test_equivalent_ignores_separators() -> None:
    assert equivalent("A major open", "A major/open")
    assert equivalent("a major (open)", "A major/open")
    assert equivalent("A;B;A;D", "A, B, A, D")


def test_equivalent_is_order_sensitive() -> None:
    assert not equivalent("open A major", "A major open")


def test_equivalent_sharps() -> None:
    assert equivalent("C#", "c #")
    assert not equivalent("C#", "D#")
    assert not equivalent("C#", "C")


def test_equivalent_rejects_extra_tokens() -> None:
    assert not equivalent("A major", "A major open")


def test_display_label_capitalizes_first_character() -> None:
    assert display_label("c#") == "C#"
    assert display_label("a_major-open") == "A major open"
    assert display_label("") == ""


def test_label_for_strips_extension() -> None:
    assert label_for(Path("/samples/chords/A major (open).mp3")) == (
        "A major open"
    )
    assert label_for(Path("f#.wav")) == "F#"
