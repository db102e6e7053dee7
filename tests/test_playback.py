from __future__ import annotations

from pathlib import Path

import pytest

from fixtures import FakeProcess, make_resolver

from ear_trainer.playback import (
    DEFAULT_PLAYERS,
    AudioPlayer,
    PlaybackTask,
    PlayerResolver,
    PlayerUnavailableError,
)


def test_resolve_picks_first_available_in_priority_order() -> None:
    resolver, exists, _ = make_resolver(available=("mpg321", "mpg123"))

    player = resolver.resolve()

    assert player.command == "mpg123"
    assert exists.calls == ["mplayer", "afplay", "mpg123"]


def test_resolve_is_memoized() -> None:
    resolver, exists, _ = make_resolver(available=("afplay",))

    first = resolver.resolve()
    second = resolver.resolve()

    assert first is second
    assert exists.calls == ["mplayer", "afplay"]
    assert resolver.resolved


def test_resolve_failure_is_terminal_and_memoized() -> None:
    resolver, exists, _ = make_resolver(available=())

    with pytest.raises(PlayerUnavailableError) as excinfo:
        resolver.resolve()
    assert excinfo.value.candidates == DEFAULT_PLAYERS
    assert excinfo.value.exit_code == 4
    assert exists.calls == list(DEFAULT_PLAYERS)

    with pytest.raises(PlayerUnavailableError):
        resolver.resolve()
    assert exists.calls == list(DEFAULT_PLAYERS)


def test_empty_candidate_list_fails() -> None:
    resolver, exists, _ = make_resolver(available=("play",), candidates=())

    with pytest.raises(PlayerUnavailableError):
        resolver.resolve()
    assert exists.calls == []


def test_probe_errors_fall_through_to_next_candidate() -> None:
    calls = []

    def flaky_exists(name: str) -> bool:
        calls.append(name)
        if name == "first":
            raise PermissionError("denied")
        return name == "second"

    resolver = PlayerResolver(
        ["first", "second"], exists=flaky_exists, spawn=FakeProcess
    )

    assert resolver.resolve().command == "second"
    assert calls == ["first", "second"]


def test_probe_all_reports_each_candidate_without_resolving() -> None:
    def exists(name: str) -> bool:
        if name == "broken":
            raise OSError("bad PATH entry")
        return name == "ok"

    resolver = PlayerResolver(
        ["missing", "broken", "ok"], exists=exists, spawn=FakeProcess
    )

    probes = resolver.probe_all()

    assert [(p.name, p.found) for p in probes] == [
        ("missing", False),
        ("broken", False),
        ("ok", True),
    ]
    assert probes[1].error == "bad PATH entry"
    assert not resolver.resolved


def test_with_preferred_puts_names_first_without_duplicates() -> None:
    resolver = PlayerResolver.with_preferred(["ffplay", "mpg123", ""])

    assert resolver.candidates == (
        "ffplay",
        "mpg123",
        "mplayer",
        "afplay",
        "mpg321",
        "play",
    )


def test_with_preferred_none_uses_defaults() -> None:
    assert PlayerResolver.with_preferred(None).candidates == DEFAULT_PLAYERS


def test_play_file_dispatches_without_waiting(tmp_path: Path) -> None:
    resolver, _, spawner = make_resolver(available=("play",))
    sample = tmp_path / "C#.wav"

    task = resolver.resolve().play_file(sample)

    assert isinstance(task, PlaybackTask)
    assert spawner.processes[0].argv == ["play", str(sample)]
    assert task.path == sample
    assert not task.done()
    assert spawner.processes[0].wait_calls == []


def test_playback_task_completion_can_be_awaited(tmp_path: Path) -> None:
    process = FakeProcess(["mpg123", "x.mp3"])
    task = PlaybackTask("mpg123", tmp_path / "x.mp3", process)

    assert not task.done()
    assert "running" in repr(task)
    assert task.wait(timeout=2.0) == 0
    assert process.wait_calls == [2.0]
    assert task.done()


def test_audio_player_propagates_spawn_errors(tmp_path: Path) -> None:
    def spawn(argv):
        raise FileNotFoundError(argv[0])

    player = AudioPlayer("mplayer", spawn)

    with pytest.raises(FileNotFoundError):
        player.play_file(tmp_path / "a.mp3")
