from __future__ import annotations

from pathlib import Path

import pytest

from ear_trainer.core.files import (
    CollectionUnreadableError,
    QuizRootEmptyError,
    QuizRootMissingError,
    list_audio_files,
    list_collections,
)
from ear_trainer.quiz.answers import label_for


def test_list_collections_sorted_directories_only(quiz_root):
    root = quiz_root.create(
        {
            "triads": None,
            "Intervals": None,
            ".cache": None,
            "notes.txt": "not a collection",
        }
    )

    assert list_collections(root) == ["Intervals", "triads"]


def test_list_collections_missing_root(tmp_path):
    with pytest.raises(QuizRootMissingError) as excinfo:
        list_collections(tmp_path / "missing")
    assert excinfo.value.root == tmp_path / "missing"
    assert excinfo.value.exit_code == 1


def test_list_collections_root_is_a_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(QuizRootMissingError):
        list_collections(target)


def test_list_collections_only_files_counts_as_empty(quiz_root):
    root = quiz_root.create({"stray.mp3": b"\x00"})
    with pytest.raises(QuizRootEmptyError) as excinfo:
        list_collections(root)
    assert excinfo.value.exit_code == 2


def test_list_audio_files_filters_by_extension(quiz_root):
    path = quiz_root.collection(
        "mixed",
        ["b.MP3", "a.wav", "c.ogg", "d.mp4", "e.flac", "readme.md", "mp3"],
    )
    (path / "nested.wav").mkdir()

    files = list_audio_files(path)

    assert [f.name for f in files] == ["a.wav", "b.MP3", "c.ogg", "d.mp4"]
    assert all(f.is_absolute() for f in files)


def test_list_audio_files_keeps_symlink_names(quiz_root, tmp_path):
    blobs = tmp_path / "blobs"
    blobs.mkdir()
    (blobs / "ab12cd.mp3").write_bytes(b"\x00")
    path = quiz_root.collection("notes", ["D.mp3"])
    (path / "C#.mp3").symlink_to(blobs / "ab12cd.mp3")

    files = list_audio_files(path)

    assert [f.name for f in files] == ["C#.mp3", "D.mp3"]
    assert [label_for(f) for f in files] == ["C#", "D"]
    assert files[0].parent == path


def test_list_audio_files_unreadable(tmp_path):
    missing = tmp_path / "gone"
    with pytest.raises(CollectionUnreadableError) as excinfo:
        list_audio_files(missing)
    assert excinfo.value.path == missing
    assert excinfo.value.exit_code == 3


def test_list_audio_files_wraps_os_errors(monkeypatch, tmp_path):
    def boom(self):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "iterdir", boom)

    with pytest.raises(CollectionUnreadableError) as excinfo:
        list_audio_files(tmp_path)
    assert "Permission denied" in str(excinfo.value)
