"""Tests for on-disk file sourcing."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from stylerun.errors import PathNotFound
from stylerun.models import FileFilter
from stylerun.sources.local import LocalFileSource

_TREE = {
    "src/App.cs": "class App {}\n",
    "src/App.Designer.cs": "partial class App {}\n",
    "src/notes.txt": "todo\n",
    "src/nested/Deep.cs": "class Deep {}\n",
}


def _physical(files) -> list[str]:
    return [resolved.physical_path for resolved in files]


def test_directory_without_recursion_returns_direct_children(write_tree) -> None:
    root = write_tree(_TREE)

    files = LocalFileSource().resolve([str(root / "src")], recursive=False)

    assert _physical(files) == [
        str(root / "src" / "App.Designer.cs"),
        str(root / "src" / "App.cs"),
        str(root / "src" / "notes.txt"),
    ]


def test_directory_with_recursion_includes_nested_files(write_tree) -> None:
    root = write_tree(_TREE)

    files = LocalFileSource().resolve([str(root / "src")], recursive=True)

    assert str(root / "src" / "nested" / "Deep.cs") in _physical(files)
    assert len(files) == 4


def test_glob_pattern_matches_file_names(write_tree) -> None:
    root = write_tree(_TREE)

    files = LocalFileSource().resolve([str(root / "src" / "*.cs")], recursive=True)

    assert sorted(_physical(files)) == sorted(
        [
            str(root / "src" / "App.cs"),
            str(root / "src" / "App.Designer.cs"),
            str(root / "src" / "nested" / "Deep.cs"),
        ]
    )


def test_glob_without_directory_uses_current_directory(
    write_tree, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = write_tree(_TREE)
    monkeypatch.chdir(root / "src")

    files = LocalFileSource().resolve(["App?cs"])

    assert _physical(files) == [str(root / "src" / "App.cs")]


def test_literal_file_becomes_absolute(write_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    root = write_tree(_TREE)
    monkeypatch.chdir(root)

    files = LocalFileSource().resolve([os.path.join("src", "App.cs")])

    assert len(files) == 1
    assert files[0].physical_path == str(root / "src" / "App.cs")
    assert files[0].display_path == files[0].physical_path


def test_filter_applies_after_enumeration(write_tree) -> None:
    root = write_tree(_TREE)

    files = LocalFileSource().resolve(
        [str(root / "src")],
        recursive=True,
        file_filter=FileFilter(includes=(r"\.cs$",), excludes=("Designer",)),
    )
    assert len(files) == 3

    files = LocalFileSource().resolve(
        [str(root / "src")],
        recursive=True,
        file_filter=FileFilter(excludes=(r"\.Designer\.", r"\.txt$")),
    )
    assert sorted(Path(path).name for path in _physical(files)) == ["App.cs", "Deep.cs"]


def test_overlapping_inputs_keep_duplicates(write_tree) -> None:
    root = write_tree(_TREE)
    target = str(root / "src" / "App.cs")

    files = LocalFileSource().resolve([target, str(root / "src" / "App.cs")])

    assert _physical(files) == [target, target]


def test_missing_input_raises_path_not_found(tmp_path: Path) -> None:
    missing = str(tmp_path / "missing.cs")

    with pytest.raises(PathNotFound) as excinfo:
        LocalFileSource().resolve([missing])

    assert excinfo.value.input_spec == missing
    assert str(excinfo.value) == f"Path not found: {missing}"


def test_missing_pattern_directory_raises_path_not_found(tmp_path: Path) -> None:
    with pytest.raises(PathNotFound):
        LocalFileSource().resolve([str(tmp_path / "nope" / "*.cs")])
