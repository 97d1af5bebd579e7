"""Tests for include/exclude path matching."""

from __future__ import annotations

import pytest

from stylerun.errors import ArgumentError
from stylerun.matcher import filter_paths, matches, validate
from stylerun.models import FileFilter


def test_include_requires_a_match() -> None:
    file_filter = FileFilter(includes=(r"\.cs$",))

    assert matches("Foo.cs", file_filter) is True
    assert matches("Foo.txt", file_filter) is False


def test_exclude_rejects_matching_paths() -> None:
    file_filter = FileFilter(excludes=("Generated",))

    assert matches("Foo.Generated.cs", file_filter) is False
    assert matches("Foo.cs", file_filter) is True


def test_includes_take_precedence_over_excludes() -> None:
    file_filter = FileFilter(includes=(r"\.cs$",), excludes=("Generated",))

    assert matches("Foo.Generated.cs", file_filter) is True
    assert matches("Foo.txt", file_filter) is False


def test_patterns_are_case_insensitive_and_unanchored() -> None:
    file_filter = FileFilter(includes=("tests/",))

    assert matches("/repo/Tests/unit/FooTests.cs", file_filter) is True


def test_empty_filter_accepts_everything() -> None:
    assert matches("anything.bin", FileFilter()) is True


def test_filter_paths_preserves_order_and_duplicates() -> None:
    paths = ["b.cs", "a.txt", "b.cs", "c.cs"]

    assert filter_paths(paths, FileFilter(includes=(r"\.cs$",))) == ["b.cs", "b.cs", "c.cs"]


def test_invalid_pattern_is_an_argument_error() -> None:
    with pytest.raises(ArgumentError) as excinfo:
        validate(FileFilter(excludes=("[unclosed",)))

    assert "[unclosed" in str(excinfo.value)
