"""Tests for stylerun.roots."""

from __future__ import annotations

import os

from stylerun.roots import common_root


def test_common_root_of_nothing_is_empty() -> None:
    assert common_root([]) == ""


def test_common_root_of_single_file_keeps_filename() -> None:
    assert common_root(["/a/b/c.txt"]) == os.sep.join(["", "a", "b", "c.txt"])


def test_common_root_shared_directory() -> None:
    assert common_root(["/a/b/x.cs", "/a/b/y.cs"]) == os.sep.join(["", "a", "b"])


def test_common_root_shrinks_to_divergence() -> None:
    assert common_root(["/a/b/x.cs", "/a/c/y.cs"]) == os.sep.join(["", "a"])


def test_common_root_different_drives_is_empty() -> None:
    assert common_root(["C:\\a\\x", "D:\\b\\y"]) == ""


def test_common_root_splits_mixed_separators() -> None:
    assert common_root(["C:\\src/app\\one.cs", "C:/src\\app/two.cs"]) == os.sep.join(
        ["C:", "src", "app"]
    )


def test_common_root_handles_shorter_later_path() -> None:
    assert common_root(["src/app/deep/file.cs", "src/app"]) == os.sep.join(["src", "app"])
