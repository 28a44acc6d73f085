from __future__ import annotations

"""
Unit tests for the Directory Summarizer Worker.

Verifies:
1. Only immediate regular-file children are counted per directory entry.
2. Non-directory entries are ignored; empty directories yield {0, 0}.
3. Listing failures keep the partial statistics and do not abort the chunk.
4. Key derivation in 'name' and 'relative_path' modes.
"""

import os
from pathlib import Path
from typing import Any, Iterator, List
from unittest.mock import patch

import pytest

from dirstats.core.pipeline.stages.summarizer import directory_key, summarize_chunk
from dirstats.core.services.collector import collect_entries
from dirstats.domain.stats_models import DirectoryStats

_REAL_SCANDIR = os.scandir


class _FailingScandir:
    """Context manager yielding a few real entries, then raising."""

    def __init__(self, path: str, yield_before_failure: int) -> None:
        self._entries = sorted(_REAL_SCANDIR(path), key=lambda e: e.name)
        self._limit = yield_before_failure

    def __enter__(self) -> Iterator[Any]:
        return self._iterate()

    def __exit__(self, *exc: Any) -> None:
        return None

    def _iterate(self) -> Iterator[Any]:
        for entry in self._entries[:self._limit]:
            yield entry
        raise PermissionError(13, "Permission denied")


def test_single_directory_single_file(make_tree) -> None:
    root = make_tree({"thatDir": {"file.bin": 100}})
    summary = summarize_chunk(collect_entries(str(root)), str(root))

    assert summary.partial_map == {"thatDir": DirectoryStats(file_count=1, total_bytes=100)}
    assert summary.errors == []


def test_counts_immediate_children_only(sample_tree: Path) -> None:
    """src holds a.py and b.py directly; pkg/mod.py belongs to 'pkg'."""
    summary = summarize_chunk(collect_entries(str(sample_tree)), str(sample_tree))

    assert summary.partial_map["src"] == DirectoryStats(2, 30)
    assert summary.partial_map["pkg"] == DirectoryStats(1, 30)
    assert summary.partial_map["docs"] == DirectoryStats(1, 5)


def test_empty_directory_is_present_with_zero_stats(sample_tree: Path) -> None:
    summary = summarize_chunk(collect_entries(str(sample_tree)), str(sample_tree))
    assert summary.partial_map["empty"] == DirectoryStats(0, 0)


def test_file_entries_are_skipped(sample_tree: Path) -> None:
    chunk = [str(sample_tree / "top.txt"), str(sample_tree / "src" / "a.py")]
    summary = summarize_chunk(chunk, str(sample_tree))
    assert summary.partial_map == {}


def test_empty_chunk_returns_empty_summary(tmp_path: Path) -> None:
    summary = summarize_chunk([], str(tmp_path))
    assert summary.partial_map == {}
    assert summary.errors == []


def test_vanished_entry_is_ignored(tmp_path: Path) -> None:
    summary = summarize_chunk([str(tmp_path / "gone")], str(tmp_path))
    assert summary.partial_map == {}


def test_listing_failure_keeps_partial_counts(make_tree) -> None:
    """
    A permission error midway through 'locked' leaves the two files already
    seen, and the unrelated 'open' directory is unaffected.
    """
    root = make_tree({
        "locked": {"f1": 10, "f2": 10, "f3": 10},
        "open": {"g1": 4, "g2": 6},
    })
    locked = str(root / "locked")

    def fake_scandir(path: Any) -> Any:
        if os.fspath(path) == locked:
            return _FailingScandir(locked, yield_before_failure=2)
        return _REAL_SCANDIR(path)

    entries = collect_entries(str(root))
    with patch("dirstats.core.pipeline.stages.summarizer.os.scandir", side_effect=fake_scandir):
        summary = summarize_chunk(entries, str(root))

    assert summary.partial_map["locked"] == DirectoryStats(2, 20)
    assert summary.partial_map["open"] == DirectoryStats(2, 10)
    assert len(summary.errors) == 1
    assert summary.errors[0].directory == locked
    assert "Permission denied" in summary.errors[0].error


def test_listing_failure_is_logged(make_tree, caplog: pytest.LogCaptureFixture) -> None:
    root = make_tree({"locked": {"f1": 1}})

    with patch(
            "dirstats.core.pipeline.stages.summarizer.os.scandir",
            side_effect=PermissionError(13, "Permission denied"),
    ):
        with caplog.at_level("ERROR", logger="dirstats.core.pipeline.stages.summarizer"):
            summary = summarize_chunk([str(root / "locked")], str(root))

    assert summary.partial_map["locked"] == DirectoryStats(0, 0)
    assert any("Cannot list" in r.message for r in caplog.records)


def test_failure_does_not_stop_rest_of_chunk(make_tree) -> None:
    root = make_tree({"a": {"x": 1}, "b": {"y": 2}, "c": {"z": 3}})
    failing = str(root / "b")

    def fake_scandir(path: Any) -> Any:
        if os.fspath(path) == failing:
            raise FileNotFoundError(2, "No such file or directory")
        return _REAL_SCANDIR(path)

    chunk: List[str] = [str(root / "a"), failing, str(root / "c")]
    with patch("dirstats.core.pipeline.stages.summarizer.os.scandir", side_effect=fake_scandir):
        summary = summarize_chunk(chunk, str(root))

    assert summary.partial_map["a"] == DirectoryStats(1, 1)
    assert summary.partial_map["b"] == DirectoryStats(0, 0)
    assert summary.partial_map["c"] == DirectoryStats(1, 3)


def test_same_name_in_one_chunk_is_summed_by_name(make_tree) -> None:
    root = make_tree({"a": {"build": {"o1": 5}}, "b": {"build": {"o2": 7, "o3": 1}}})
    summary = summarize_chunk(collect_entries(str(root)), str(root))
    assert summary.partial_map["build"] == DirectoryStats(3, 13)


def test_relative_path_mode_keeps_same_names_apart(make_tree) -> None:
    root = make_tree({"a": {"build": {"o1": 5}}, "b": {"build": {"o2": 7, "o3": 1}}})
    summary = summarize_chunk(collect_entries(str(root)), str(root), key_mode="relative_path")

    assert summary.partial_map["a/build"] == DirectoryStats(1, 5)
    assert summary.partial_map["b/build"] == DirectoryStats(2, 8)
    assert "build" not in summary.partial_map


@pytest.mark.skipif(os.name == "nt", reason="POSIX symlinks required")
def test_symlinks_to_files_count_and_dangling_links_do_not(make_tree) -> None:
    root = make_tree({"d": {"real": 9}})
    os.symlink(root / "d" / "real", root / "d" / "alias")
    os.symlink(root / "d" / "missing", root / "d" / "dangling")

    summary = summarize_chunk([str(root / "d")], str(root))

    assert summary.partial_map["d"] == DirectoryStats(2, 18)
    assert summary.errors == []


@pytest.mark.parametrize("mode, expected", [("name", "build"), ("relative_path", "a/build")])
def test_directory_key(tmp_path: Path, mode: str, expected: str) -> None:
    path = os.path.join(str(tmp_path), "a", "build")
    assert directory_key(path, str(tmp_path), mode) == expected
