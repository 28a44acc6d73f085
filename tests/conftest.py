from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Factories that materialize synthetic directory trees.
3. A naive single-threaded walk used as the reference for totals.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Tuple, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

TreeLayout = Dict[str, Union[int, Dict[str, Any]]]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def build_tree(base: Path, layout: TreeLayout) -> None:
    """
    Materialize a nested layout: int values are file sizes, dicts are folders.
    """
    base.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        target = base / name
        if isinstance(value, dict):
            build_tree(target, value)
        else:
            target.write_bytes(b"x" * value)


def naive_totals(root: Path) -> Tuple[int, int]:
    """Reference file count and byte total of every regular file below root."""
    count = 0
    size = 0
    for current, _dirs, files in os.walk(root):
        for f in files:
            count += 1
            size += os.path.getsize(os.path.join(current, f))
    return count, size


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeLayout], Path]:
    """Return a factory building a tree under a fresh 'root' directory."""
    def _make(layout: TreeLayout) -> Path:
        root = tmp_path / "root"
        build_tree(root, layout)
        return root
    return _make


@pytest.fixture
def sample_tree(make_tree: Callable[[TreeLayout], Path]) -> Path:
    """
    Mixed tree used across unit and integration tests.

    Structure:
    /root
      top.txt (7)
      /src
        a.py (10), b.py (20)
        /pkg
          mod.py (30)
      /docs
        readme.md (5)
      /empty
    """
    return make_tree({
        "top.txt": 7,
        "src": {"a.py": 10, "b.py": 20, "pkg": {"mod.py": 30}},
        "docs": {"readme.md": 5},
        "empty": {},
    })


@pytest.fixture
def reference_totals() -> Callable[[Path], Tuple[int, int]]:
    """Expose the naive single-threaded walk to tests."""
    return naive_totals
