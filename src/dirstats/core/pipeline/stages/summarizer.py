from __future__ import annotations

"""
Directory Summarizer Worker.

Encapsulates the per-chunk work unit: for each directory entry in a chunk,
list its immediate children and accumulate regular file counts and sizes.
Deeper levels are covered because the collector already emitted every
nested directory as its own entry in some chunk.

The worker never raises on filesystem errors. Each directory yields an
explicit outcome (complete or failed with a message) and a failed listing
keeps the statistics accumulated before the failure.
"""

import logging
import os
from typing import List, Optional, Sequence

from dirstats.domain.constants import KEY_MODE_NAME, KEY_MODE_RELATIVE_PATH
from dirstats.domain.stats_models import (
    ChunkSummary,
    DirectoryStats,
    ListingError,
    PartialMap,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def summarize_chunk(
        chunk: Sequence[str],
        root: str,
        key_mode: str = KEY_MODE_NAME,
) -> ChunkSummary:
    """
    Build the partial map for one chunk of entries.

    Designed to run inside a worker thread with no shared mutable state:
    the chunk is read-only and the returned map is owned by the caller.

    Args:
        chunk: Ordered subsequence of collected entries.
        root: Scan root, used to derive relative keys.
        key_mode: "name" (directory base name) or "relative_path".

    Returns:
        ChunkSummary: Partial map plus the listing failures of this chunk.
    """
    partial: PartialMap = {}
    errors: List[ListingError] = []

    for path in chunk:
        if not os.path.isdir(path):
            continue

        key = directory_key(path, root, key_mode)
        stats = partial.setdefault(key, DirectoryStats())

        error = _accumulate_children(path, stats)
        if error is not None:
            logger.error(f"Cannot list '{path}': {error}")
            errors.append(ListingError(directory=path, error=error))

    for key, stats in partial.items():
        logger.debug(f"{key}: {stats.file_count} files {stats.total_bytes} bytes")

    return ChunkSummary(partial_map=partial, errors=errors)


def directory_key(path: str, root: str, key_mode: str = KEY_MODE_NAME) -> str:
    """
    Derive the map key of a directory entry.

    With "name", directories sharing a base name at different depths
    (a/build, b/build) collapse into a single key.

    Args:
        path: Directory path.
        root: Scan root.
        key_mode: Key strategy.

    Returns:
        str: Base name, or POSIX-style path relative to the root.
    """
    if key_mode == KEY_MODE_RELATIVE_PATH:
        return os.path.relpath(path, root).replace(os.sep, "/")
    return os.path.basename(os.path.normpath(path))


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _accumulate_children(path: str, stats: DirectoryStats) -> Optional[str]:
    """
    Add the immediate regular-file children of a directory into stats.

    Symlinks to files count as regular files; dangling links do not. The
    listing stops at the first error, leaving what was already added.

    Returns:
        Optional[str]: None on a complete listing, else the error message.
    """
    try:
        with os.scandir(path) as it:
            for entry in it:
                if entry.is_file():
                    stats.add_file(entry.stat().st_size)
    except OSError as e:
        return str(e)
    return None
