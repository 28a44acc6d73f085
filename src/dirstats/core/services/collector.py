from __future__ import annotations

"""
Path Collection Service.

Performs the single recursive walk of the scan root and materializes every
entry (files and directories, any depth) into a flat list that the
partitioner can slice statically.
"""

import logging
import os
from typing import List

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_entries(root: str) -> List[str]:
    """
    Walk the root recursively and return every entry path found.

    Entries are emitted top-down in walk order: for each visited directory,
    its subdirectories first, then its files. The root itself is not an
    entry. Symlinked directories are listed as entries but never descended
    into, so link cycles cannot trap the walk.

    Args:
        root: Validated, existing directory.

    Returns:
        List[str]: Absolute paths of all entries, fully materialized.
    """
    root_abs = os.path.abspath(root)
    entries: List[str] = []

    for current, dirs, files in os.walk(root_abs, onerror=_log_walk_error):
        entries.extend(os.path.join(current, d) for d in dirs)
        entries.extend(os.path.join(current, f) for f in files)

    logger.debug(f"Collected {len(entries)} entries under {root_abs}")
    return entries


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _log_walk_error(error: OSError) -> None:
    """The walk skips unreadable directories; record them and keep going."""
    logger.warning(f"Cannot descend into '{error.filename}': {error.strerror or error}")
