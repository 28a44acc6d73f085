from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and validation helpers used to turn raw user
input into a root directory the scanning engine can trust.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str]) -> str:
    """
    Normalize a raw path string into an absolute filesystem path.

    Strips the trailing line break left by line-oriented input and expands
    environment variables ($VAR/%VAR%) and user home shortcuts (~/).
    An empty input stays empty so that validation rejects it.

    Args:
        path: Raw input path string.

    Returns:
        str: Normalized absolute path, or an empty string.
    """
    p = (path or "").rstrip("\r\n")
    if not p.strip():
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def is_existing_directory(path: str) -> bool:
    """
    Check whether a path resolves to an existing directory.

    Args:
        path: Path to inspect (symlinks are followed).

    Returns:
        bool: True if the path is a directory.
    """
    if not path:
        return False
    return os.path.isdir(path)
