from __future__ import annotations

"""
Domain Constants.

Centralizes user-facing strings, report layout widths and key mode
identifiers shared by the engine and the interface layer.
"""

from typing import Tuple

# Directory key strategies
KEY_MODE_NAME = "name"
KEY_MODE_RELATIVE_PATH = "relative_path"
KEY_MODES: Tuple[str, ...] = (KEY_MODE_NAME, KEY_MODE_RELATIVE_PATH)

# Accepted log level names
LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")

# -----------------------------------------------------------------------------
# USER-FACING MESSAGES
# -----------------------------------------------------------------------------
ROOT_PROMPT = "Please insert a root: "
INVALID_ROOT_MESSAGE = "you must indicate an actual directory"

# -----------------------------------------------------------------------------
# REPORT LAYOUT
# -----------------------------------------------------------------------------
REPORT_HEADER = "                 -------------[Directories]------------"
NAME_WIDTH = 25
COUNT_WIDTH = 5
BYTES_WIDTH = 10
SUMMARY_INDENT = 20
