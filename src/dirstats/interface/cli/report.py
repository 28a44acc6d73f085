from __future__ import annotations

"""
Scan Report Rendering.

Transforms a ScanResult into the fixed-width terminal report: one line per
directory key holding at least one file, then the grand total line.
"""

from typing import List

from dirstats.domain.constants import (
    BYTES_WIDTH,
    COUNT_WIDTH,
    NAME_WIDTH,
    REPORT_HEADER,
    SUMMARY_INDENT,
)
from dirstats.domain.stats_models import DirectoryStats, ScanResult


def render_report(result: ScanResult) -> List[str]:
    """
    Render the full report for a completed scan.

    Keys are listed in sorted order. Directories without files stay in the
    global map but are left out of the listing.

    Args:
        result: A successful scan result.

    Returns:
        List[str]: Report lines, without trailing newlines.
    """
    lines: List[str] = [REPORT_HEADER, ""]

    for name in sorted(result.global_map):
        stats = result.global_map[name]
        if stats.file_count > 0:
            lines.append(format_directory_line(name, stats))

    lines.append("")
    lines.append(format_summary_line(result))
    return lines


def format_directory_line(name: str, stats: DirectoryStats) -> str:
    return (
        f"{name:>{NAME_WIDTH}}: {stats.file_count:>{COUNT_WIDTH}} files "
        f"{stats.total_bytes:>{BYTES_WIDTH}} bytes"
    )


def format_summary_line(result: ScanResult) -> str:
    return (
        f"{'':>{SUMMARY_INDENT}}Total: {result.total_files:>{COUNT_WIDTH}} files "
        f"{result.total_bytes:>{BYTES_WIDTH}} bytes | "
        f"{result.directory_count} folders [{result.elapsed_ms} ms]"
    )
