from __future__ import annotations

"""
Scan Domain Data Models.

Defines the accumulators, per-worker summaries and the final result object
exchanged between the scanning engine and the interface layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# STATISTICS ACCUMULATORS
# -----------------------------------------------------------------------------

@dataclass
class DirectoryStats:
    """
    Mutable accumulator of regular file statistics for one directory key.

    Attributes:
        file_count: Number of regular files counted.
        total_bytes: Aggregate size of those files in bytes.
    """
    file_count: int = 0
    total_bytes: int = 0

    def add_file(self, size: int) -> None:
        """Account for a single regular file of the given size."""
        self.file_count += 1
        self.total_bytes += size

    def absorb(self, other: DirectoryStats) -> None:
        """Fold another accumulator into this one."""
        self.file_count += other.file_count
        self.total_bytes += other.total_bytes


PartialMap = Dict[str, DirectoryStats]
GlobalMap = Dict[str, DirectoryStats]


@dataclass(frozen=True)
class ListingError:
    """
    Encapsulates a failure while listing the children of a directory.

    Attributes:
        directory: Path of the directory that could not be fully listed.
        error: Descriptive exception message.
    """
    directory: str
    error: str


@dataclass(frozen=True)
class ChunkSummary:
    """
    Output of one summarizer worker.

    Attributes:
        partial_map: Statistics keyed by directory identifier.
        errors: Listing failures encountered while processing the chunk.
    """
    partial_map: PartialMap = field(default_factory=dict)
    errors: List[ListingError] = field(default_factory=list)


class PipelineStage(str, Enum):
    """Lifecycle states of a scan."""
    IDLE = "idle"
    COLLECTING = "collecting"
    PARTITIONED = "partitioned"
    SUMMARIZING = "summarizing"
    MERGING = "merging"
    REPORTED = "reported"

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Unified result of a complete scan.

    Attributes:
        ok: False only when the root was rejected before any work.
        error: Descriptive message when ok is False.
        root: Normalized root directory.
        global_map: Merged statistics across all workers.
        total_files: Sum of file counts over the global map.
        total_bytes: Sum of byte totals over the global map.
        directory_count: Directory keys merged, summed per partial map.
        elapsed_ms: Wall-clock duration of the scan in milliseconds.
        worker_count: Number of chunks dispatched.
        entry_count: Number of entries found by the collector.
        listing_errors: Directories that could not be fully listed.
        stage: Last lifecycle stage reached.
    """
    ok: bool
    error: str
    root: str

    global_map: GlobalMap = field(default_factory=dict)
    total_files: int = 0
    total_bytes: int = 0
    directory_count: int = 0
    elapsed_ms: int = 0

    worker_count: int = 0
    entry_count: int = 0
    listing_errors: List[ListingError] = field(default_factory=list)
    stage: PipelineStage = PipelineStage.IDLE

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_invalid_root_result(root: str, error: str) -> ScanResult:
    """
    Create the result returned when the root is not an existing directory.

    Args:
        root: The rejected root path.
        error: Reason for rejection.

    Returns:
        ScanResult: A failed result; no stage beyond IDLE was entered.
    """
    return ScanResult(ok=False, error=error, root=root)


def create_scan_result(
        root: str,
        global_map: GlobalMap,
        total_files: int,
        total_bytes: int,
        directory_count: int,
        elapsed_ms: int,
        worker_count: int,
        entry_count: int,
        listing_errors: Optional[List[ListingError]] = None,
) -> ScanResult:
    """
    Create a completed scan result.

    Args:
        root: Normalized root directory.
        global_map: Fully merged statistics.
        total_files: Sum of file counts over the global map.
        total_bytes: Sum of byte totals over the global map.
        directory_count: Final value of the directory counter.
        elapsed_ms: Wall-clock duration in milliseconds.
        worker_count: Number of chunks dispatched.
        entry_count: Number of collected entries.
        listing_errors: Failures reported by workers.

    Returns:
        ScanResult: An immutable result in the REPORTED stage.
    """
    return ScanResult(
        ok=True,
        error="",
        root=root,
        global_map=global_map,
        total_files=total_files,
        total_bytes=total_bytes,
        directory_count=directory_count,
        elapsed_ms=elapsed_ms,
        worker_count=worker_count,
        entry_count=entry_count,
        listing_errors=listing_errors or [],
        stage=PipelineStage.REPORTED,
    )
