from __future__ import annotations

"""
Chunk Partitioning Service.

Splits the collected entry list into contiguous, non-overlapping chunks,
one per worker thread.
"""

import logging
import os
from typing import List, Sequence

logger = logging.getLogger(__name__)


def get_hardware_concurrency() -> int:
    """Return the number of logical CPUs, or 1 when it cannot be determined."""
    return os.cpu_count() or 1


def compute_worker_count(hardware_concurrency: int) -> int:
    """
    Derive the number of summarizer workers.

    One CPU is left to the merging thread. A single-CPU host still gets one
    worker, otherwise no entry would ever be summarized.

    Args:
        hardware_concurrency: Logical CPUs available.

    Returns:
        int: max(hardware_concurrency - 1, 1).
    """
    return max(hardware_concurrency - 1, 1)


def partition_entries(entries: Sequence[str], hardware_concurrency: int) -> List[List[str]]:
    """
    Slice entries into one contiguous chunk per worker.

    The chunk size is the entry count divided by the hardware concurrency
    (not by the worker count); the last chunk extends to the end of the
    sequence and absorbs the remainder. When there are fewer entries than
    CPUs the leading chunks are empty, which is valid.

    Args:
        entries: Full, ordered entry sequence.
        hardware_concurrency: Logical CPUs available (at least 1).

    Returns:
        List[List[str]]: Exactly compute_worker_count() chunks whose
                         concatenation equals the input sequence.
    """
    hardware_concurrency = max(hardware_concurrency, 1)
    worker_count = compute_worker_count(hardware_concurrency)
    chunk_size = len(entries) // hardware_concurrency

    chunks: List[List[str]] = []
    for i in range(worker_count):
        begin = i * chunk_size
        if i == worker_count - 1:
            chunks.append(list(entries[begin:]))
        else:
            chunks.append(list(entries[begin:begin + chunk_size]))

    logger.debug(
        f"Partitioned {len(entries)} entries into {worker_count} chunks "
        f"(chunk size {chunk_size}, last {len(chunks[-1])})"
    )
    return chunks
