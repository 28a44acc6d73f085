from __future__ import annotations

"""
Core scanning pipeline.

This module coordinates the whole scan:
1. Validates configuration and the root directory.
2. Collects every entry under the root in a single walk.
3. Partitions the entries into one chunk per worker.
4. Launches one summarizer thread per chunk, all before any join.
5. Joins workers in launch order, merging each partial map as it arrives.
6. Packages the global map and grand totals into a ScanResult.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from dirstats.core.pipeline.stages.merger import MergeAggregator
from dirstats.core.pipeline.stages.summarizer import summarize_chunk
from dirstats.core.pipeline.stages.validator import validate_config
from dirstats.core.services.collector import collect_entries
from dirstats.core.services.partitioner import (
    get_hardware_concurrency,
    partition_entries,
)
from dirstats.domain.constants import INVALID_ROOT_MESSAGE
from dirstats.domain.stats_models import (
    ChunkSummary,
    ListingError,
    PipelineStage,
    ScanResult,
    create_invalid_root_result,
    create_scan_result,
)
from dirstats.infra.fs import is_existing_directory, normalize_path

logger = logging.getLogger(__name__)


def run_scan(
        root: str,
        config: Optional[Dict[str, Any]] = None,
        *,
        hardware_concurrency: Optional[int] = None,
) -> ScanResult:
    """
    Execute the full scan of a root directory.

    Worker failures only degrade that worker's contribution; once the root
    is accepted the pipeline always reaches the REPORTED stage.

    Args:
        root: Root directory to scan.
        config: Optional configuration dictionary (raw or partial).
        hardware_concurrency: Override for the detected CPU count.

    Returns:
        ScanResult: Global map, grand totals and execution metrics.
    """
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    # -------------------------------------------------------------------------
    # 1) Root validation
    # -------------------------------------------------------------------------
    root_path = normalize_path(root)
    if not is_existing_directory(root_path):
        logger.error(f"Invalid root directory: '{root_path or root}'")
        return create_invalid_root_result(root_path, INVALID_ROOT_MESSAGE)

    hw = hardware_concurrency or cfg["hardware_concurrency"] or get_hardware_concurrency()
    start = time.perf_counter()

    # -------------------------------------------------------------------------
    # 2) Collection & partitioning
    # -------------------------------------------------------------------------
    _enter_stage(PipelineStage.COLLECTING)
    entries = collect_entries(root_path)

    chunks = partition_entries(entries, hw)
    _enter_stage(PipelineStage.PARTITIONED)

    # -------------------------------------------------------------------------
    # 3) Parallel summarization & sequential merge
    # -------------------------------------------------------------------------
    aggregator = MergeAggregator()
    listing_errors: List[ListingError] = []

    with ThreadPoolExecutor(
            max_workers=len(chunks),
            thread_name_prefix="SummarizerWorker"
    ) as executor:
        _enter_stage(PipelineStage.SUMMARIZING)
        futures = _launch_workers(executor, chunks, root_path, cfg["key_mode"])

        _enter_stage(PipelineStage.MERGING)
        for index, future in enumerate(futures):
            summary = _join_worker(future, index)
            aggregator.merge(summary.partial_map)
            listing_errors.extend(summary.errors)

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    _enter_stage(PipelineStage.REPORTED)

    result = create_scan_result(
        root=root_path,
        global_map=aggregator.global_map,
        total_files=aggregator.total_files(),
        total_bytes=aggregator.total_bytes(),
        directory_count=aggregator.directory_count,
        elapsed_ms=elapsed_ms,
        worker_count=len(chunks),
        entry_count=len(entries),
        listing_errors=listing_errors,
    )

    logger.info(
        f"Scan finalized. Files: {result.total_files}. Bytes: {result.total_bytes}. "
        f"Directories: {result.directory_count}. Workers: {result.worker_count}. "
        f"Listing errors: {len(listing_errors)}"
    )
    return result


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _enter_stage(stage: PipelineStage) -> None:
    logger.debug(f"Pipeline stage -> {stage.value}")


def _launch_workers(
        executor: ThreadPoolExecutor,
        chunks: List[List[str]],
        root: str,
        key_mode: str,
) -> List[Future]:
    """
    Submit one summarizer task per chunk, in chunk order.

    A task that cannot be started (thread creation refused) is replaced by
    an already-resolved future carrying an empty summary, so every chunk
    still produces exactly one result.
    """
    futures: List[Future] = []
    for index, chunk in enumerate(chunks):
        try:
            futures.append(executor.submit(summarize_chunk, chunk, root, key_mode))
        except RuntimeError as e:
            logger.error(f"Failed to launch worker #{index} ({len(chunk)} entries): {e}")
            futures.append(_resolved_empty_future())
    return futures


def _resolved_empty_future() -> Future:
    future: Future = Future()
    future.set_result(ChunkSummary())
    return future


def _join_worker(future: Future, index: int) -> ChunkSummary:
    """Block on a worker; a crashed worker contributes an empty summary."""
    try:
        return future.result()
    except Exception as e:
        logger.error(f"Worker #{index} crashed: {e}", exc_info=True)
        return ChunkSummary()
