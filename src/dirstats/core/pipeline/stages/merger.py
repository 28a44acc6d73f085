from __future__ import annotations

"""
Merge Aggregation Stage.

Folds worker partial maps into the single global map. Only the main control
flow calls merge(), one partial map at a time, so the global map needs no
lock; the directory counter is still guarded to stay safe if that changes.
"""

import logging
import threading

from dirstats.domain.stats_models import DirectoryStats, GlobalMap, PartialMap

logger = logging.getLogger(__name__)


class DirectoryCounter:
    """Running total of directory keys merged, with atomic increments."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class MergeAggregator:
    """
    Owner of the global statistics map for one scan.

    Keys are only ever created or augmented, never removed. Each instance
    belongs to a single run and is discarded with its result.
    """

    def __init__(self) -> None:
        self.global_map: GlobalMap = {}
        self.counter = DirectoryCounter()
        self.merged_maps = 0

    def merge(self, partial: PartialMap) -> None:
        """
        Add every entry of a partial map into the global map.

        The counter advances once per partial map, by its key count.

        Args:
            partial: A worker's map; it is read, never mutated.
        """
        for key, stats in partial.items():
            self.global_map.setdefault(key, DirectoryStats()).absorb(stats)

        self.counter.increment(len(partial))
        self.merged_maps += 1
        logger.debug(
            f"Merged partial map #{self.merged_maps} ({len(partial)} keys); "
            f"{self.counter.value} directories so far"
        )

    @property
    def directory_count(self) -> int:
        return self.counter.value

    def total_files(self) -> int:
        return sum(s.file_count for s in self.global_map.values())

    def total_bytes(self) -> int:
        return sum(s.total_bytes for s in self.global_map.values())
