"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the staged duplicate detection pipeline:
    size → quick hash (prefix) → full hash (whole content) → duplicate groups

Each stage completes before the next one starts. Only the full hash declares
files duplicate; the quick hash just avoids full reads of obvious mismatches.
"""
import logging
import time
from functools import reduce
from typing import Callable, List, Optional, Tuple

from ducky.core.grouper import FileGrouperImpl
from ducky.core.hasher import HasherImpl
from ducky.core.interfaces import Deduplicator, Hasher
from ducky.core.models import (
    CandidateGroup,
    DeduplicationStats,
    DuplicateGroup,
    FileDescriptor,
    Stage,
)
from ducky.core.stages import FullHashStage, QuickHashStage, SizeStageImpl

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Implements multi-stage duplicate detection using a pipeline architecture.
    Collects per-stage statistics and timings.
    """
    def __init__(self, grouper: FileGrouperImpl = None, hasher: Hasher = None, workers: int = 1):
        self.grouper = grouper or FileGrouperImpl(workers=workers)
        self.hasher = hasher or HasherImpl()

    def find_duplicates(
        self,
        files: List[FileDescriptor],
        quick_bytes: int,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main detection pipeline.
        Args:
            files: Inventory of candidate files
            quick_bytes: Quick-hash sample size (clamped to [1 KiB, 1 GiB])
            progress_callback: Reports progress per stage.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]; groups are in no particular
            order, use Sorter.sort_groups for presentation.
        """
        stats = DeduplicationStats()
        total_start_time = time.perf_counter()

        # Stage 1: group by size
        start_time = time.perf_counter()
        groups = SizeStageImpl(self.grouper).process(files, progress_callback=progress_callback)
        self._update_stats(stats, Stage.SIZE, time.perf_counter() - start_time, groups)

        # Stage 2 and 3: quick hash, then full hash, inside each surviving bucket
        pipeline = [
            (Stage.QUICK, QuickHashStage(self.grouper, self.hasher, limit=quick_bytes)),
            (Stage.FULL, FullHashStage(self.grouper, self.hasher)),
        ]
        for stage_name, stage in pipeline:
            start_time = time.perf_counter()
            groups = stage.process(groups, stats, progress_callback=progress_callback)
            self._update_stats(stats, stage_name, time.perf_counter() - start_time, groups)

        duplicates = self._build_groups(groups)

        stats.total_time = time.perf_counter() - total_start_time
        logger.debug(
            f"Found {len(duplicates)} duplicate groups, "
            f"reclaimable {self.total_reclaimable(duplicates)} bytes"
        )
        return duplicates, stats

    @staticmethod
    def _build_groups(groups: List[CandidateGroup]) -> List[DuplicateGroup]:
        """The only place where files are declared duplicates."""
        return [
            DuplicateGroup.from_members(group.size, group.paths)
            for group in groups
            if group.is_candidate()
        ]

    @staticmethod
    def total_reclaimable(groups: List[DuplicateGroup]) -> int:
        """Sum of per-group reclaimable bytes (order-independent fold)."""
        return reduce(lambda total, group: total + group.reclaimable, groups, 0)

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: Stage,
        duration: float,
        groups: List[CandidateGroup]
    ):
        """
        Helper to update DeduplicationStats object with the groups surviving a stage.
        """
        stats.update_stage(
            stage=stage,
            groups_found=len(groups),
            files_processed=sum(len(g.files) for g in groups),
            duration=duration
        )
