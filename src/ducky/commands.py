"""
Unified command orchestrator for duplicate detection and collapsing.
This is the single source of truth for the run workflow; the CLI only parses and prints.
"""
import time
from typing import Callable, List, Optional, Tuple

from ducky.core.deduplicator import DeduplicatorImpl
from ducky.core.models import (
    ActionStats,
    DeduplicationParams,
    DeduplicationStats,
    DuplicateGroup,
    FileDescriptor,
    Stage,
)
from ducky.core.scanner import FileScannerImpl
from ducky.core.sorter import Sorter
from ducky.services.action_service import ActionService


class DeduplicationCommand:
    """
    Orchestrates the entire workflow:
    1. Build the file inventory from the configured roots
    2. Find duplicate groups (size → quick hash → full hash)
    3. Sort groups into presentation order
    4. Optionally apply delete/hardlink, only after the group set is final

    Usage:
        params = DeduplicationParams(roots=["/data"], action=ActionMode.DELETE, confirmed=True)
        command = DeduplicationCommand()
        files, groups, stats = command.execute(params, progress_callback=printer)
        action_stats = command.apply_actions(groups, params, stats)
    """

    def __init__(self, action_service: ActionService = None):
        self._action_service = action_service or ActionService()

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[FileDescriptor], List[DuplicateGroup], DeduplicationStats]:
        """
        Scan and detect duplicates.

        Returns:
            Tuple of (inventory, sorted duplicate groups, statistics)

        Raises:
            RuntimeError: If a root cannot be enumerated
        """
        scanner = FileScannerImpl(
            roots=params.roots,
            min_size=params.min_size_bytes,
            extensions=params.extensions,
            include_hidden=params.include_hidden,
            follow_symlinks=params.follow_symlinks,
        )

        start_time = time.perf_counter()
        files = scanner.scan(progress_callback=progress_callback)
        discover_time = time.perf_counter() - start_time

        if not files:
            stats = DeduplicationStats()
            stats.record_duration(Stage.DISCOVER, discover_time)
            return files, [], stats

        deduplicator = DeduplicatorImpl(workers=params.workers)
        groups, stats = deduplicator.find_duplicates(
            files,
            params.quick_bytes,
            progress_callback=progress_callback
        )
        stats.record_duration(Stage.DISCOVER, discover_time)

        return files, Sorter.sort_groups(groups), stats

    def apply_actions(
            self,
            groups: List[DuplicateGroup],
            params: DeduplicationParams,
            stats: Optional[DeduplicationStats] = None
    ) -> ActionStats:
        """Apply the requested action mode; records the action phase duration in stats."""
        start_time = time.perf_counter()
        action_stats = self._action_service.apply_actions(groups, params.action, params.confirmed)
        if stats is not None:
            stats.record_duration(Stage.ACTIONS, time.perf_counter() - start_time)
        return action_stats
