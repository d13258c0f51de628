"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/action_service.py
Applies delete or hardlink to confirmed duplicate groups.

Per duplicate member (the canonical members[0] is never touched):
    identity check ──same object──> skipped_same_inode
        │
        ├─ DELETE:   remove ──> deleted | errors
        └─ HARDLINK: device check ──different──> skipped_cross_device
                         └─ replace with link ──> linked | errors

No retries; every per-file failure is counted and the run moves on.
"""
import logging
from typing import List

from ducky.core.models import ActionMode, ActionStats, DuplicateGroup
from ducky.services.file_service import FileService
from ducky.services.identity import StorageIdentity, get_storage_identity

logger = logging.getLogger(__name__)


class ActionService:
    def __init__(self, identity: StorageIdentity = None, file_service: FileService = None):
        self.identity = identity or get_storage_identity()
        self.file_service = file_service or FileService()

    def apply_actions(self, groups: List[DuplicateGroup], mode: ActionMode, confirmed: bool) -> ActionStats:
        """
        Mutates the filesystem only when a mode is requested AND confirmed.
        Returns the counters for this run.
        """
        stats = ActionStats()
        if not mode.mutates:
            return stats
        if not groups:
            logger.info("No duplicate groups to modify.")
            return stats
        if not confirmed:
            logger.warning("Refusing to modify files without --yes.")
            stats.refused = True
            return stats

        for group in groups:
            canonical = group.canonical
            for dupe in group.duplicates:
                if self.identity.same_storage_object(canonical, dupe):
                    stats.skipped_same_inode += 1
                    logger.debug(f"Already the same file, skipping {dupe}")
                    continue

                if mode is ActionMode.DELETE:
                    self._delete(dupe, stats)
                else:
                    self._hardlink(canonical, dupe, stats)

        logger.info(str(stats))
        return stats

    def _delete(self, dupe: str, stats: ActionStats) -> None:
        try:
            self.file_service.remove_file(dupe)
            stats.deleted += 1
        except OSError as e:
            stats.errors += 1
            logger.error(f"Failed to delete {dupe}: {e}")

    def _hardlink(self, canonical: str, dupe: str, stats: ActionStats) -> None:
        if not self.identity.same_container(canonical, dupe):
            stats.skipped_cross_device += 1
            logger.warning(f"cross-device: cannot hardlink {dupe} -> {canonical}")
            return
        try:
            self.file_service.replace_with_hardlink(canonical, dupe)
            stats.linked += 1
        except OSError as e:
            stats.errors += 1
            logger.error(f"Failed to hardlink {dupe} -> {canonical}: {e}")
