"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages for ducky's staged duplicate detection.

CLASS HIERARCHY
---------------
HashStageBase    : Shared split-by-fingerprint logic for hash stages
SizeStageImpl    : Initial size-based grouping (SizeStage interface)
QuickHashStage   : Prefix fingerprint, cheap filter for same-size files
FullHashStage    : Whole-content fingerprint, the authoritative check

CONFIGURATION
-------------
DeduplicationConfig holds the quick-hash sample bounds:
  • QUICK_BYTES_MIN / QUICK_BYTES_MAX: configured sample sizes are clamped into this range
  • clamp_quick_bytes(): out-of-range values are clamped, never rejected

STAGE CONTRACTS
---------------
Each stage implements `process()`:
  • Accepts candidate groups from the previous stage
  • Returns refined groups (2+ files each) for the next stage
  • Files that cannot be read are dropped and counted in stats.warnings
  • Reports progress via callback (stage name, processed count, total count)
"""

import logging
from typing import Callable, Dict, List, Optional

from ducky.core.grouper import FileGrouperImpl
from ducky.core.hasher import HasherImpl
from ducky.core.interfaces import Hasher, HashStage, SizeStage
from ducky.core.models import CandidateGroup, DeduplicationStats, FileDescriptor
from ducky.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


#=============================
# Config
#=============================
class DeduplicationConfig:
    QUICK_BYTES_MIN = 1024                # 1 KiB
    QUICK_BYTES_MAX = 1024 * 1024 * 1024  # 1 GiB
    QUICK_BYTES_DEFAULT = 64 * 1024       # 64 KiB

    @staticmethod
    def clamp_quick_bytes(value: int) -> int:
        if value < DeduplicationConfig.QUICK_BYTES_MIN:
            logger.warning(
                f"quick-bytes too small ({ConvertUtils.bytes_to_human(value)}); "
                f"clamping to {ConvertUtils.bytes_to_human(DeduplicationConfig.QUICK_BYTES_MIN)}"
            )
            return DeduplicationConfig.QUICK_BYTES_MIN
        if value > DeduplicationConfig.QUICK_BYTES_MAX:
            logger.warning(
                f"quick-bytes too large ({ConvertUtils.bytes_to_human(value)}); "
                f"clamping to {ConvertUtils.bytes_to_human(DeduplicationConfig.QUICK_BYTES_MAX)}"
            )
            return DeduplicationConfig.QUICK_BYTES_MAX
        return value


# =============================
# Hash Stage Base Class
# =============================
class HashStageBase(HashStage):
    """
    Base class for stages that split groups by a per-file fingerprint.
    Subclasses provide the stage name and the fingerprint function.
    """

    def __init__(self, grouper: FileGrouperImpl, hasher: Hasher = None):
        self.grouper = grouper
        self.hasher = hasher or HasherImpl()

    def get_stage_name(self) -> str:
        raise NotImplementedError

    def _fingerprint(self, file: FileDescriptor) -> bytes:
        raise NotImplementedError

    def process(
        self,
        groups: List[CandidateGroup],
        stats: DeduplicationStats,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[CandidateGroup]:
        """
        Fingerprints every file of every group, then splits each group by fingerprint.
        Buckets are always scoped to their parent group.
        """
        all_files = [f for group in groups for f in group.files]
        if not all_files:
            return []

        hashes, failed = self.grouper.hash_files(all_files, self._fingerprint, self.get_stage_name())
        stats.warnings += failed

        refined = []
        for group in groups:
            buckets: Dict[bytes, List[FileDescriptor]] = self.grouper.group_by_hash(group.files, hashes)
            for files_in_bucket in buckets.values():
                refined.append(CandidateGroup(size=group.size, files=files_in_bucket))

        if progress_callback:
            progress_callback(self.get_stage_name(), len(all_files), len(all_files))

        logger.debug(f"{self.get_stage_name()}: {len(groups)} groups in, {len(refined)} groups out, {failed} unreadable")
        return refined


# =============================
# Individual Stages
# =============================
class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[FileDescriptor],
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[CandidateGroup]:
        """
        Group by file size.
        Returns list of CandidateGroups with 2+ files of same size.
        """
        size_groups = self.grouper.group_by_size(files)
        groups = [
            CandidateGroup(size=size, files=files_list)
            for size, files_list in sorted(size_groups.items())
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback("Size grouping", total_files, total_files)

        return groups


class QuickHashStage(HashStageBase):
    def __init__(self, grouper: FileGrouperImpl, hasher: Hasher = None, limit: int = DeduplicationConfig.QUICK_BYTES_DEFAULT):
        super().__init__(grouper, hasher)
        self.limit = DeduplicationConfig.clamp_quick_bytes(limit)

    def get_stage_name(self) -> str:
        return "Quick Hash"

    def _fingerprint(self, file: FileDescriptor) -> bytes:
        return self.hasher.compute_quick_hash(file, self.limit)


class FullHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return "Full Hash"

    def _fingerprint(self, file: FileDescriptor) -> bytes:
        return self.hasher.compute_full_hash(file)
