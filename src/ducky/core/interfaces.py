"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate detection system.
These protocols enforce structural typing using Python's `typing.Protocol` to keep
modules swappable and testable.

Key Components:
---------------
- HashAlgorithm: Streaming hash function factory (xxHash64, BLAKE3, ...).
- Hasher: Computes quick (prefix) and full content fingerprints of files.
- FileScanner: Produces the candidate file inventory.
- FileGrouper: Buckets files by size or by hash.
- SizeStage / HashStage: Individual stages of the detection pipeline.
- Deduplicator: The pipeline coordinating all stages.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from ducky.core.models import (
    CandidateGroup,
    DeduplicationStats,
    DuplicateGroup,
    FileDescriptor,
)


# ===== Interfaces =====

class HashState(Protocol):
    """Incremental hash object as returned by xxhash/blake3 constructors."""
    def update(self, data: bytes) -> Any: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic streaming hash algorithms.

    Allows plugging in different hashing functions without affecting the rest of
    the pipeline. `new()` must return a fresh incremental state.
    """
    name: str

    @staticmethod
    def new() -> HashState:
        ...


class Hasher(Protocol):
    """Interface for fingerprinting files."""
    def compute_quick_hash(self, file: FileDescriptor, limit: int) -> bytes: ...
    def compute_full_hash(self, file: FileDescriptor) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting the candidate inventory.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[FileDescriptor]:
        """
        Scan files from the configured roots.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            All files matching the configured filters.

        Raises:
            RuntimeError: If a root cannot be enumerated.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files by size or by a per-file hash.
    Only buckets with 2+ members are ever returned.
    """
    def group_by_size(self, files: List[FileDescriptor]) -> Dict[int, List[FileDescriptor]]:
        ...

    def group_by_hash(
        self,
        files: List[FileDescriptor],
        hashes: Dict[str, bytes]
    ) -> Dict[bytes, List[FileDescriptor]]:
        ...


# =============================
# Stage Interfaces
# =============================


class SizeStage(Protocol):
    """
    Interface for the first stage of the pipeline: grouping files by size.
    """
    def process(
        self,
        files: List[FileDescriptor],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[CandidateGroup]:
        """
        Returns groups where each contains 2+ files of the same size.
        """
        ...


class HashStage(Protocol):
    """
    Interface for a stage that splits candidate groups by a per-file fingerprint.
    """

    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and progress)."""
        ...

    def process(
        self,
        groups: List[CandidateGroup],
        stats: DeduplicationStats,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[CandidateGroup]:
        """
        Split each group by fingerprint and drop buckets that fall below two files.

        Args:
            groups: Candidate groups from the previous stage.
            stats: Receives the count of files that could not be hashed.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Refined candidate groups for the next stage.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the detection engine.

    Runs size → quick hash → full hash and builds the confirmed duplicate groups.
    """
    def find_duplicates(
        self,
        files: List[FileDescriptor],
        quick_bytes: int,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        ...
