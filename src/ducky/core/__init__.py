"""
Core detection engine — scanner, hasher, grouper, stages, and pipeline orchestrator.

This package contains the performance-critical foundation of ducky:
- FileScannerImpl: recursive traversal of one or more roots with size/extension/visibility filters
- HasherImpl: xxHash64 quick (prefix) hash and BLAKE3 full content hash, streamed
- FileGrouperImpl: size and fingerprint bucketing with an order-independent merge
- DeduplicatorImpl: staged pipeline (size → quick hash → full hash → duplicate groups)
- Sorter: deterministic presentation order of duplicate groups
- Models: FileDescriptor, DuplicateGroup, ActionStats, and configuration objects

All components are pure Python with no output or CLI dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, Blake3AlgorithmImpl
from .stages import DeduplicationConfig, SizeStageImpl, QuickHashStage, FullHashStage
from .deduplicator import DeduplicatorImpl
from .sorter import Sorter
from .models import (
    FileDescriptor, CandidateGroup, DuplicateGroup, ActionMode, ActionStats,
    DeduplicationParams, DeduplicationStats, Stage)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "Blake3AlgorithmImpl",
    "DeduplicationConfig",
    "SizeStageImpl",
    "QuickHashStage",
    "FullHashStage",
    "DeduplicatorImpl",
    "Sorter",
    "FileDescriptor",
    "CandidateGroup",
    "DuplicateGroup",
    "ActionMode",
    "ActionStats",
    "DeduplicationParams",
    "DeduplicationStats",
    "Stage",
]
