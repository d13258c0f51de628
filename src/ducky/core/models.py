"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for duplicate detection and duplicate collapsing.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ducky.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class ActionMode(Enum):
    """
    What to do with confirmed duplicates once the groups are final.
    A single value, so delete and hardlink can never be requested together.
    """
    NONE = "none"
    DELETE = "delete"
    HARDLINK = "hardlink"

    @property
    def display_name(self) -> str:
        """Human-readable name for CLI output."""
        mapping = {
            ActionMode.NONE: "Report only",
            ActionMode.DELETE: "Delete duplicates",
            ActionMode.HARDLINK: "Replace duplicates with hard links",
        }
        return mapping.get(self, self.value)

    @property
    def mutates(self) -> bool:
        return self is not ActionMode.NONE

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    """Timed phases of one run. Values double as timing keys."""
    DISCOVER = "discover"
    SIZE = "size_group"
    QUICK = "quick_hash"
    FULL = "full_hash"
    ACTIONS = "actions"

    @property
    def label(self) -> str:
        mapping = {
            Stage.DISCOVER: "Discovery",
            Stage.SIZE: "Size grouping",
            Stage.QUICK: "Quick Hash",
            Stage.FULL: "Full Hash",
            Stage.ACTIONS: "Actions",
        }
        return mapping[self]

    @classmethod
    def get_all(cls):
        return [cls.DISCOVER, cls.SIZE, cls.QUICK, cls.FULL, cls.ACTIONS]


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileDescriptor:
    """
    A candidate file supplied by the inventory: path plus byte size.
    Immutable for the whole run; hashes live in the stage buckets, not here.
    """
    path: str
    size: int  # in bytes

    @property
    def extension(self) -> str:
        return os.path.splitext(self.path)[1].lower()

    def __repr__(self):
        return f"<FileDescriptor path={self.path}, size={self.size}>"


@dataclass
class CandidateGroup:
    """
    Files that may still be duplicates: a size bucket, or a hash bucket scoped
    inside one. Handed from one pipeline stage to the next.
    """
    size: int
    files: List[FileDescriptor]

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def is_candidate(self) -> bool:
        """True if this group contains at least two files."""
        return len(self.files) >= 2

    def __repr__(self):
        return f"<CandidateGroup size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A confirmed set of byte-identical files.
    Members are sorted lexicographically; the first one is the canonical file.
    """
    size: int
    members: Tuple[str, ...]

    def __post_init__(self):
        if len(self.members) < 2:
            raise ValueError("A duplicate group needs at least two members")
        if list(self.members) != sorted(self.members):
            raise ValueError("Duplicate group members must be sorted")

    @classmethod
    def from_members(cls, size: int, paths: Sequence[str]) -> "DuplicateGroup":
        return cls(size=size, members=tuple(sorted(paths)))

    @property
    def canonical(self) -> str:
        return self.members[0]

    @property
    def duplicates(self) -> Tuple[str, ...]:
        return self.members[1:]

    @property
    def reclaimable(self) -> int:
        """Bytes recovered by keeping only the canonical member."""
        return self.size * (len(self.members) - 1)

    def to_dict(self) -> Dict[str, object]:
        return {"size": self.size, "members": list(self.members)}

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.members)}>"


@dataclass
class ActionStats:
    """Counters accumulated by one action phase. Never persisted."""
    deleted: int = 0
    linked: int = 0
    skipped_same_inode: int = 0
    skipped_cross_device: int = 0
    errors: int = 0
    refused: bool = False  # action requested without confirmation

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "deleted": self.deleted,
            "linked": self.linked,
            "skipped_same_inode": self.skipped_same_inode,
            "skipped_cross_device": self.skipped_cross_device,
            "errors": self.errors,
        }

    def __str__(self) -> str:
        return "actions: " + " ".join(f"{k}={v}" for k, v in self.as_dict().items())


class DeduplicationStats:
    """
    Statistics collected during one run: per-stage group/file counts and durations,
    plus the number of files dropped because they could not be read.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.warnings: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage: Stage,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage.value not in self.stage_stats:
            self.stage_stats[stage.value] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage.value]["groups"] += groups_found
        self.stage_stats[stage.value]["files"] += files_processed
        self.stage_stats[stage.value]["time"] += duration

    def record_duration(self, stage: Stage, duration: float) -> None:
        """Record a stage that produces no groups (discovery, actions)."""
        self.update_stage(stage, groups_found=0, files_processed=0, duration=duration)

    def duration_ms(self, stage: Stage) -> int:
        data = self.stage_stats.get(stage.value)
        if not data:
            return 0
        return int(data["time"] * 1000)

    def timings_ms(self) -> Dict[str, int]:
        return {f"{stage.value}_ms": self.duration_ms(stage) for stage in Stage.get_all()}

    def print_summary(self) -> str:
        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Unreadable files skipped: {self.warnings}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage in Stage.get_all():
            data = self.stage_stats.get(stage.value)
            if data is None:
                continue
            lines.append(f"{stage.label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Interface-agnostic: the CLI builds it, the command and the core consume it.
"""

@dataclass
class DeduplicationParams:
    """Parameters for one run with validation."""
    roots: List[str]
    min_size_bytes: int = 1024
    extensions: Optional[List[str]] = None  # None = no filter, [] = match nothing
    include_hidden: bool = False
    follow_symlinks: bool = False
    quick_bytes: int = 64 * 1024
    action: ActionMode = ActionMode.NONE
    confirmed: bool = False
    workers: int = 1

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("At least one path to scan is required")

        if any(not root for root in self.roots):
            raise ValueError("Path to scan cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.workers < 1:
            raise ValueError("Number of workers must be at least 1")

        # quick_bytes is not range-checked: the quick-hash stage clamps it

        # Normalize extensions: ensure they start with dot and are lowercase
        if self.extensions is None:
            return
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext and ext not in normalized:
                normalized.append(ext)
        self.extensions = normalized

    @staticmethod
    def parse_extensions(extensions_str: Optional[str]) -> Optional[List[str]]:
        """
        Split a comma-separated extension list.
        " JPG , png,, .gif " -> ["jpg", "png", ".gif"] (normalized later by __post_init__).
        None means no filter; a list with no usable entries (" , ,") matches nothing.
        """
        if extensions_str is None:
            return None
        return [ext.strip().lower() for ext in extensions_str.split(",") if ext.strip()]

    @staticmethod
    def from_human_readable(
            roots: List[str],
            min_size_str: str = "1KB",
            quick_bytes_str: str = "64KB",
            extensions_str: Optional[str] = None,
            include_hidden: bool = False,
            follow_symlinks: bool = False,
            action: ActionMode = ActionMode.NONE,
            confirmed: bool = False,
            workers: int = 1,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Used by CLI argument parsing.
        """
        return DeduplicationParams(
            roots=list(roots),
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            extensions=DeduplicationParams.parse_extensions(extensions_str),
            include_hidden=include_hidden,
            follow_symlinks=follow_symlinks,
            quick_bytes=ConvertUtils.human_to_bytes(quick_bytes_str),
            action=action,
            confirmed=confirmed,
            workers=workers,
        )
