"""
ducky — content-based duplicate file finder.

Core features:
- Staged detection: size grouping, xxHash64 quick hash of a prefix, BLAKE3 full content hash
- Deterministic reports: human text, per-group JSON, or a single summary JSON object
- Optional delete/hardlink collapsing of duplicates, only with explicit confirmation
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import PackageNotFoundError, version as _version
    __version__ = _version("ducky")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Public API: only what users should import directly
from ducky.commands import DeduplicationCommand
from ducky.core import ActionMode, ActionStats, DeduplicationParams, DuplicateGroup, FileDescriptor
from ducky.utils.convert_utils import ConvertUtils
from ducky.services import ActionService, ReportService
from ducky.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "ActionMode",
    "ActionStats",
    "DuplicateGroup",
    "FileDescriptor",
    "ConvertUtils",
    "ActionService",
    "ReportService",
    "FileService",
    "__version__",
]
