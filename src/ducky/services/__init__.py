from .action_service import ActionService
from .file_service import FileService
from .identity import InodeStorageIdentity, PathStorageIdentity, StorageIdentity, get_storage_identity
from .report_service import ReportService

__all__ = [
    "ActionService",
    "FileService",
    "InodeStorageIdentity",
    "PathStorageIdentity",
    "StorageIdentity",
    "get_storage_identity",
    "ReportService",
]
