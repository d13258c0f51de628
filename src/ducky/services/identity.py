"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/identity.py
Storage identity checks used by the action phase.

Two questions are asked about a (canonical, duplicate) pair:
- same_storage_object: do both paths name one underlying file allocation?
- same_container: do both live on one device, so a hard link is possible?

One implementation per platform family; callers get one from get_storage_identity()
and never branch on the platform themselves.
"""
import os
from typing import Protocol


class StorageIdentity(Protocol):
    def same_storage_object(self, path_a: str, path_b: str) -> bool: ...
    def same_container(self, path_a: str, path_b: str) -> bool: ...


class InodeStorageIdentity(StorageIdentity):
    """POSIX: device id + inode number."""

    def same_storage_object(self, path_a: str, path_b: str) -> bool:
        try:
            st_a = os.stat(path_a)
            st_b = os.stat(path_b)
        except OSError:
            return False
        return (st_a.st_dev, st_a.st_ino) == (st_b.st_dev, st_b.st_ino)

    def same_container(self, path_a: str, path_b: str) -> bool:
        # Unknown counts as same device; the mutation itself reports the real error
        try:
            return os.stat(path_a).st_dev == os.stat(path_b).st_dev
        except OSError:
            return True


class PathStorageIdentity(StorageIdentity):
    """Fallback for platforms without a usable inode concept: resolved path equality."""

    def same_storage_object(self, path_a: str, path_b: str) -> bool:
        return os.path.realpath(path_a) == os.path.realpath(path_b)

    def same_container(self, path_a: str, path_b: str) -> bool:
        return True


def get_storage_identity() -> StorageIdentity:
    if os.name == "posix":
        return InodeStorageIdentity()
    return PathStorageIdentity()
