"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file bucketing by size and by per-file fingerprint.

Fingerprints are computed independently per file (optionally on a thread pool) and
merged into a path -> digest map. Buckets are then built from that map in input
order, so the result never depends on which hash job finished first.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Tuple

from ducky.core.interfaces import FileGrouper
from ducky.core.models import FileDescriptor

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Groups files by size or by a precomputed fingerprint.
    With workers > 1, fingerprints are computed concurrently.
    """

    def __init__(self, workers: int = 1):
        self.workers = max(1, workers)

    def group_by_size(self, files: List[FileDescriptor]) -> Dict[int, List[FileDescriptor]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_hash(
            self,
            files: List[FileDescriptor],
            hashes: Dict[str, bytes]
    ) -> Dict[bytes, List[FileDescriptor]]:
        """Groups files by fingerprint. Files without one (failed reads) are left out."""
        return self._group_by(files, lambda f: hashes.get(f.path))

    def hash_files(
            self,
            files: List[FileDescriptor],
            hash_func: Callable[[FileDescriptor], bytes],
            stage_name: str = "hash"
    ) -> Tuple[Dict[str, bytes], int]:
        """
        Computes one fingerprint per file.

        Returns:
            (path -> digest, number of files that could not be read)
        """
        if self.workers == 1 or len(files) < 2:
            results = [self._safe_hash(f, hash_func, stage_name) for f in files]
        else:
            results = []
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [executor.submit(self._safe_hash, f, hash_func, stage_name) for f in files]
                for future in as_completed(futures):
                    results.append(future.result())

        return self.merge_results(results)

    @staticmethod
    def merge_results(results: List[Tuple[str, Any]]) -> Tuple[Dict[str, bytes], int]:
        """Folds (path, digest-or-None) pairs into a map; arrival order is irrelevant."""
        hashes: Dict[str, bytes] = {}
        failed = 0
        for path, digest in results:
            if digest is None:
                failed += 1
            else:
                hashes[path] = digest
        return hashes, failed

    @staticmethod
    def _safe_hash(
            file: FileDescriptor,
            hash_func: Callable[[FileDescriptor], bytes],
            stage_name: str
    ) -> Tuple[str, Any]:
        try:
            return file.path, hash_func(file)
        except OSError as e:
            logger.warning(f"{stage_name} failed {file.path}: {e}")
            return file.path, None

    @staticmethod
    def _group_by(files: List[FileDescriptor], key_func: Callable[[FileDescriptor], Any]) -> Dict[Any, List[FileDescriptor]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key (None excludes the file)
        Returns:
            Dict[key, List[FileDescriptor]] holding only buckets with 2+ files
        """
        groups = defaultdict(list)
        for file in files:
            key = key_func(file)
            if key is not None:
                groups[key].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
