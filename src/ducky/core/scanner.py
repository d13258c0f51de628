"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Builds the candidate file inventory.
Features:
- Recursively scans one or more roots (a root may also be a single file)
- Skips hidden entries unless asked not to
- Skips symbolic links unless asked to follow them
- Applies minimum size and extension filters
- Returns a list of FileDescriptor objects, each path reported once
"""

import logging
import os
import stat
import time
from typing import Callable, List, Optional, Set

from ducky.core.interfaces import FileScanner
from ducky.core.models import FileDescriptor

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans roots recursively and filters files based on size, extension and visibility.

    Attributes:
        roots: Files or directories to scan
        min_size: Minimum file size in bytes
        extensions: Allowed file extensions (e.g., [".txt", ".jpg"]); None = all, empty list = none
        include_hidden: Also scan dot-files and dot-directories
        follow_symlinks: Follow symbolic links to files and directories
    """

    def __init__(
        self,
        roots: List[str],
        min_size: int = 0,
        extensions: Optional[List[str]] = None,
        include_hidden: bool = False,
        follow_symlinks: bool = False
    ):
        self.roots = list(roots)
        self.min_size = min_size
        self.extensions = None if extensions is None else [ext.lower() for ext in extensions]
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks

    def scan(self,
             progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None) -> List[FileDescriptor]:
        """
        Returns the filtered list of files found under all roots.
        Raises RuntimeError when a root cannot be enumerated at all.
        """
        logger.debug(f"Starting scan of {len(self.roots)} root(s)")
        logger.debug(f"Filters: min_size={self.min_size}, extensions={self.extensions}, "
                     f"hidden={self.include_hidden}, follow_symlinks={self.follow_symlinks}")

        found_files: List[FileDescriptor] = []
        seen: Set[str] = set()
        processed_files = 0

        # Progress throttling: update every N files to reduce output overhead
        progress_interval = 5000
        progress_counter = 0

        start_time = time.time()
        for root in self.roots:
            for path, follow_links in self._iter_root(root):
                processed_files += 1
                progress_counter += 1

                key = self._identity_key(path)
                if key not in seen:
                    seen.add(key)
                    file_info = self._process_file(path, follow_links)
                    if file_info:
                        found_files.append(file_info)

                if progress_callback and progress_counter >= progress_interval:
                    progress_callback('scanning', processed_files, None)
                    progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback('scanning', processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    def _iter_root(self, root: str):
        """
        Yields (path, follow_links) for candidate files under one root.
        The root itself is always resolved through symlinks; follow_symlinks only
        governs entries found while walking.
        """
        try:
            st = os.stat(root)
        except OSError as e:
            error_msg = f"Cannot access {root}: {e.strerror or e}"
            logger.error(error_msg)
            raise RuntimeError(error_msg) from e

        if stat.S_ISREG(st.st_mode):
            yield root, True
            return
        if not stat.S_ISDIR(st.st_mode):
            error_msg = f"Not a file or directory: {root}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        def on_error(err: OSError):
            if err.filename == root:
                raise RuntimeError(f"Cannot read directory {root}: {err.strerror or err}") from err
            logger.debug(f"Skipping unreadable directory {err.filename}: {err}")

        for dirpath, dirs, files in os.walk(root, onerror=on_error, followlinks=self.follow_symlinks):
            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if self._prefilter_dirs(dirpath, d))
            for filename in sorted(files):
                if not self.include_hidden and self._is_hidden(filename):
                    continue
                yield os.path.join(dirpath, filename), self.follow_symlinks

    @staticmethod
    def _is_hidden(name: str) -> bool:
        return name.startswith(".")

    @staticmethod
    def _identity_key(path: str) -> str:
        """Spelling-independent key, so overlapping roots like /d and /d/. meet."""
        return os.path.normcase(os.path.normpath(os.path.abspath(path)))

    def _prefilter_dirs(self, parent: str, name: str) -> bool:
        """Skip hidden directories. os.walk itself decides whether to enter directory symlinks."""
        if not self.include_hidden and self._is_hidden(name):
            logger.debug(f"Skipping hidden directory: {os.path.join(parent, name)}")
            return False
        return True

    def _process_file(self, path: str, follow_links: bool) -> Optional[FileDescriptor]:
        """
        Process an individual file path and return a FileDescriptor if it passes all filters.
        Args:
            path: Path pointing to the file
            follow_links: Resolve a symbolic link instead of skipping it
        Returns:
            Optional[FileDescriptor]: descriptor if it passes filters, else None
        """
        try:
            st = os.lstat(path)
            if stat.S_ISLNK(st.st_mode):
                if not follow_links:
                    logger.debug(f"Skipping symbolic link: {path}")
                    return None
                st = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        size = st.st_size
        if size < self.min_size:
            logger.debug(f"Skipping {path} (size {size} bytes below minimum)")
            return None

        if not self._extension_passes(path):
            logger.debug(f"Skipping {path} (extension not allowed)")
            return None

        return FileDescriptor(path=path, size=size)

    def _extension_passes(self, path: str) -> bool:
        """
        Check if file matches any of the allowed extensions.
        Returns True if no extension filter is configured; an empty filter matches nothing.
        """
        if self.extensions is None:
            return True
        ext = os.path.splitext(path)[1].lower()
        return ext in self.extensions
