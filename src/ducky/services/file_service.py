"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations used by the action phase: remove a file, or replace it with a
hard link to another file. Failures are raised as OSError for the caller to count.
"""
import logging
import os
import uuid

logger = logging.getLogger(__name__)


class FileService:
    """
    Thin wrappers over os primitives.
    """

    @staticmethod
    def remove_file(file_path: str) -> None:
        """Removes a file permanently."""
        os.remove(file_path)
        logger.debug(f"Removed {file_path}")

    @staticmethod
    def replace_with_hardlink(source_path: str, target_path: str) -> None:
        """
        Replaces target_path with a hard link to source_path.

        The link is first created under a temporary name next to the target and then
        renamed over it, so a failed link leaves the target untouched instead of
        leaving nothing at that path.
        """
        directory = os.path.dirname(target_path) or "."
        temp_path = os.path.join(
            directory, f".{os.path.basename(target_path)}.ducky-{uuid.uuid4().hex[:12]}.tmp"
        )

        os.link(source_path, temp_path)
        try:
            os.replace(temp_path, target_path)
        except OSError:
            FileService._discard(temp_path)
            raise
        logger.debug(f"Linked {target_path} -> {source_path}")

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            logger.error(f"Failed to clean up temporary link {path}: {e}")
