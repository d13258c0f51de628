"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups, with no dependencies outside core.
Ordering depends only on sizes and path strings, never on file metadata or on the
order in which hash jobs finished.
"""
from typing import List, Tuple

from ducky.core.models import DuplicateGroup


class Sorter:
    """
    Orders duplicate groups for presentation and for the action phase.
    Sorting priority (applied lexicographically):
    1. Reclaimable bytes, descending
    2. Per-file size, descending
    3. Canonical path, ascending
    """

    @staticmethod
    def sort_key(group: DuplicateGroup) -> Tuple[int, int, str]:
        return -group.reclaimable, -group.size, group.canonical

    @staticmethod
    def sort_groups(groups: List[DuplicateGroup]) -> List[DuplicateGroup]:
        """Returns a new sorted list; the input is left untouched."""
        if not groups:
            return []
        return sorted(groups, key=Sorter.sort_key)
