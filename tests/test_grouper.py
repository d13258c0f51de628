"""
Unit tests for FileGrouperImpl.
Verifies size and fingerprint bucketing, failure accounting and the order-independent merge.
"""
import logging
import time

from ducky.core import FileDescriptor, FileGrouperImpl


class TestGroupBySize:
    def test_groups_by_size_filters_single_files(self):
        """
        group_by_size returns ONLY groups with 2+ files of same size.
        Single files are filtered out (not considered duplicates).
        """
        files = [
            FileDescriptor(path="/a.txt", size=1024),
            FileDescriptor(path="/b.txt", size=1024),  # Same size → group
            FileDescriptor(path="/c.txt", size=2048),  # Single file → filtered
        ]

        size_groups = FileGrouperImpl().group_by_size(files)

        assert list(size_groups) == [1024]
        assert [f.path for f in size_groups[1024]] == ["/a.txt", "/b.txt"]


class TestGroupByHash:
    def test_groups_by_hash_filters_small_groups(self):
        files = [
            FileDescriptor(path="/dup1.txt", size=100),
            FileDescriptor(path="/dup2.txt", size=100),
            FileDescriptor(path="/unique.txt", size=100),
        ]
        hashes = {"/dup1.txt": b"same", "/dup2.txt": b"same", "/unique.txt": b"other"}

        hash_groups = FileGrouperImpl().group_by_hash(files, hashes)

        assert len(hash_groups) == 1
        assert {f.path for f in hash_groups[b"same"]} == {"/dup1.txt", "/dup2.txt"}

    def test_files_without_hash_are_excluded(self):
        """A file whose read failed has no digest and cannot join any bucket."""
        files = [
            FileDescriptor(path="/a", size=1),
            FileDescriptor(path="/b", size=1),
            FileDescriptor(path="/c", size=1),
        ]
        hashes = {"/a": b"h", "/b": b"h"}

        hash_groups = FileGrouperImpl().group_by_hash(files, hashes)
        assert [f.path for f in hash_groups[b"h"]] == ["/a", "/b"]


class TestHashFiles:
    def test_failed_reads_are_counted_and_logged(self, caplog):
        files = [FileDescriptor(path="/ok", size=1), FileDescriptor(path="/broken", size=1)]

        def hash_func(file):
            if file.path == "/broken":
                raise PermissionError(13, "Permission denied")
            return b"digest"

        with caplog.at_level(logging.WARNING, logger="ducky.core.grouper"):
            hashes, failed = FileGrouperImpl().hash_files(files, hash_func, "quick-hash")

        assert hashes == {"/ok": b"digest"}
        assert failed == 1
        assert "quick-hash failed /broken" in caplog.text

    def test_parallel_result_matches_sequential(self):
        """Completion order must not leak into the merged result."""
        files = [FileDescriptor(path=f"/f{i:02d}", size=1) for i in range(20)]

        def hash_func(file):
            index = int(file.path[2:])
            # Early files finish last
            time.sleep((20 - index) * 0.001)
            return bytes([index % 3])

        sequential = FileGrouperImpl(workers=1).hash_files(files, hash_func)
        parallel = FileGrouperImpl(workers=8).hash_files(files, hash_func)
        assert parallel == sequential

        groups_seq = FileGrouperImpl().group_by_hash(files, sequential[0])
        groups_par = FileGrouperImpl().group_by_hash(files, parallel[0])
        assert {k: [f.path for f in v] for k, v in groups_seq.items()} == \
            {k: [f.path for f in v] for k, v in groups_par.items()}

    def test_merge_results_ignores_arrival_order(self):
        results = [("/b", b"2"), ("/a", b"1"), ("/c", None)]
        assert FileGrouperImpl.merge_results(results) == FileGrouperImpl.merge_results(results[::-1])
        assert FileGrouperImpl.merge_results(results) == ({"/a": b"1", "/b": b"2"}, 1)

    def test_workers_lower_bound(self):
        assert FileGrouperImpl(workers=0).workers == 1
