"""
Unit tests for core/models.py
Covers duplicate group invariants, action counters, run statistics and parameter validation.
"""
import pytest
from ducky.core.models import (
    ActionMode,
    ActionStats,
    CandidateGroup,
    DeduplicationParams,
    DeduplicationStats,
    DuplicateGroup,
    FileDescriptor,
    Stage,
)


class TestDuplicateGroup:
    """A confirmed group: sorted members, canonical first, reclaimable bytes."""

    def test_three_identical_files(self):
        """Three 100-byte copies: canonical is the smallest path, 200 bytes reclaimable."""
        group = DuplicateGroup.from_members(100, ["/x/C", "/x/A", "/x/B"])

        assert group.members == ("/x/A", "/x/B", "/x/C")
        assert group.canonical == "/x/A"
        assert group.duplicates == ("/x/B", "/x/C")
        assert group.reclaimable == 200

    def test_rejects_single_member(self):
        with pytest.raises(ValueError, match="at least two"):
            DuplicateGroup.from_members(100, ["/only"])

    def test_rejects_unsorted_members(self):
        with pytest.raises(ValueError, match="sorted"):
            DuplicateGroup(size=10, members=("/b", "/a"))

    def test_canonical_uses_code_point_order(self):
        """Uppercase sorts before lowercase; no locale-aware collation."""
        group = DuplicateGroup.from_members(1, ["/data/a.txt", "/data/B.txt"])
        assert group.canonical == "/data/B.txt"

    def test_to_dict(self):
        group = DuplicateGroup.from_members(5, ["/b", "/a"])
        assert group.to_dict() == {"size": 5, "members": ["/a", "/b"]}

    def test_is_immutable(self):
        group = DuplicateGroup.from_members(5, ["/b", "/a"])
        with pytest.raises(AttributeError):
            group.size = 6  # type: ignore[misc]


class TestCandidateGroup:
    def test_paths_and_candidate_flag(self):
        files = [FileDescriptor("/a", 3), FileDescriptor("/b", 3)]
        group = CandidateGroup(size=3, files=files)
        assert group.paths == ["/a", "/b"]
        assert group.is_candidate()
        assert not CandidateGroup(size=3, files=files[:1]).is_candidate()

    def test_file_extension_is_lowercase(self):
        assert FileDescriptor("/photos/IMG.JPG", 1).extension == ".jpg"
        assert FileDescriptor("/photos/README", 1).extension == ""


class TestActionStats:
    def test_defaults_are_zero(self):
        stats = ActionStats()
        assert stats.as_dict() == {
            "deleted": 0,
            "linked": 0,
            "skipped_same_inode": 0,
            "skipped_cross_device": 0,
            "errors": 0,
        }
        assert not stats.has_errors
        assert not stats.refused

    def test_str_lists_every_counter(self):
        stats = ActionStats(deleted=2, errors=1)
        assert str(stats) == (
            "actions: deleted=2 linked=0 skipped_same_inode=0 skipped_cross_device=0 errors=1"
        )
        assert stats.has_errors


class TestActionMode:
    def test_only_delete_and_hardlink_mutate(self):
        assert not ActionMode.NONE.mutates
        assert ActionMode.DELETE.mutates
        assert ActionMode.HARDLINK.mutates


class TestDeduplicationStats:
    def test_timings_have_fixed_keys(self):
        stats = DeduplicationStats()
        stats.record_duration(Stage.DISCOVER, 0.25)
        stats.update_stage(Stage.QUICK, groups_found=1, files_processed=2, duration=0.5)

        timings = stats.timings_ms()
        assert list(timings) == [
            "discover_ms", "size_group_ms", "quick_hash_ms", "full_hash_ms", "actions_ms"
        ]
        assert timings["discover_ms"] == 250
        assert timings["quick_hash_ms"] == 500
        assert timings["actions_ms"] == 0

    def test_update_stage_accumulates(self):
        stats = DeduplicationStats()
        stats.update_stage(Stage.FULL, groups_found=1, files_processed=2, duration=0.1)
        stats.update_stage(Stage.FULL, groups_found=2, files_processed=4, duration=0.1)
        assert stats.stage_stats["full_hash"]["groups"] == 3
        assert stats.stage_stats["full_hash"]["files"] == 6

    def test_print_summary_mentions_recorded_stages(self):
        stats = DeduplicationStats()
        stats.update_stage(Stage.SIZE, groups_found=1, files_processed=2, duration=0.0)
        summary = stats.print_summary()
        assert "Size grouping: 1 / 2" in summary
        assert "Full Hash" not in summary


class TestDeduplicationParams:
    """Parameter validation happens at construction time."""

    def test_defaults(self):
        params = DeduplicationParams(roots=["/data"])
        assert params.min_size_bytes == 1024
        assert params.quick_bytes == 65536
        assert params.action is ActionMode.NONE
        assert params.confirmed is False
        assert params.workers == 1
        assert params.extensions is None

    def test_requires_roots(self):
        with pytest.raises(ValueError, match="At least one path"):
            DeduplicationParams(roots=[])

    def test_rejects_negative_min_size_and_bad_workers(self):
        with pytest.raises(ValueError):
            DeduplicationParams(roots=["/data"], min_size_bytes=-1)
        with pytest.raises(ValueError, match="workers"):
            DeduplicationParams(roots=["/data"], workers=0)

    def test_out_of_range_quick_bytes_is_accepted(self):
        """The quick-hash stage clamps the sample size; params never reject it."""
        assert DeduplicationParams(roots=["/data"], quick_bytes=-1).quick_bytes == -1
        assert DeduplicationParams(roots=["/data"], quick_bytes=10).quick_bytes == 10

    def test_extensions_normalized(self):
        params = DeduplicationParams(roots=["/data"], extensions=["JPG", ".png", "jpg", " "])
        assert params.extensions == [".jpg", ".png"]

    def test_parse_extensions(self):
        assert DeduplicationParams.parse_extensions(" JPG , png,, .gif ") == ["jpg", "png", ".gif"]
        assert DeduplicationParams.parse_extensions(None) is None

    def test_blank_extension_list_stays_an_empty_filter(self):
        """An explicit list without usable entries is a filter that matches nothing."""
        assert DeduplicationParams.parse_extensions("   , ,  ") == []
        assert DeduplicationParams.parse_extensions("") == []
        params = DeduplicationParams.from_human_readable(roots=["/a"], extensions_str=" , ,")
        assert params.extensions == []

    def test_from_human_readable(self):
        params = DeduplicationParams.from_human_readable(
            roots=["/a", "/b"],
            min_size_str="256KB",
            quick_bytes_str="1MB",
            extensions_str="jpg,png",
            action=ActionMode.HARDLINK,
            confirmed=True,
            workers=4,
        )
        assert params.roots == ["/a", "/b"]
        assert params.min_size_bytes == 256 * 1024
        assert params.quick_bytes == 1024 * 1024
        assert params.extensions == [".jpg", ".png"]
        assert params.action is ActionMode.HARDLINK
        assert params.confirmed is True
        assert params.workers == 4

    def test_from_human_readable_rejects_bad_size(self):
        with pytest.raises(ValueError):
            DeduplicationParams.from_human_readable(roots=["/a"], min_size_str="lots")
