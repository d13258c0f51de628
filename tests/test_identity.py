"""
Tests for storage identity checks, the guard that keeps the action phase from
deleting or relinking a path that already is the canonical file.
"""
import os
from unittest import mock

import pytest
from ducky.services.identity import InodeStorageIdentity, PathStorageIdentity, get_storage_identity


@pytest.mark.skipif(os.name != "posix", reason="inode identity is POSIX only")
class TestInodeStorageIdentity:
    def test_hardlinked_paths_are_same_object(self, tmp_path):
        original = tmp_path / "a"
        original.write_bytes(b"data")
        os.link(original, tmp_path / "b")

        identity = InodeStorageIdentity()
        assert identity.same_storage_object(str(original), str(tmp_path / "b"))

    def test_copies_are_different_objects(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        (tmp_path / "b").write_bytes(b"data")
        assert not InodeStorageIdentity().same_storage_object(str(tmp_path / "a"), str(tmp_path / "b"))

    def test_same_directory_is_same_container(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        (tmp_path / "b").write_bytes(b"data")
        assert InodeStorageIdentity().same_container(str(tmp_path / "a"), str(tmp_path / "b"))

    def test_different_devices(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        (tmp_path / "b").write_bytes(b"data")
        real_stat = os.stat

        def fake_stat(path, *args, **kwargs):
            st = real_stat(path, *args, **kwargs)
            if str(path).endswith("b"):
                return os.stat_result((st.st_mode, st.st_ino, st.st_dev + 1) + tuple(st)[3:])
            return st

        with mock.patch("ducky.services.identity.os.stat", side_effect=fake_stat):
            assert not InodeStorageIdentity().same_container(str(tmp_path / "a"), str(tmp_path / "b"))

    def test_missing_path(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        identity = InodeStorageIdentity()
        assert not identity.same_storage_object(str(tmp_path / "a"), str(tmp_path / "gone"))
        # Unknown device defers the decision to the mutation itself
        assert identity.same_container(str(tmp_path / "a"), str(tmp_path / "gone"))


class TestPathStorageIdentity:
    def test_resolved_path_equality(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        identity = PathStorageIdentity()
        assert identity.same_storage_object(str(tmp_path / "a"), os.path.join(str(tmp_path), "sub", "..", "a"))
        assert not identity.same_storage_object(str(tmp_path / "a"), str(tmp_path / "b"))

    def test_container_always_same(self, tmp_path):
        assert PathStorageIdentity().same_container("/x", "/y")


class TestGetStorageIdentity:
    def test_posix_uses_inodes(self):
        with mock.patch("ducky.services.identity.os.name", "posix"):
            assert isinstance(get_storage_identity(), InodeStorageIdentity)

    def test_other_platforms_use_paths(self):
        with mock.patch("ducky.services.identity.os.name", "nt"):
            assert isinstance(get_storage_identity(), PathStorageIdentity)
