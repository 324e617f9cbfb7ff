"""
Unit tests for FileGrouperImpl.
Verifies size partitioning and digest partitioning with singleton filtering.
"""
from ghostradar.core import FileGrouperImpl
from ghostradar.core.models import DigestedFile

from conftest import make_descriptor, make_digested


class TestSizePartitioning:
    """Size groups: exact byte size, discovery order, singletons dropped."""

    def test_group_by_size_keeps_every_size(self):
        files = [
            make_descriptor("/a.txt", size=1024),
            make_descriptor("/b.txt", size=1024),
            make_descriptor("/c.txt", size=2048),
        ]

        groups = FileGrouperImpl().group_by_size(files)

        assert set(groups) == {1024, 2048}
        assert [f.path for f in groups[1024]] == ["/a.txt", "/b.txt"]

    def test_filter_candidates_drops_singletons(self):
        files = [
            make_descriptor("/a.txt", size=1024),
            make_descriptor("/b.txt", size=1024),
            make_descriptor("/c.txt", size=2048),
        ]
        grouper = FileGrouperImpl()

        candidates = grouper.filter_candidates(grouper.group_by_size(files))

        assert len(candidates) == 1
        assert [f.path for f in candidates[0]] == ["/a.txt", "/b.txt"]

    def test_different_sizes_never_share_a_group(self):
        files = [make_descriptor(f"/f{i}", size=i % 3 + 1) for i in range(12)]

        for group in FileGrouperImpl().partition_by_size(files):
            assert len({f.size for f in group}) == 1

    def test_preserves_discovery_order(self):
        files = [
            make_descriptor("/z.txt", size=10),
            make_descriptor("/y.txt", size=20),
            make_descriptor("/x.txt", size=10),
            make_descriptor("/w.txt", size=20),
        ]

        candidates = FileGrouperImpl().partition_by_size(files)

        assert [[f.path for f in g] for g in candidates] == [["/z.txt", "/x.txt"], ["/y.txt", "/w.txt"]]

    def test_zero_byte_files_group_together(self):
        files = [make_descriptor("/e1", size=0), make_descriptor("/e2", size=0)]

        candidates = FileGrouperImpl().partition_by_size(files)

        assert len(candidates) == 1
        assert candidates[0][0].size == 0

    def test_empty_input(self):
        assert FileGrouperImpl().partition_by_size([]) == []

    def test_does_not_mutate_input(self):
        files = [make_descriptor("/a", size=1), make_descriptor("/b", size=1)]
        snapshot = list(files)

        FileGrouperImpl().partition_by_size(files)

        assert files == snapshot


class TestDigestPartitioning:
    """Digest groups: failed digests excluded, singletons dropped."""

    def test_groups_by_digest_filters_small_groups(self):
        files = [
            make_digested("/dup1.txt", digest="aaaa"),
            make_digested("/dup2.txt", digest="aaaa"),
            make_digested("/unique.txt", digest="bbbb"),
        ]

        groups = FileGrouperImpl().group_by_digest(files)

        assert list(groups) == ["aaaa"]
        assert [f.path for f in groups["aaaa"]] == ["/dup1.txt", "/dup2.txt"]

    def test_failed_digest_is_not_grouped(self):
        """A file whose digest failed cannot make its partner a duplicate."""
        ok = make_digested("/ok.txt", digest="aaaa")
        failed = DigestedFile.from_descriptor(
            make_descriptor("/failed.txt"), digest=None, digest_error="Permission denied"
        )

        assert FileGrouperImpl().group_by_digest([ok, failed]) == {}

    def test_multiple_digest_groups_within_one_size(self):
        files = [
            make_digested("/a1", digest="aaaa"),
            make_digested("/b1", digest="bbbb"),
            make_digested("/a2", digest="aaaa"),
            make_digested("/b2", digest="bbbb"),
        ]

        groups = FileGrouperImpl().group_by_digest(files)

        assert {k: [f.path for f in v] for k, v in groups.items()} == {
            "aaaa": ["/a1", "/a2"],
            "bbbb": ["/b1", "/b2"],
        }
