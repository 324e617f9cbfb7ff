"""
Integration tests for ScanCommand: the orchestration layer between the CLI and core.
Verifies correct wiring of walker → size partition → content verification
with progress/cancellation support.
"""
import pytest

from ghostradar import ScanCommand, ScanParams, HashAlgorithm, FatalPreconditionError

from conftest import write_file


class TestScanCommand:
    """Test command orchestration logic."""

    def test_execute_finds_duplicate_sets(self, temp_dir, test_files):
        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir)))

        assert result.total_sets == 2
        assert not result.cancelled
        assert result.files_scanned == 7
        assert {s.size for s in result.duplicate_sets} == {1024, 2048}

    def test_recursive_includes_subdirectory_copy(self, temp_dir, test_files):
        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir), recursive=True))
        one_kb = next(s for s in result.duplicate_sets if s.size == 1024)

        assert str(test_files["sub_dup"]) in [f.path for f in one_kb.files]
        assert one_kb.files[0].path == str(test_files["sub_dup"])  # oldest

    def test_secure_algorithm(self, temp_dir, test_files):
        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir), algorithm=HashAlgorithm.SECURE))

        assert result.total_sets == 2
        assert all(len(s.digest) == 64 for s in result.duplicate_sets)

    def test_extension_filter(self, temp_dir):
        write_file(temp_dir / "a.jpg", b"img")
        write_file(temp_dir / "b.jpg", b"img")
        write_file(temp_dir / "a.txt", b"img")

        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir), extensions={"jpg"}))

        assert result.total_sets == 1
        assert sorted(f.name for f in result.duplicate_sets[0].files) == ["a.jpg", "b.jpg"]

    def test_empty_directory_yields_empty_result(self, temp_dir):
        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir)))

        assert result.total_sets == 0
        assert result.files_scanned == 0
        assert result.errors == []
        assert not result.cancelled

    def test_no_size_collisions_skips_hashing(self, temp_dir):
        write_file(temp_dir / "one.bin", b"1")
        write_file(temp_dir / "two.bin", b"22")
        stages = []

        result = ScanCommand().execute(
            ScanParams(root_path=str(temp_dir)),
            progress_callback=lambda stage, current, total: stages.append(stage)
        )

        assert result.total_sets == 0
        assert result.files_scanned == 2
        assert "hashing" not in stages

    def test_missing_root_raises(self, temp_dir):
        with pytest.raises(FatalPreconditionError):
            ScanCommand().execute(ScanParams(root_path=str(temp_dir / "missing")))

    def test_progress_stages_in_order(self, temp_dir, test_files):
        events = []

        ScanCommand().execute(
            ScanParams(root_path=str(temp_dir)),
            progress_callback=lambda stage, current, total: events.append((stage, current, total))
        )

        stages = [stage for stage, _, _ in events]
        assert stages.index("scanning") < stages.index("size grouping") < stages.index("hashing")
        hashing = [(c, t) for s, c, t in events if s == "hashing"]
        assert hashing[-1][0] == hashing[-1][1]
        assert [c for c, _ in hashing] == sorted(c for c, _ in hashing)

    def test_stopped_before_start_is_cancelled(self, temp_dir, test_files):
        result = ScanCommand().execute(ScanParams(root_path=str(temp_dir)), stopped_flag=lambda: True)

        assert result.cancelled
        assert result.total_sets == 0

    def test_stop_raised_after_hashing_keeps_result_complete(self, temp_dir, test_files):
        """A stop request that arrives once every file is digested does not discard the result."""
        cancel = {"set": False}

        def progress(stage, current, total):
            if stage == "hashing" and current == total:
                cancel["set"] = True

        result = ScanCommand().execute(
            ScanParams(root_path=str(temp_dir)),
            progress_callback=progress,
            stopped_flag=lambda: cancel["set"]
        )

        assert cancel["set"]
        assert not result.cancelled
        assert result.total_sets == 2

    def test_repeated_runs_are_identical(self, temp_dir, test_files):
        params = ScanParams(root_path=str(temp_dir), recursive=True)

        assert ScanCommand().execute(params) == ScanCommand().execute(params)
