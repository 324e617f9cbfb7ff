"""
Shared fixtures for duplicate detection tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict

from ghostradar.core.models import FileDescriptor, DigestedFile


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_file(path: Path, content: bytes, mtime: float = None) -> Path:
    """Writes content and optionally pins the modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate detection scenarios:
    - 2 identical 1KB files + 1 copy in a subdirectory
    - 2 identical 2KB files
    - 2 unique files
    - 1 empty file (filtered by the default minimum size)
    - 1 file with .tmp extension
    - hidden file, skipped directory and symlink (never reported)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = write_file(temp_dir / "dup1_a.txt", content_a, mtime=1_000_000)
    files["dup1_b"] = write_file(temp_dir / "dup1_b.txt", content_a, mtime=2_000_000)

    content_b = b"B" * 2048
    files["dup2_a"] = write_file(temp_dir / "dup2_a.txt", content_b, mtime=3_000_000)
    files["dup2_b"] = write_file(temp_dir / "dup2_b.txt", content_b, mtime=1_500_000)

    files["unique1"] = write_file(temp_dir / "unique1.txt", b"C" * 1500)
    files["unique2"] = write_file(temp_dir / "unique2.txt", b"D" * 2500)

    files["empty"] = write_file(temp_dir / "empty.txt", b"")

    files["filtered"] = write_file(temp_dir / "ignore.tmp", b"E" * 1024)

    files["sub_dup"] = write_file(temp_dir / "subdir" / "dup_in_subdir.txt", content_a, mtime=500_000)

    files["hidden"] = write_file(temp_dir / ".hidden.txt", content_a)
    files["skipped"] = write_file(temp_dir / "node_modules" / "copy.txt", content_a)

    return files


def make_descriptor(path: str, size: int = 100, modified_at: float = 0.0) -> FileDescriptor:
    return FileDescriptor(path=path, name=os.path.basename(path), size=size, modified_at=modified_at)


def make_digested(path: str, digest: str = "abc", size: int = 100, modified_at: float = 0.0) -> DigestedFile:
    return DigestedFile.from_descriptor(make_descriptor(path, size, modified_at), digest=digest)
