"""
Unit tests for HasherImpl with XXHashAlgorithmImpl and Sha256AlgorithmImpl.
Verifies streaming full-content digests and per-file error capture.
"""
import hashlib
import builtins
import pytest
import xxhash

from ghostradar.core.hasher import (
    HasherImpl, XXHashAlgorithmImpl, Sha256AlgorithmImpl, algorithm_for, CHUNK_SIZE
)
from ghostradar.core.models import HashAlgorithm, FileDescriptor

from conftest import make_descriptor


def descriptor_for(path) -> FileDescriptor:
    return make_descriptor(str(path), size=path.stat().st_size)


class TestHasherImpl:
    """Test digest computation with chunk-based reading."""

    def test_same_content_produces_same_digest(self, tmp_path):
        content = b"test content " * 1000
        f1 = tmp_path / "one.bin"
        f2 = tmp_path / "two.bin"
        f1.write_bytes(content)
        f2.write_bytes(content)

        hasher = HasherImpl(XXHashAlgorithmImpl())

        assert hasher.compute_digest(descriptor_for(f1)) == hasher.compute_digest(descriptor_for(f2))

    def test_different_content_produces_different_digests(self, tmp_path):
        f1 = tmp_path / "a.bin"
        f2 = tmp_path / "b.bin"
        f1.write_bytes(b"A" * 1024)
        f2.write_bytes(b"B" * 1024)

        hasher = HasherImpl(XXHashAlgorithmImpl())

        assert hasher.compute_digest(descriptor_for(f1)) != hasher.compute_digest(descriptor_for(f2))

    def test_xxhash_digest_matches_one_shot_hash(self, tmp_path):
        """Chunked hashing must equal hashing the whole content at once."""
        content = bytes(range(256)) * 1000  # spans several chunks
        target = tmp_path / "data.bin"
        target.write_bytes(content)

        digest = HasherImpl(XXHashAlgorithmImpl()).compute_digest(descriptor_for(target))

        assert digest == xxhash.xxh64(content).hexdigest()
        assert len(digest) == 16  # 64 bits as hex

    def test_sha256_digest_matches_hashlib(self, tmp_path):
        content = b"secure" * 50_000
        target = tmp_path / "data.bin"
        target.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl()).compute_digest(descriptor_for(target))

        assert digest == hashlib.sha256(content).hexdigest()

    def test_difference_in_last_byte_is_detected(self, tmp_path):
        """The whole file is hashed: no sampling that could miss a late difference."""
        base = b"X" * (3 * CHUNK_SIZE + 17)
        f1 = tmp_path / "one.bin"
        f2 = tmp_path / "two.bin"
        f1.write_bytes(base + b"1")
        f2.write_bytes(base + b"2")

        hasher = HasherImpl()

        assert hasher.compute_digest(descriptor_for(f1)) != hasher.compute_digest(descriptor_for(f2))

    def test_reads_in_bounded_chunks(self, tmp_path, monkeypatch):
        """No read requests more than chunk_size bytes."""
        target = tmp_path / "big.bin"
        target.write_bytes(b"Z" * 10_000)
        requested = []
        original_open = builtins.open

        class SpyFile:
            def __init__(self, f):
                self._f = f

            def read(self, size=-1):
                requested.append(size)
                return self._f.read(size)

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self._f.close()

        def spy_open(path, mode="r", *args, **kwargs):
            return SpyFile(original_open(path, mode, *args, **kwargs))

        monkeypatch.setattr(builtins, "open", spy_open)
        HasherImpl(chunk_size=1024).compute_digest(descriptor_for(target))

        assert requested
        assert all(0 < size <= 1024 for size in requested)
        assert len(requested) == 11  # 10 data chunks (9 full, 1 partial) + EOF read

    def test_empty_file_has_digest(self, tmp_path):
        target = tmp_path / "empty.bin"
        target.write_bytes(b"")

        digest = HasherImpl().compute_digest(descriptor_for(target))

        assert digest == xxhash.xxh64(b"").hexdigest()

    def test_compute_digest_raises_for_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            HasherImpl().compute_digest(make_descriptor(str(tmp_path / "gone.bin")))

    def test_digest_file_records_error_instead_of_raising(self, tmp_path):
        missing = make_descriptor(str(tmp_path / "gone.bin"), size=10, modified_at=5.0)

        digested = HasherImpl().digest_file(missing)

        assert digested.digest is None
        assert digested.digest_error
        assert digested.path == missing.path
        assert digested.modified_at == 5.0

    def test_digest_file_keeps_descriptor_fields(self, tmp_path):
        target = tmp_path / "kept.bin"
        target.write_bytes(b"payload")
        descriptor = descriptor_for(target)

        digested = HasherImpl().digest_file(descriptor)

        assert digested.descriptor == descriptor
        assert digested.is_digested
        assert digested.digest_error is None

    def test_rejects_non_positive_chunk_size(self):
        with pytest.raises(ValueError):
            HasherImpl(chunk_size=0)


class TestAlgorithmSelection:
    def test_fast_maps_to_xxhash(self):
        assert isinstance(algorithm_for(HashAlgorithm.FAST), XXHashAlgorithmImpl)

    def test_secure_maps_to_sha256(self):
        assert isinstance(algorithm_for(HashAlgorithm.SECURE), Sha256AlgorithmImpl)
