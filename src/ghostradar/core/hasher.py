"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements streaming file hashing with pluggable hash algorithms.

Files are read in fixed-size chunks and fed into an incremental hash object,
so memory use does not depend on file size. The whole file is always hashed:
partial reads could report files as duplicates that are not.
"""

import hashlib
import logging

import xxhash

from ghostradar.core.models import FileDescriptor, DigestedFile, HashAlgorithm
from ghostradar.core.interfaces import Hasher, HashAlgorithm as HashAlgorithmProtocol, IncrementalHash

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithmProtocol):
    """xxHash64: fast, not collision resistant against a deliberate attacker."""
    name = "xxh64"

    def new(self) -> IncrementalHash:
        return xxhash.xxh64()


class Sha256AlgorithmImpl(HashAlgorithmProtocol):
    """SHA-256: slower, for trees where adversarial collisions matter."""
    name = "sha256"

    def new(self) -> IncrementalHash:
        return hashlib.sha256()


def algorithm_for(choice: HashAlgorithm) -> HashAlgorithmProtocol:
    """Maps the public HashAlgorithm choice onto an implementation."""
    if choice == HashAlgorithm.SECURE:
        return Sha256AlgorithmImpl()
    return XXHashAlgorithmImpl()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Computes full-content hex digests chunk by chunk.
    """

    def __init__(self, algorithm: HashAlgorithmProtocol = None, chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, file: FileDescriptor) -> str:
        """
        Streams the file through the algorithm and returns the hex digest.
        Raises OSError if the file cannot be opened or read.
        """
        hash_obj = self.algorithm.new()
        with open(file.path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                hash_obj.update(chunk)
        return hash_obj.hexdigest()

    def digest_file(self, file: FileDescriptor) -> DigestedFile:
        """
        Like compute_digest, but a read failure is recorded on the result
        instead of being raised.
        """
        try:
            digest = self.compute_digest(file)
        except OSError as e:
            logger.warning(f"Could not hash {file.path}: {e}")
            return DigestedFile.from_descriptor(file, digest=None, digest_error=str(e))
        return DigestedFile.from_descriptor(file, digest=digest)
