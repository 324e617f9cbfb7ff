"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate detection pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so that
walkers, hash algorithms and verifiers can be swapped (or faked in tests) freely.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (xxHash64, SHA-256, ...).
- Hasher: Streams a file through a HashAlgorithm and returns its hex digest.
- FileScanner: Walks a root path and returns a FileCollection.
- ContentVerifier: Turns size-candidate groups into a ScanResult.
"""

from typing import Protocol, List, Optional, Callable
from ghostradar.core.models import (
    FileDescriptor,
    DigestedFile,
    FileCollection,
    ScanResult,
)


class IncrementalHash(Protocol):
    """Subset of the hashlib object API shared by hashlib and xxhash."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> IncrementalHash:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for computing full-content digests of files."""
    def compute_digest(self, file: FileDescriptor) -> str: ...
    def digest_file(self, file: FileDescriptor) -> DigestedFile: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> FileCollection:
        """
        Scan files from the configured root.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            FileCollection containing all scanned files matching filters and per-path errors.
        """
        ...


class ContentVerifier(Protocol):
    """
    Interface for the content verification stage: digest every candidate and
    keep only sub-groups with identical digests.
    """
    def verify(
        self,
        candidate_groups: List[List[FileDescriptor]],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> ScanResult:
        ...
