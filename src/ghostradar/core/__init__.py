"""
Core duplicate detection engine: walker, size partitioner, content verifier,
aggregator and retention engine.

This package contains the performance-critical foundation of Ghost Radar:
- FileScannerImpl: directory traversal with hidden/skip-dir/symlink rules and size/extension filters
- FileGrouperImpl: size and digest based grouping with singleton filtering
- HasherImpl + XXHashAlgorithmImpl / Sha256AlgorithmImpl: streaming full-content hashing
- ContentVerifierImpl: thread-pool digest verification with cancellation
- DuplicateSetAggregator: set construction, ordering and totals
- RetentionEngine: keep-policy selection and per-file-isolated deletion
- Models: FileDescriptor, DuplicateSet, ScanResult and configuration objects

No terminal or GUI dependencies: suitable for CLI and library usage.
"""

from .scanner import FileScannerImpl, SKIP_DIRS
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, Sha256AlgorithmImpl, algorithm_for
from .verifier import ContentVerifierImpl, ProgressTracker, VerifierConfig
from .aggregator import DuplicateSetAggregator
from .retention import RetentionEngine
from .models import (
    FileDescriptor, DigestedFile, DuplicateSet, ScanResult, ScanError, FileCollection,
    RetentionPlan, DeletionOutcome, DeletionFailure, ScanParams,
    HashAlgorithm, KeepPolicy, DeletionMethod,
    GhostRadarError, FatalPreconditionError)

__all__ = [
    "FileScannerImpl",
    "SKIP_DIRS",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "Sha256AlgorithmImpl",
    "algorithm_for",
    "ContentVerifierImpl",
    "ProgressTracker",
    "VerifierConfig",
    "DuplicateSetAggregator",
    "RetentionEngine",
    "FileDescriptor",
    "DigestedFile",
    "DuplicateSet",
    "ScanResult",
    "ScanError",
    "FileCollection",
    "RetentionPlan",
    "DeletionOutcome",
    "DeletionFailure",
    "ScanParams",
    "HashAlgorithm",
    "KeepPolicy",
    "DeletionMethod",
    "GhostRadarError",
    "FatalPreconditionError",
]
