"""
Ghost Radar: exact duplicate file finder with policy-driven cleanup.

Core features:
- Two-phase detection: size grouping, then full-content digest (xxHash64 or SHA-256)
- Parallel, cancellable content verification with cumulative progress
- Retention policies: oldest, newest, shortest-path
- Safe deletion to system trash (via send2trash) or permanent removal
- CLI interface with human-readable and JSON output
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("ghost-radar")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from ghostradar.commands import ScanCommand
from ghostradar.core import (
    ScanParams, ScanResult, DuplicateSet, FileDescriptor, DigestedFile,
    HashAlgorithm, KeepPolicy, DeletionMethod, RetentionPlan, DeletionOutcome,
    FatalPreconditionError)
from ghostradar.utils.convert_utils import ConvertUtils
from ghostradar.services import DuplicateService
from ghostradar.services.file_service import FileService

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanResult",
    "DuplicateSet",
    "FileDescriptor",
    "DigestedFile",
    "HashAlgorithm",
    "KeepPolicy",
    "DeletionMethod",
    "RetentionPlan",
    "DeletionOutcome",
    "FatalPreconditionError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "__version__",
]
