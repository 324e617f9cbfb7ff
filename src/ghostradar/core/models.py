"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning, duplicate detection and retention.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Set, Any
import os
from enum import Enum

from ghostradar.utils.convert_utils import ConvertUtils


# =============================
# Exceptions
# =============================

class GhostRadarError(Exception):
    """Base class for all errors raised by the duplicate detection core."""


class FatalPreconditionError(GhostRadarError, RuntimeError):
    """Target path is missing or of an unsupported type; the whole run is aborted."""


# =============================
# Enums
# =============================

class HashAlgorithm(Enum):
    """
    Digest function used by the content verifier.
    Both variants hash the full byte stream of each file.
    """
    FAST = "fast"
    SECURE = "secure"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithm.FAST: "xxHash64",
            HashAlgorithm.SECURE: "SHA-256",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class KeepPolicy(Enum):
    """Which member of a duplicate set survives deletion."""
    OLDEST = "oldest"
    NEWEST = "newest"
    SHORTEST_PATH = "shortest-path"

    @property
    def display_name(self) -> str:
        mapping = {
            KeepPolicy.OLDEST: "Oldest",
            KeepPolicy.NEWEST: "Newest",
            KeepPolicy.SHORTEST_PATH: "Shortest Path",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class DeletionMethod(Enum):
    TRASH = "trash"
    PERMANENT = "permanent"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileDescriptor:
    """
    Represents a single regular file discovered by the walker.
    Uniquely identified by its path within one scan run.
    """
    path: str
    name: str
    size: int  # in bytes
    modified_at: float  # st_mtime

    @staticmethod
    def from_path(path: str, stat_result: os.stat_result) -> 'FileDescriptor':
        return FileDescriptor(
            path=path,
            name=os.path.basename(path),
            size=stat_result.st_size,
            modified_at=stat_result.st_mtime,
        )

    @property
    def extension(self) -> str:
        """Lowercased suffix including the dot, or empty string."""
        return os.path.splitext(self.name)[1].lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "size": self.size,
            "modified_at": self.modified_at,
        }

    def __repr__(self):
        return f"<FileDescriptor path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class DigestedFile(FileDescriptor):
    """
    A FileDescriptor extended with the outcome of content hashing.
    `digest` is None when hashing failed; `digest_error` then holds the reason.
    """
    digest: Optional[str] = None
    digest_error: Optional[str] = None

    @staticmethod
    def from_descriptor(
            descriptor: FileDescriptor,
            digest: Optional[str] = None,
            digest_error: Optional[str] = None
    ) -> 'DigestedFile':
        return DigestedFile(
            path=descriptor.path,
            name=descriptor.name,
            size=descriptor.size,
            modified_at=descriptor.modified_at,
            digest=digest,
            digest_error=digest_error,
        )

    @property
    def descriptor(self) -> FileDescriptor:
        return FileDescriptor(
            path=self.path,
            name=self.name,
            size=self.size,
            modified_at=self.modified_at,
        )

    @property
    def is_digested(self) -> bool:
        return self.digest is not None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["digest"] = self.digest
        if self.digest_error is not None:
            data["digest_error"] = self.digest_error
        return data

    def __repr__(self):
        return f"<DigestedFile path={self.path}, size={self.size}, digest={self.digest}>"


@dataclass(frozen=True)
class ScanError:
    """A single path that could not be read during traversal or hashing."""
    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "error": self.message}


@dataclass
class FileCollection:
    """Output of the walker: accepted files plus per-entry failures."""
    files: List[FileDescriptor] = field(default_factory=list)
    errors: List[ScanError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)


@dataclass(frozen=True)
class DuplicateSet:
    """
    A confirmed group of byte-identical files.
    All members share size and digest; files are ordered oldest first.
    """
    digest: str
    size: int
    files: Tuple[DigestedFile, ...]

    def __post_init__(self):
        if len(self.files) < 2:
            raise ValueError("A duplicate set needs at least two files")
        for file in self.files:
            if file.size != self.size:
                raise ValueError(f"File {file.path} has size {file.size}, expected {self.size}")
            if file.digest != self.digest:
                raise ValueError(f"File {file.path} does not match set digest {self.digest}")

    @property
    def count(self) -> int:
        """How many files are in this set."""
        return len(self.files)

    @property
    def wasted_space(self) -> int:
        return self.size * (self.count - 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "digest": self.digest,
            "size": self.size,
            "files": [f.to_dict() for f in self.files],
            "wasted_space": self.wasted_space,
        }

    def __repr__(self):
        return f"<DuplicateSet size={self.size}, count={self.count}, digest={self.digest}>"


@dataclass(frozen=True)
class ScanResult:
    """
    The sole artifact returned by a scan.
    duplicate_sets are ordered by wasted space, largest first.
    """
    duplicate_sets: Tuple[DuplicateSet, ...] = ()
    scan_errors: Tuple[ScanError, ...] = ()
    digest_errors: Tuple[ScanError, ...] = ()
    files_scanned: int = 0
    cancelled: bool = False

    @staticmethod
    def empty(
            scan_errors: Tuple[ScanError, ...] = (),
            files_scanned: int = 0,
            cancelled: bool = False
    ) -> 'ScanResult':
        return ScanResult(
            duplicate_sets=(),
            scan_errors=tuple(scan_errors),
            files_scanned=files_scanned,
            cancelled=cancelled,
        )

    @property
    def total_sets(self) -> int:
        return len(self.duplicate_sets)

    @property
    def total_duplicate_files(self) -> int:
        return sum(s.count - 1 for s in self.duplicate_sets)

    @property
    def total_wasted_space(self) -> int:
        return sum(s.wasted_space for s in self.duplicate_sets)

    @property
    def errors(self) -> List[ScanError]:
        return list(self.scan_errors) + list(self.digest_errors)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable view used for machine-readable output."""
        return {
            "duplicate_sets": [s.to_dict() for s in self.duplicate_sets],
            "total_sets": self.total_sets,
            "total_duplicate_files": self.total_duplicate_files,
            "total_wasted_space": self.total_wasted_space,
            "files_scanned": self.files_scanned,
            "errors": [e.to_dict() for e in self.errors],
            "cancelled": self.cancelled,
        }

    def __repr__(self):
        return (f"<ScanResult sets={self.total_sets}, "
                f"wasted={self.total_wasted_space}, cancelled={self.cancelled}>")


@dataclass(frozen=True)
class RetentionPlan:
    """Preview of a deletion: one kept file and the rest marked for removal."""
    kept: FileDescriptor
    to_delete: Tuple[FileDescriptor, ...]

    @property
    def reclaimable_space(self) -> int:
        return sum(f.size for f in self.to_delete)


@dataclass(frozen=True)
class DeletionFailure:
    descriptor: FileDescriptor
    error_message: str


@dataclass(frozen=True)
class DeletionOutcome:
    """What actually happened when a RetentionPlan was executed."""
    kept: FileDescriptor
    deleted: Tuple[FileDescriptor, ...] = ()
    failed: Tuple[DeletionFailure, ...] = ()

    @property
    def freed_space(self) -> int:
        return sum(f.size for f in self.deleted)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kept": self.kept.path,
            "deleted": [f.path for f in self.deleted],
            "failed": [{"path": f.descriptor.path, "error": f.error_message} for f in self.failed],
            "freed_space": self.freed_space,
        }


"""
DTO for scan parameters with built-in validation.
Interface-agnostic: used by the CLI and by library callers.
"""

@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    root_path: str
    recursive: bool = False
    extensions: Set[str] = field(default_factory=set)
    min_size_bytes: int = 1
    algorithm: HashAlgorithm = HashAlgorithm.FAST
    keep_policy: KeepPolicy = KeepPolicy.OLDEST
    max_workers: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_path:
            raise ValueError("Root path cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = set()
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.add(ext)
        self.extensions = normalized

    @staticmethod
    def from_human_readable(
            root_path: str,
            min_size_str: str = "1",
            extensions_str: str = "",
            recursive: bool = False,
            algorithm: HashAlgorithm = HashAlgorithm.FAST,
            keep_policy: KeepPolicy = KeepPolicy.OLDEST,
            max_workers: Optional[int] = None,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)

        ext_set = {
            ext.strip() for ext in extensions_str.split(",") if ext.strip()
        } if extensions_str else set()

        return ScanParams(
            root_path=root_path,
            recursive=recursive,
            extensions=ext_set,
            min_size_bytes=min_size,
            algorithm=algorithm,
            keep_policy=keep_policy,
            max_workers=max_workers,
        )
