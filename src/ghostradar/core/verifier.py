"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/verifier.py
Content verification stage of Ghost Radar's duplicate detection pipeline.

STAGE CONTRACT
--------------
ContentVerifierImpl.verify():
  • Accepts candidate groups from the size partitioner (2+ files of one size each)
  • Digests every member over its full content (streaming, bounded memory)
  • Splits each group by digest and keeps sub-groups with 2+ files
  • Returns a ScanResult built by DuplicateSetAggregator

CONCURRENCY
-----------
• Every file is one task on a ThreadPoolExecutor; groups share no state
• ProgressTracker serializes counter increments and callback calls under one
  lock, so progress is cumulative and never goes backwards
• Results are assembled in input-group order after all tasks finish, so the
  output does not depend on thread scheduling

CANCELLATION
------------
• stopped_flag is polled before each digest; once raised, remaining tasks
  return without reading their file
• A group is only aggregated if every member was digested; groups cut short by
  cancellation are dropped and the result is marked cancelled
"""

import os
import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Callable, Sequence

from ghostradar.core.models import FileDescriptor, DigestedFile, DuplicateSet, ScanError, ScanResult
from ghostradar.core.interfaces import ContentVerifier, Hasher
from ghostradar.core.hasher import HasherImpl
from ghostradar.core.grouper import FileGrouperImpl
from ghostradar.core.aggregator import DuplicateSetAggregator

logger = logging.getLogger(__name__)


class VerifierConfig:
    MAX_WORKERS_LIMIT = 32

    @staticmethod
    def default_worker_count() -> int:
        """Hashing is I/O bound: a small multiple of the CPU count, capped."""
        return min(VerifierConfig.MAX_WORKERS_LIMIT, 2 * (os.cpu_count() or 1))


class ProgressTracker:
    """Thread-safe cumulative progress counter."""

    def __init__(self, total: int, callback: Optional[Callable[[int, int], None]] = None):
        self.total = total
        self.done = 0
        self._callback = callback
        self._lock = threading.Lock()

    def advance(self) -> int:
        with self._lock:
            self.done += 1
            if self._callback:
                self._callback(self.done, self.total)
            return self.done


class ContentVerifierImpl(ContentVerifier):
    """
    Confirms duplicates among same-size candidates by full-content digest.
    Two files with equal size and equal digest are reported as duplicates;
    there is no byte-by-byte comparison pass.
    """

    def __init__(
            self,
            hasher: Hasher = None,
            grouper: FileGrouperImpl = None,
            max_workers: Optional[int] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.grouper = grouper or FileGrouperImpl()
        self.max_workers = max_workers or VerifierConfig.default_worker_count()

    def verify(
            self,
            candidate_groups: Sequence[Sequence[FileDescriptor]],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> ScanResult:
        total_files = sum(len(group) for group in candidate_groups)
        logger.debug(f"Verifying {len(candidate_groups)} groups ({total_files} files) "
                     f"with {self.max_workers} workers")

        if not candidate_groups:
            return DuplicateSetAggregator.aggregate([])

        start_time = time.time()
        tracker = ProgressTracker(total_files, progress_callback)

        def digest_task(file: FileDescriptor) -> Optional[DigestedFile]:
            if stopped_flag and stopped_flag():
                return None
            digested = self.hasher.digest_file(file)
            tracker.advance()
            return digested

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                [executor.submit(digest_task, file) for file in group]
                for group in candidate_groups
            ]
            digested_groups = [[future.result() for future in group] for group in futures]

        duplicate_sets: List[DuplicateSet] = []
        digest_errors: List[ScanError] = []
        incomplete_groups = 0

        for group, digested in zip(candidate_groups, digested_groups):
            digest_errors.extend(
                ScanError(path=f.path, message=f.digest_error)
                for f in digested
                if f is not None and not f.is_digested
            )

            if any(f is None for f in digested):
                incomplete_groups += 1
                continue

            digest_groups = self.grouper.group_by_digest(digested)
            duplicate_sets.extend(DuplicateSetAggregator.build_sets(digest_groups, group[0].size))

        cancelled = incomplete_groups > 0
        if cancelled:
            logger.debug(f"Verification cancelled: {incomplete_groups} groups dropped")

        logger.debug(f"Verification done in {time.time() - start_time:.3f}s: "
                     f"{len(duplicate_sets)} duplicate sets, {len(digest_errors)} digest errors")

        return DuplicateSetAggregator.aggregate(
            duplicate_sets,
            digest_errors=digest_errors,
            files_scanned=total_files,
            cancelled=cancelled,
        )
