"""
Unified command orchestrator for duplicate scanning.
This is the single source of truth for the scan workflow, used by the CLI and library callers.
"""
import dataclasses
import logging
import time
from typing import Optional, Callable

from ghostradar.core.models import ScanParams, ScanResult
from ghostradar.core.scanner import FileScannerImpl
from ghostradar.core.grouper import FileGrouperImpl
from ghostradar.core.hasher import HasherImpl, algorithm_for
from ghostradar.core.verifier import ContentVerifierImpl

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates the entire scan workflow:
    1. Walk the root path
    2. Partition by size
    3. Verify candidates by content digest

    Usage:
        params = ScanParams(root_path="~/Downloads", recursive=True)
        command = ScanCommand()
        result = command.execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=cancel_event.is_set
        )

    Deletion is not part of this command: plan and execute it afterwards with
    DuplicateService, once the complete ScanResult is available.
    """

    def __init__(self):
        self._grouper = FileGrouperImpl()

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            ScanResult

        Raises:
            FatalPreconditionError: If the root path is missing or unsupported
        """
        start_time = time.time()

        # Step 1: Walk
        scanner = FileScannerImpl(
            root_path=params.root_path,
            recursive=params.recursive,
            extensions=params.extensions,
            min_size=params.min_size_bytes
        )
        collection = scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback)
        files = list(collection.files)

        if stopped_flag and stopped_flag():
            return ScanResult.empty(collection.errors, len(files), cancelled=True)

        # Step 2: Size partitioning
        candidates = self._grouper.partition_by_size(files)
        if progress_callback:
            progress_callback("size grouping", len(candidates), len(candidates))

        if not candidates:
            return ScanResult.empty(collection.errors, len(files))

        # Step 3: Content verification
        verifier = ContentVerifierImpl(
            hasher=HasherImpl(algorithm_for(params.algorithm)),
            grouper=self._grouper,
            max_workers=params.max_workers
        )

        def hash_progress(done: int, total: int) -> None:
            progress_callback("hashing", done, total)

        result = verifier.verify(
            candidates,
            stopped_flag=stopped_flag,
            progress_callback=hash_progress if progress_callback else None
        )

        logger.debug(f"Scan of {params.root_path} finished in {time.time() - start_time:.3f}s")

        return dataclasses.replace(
            result,
            scan_errors=tuple(collection.errors),
            files_scanned=len(files)
        )
