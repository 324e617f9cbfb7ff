"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the filesystem walker.
Features:
- Single regular file or a directory tree as the scan root
- Skips hidden entries, build/VCS/cache directories and symbolic links
- Applies minimum-size and extension filters
- Collects per-path errors instead of aborting the traversal
"""

import os
import time
import logging
from typing import Optional, Callable, Iterable

from ghostradar.core.models import FileDescriptor, FileCollection, ScanError, FatalPreconditionError
from ghostradar.core.interfaces import FileScanner

logger = logging.getLogger(__name__)

# Entries whose name starts with this prefix are treated as hidden
HIDDEN_PREFIX = "."

# Directories that are never descended into
SKIP_DIRS = frozenset({
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    ".next",
    "__pycache__",
    ".cache",
    ".Trash",
    "$RECYCLE.BIN",
})


class FileScannerImpl(FileScanner):
    """
    Walks a root path depth-first and filters files by size and extension.

    Attributes:
        root_path: File or directory to scan
        recursive: Descend into subdirectories
        extensions: Allowed lowercased suffixes (e.g. {".txt", ".jpg"}); empty means all
        min_size: Minimum file size in bytes (inclusive)
    """

    # Report progress every N accepted files
    PROGRESS_INTERVAL = 5000

    def __init__(
        self,
        root_path: str,
        recursive: bool = False,
        extensions: Optional[Iterable[str]] = None,
        min_size: int = 1
    ):
        self.root_path = os.path.abspath(root_path)
        self.recursive = recursive
        self.extensions = {ext.lower() for ext in extensions} if extensions else set()
        self.min_size = min_size
        self._progress_counter = 0

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> FileCollection:
        """
        Returns every accepted file under the root plus per-path errors.
        Raises FatalPreconditionError if the root is missing or is neither a file nor a directory.
        """
        logger.debug(f"Root path: {self.root_path}")
        logger.debug(f"Filters: recursive={self.recursive}, min_size={self.min_size}, "
                     f"extensions={sorted(self.extensions)}")

        try:
            root_stat = os.stat(self.root_path)
        except FileNotFoundError:
            error_msg = f"Path does not exist: {self.root_path}"
            logger.error(error_msg)
            raise FatalPreconditionError(error_msg)
        except OSError as e:
            error_msg = f"Cannot access path {self.root_path}: {e}"
            logger.error(error_msg)
            raise FatalPreconditionError(error_msg) from e

        collection = FileCollection()

        if os.path.isfile(self.root_path):
            # A single file is returned as-is: filters only apply to directory traversal
            collection.files.append(FileDescriptor.from_path(self.root_path, root_stat))
            return collection

        if not os.path.isdir(self.root_path):
            error_msg = f"Unsupported path type: {self.root_path}"
            logger.error(error_msg)
            raise FatalPreconditionError(error_msg)

        start_time = time.time()
        self._progress_counter = 0
        self._scan_directory(self.root_path, collection, stopped_flag, progress_callback)

        if progress_callback:
            progress_callback("scanning", len(collection.files), None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(collection.files)} matching files, "
                     f"{len(collection.errors)} errors.")
        return collection

    def _scan_directory(
        self,
        dir_path: str,
        collection: FileCollection,
        stopped_flag: Optional[Callable[[], bool]],
        progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> None:
        if stopped_flag and stopped_flag():
            logger.debug("Scan interrupted by user")
            return

        try:
            with os.scandir(dir_path) as it:
                # Sorted so repeated runs over an unchanged tree yield identical output
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot read directory {dir_path}: {e}")
            collection.errors.append(ScanError(path=dir_path, message=str(e)))
            return

        for entry in entries:
            if entry.name.startswith(HIDDEN_PREFIX):
                logger.debug(f"Skipping hidden entry: {entry.path}")
                continue

            try:
                if entry.is_symlink():
                    logger.debug(f"Skipping symbolic link: {entry.path}")
                    continue

                if entry.is_dir(follow_symlinks=False):
                    if entry.name in SKIP_DIRS:
                        logger.debug(f"Skipping excluded directory: {entry.path}")
                    elif self.recursive:
                        self._scan_directory(entry.path, collection, stopped_flag, progress_callback)
                        if stopped_flag and stopped_flag():
                            return
                    continue

                if not entry.is_file(follow_symlinks=False):
                    logger.debug(f"Skipping special file: {entry.path}")
                    continue

                descriptor = self._process_file(entry)
            except OSError as e:
                logger.debug(f"Could not stat {entry.path}: {e}")
                collection.errors.append(ScanError(path=entry.path, message=str(e)))
                continue

            if descriptor is None:
                continue

            collection.files.append(descriptor)
            self._progress_counter += 1
            if progress_callback and self._progress_counter >= self.PROGRESS_INTERVAL:
                progress_callback("scanning", len(collection.files), None)
                self._progress_counter = 0

    def _process_file(self, entry: os.DirEntry) -> Optional[FileDescriptor]:
        """
        Stat a regular file and return a FileDescriptor if it passes all filters.
        OSError from stat propagates to the caller, which records it.
        """
        stat_result = entry.stat(follow_symlinks=False)

        if stat_result.st_size < self.min_size:
            logger.debug(f"Skipping {entry.path} (size {stat_result.st_size} below minimum)")
            return None

        if not self._extension_passes(entry.name):
            logger.debug(f"Skipping {entry.path} (extension not allowed)")
            return None

        return FileDescriptor.from_path(entry.path, stat_result)

    def _extension_passes(self, name: str) -> bool:
        """
        Check if file matches any of the allowed extensions.
        Args:
            name: Base filename
        Returns:
            True if no filter is set or the lowercased suffix is allowed
        """
        if not self.extensions:
            return True
        return os.path.splitext(name)[1].lower() in self.extensions
