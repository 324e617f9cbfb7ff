"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping: size partitioning before hashing and digest
partitioning after it. All methods are pure and keep discovery order.
"""

from typing import List, Dict, Any, Callable, Sequence, TypeVar
from collections import defaultdict
import logging

from ghostradar.core.models import FileDescriptor, DigestedFile

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=FileDescriptor)


class FileGrouperImpl:
    """Groups files by size and by content digest."""

    def group_by_size(self, files: Sequence[FileDescriptor]) -> Dict[int, List[FileDescriptor]]:
        """
        Groups files by their exact byte size.
        Every size is kept here, singletons included; see filter_candidates.
        """
        return self._group_by(files, lambda f: f.size)

    @staticmethod
    def filter_candidates(groups: Dict[int, List[FileDescriptor]]) -> List[List[FileDescriptor]]:
        """Keeps only size groups with 2+ files (a unique size cannot have a duplicate)."""
        return [list(group) for group in groups.values() if len(group) >= 2]

    def partition_by_size(self, files: Sequence[FileDescriptor]) -> List[List[FileDescriptor]]:
        """group_by_size followed by filter_candidates."""
        candidates = self.filter_candidates(self.group_by_size(files))
        logger.debug(f"Size partitioning: {len(files)} files -> {len(candidates)} candidate groups")
        return candidates

    def group_by_digest(self, files: Sequence[DigestedFile]) -> Dict[str, List[DigestedFile]]:
        """
        Groups digested files by digest.
        Files whose digest failed are left out, and sub-groups with <2 files are discarded.
        """
        groups = self._group_by(files, lambda f: f.digest)
        return {key: group for key, group in groups.items() if len(group) >= 2}

    @staticmethod
    def _group_by(files: Sequence[T], key_func: Callable[[T], Any]) -> Dict[Any, List[T]]:
        """
        Helper method to group files by any computed key.
        Files whose key is None are skipped.
        Args:
            files: Files to group
            key_func: Function that computes a hashable key from a file
        Returns:
            Dict[key, List[file]] in first-seen key order
        """
        groups = defaultdict(list)
        for file in files:
            key = key_func(file)
            if key is not None:
                groups[key].append(file)
        return dict(groups)
