"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/retention.py
Chooses the file to keep in each duplicate set and removes the others.

select_retained() is pure and never touches the filesystem, so callers can show
a preview and ask for confirmation before execute_deletion() is called.
"""
import logging
from typing import Callable, List

from ghostradar.core.models import (
    DuplicateSet, KeepPolicy, RetentionPlan, DeletionOutcome, DeletionFailure, FileDescriptor
)

logger = logging.getLogger(__name__)


class RetentionEngine:
    """
    Keep-policies:
    - OLDEST: minimum modification time
    - NEWEST: maximum modification time
    - SHORTEST_PATH: fewest characters in the path
    Ties always go to the file that comes first in the set.
    """

    @staticmethod
    def select_retained(duplicate_set: DuplicateSet, policy: KeepPolicy = KeepPolicy.OLDEST) -> RetentionPlan:
        files = list(duplicate_set.files)
        if not files:
            raise ValueError("Cannot select a file to keep from an empty set")

        if policy == KeepPolicy.OLDEST:
            keep_index = min(range(len(files)), key=lambda i: files[i].modified_at)
        elif policy == KeepPolicy.NEWEST:
            # max() returns the first maximal element, which gives the input-order tie-break
            keep_index = max(range(len(files)), key=lambda i: files[i].modified_at)
        elif policy == KeepPolicy.SHORTEST_PATH:
            keep_index = min(range(len(files)), key=lambda i: len(files[i].path))
        else:
            raise ValueError(f"Unknown keep policy: {policy!r}")

        kept = files[keep_index].descriptor
        to_delete = tuple(f.descriptor for i, f in enumerate(files) if i != keep_index)
        return RetentionPlan(kept=kept, to_delete=to_delete)

    @staticmethod
    def execute_deletion(plan: RetentionPlan, remover: Callable[[str], None]) -> DeletionOutcome:
        """
        Removes every file in plan.to_delete independently.
        A failure on one file is recorded and the remaining files are still attempted.
        """
        deleted: List[FileDescriptor] = []
        failed: List[DeletionFailure] = []

        for file in plan.to_delete:
            try:
                remover(file.path)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Failed to delete {file.path}: {e}")
                failed.append(DeletionFailure(descriptor=file, error_message=str(e)))
                continue
            logger.debug(f"Deleted {file.path}")
            deleted.append(file)

        return DeletionOutcome(kept=plan.kept, deleted=tuple(deleted), failed=tuple(failed))
