import logging
from typing import Callable, List, Optional, Sequence

from ghostradar.core.models import (
    ScanResult, KeepPolicy, RetentionPlan, DeletionOutcome, DeletionMethod
)
from ghostradar.core.retention import RetentionEngine
from ghostradar.services.file_service import FileService

logger = logging.getLogger(__name__)


class DuplicateService:
    @staticmethod
    def plan_deletions(result: ScanResult, policy: KeepPolicy = KeepPolicy.OLDEST) -> List[RetentionPlan]:
        """
        Builds one RetentionPlan per duplicate set, in result order.
        Nothing is touched on disk; use the plans to preview what would be deleted.

        Args:
            result (ScanResult): A finished scan.
            policy (KeepPolicy): Which file to keep in each set.

        Returns:
            List[RetentionPlan]: One plan per set.
        """
        if result.cancelled:
            raise ValueError("Refusing to plan deletions from a cancelled scan")
        return [RetentionEngine.select_retained(s, policy) for s in result.duplicate_sets]

    @staticmethod
    def delete_duplicates(
            plans: Sequence[RetentionPlan],
            method: DeletionMethod = DeletionMethod.TRASH,
            remover: Optional[Callable[[str], None]] = None,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[DeletionOutcome]:
        """
        Executes every plan. Failures are isolated per file: one file failing
        never stops the rest of its set or the other sets.
        """
        remover = remover or FileService.remover_for(method)
        outcomes = []
        for idx, plan in enumerate(plans, 1):
            outcomes.append(RetentionEngine.execute_deletion(plan, remover))
            if progress_callback:
                progress_callback(idx, len(plans))

        failed = sum(len(o.failed) for o in outcomes)
        if failed:
            logger.warning(f"{failed} file(s) could not be deleted")
        return outcomes

    @staticmethod
    def calculate_space_savings(plans: Sequence[RetentionPlan]) -> int:
        """Space that would be freed by executing the plans."""
        return sum(plan.reclaimable_space for plan in plans)

    @staticmethod
    def calculate_freed_space(outcomes: Sequence[DeletionOutcome]) -> int:
        """Space actually freed by executed plans."""
        return sum(outcome.freed_space for outcome in outcomes)
