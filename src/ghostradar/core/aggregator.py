"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/aggregator.py
Turns digest groups into DuplicateSets and assembles the final ScanResult.
"""
from typing import Dict, List, Iterable, Sequence

from ghostradar.core.models import DigestedFile, DuplicateSet, ScanError, ScanResult


class DuplicateSetAggregator:
    """
    Sorting rules (both stable, so ties keep discovery order):
    1. Files inside a set: modification time ascending (oldest first).
       Retention policies rely on this order.
    2. Sets inside a result: wasted space descending.
    """

    @staticmethod
    def build_sets(digest_groups: Dict[str, List[DigestedFile]], size: int) -> List[DuplicateSet]:
        """Builds one DuplicateSet per digest group of a single size group."""
        return [
            DuplicateSet(
                digest=digest,
                size=size,
                files=tuple(sorted(files, key=lambda f: f.modified_at)),
            )
            for digest, files in digest_groups.items()
            if len(files) >= 2
        ]

    @staticmethod
    def aggregate(
            sets: Iterable[DuplicateSet],
            scan_errors: Sequence[ScanError] = (),
            digest_errors: Sequence[ScanError] = (),
            files_scanned: int = 0,
            cancelled: bool = False
    ) -> ScanResult:
        ordered = sorted(sets, key=lambda s: s.wasted_space, reverse=True)
        return ScanResult(
            duplicate_sets=tuple(ordered),
            scan_errors=tuple(scan_errors),
            digest_errors=tuple(digest_errors),
            files_scanned=files_scanned,
            cancelled=cancelled,
        )
