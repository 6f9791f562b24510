"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups walked entries by canonical identity and orders each group oldest-first.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List
from collections import defaultdict

from lastcopy.core.models import DuplicateGroup, FileRecord
from lastcopy.core.normalizer import normalize_filename

logger = logging.getLogger(__name__)


class DuplicateGrouperImpl:
    """
    Groups FileRecords whose basenames normalize to the same identity.
    The identity function is injectable for testability.
    """

    def __init__(self, identity_func: Callable[[str], str] = normalize_filename):
        self.identity_func = identity_func

    def group(self, records: Iterable[FileRecord]) -> Dict[str, DuplicateGroup]:
        """
        Consume the records and return only genuine duplicate groups.

        Errors raised while the walk is consumed (metadata or listing failures)
        propagate unchanged: there is no partial result.

        Returns:
            Dict[identity, DuplicateGroup] with every group holding 2+ records,
            sorted ascending by (created_at, modified_at)
        """
        buckets = self._group_by(records, lambda r: self.identity_func(r.name))

        result = {}
        for identity, bucket in buckets.items():
            # list.sort is stable: equal timestamps keep traversal order
            bucket.sort(key=lambda r: r.sort_key)
            result[identity] = DuplicateGroup(identity=identity, records=bucket)

        logger.debug(f"Grouping completed. Found {len(result)} duplicate groups.")
        return result

    @staticmethod
    def _group_by(records: Iterable[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Helper method to group records by any computed key.
        Args:
            records: Records to group
            key_func: Function that computes a hashable key from a FileRecord
        Returns:
            Dict[key, List[FileRecord]] without single-record entries
        """
        groups = defaultdict(list)
        total = 0
        for record in records:
            groups[key_func(record)].append(record)
            total += 1

        logger.debug(f"Grouped {total} entries into {len(groups)} identities")
        return {key: group for key, group in groups.items() if len(group) >= 2}
