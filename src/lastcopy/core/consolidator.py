"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/consolidator.py
Collapses every duplicate group into one entry carrying the canonical name.

For each group the survivor (newest entry) is kept; all other members are
deleted, then the survivor is renamed to <its directory>/<canonical identity>.
The first failure aborts the run. Nothing already deleted is restored.
"""

import logging
import os
import time
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from lastcopy.core.models import (
    ActionKind,
    ConsolidationAction,
    ConsolidationReport,
    DuplicateGroup,
)
from lastcopy.core.interfaces import FileSystem
from lastcopy.core.errors import DeletionError, DestinationCollisionError, RenameError

logger = logging.getLogger(__name__)


class ConsolidatorImpl:
    """Applies the keep-newest policy through an injected FileSystem."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    @staticmethod
    def plan_group(group: DuplicateGroup) -> List[ConsolidationAction]:
        """Actions for one group, in execution order."""
        actions = [ConsolidationAction(ActionKind.DELETE, record.path) for record in group.redundant]
        survivor = group.survivor
        target = group.canonical_path
        if survivor.path != target:
            actions.append(ConsolidationAction(ActionKind.RENAME, survivor.path, target))
        return actions

    def plan(self, groups: Dict[str, DuplicateGroup]) -> List[ConsolidationAction]:
        """Everything consolidate() would do, without touching the filesystem."""
        actions = []
        moves: List[Tuple[str, str]] = []
        for group in self._execution_order(groups):
            group = self._relocate(group, moves)
            actions.extend(self.plan_group(group))
            self._track_move(group, moves)
        return actions

    def consolidate(
        self,
        groups: Dict[str, DuplicateGroup],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> ConsolidationReport:
        """
        Delete redundant members and rename survivors.

        Groups run deepest first, so entries inside a directory survivor are
        handled before that directory is renamed. Paths under an already
        renamed directory are rewritten before use.

        Raises:
            DeletionError: A member could not be deleted (permission, vanished, directory)
            DestinationCollisionError: The canonical name belongs to an unrelated entry
            RenameError: The survivor could not be renamed
        """
        start_time = time.time()
        report = ConsolidationReport(groups=len(groups))
        total = len(groups)
        ordered = self._execution_order(groups)

        # Directory members are refused before anything is touched
        for group in ordered:
            self._check_deletable(group)

        moves: List[Tuple[str, str]] = []
        for index, group in enumerate(ordered, 1):
            group = self._relocate(group, moves)
            self._check_destination(group)

            for record in group.redundant:
                self._delete(record.path)
                report.deleted.append(record.path)

            survivor = group.survivor
            target = group.canonical_path
            if survivor.path != target:
                self._rename(survivor.path, target)
                report.renamed.append(ConsolidationAction(ActionKind.RENAME, survivor.path, target))
            self._track_move(group, moves)

            if progress_callback:
                progress_callback('consolidating', index, total)

        report.total_time = time.time() - start_time
        logger.debug(
            f"Consolidation completed: {len(report.deleted)} deleted, {len(report.renamed)} renamed "
            f"in {report.total_time:.2f} seconds"
        )
        return report

    @staticmethod
    def _execution_order(groups: Dict[str, DuplicateGroup]) -> List[DuplicateGroup]:
        """Deepest records first; groups at the same depth keep their order."""
        return sorted(
            groups.values(),
            key=lambda group: max(record.path.count(os.sep) for record in group.records),
            reverse=True
        )

    @staticmethod
    def _track_move(group: DuplicateGroup, moves: List[Tuple[str, str]]) -> None:
        survivor = group.survivor
        if survivor.is_dir and survivor.path != group.canonical_path:
            moves.append((survivor.path, group.canonical_path))

    @staticmethod
    def _relocate(group: DuplicateGroup, moves: List[Tuple[str, str]]) -> DuplicateGroup:
        """Rewrite record paths that lie under a directory renamed earlier in the run."""
        if not moves:
            return group

        records = []
        for record in group.records:
            path = record.path
            for source, target in moves:
                if path.startswith(source + os.sep):
                    path = target + path[len(source):]
            records.append(record if path == record.path else replace(record, path=path))
        return DuplicateGroup(identity=group.identity, records=records)

    @staticmethod
    def _check_deletable(group: DuplicateGroup) -> None:
        for record in group.redundant:
            if record.is_dir:
                message = f"Cannot delete {record.path}: is a directory"
                logger.error(message)
                raise DeletionError(message, record.path)

    def _check_destination(self, group: DuplicateGroup) -> None:
        """Refuse to overwrite an entry that is not part of the group."""
        survivor = group.survivor
        target = group.canonical_path
        if survivor.path == target:
            return
        if target in {record.path for record in group.redundant}:
            return
        if self.file_system.exists(target):
            message = f"Cannot rename {survivor.path}: destination already exists: {target}"
            logger.error(message)
            raise DestinationCollisionError(message, survivor.path, target)

    def _delete(self, path: str) -> None:
        try:
            self.file_system.delete_file(path)
        except OSError as e:
            logger.error(f"Cannot delete {path}: {e}")
            raise DeletionError(f"Cannot delete {path}: {e}", path) from e
        logger.debug(f"Deleted: {path}")

    def _rename(self, source: str, target: str) -> None:
        try:
            self.file_system.rename_file(source, target)
        except OSError as e:
            logger.error(f"Cannot rename {source} to {target}: {e}")
            raise RenameError(f"Cannot rename {source} to {target}: {e}", source) from e
        logger.debug(f"Renamed: {source} -> {target}")
