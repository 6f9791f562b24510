"""
Unified command orchestrator for consolidation.
This is the SINGLE source of truth for the walk → group → consolidate workflow, used by the CLI
and by library callers.
"""
import logging
from typing import Dict, List, Optional, Callable

from lastcopy.core.models import (
    ConsolidationAction, ConsolidationParams, ConsolidationReport, DuplicateGroup)
from lastcopy.core.interfaces import FileSystem
from lastcopy.core.scanner import DirectoryWalkerImpl
from lastcopy.core.grouper import DuplicateGrouperImpl
from lastcopy.core.consolidator import ConsolidatorImpl
from lastcopy.services.file_service import FileService

logger = logging.getLogger(__name__)


class ConsolidationCommand:
    """
    Orchestrates the entire consolidation workflow:
    1. Walk the root directory (hidden entries pruned)
    2. Group entries by canonical identity
    3. Delete all but the newest entry per group and rename it to the canonical name

    Usage:
        params = ConsolidationParams(root_dir="/home/me/Downloads")
        command = ConsolidationCommand()

        # Preview only:
        groups = command.find_duplicates(params)
        actions = command.plan(groups)

        # Apply:
        report = command.execute(params)
    """

    def __init__(self, file_system: Optional[FileSystem] = None):
        self._file_system = file_system
        self._groups: Dict[str, DuplicateGroup] = {}

    def _resolve_file_system(self, params: ConsolidationParams) -> FileSystem:
        if self._file_system is not None:
            return self._file_system
        return FileService(use_trash=params.use_trash)

    def find_duplicates(
            self,
            params: ConsolidationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Dict[str, DuplicateGroup]:
        """
        Walk and group without modifying anything.

        Raises:
            TraversalError: A directory could not be listed
            MetadataReadError: Timestamps of an entry could not be read
        """
        walker = DirectoryWalkerImpl(
            self._resolve_file_system(params),
            include_directories=params.include_directories,
            strict_creation_time=params.strict_creation_time
        )
        records = walker.walk(params.root_dir)
        if progress_callback:
            records = self._count_progress(records, progress_callback)

        self._groups = DuplicateGrouperImpl().group(records)
        logger.debug(f"Found {len(self._groups)} duplicate groups under {params.root_dir}")
        return self._groups

    def plan(self, groups: Dict[str, DuplicateGroup]) -> List[ConsolidationAction]:
        """Deletions and renames that consolidation would perform."""
        return ConsolidatorImpl(self._file_system or FileService()).plan(groups)

    def consolidate(
            self,
            params: ConsolidationParams,
            groups: Dict[str, DuplicateGroup],
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> ConsolidationReport:
        """Apply consolidation to groups previously returned by find_duplicates()."""
        consolidator = ConsolidatorImpl(self._resolve_file_system(params))
        return consolidator.consolidate(groups, progress_callback=progress_callback)

    def execute(
            self,
            params: ConsolidationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> ConsolidationReport:
        """
        Walk → group → consolidate in one go.

        Raises:
            ConsolidationError: Any traversal, metadata, deletion or rename failure (fatal)
        """
        groups = self.find_duplicates(params, progress_callback=progress_callback)
        return self.consolidate(params, groups, progress_callback=progress_callback)

    def get_groups(self) -> Dict[str, DuplicateGroup]:
        """Get duplicate groups found by the last find_duplicates() call."""
        return dict(self._groups)

    @staticmethod
    def _count_progress(records, progress_callback, interval: int = 1000):
        """Pass records through, reporting every `interval` entries."""
        count = 0
        for record in records:
            count += 1
            if count % interval == 0:
                progress_callback('scanning', count, None)
            yield record
        progress_callback('scanning', count, None)


def run(root_dir: str, file_system: Optional[FileSystem] = None) -> ConsolidationReport:
    """Consolidate every duplicate group under root_dir with default settings."""
    return ConsolidationCommand(file_system).execute(ConsolidationParams(root_dir=root_dir))
