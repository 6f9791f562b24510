"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory traversal on top of an injectable FileSystem.
Features:
- Recursively walks the tree, lazily yielding one FileRecord per entry
- Prunes hidden files and hidden directories together with their subtree
- Visits siblings in sorted order so runs on an unchanged tree are repeatable
- Never descends into symbolic links
"""

import logging
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

# Local imports
from lastcopy.core.models import DirectoryEntry, FileRecord
from lastcopy.core.interfaces import FileSystem
from lastcopy.core.errors import MetadataReadError, TraversalError


def is_hidden(name: str) -> bool:
    """True for dot-files and dot-directories."""
    return name.startswith(".")


class DirectoryWalkerImpl:
    """
    Walks a directory tree and reads timestamps of every non-hidden entry.

    Attributes:
        file_system: Filesystem capability used for listing and stat calls
        include_directories: Yield directories as duplicate candidates too
        strict_creation_time: Fail instead of accepting a missing creation time
    """

    def __init__(
        self,
        file_system: FileSystem,
        include_directories: bool = True,
        strict_creation_time: bool = False
    ):
        self.file_system = file_system
        self.include_directories = include_directories
        self.strict_creation_time = strict_creation_time

    def walk(self, root: str) -> Iterator[FileRecord]:
        """
        Pre-order traversal below root. The root itself is not yielded.

        Raises:
            TraversalError: A directory could not be listed
            MetadataReadError: Timestamps of an entry could not be read
        """
        logger.debug(f"Starting walk at: {root}")
        visited = 0

        # Stack of pending directories; children are pushed reversed to keep sorted pre-order
        pending: List[List[DirectoryEntry]] = [self._list(root)]
        while pending:
            siblings = pending[-1]
            if not siblings:
                pending.pop()
                continue
            entry = siblings.pop()

            record = self._to_record(entry)
            visited += 1

            if entry.is_dir:
                pending.append(self._list(entry.path))
                if not self.include_directories:
                    continue

            yield record

        logger.debug(f"Walk completed. Visited {visited} entries.")

    def _list(self, path: str) -> List[DirectoryEntry]:
        """List non-hidden children, reversed so pop() returns them in name order."""
        try:
            entries = self.file_system.list_directory(path)
        except OSError as e:
            logger.error(f"Cannot list directory {path}: {e}")
            raise TraversalError(f"Cannot list directory {path}: {e}", path) from e

        visible = []
        for entry in entries:
            if is_hidden(entry.name):
                logger.debug(f"Skipping hidden entry: {entry.path}")
                continue
            visible.append(entry)

        visible.sort(key=lambda e: e.name, reverse=True)
        return visible

    def _to_record(self, entry: DirectoryEntry) -> FileRecord:
        """Read metadata of a listed entry and build its FileRecord."""
        try:
            metadata = self.file_system.read_metadata(entry.path)
        except OSError as e:
            logger.error(f"Cannot read metadata of {entry.path}: {e}")
            raise MetadataReadError(f"Cannot read metadata of {entry.path}: {e}", entry.path) from e

        created_at: Optional[float] = metadata.created_at
        if created_at is None:
            if self.strict_creation_time:
                logger.error(f"Creation time not available for {entry.path}")
                raise MetadataReadError(f"Creation time not available for {entry.path}", entry.path)
            # No birth time on this platform (Linux): fall back to st_ctime
            created_at = metadata.changed_at if metadata.changed_at is not None else metadata.modified_at

        return FileRecord(
            path=entry.path,
            created_at=created_at,
            modified_at=metadata.modified_at,
            is_dir=entry.is_dir
        )
