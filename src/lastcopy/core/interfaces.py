"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the consolidation engine.
These protocols use Python's `typing.Protocol` for structural typing, so the
real filesystem and the in-memory test double are interchangeable.

Key Components:
---------------
- FileSystem: The only gateway to the filesystem (list, stat, delete, rename).
- DirectoryWalker: Recursively enumerates entries under a root.
- DuplicateGrouper: Groups walked entries by canonical identity.
- Consolidator: Deletes redundant duplicates and renames survivors.
"""

from typing import Protocol, List, Dict, Iterable, Iterator, Optional, Callable
from lastcopy.core.models import (
    DirectoryEntry,
    FileMetadata,
    FileRecord,
    DuplicateGroup,
    ConsolidationAction,
    ConsolidationReport,
)


# ===== Interfaces =====

class FileSystem(Protocol):
    """
    Interface for filesystem access.

    Implementations raise OSError (or a subclass) on failure; the core maps
    those to its own error taxonomy.
    """
    def list_directory(self, path: str) -> List[DirectoryEntry]:
        """Return the direct children of a directory."""
        ...

    def read_metadata(self, path: str) -> FileMetadata:
        """Return timestamps and type of an entry, following symbolic links."""
        ...

    def delete_file(self, path: str) -> None:
        """Remove a file. Directories are refused."""
        ...

    def rename_file(self, source: str, target: str) -> None:
        """Rename an entry within the filesystem."""
        ...

    def exists(self, path: str) -> bool:
        """True if something lives at the path."""
        ...


class DirectoryWalker(Protocol):
    """Interface for recursive, hidden-entry-aware traversal."""
    def walk(self, root: str) -> Iterator[FileRecord]:
        ...


class DuplicateGrouper(Protocol):
    """Interface for grouping entries sharing a canonical identity."""
    def group(self, records: Iterable[FileRecord]) -> Dict[str, DuplicateGroup]:
        ...


class Consolidator(Protocol):
    """Interface for collapsing each duplicate group into a single canonical entry."""
    def plan(self, groups: Dict[str, DuplicateGroup]) -> List[ConsolidationAction]:
        ...

    def consolidate(
        self,
        groups: Dict[str, DuplicateGroup],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> ConsolidationReport:
        ...
