"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for directory scanning and duplicate consolidation.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum
import os


# =============================
# Enums
# =============================

class ActionKind(str, Enum):
    """Kind of filesystem change the consolidator performs."""
    DELETE = "delete"
    RENAME = "rename"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            ActionKind.DELETE: "DEL",
            ActionKind.RENAME: "RENAME",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileMetadata:
    """
    Timestamps of a filesystem entry as reported by a FileSystem.
    created_at is None when the platform does not expose a creation (birth) time;
    changed_at is the status change time (st_ctime).
    """
    modified_at: float
    created_at: Optional[float] = None
    changed_at: Optional[float] = None


@dataclass(frozen=True)
class DirectoryEntry:
    """A single child returned when listing a directory."""
    name: str
    path: str
    is_dir: bool = False


@dataclass(frozen=True)
class FileRecord:
    """
    Represents a single entry found during traversal.
    Immutable once created by the walker.
    """
    path: str
    created_at: float
    modified_at: float
    is_dir: bool = False

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def sort_key(self):
        """Oldest-created first, ties broken by oldest-modified."""
        return self.created_at, self.modified_at

    def __repr__(self):
        kind = "dir" if self.is_dir else "file"
        return f"<FileRecord {kind} path={self.path}>"


@dataclass
class DuplicateGroup:
    """
    Entries sharing one canonical identity.
    Records are ordered ascending by (created_at, modified_at): the last one is the survivor.
    """
    identity: str
    records: List[FileRecord] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """How many entries are in this group."""
        return len(self.records)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two entries."""
        return self.duplicate_count >= 2

    @property
    def survivor(self) -> FileRecord:
        """The newest entry, kept and renamed to the canonical name."""
        if not self.records:
            raise ValueError(f"Duplicate group '{self.identity}' is empty")
        return self.records[-1]

    @property
    def redundant(self) -> List[FileRecord]:
        """Entries that will be deleted."""
        return self.records[:-1]

    @property
    def canonical_path(self) -> str:
        """Rename target: survivor's own directory joined with the canonical identity."""
        return os.path.join(os.path.dirname(self.survivor.path), self.identity)

    def __repr__(self):
        return f"<DuplicateGroup identity={self.identity}, count={len(self.records)}>"


@dataclass(frozen=True)
class ConsolidationAction:
    """One planned deletion or rename."""
    kind: ActionKind
    source: str
    target: Optional[str] = None

    def __str__(self):
        if self.kind == ActionKind.RENAME:
            return f"{self.kind.display_name}: {self.source} -> {self.target}"
        return f"{self.kind.display_name}: {self.source}"


@dataclass
class ConsolidationReport:
    """
    Outcome of a consolidation run.
    """
    groups: int = 0
    deleted: List[str] = field(default_factory=list)
    renamed: List[ConsolidationAction] = field(default_factory=list)
    total_time: float = 0.0

    def print_summary(self) -> str:
        lines = [
            "📊 Consolidation Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Duplicate groups: {self.groups}",
            f"Deleted entries: {len(self.deleted)}",
            f"Renamed survivors: {len(self.renamed)}",
        ]
        return "\n".join(lines)


# ======================
#  Parameters
# ======================

@dataclass
class ConsolidationParams:
    """Parameters for a consolidation run with built-in validation."""
    root_dir: str
    include_directories: bool = True
    strict_creation_time: bool = False
    use_trash: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")
