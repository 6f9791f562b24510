"""
Core consolidation engine — normalizer, walker, grouper and consolidator.

This package contains the whole duplicate-consolidation algorithm:
- normalize_filename: maps "report (2).pdf" to its canonical identity "report.pdf"
- DirectoryWalkerImpl: recursive traversal that prunes hidden entries
- DuplicateGrouperImpl: identity-based grouping, oldest entry first
- ConsolidatorImpl: deletes all but the newest entry and renames it to the canonical name
- Models and errors shared by all of the above

All filesystem access goes through the FileSystem protocol, no direct os calls here.
"""

from .normalizer import normalize_filename
from .scanner import DirectoryWalkerImpl, is_hidden
from .grouper import DuplicateGrouperImpl
from .consolidator import ConsolidatorImpl
from .interfaces import FileSystem, DirectoryWalker, DuplicateGrouper, Consolidator
from .models import (
    ActionKind, ConsolidationAction, ConsolidationParams, ConsolidationReport,
    DirectoryEntry, DuplicateGroup, FileMetadata, FileRecord)
from .errors import (
    ConsolidationError, MetadataReadError, TraversalError, DeletionError,
    RenameError, DestinationCollisionError)

__all__ = [
    "normalize_filename",
    "is_hidden",
    "DirectoryWalkerImpl",
    "DuplicateGrouperImpl",
    "ConsolidatorImpl",
    "FileSystem",
    "DirectoryWalker",
    "DuplicateGrouper",
    "Consolidator",
    "ActionKind",
    "ConsolidationAction",
    "ConsolidationParams",
    "ConsolidationReport",
    "DirectoryEntry",
    "DuplicateGroup",
    "FileMetadata",
    "FileRecord",
    "ConsolidationError",
    "MetadataReadError",
    "TraversalError",
    "DeletionError",
    "RenameError",
    "DestinationCollisionError",
]
