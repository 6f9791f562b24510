"""
LastCopy — consolidates enumerated duplicate files.

Core features:
- Recognizes copies named like "report (2).pdf" as duplicates of "report.pdf"
- Keeps the newest copy (by creation, then modification time) under the canonical name
- Skips hidden files and directories
- Optional deletion to system trash (via send2trash)
- CLI interface for interactive and scripted usage
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("lastcopy")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from lastcopy.commands import ConsolidationCommand, run
from lastcopy.core import (
    ConsolidationParams, ConsolidationReport, DuplicateGroup, FileRecord, normalize_filename,
    ConsolidationError, MetadataReadError, TraversalError, DeletionError, RenameError,
    DestinationCollisionError)
from lastcopy.services.file_service import FileService

__all__ = [
    "ConsolidationCommand",
    "run",
    "ConsolidationParams",
    "ConsolidationReport",
    "DuplicateGroup",
    "FileRecord",
    "normalize_filename",
    "ConsolidationError",
    "MetadataReadError",
    "TraversalError",
    "DeletionError",
    "RenameError",
    "DestinationCollisionError",
    "FileService",
    "__version__",
]
