"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Error taxonomy for the consolidation pipeline.
Every error is fatal: it aborts the run and propagates up to the entry point.
"""

from typing import Optional


class ConsolidationError(RuntimeError):
    """Base class for all failures raised by the core engine."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MetadataReadError(ConsolidationError):
    """Creation/modification time of a traversed entry could not be read."""


class TraversalError(ConsolidationError):
    """A directory could not be listed."""


class DeletionError(ConsolidationError):
    """A redundant duplicate could not be removed."""


class RenameError(ConsolidationError):
    """The survivor could not be renamed to its canonical name."""


class DestinationCollisionError(RenameError):
    """The canonical name is already taken by an entry outside the duplicate group."""

    def __init__(self, message: str, path: Optional[str] = None, target: Optional[str] = None):
        super().__init__(message, path)
        self.target = target
