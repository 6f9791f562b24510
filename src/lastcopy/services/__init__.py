"""Filesystem services backing the consolidation engine."""

from .file_service import FileService

__all__ = ["FileService"]
