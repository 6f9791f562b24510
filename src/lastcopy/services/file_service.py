"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Real filesystem implementation of the FileSystem protocol.
Deletion is permanent by default, or goes to the system trash (via send2trash).
"""
import os
import logging
from pathlib import Path
from typing import List
from send2trash import send2trash

from lastcopy.core.models import DirectoryEntry, FileMetadata

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform filesystem access used by the consolidation engine.
    All failures surface as OSError subclasses.
    """

    def __init__(self, use_trash: bool = False):
        self.use_trash = use_trash

    def list_directory(self, path: str) -> List[DirectoryEntry]:
        """Lists direct children; symbolic links are never reported as directories."""
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                entries.append(DirectoryEntry(
                    name=entry.name,
                    path=entry.path,
                    is_dir=entry.is_dir(follow_symlinks=False)
                ))
        return entries

    def read_metadata(self, path: str) -> FileMetadata:
        """Reads timestamps through symbolic links; a broken link raises FileNotFoundError."""
        stat_result = os.stat(path)
        return FileMetadata(
            modified_at=stat_result.st_mtime,
            created_at=getattr(stat_result, 'st_birthtime', None),
            changed_at=stat_result.st_ctime
        )

    def delete_file(self, path: str) -> None:
        """Removes a file permanently, or moves it to trash when use_trash is set."""
        if os.path.isdir(path) and not os.path.islink(path):
            raise IsADirectoryError(f"Is a directory: {path}")

        if self.use_trash:
            FileService.move_to_trash(path)
        else:
            os.remove(path)

    def rename_file(self, source: str, target: str) -> None:
        os.rename(source, target)

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not os.path.lexists(path):
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise OSError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash: {path}")
