"""
Shared fixtures for consolidation tests.
Provides an in-memory FileSystem double with explicit timestamps, plus
isolated temporary directories for tests against the real filesystem.
"""
import os
import sys
import time
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

# Add src/ to sys.path so 'lastcopy' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from lastcopy.core.models import DirectoryEntry, FileMetadata


@dataclass
class FakeNode:
    is_dir: bool
    created_at: Optional[float]
    modified_at: float
    content: bytes = b""


class InMemoryFileSystem:
    """
    FileSystem protocol implementation backed by a dict.
    Records every write so tests can assert on exact side effects.
    """

    def __init__(self, root: str = "/data"):
        self.root = root
        self.nodes: Dict[str, FakeNode] = {root: FakeNode(True, 0.0, 0.0)}
        self.deleted: List[str] = []
        self.renamed: List[Tuple[str, str]] = []
        self.metadata_reads: List[str] = []
        self._failures: Dict[Tuple[str, str], OSError] = {}

    # ----- setup helpers -----

    def add_dir(self, path: str, created_at: float = 0.0, modified_at: float = 0.0) -> str:
        self._ensure_parent(path)
        self.nodes[path] = FakeNode(True, created_at, modified_at)
        return path

    def add_file(self, path: str, content: bytes = b"", created_at: Optional[float] = 0.0,
                 modified_at: float = 0.0) -> str:
        self._ensure_parent(path)
        self.nodes[path] = FakeNode(False, created_at, modified_at, content)
        return path

    def fail_on(self, operation: str, path: str, error: OSError) -> None:
        """Make `operation` ('list', 'stat', 'delete', 'rename') raise `error` for `path`."""
        self._failures[(operation, path)] = error

    def read(self, path: str) -> bytes:
        return self.nodes[path].content

    def files(self) -> List[str]:
        return sorted(p for p, node in self.nodes.items() if not node.is_dir)

    def _ensure_parent(self, path: str) -> None:
        parent = os.path.dirname(path)
        if parent not in self.nodes:
            self.add_dir(parent)

    def _check(self, operation: str, path: str) -> None:
        error = self._failures.get((operation, path))
        if error is not None:
            raise error

    # ----- FileSystem protocol -----

    def list_directory(self, path: str) -> List[DirectoryEntry]:
        self._check("list", path)
        node = self.nodes.get(path)
        if node is None:
            raise FileNotFoundError(path)
        if not node.is_dir:
            raise NotADirectoryError(path)
        # Unsorted on purpose: the walker must not rely on listing order
        children = [p for p in self.nodes if os.path.dirname(p) == path and p != path]
        return [
            DirectoryEntry(name=os.path.basename(p), path=p, is_dir=self.nodes[p].is_dir)
            for p in reversed(children)
        ]

    def read_metadata(self, path: str) -> FileMetadata:
        self._check("stat", path)
        self.metadata_reads.append(path)
        node = self.nodes.get(path)
        if node is None:
            raise FileNotFoundError(path)
        return FileMetadata(
            modified_at=node.modified_at,
            created_at=node.created_at,
            changed_at=node.modified_at
        )

    def delete_file(self, path: str) -> None:
        self._check("delete", path)
        node = self.nodes.get(path)
        if node is None:
            raise FileNotFoundError(path)
        if node.is_dir:
            raise IsADirectoryError(path)
        del self.nodes[path]
        self.deleted.append(path)

    def rename_file(self, source: str, target: str) -> None:
        self._check("rename", source)
        if source not in self.nodes:
            raise FileNotFoundError(source)
        moved = {p: n for p, n in self.nodes.items() if p == source or p.startswith(source + "/")}
        for p in moved:
            del self.nodes[p]
        for p, n in moved.items():
            self.nodes[target + p[len(source):]] = n
        self.renamed.append((source, target))

    def exists(self, path: str) -> bool:
        return path in self.nodes


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Empty in-memory tree rooted at /data."""
    return InMemoryFileSystem()


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _write_in_order(*items: Tuple[Path, bytes]) -> None:
    """
    Create files one after another with strictly increasing timestamps.
    Filesystem timestamps are coarse on some platforms, so wait between writes.
    """
    for path, content in items:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        time.sleep(0.05)


@pytest.fixture
def write_in_order():
    """Helper creating files with strictly increasing timestamps."""
    return _write_in_order


@pytest.fixture
def photo_dir(temp_dir) -> Path:
    """
    Real directory tree:
    - photo.jpg (oldest), photo (1).jpg (newest)          → one group
    - notes.txt, notes (2).txt, notes (3).txt (newest)    → one group
    - sub/a.txt, sub/b.txt                                → no shared identity
    - .cache/photo (5).jpg                                → hidden, ignored
    """
    _write_in_order(
        (temp_dir / "photo.jpg", b"old photo"),
        (temp_dir / "notes.txt", b"notes v1"),
        (temp_dir / "sub" / "a.txt", b"a"),
        (temp_dir / "notes (2).txt", b"notes v2"),
        (temp_dir / "sub" / "b.txt", b"b"),
        (temp_dir / ".cache" / "photo (5).jpg", b"cached photo"),
        (temp_dir / "photo (1).jpg", b"new photo"),
        (temp_dir / "notes (3).txt", b"notes v3"),
    )
    return temp_dir
