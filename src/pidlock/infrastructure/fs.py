# src/pidlock/infrastructure/fs.py
import os
from pathlib import Path
from typing import Protocol


class ILockFileSystem(Protocol):
    """Filesystem operations on a single lock file."""

    def read_text(self, path: Path) -> str | None:
        """Return the file content, or None if it is missing or unreadable."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        ...

    def create_exclusive(self, path: Path, content: str) -> None:
        """Create path with content. Raises FileExistsError if it exists."""
        ...

    def remove(self, path: Path) -> None:
        ...


class LockFileSystem:
    """Concrete FS helper."""

    def read_text(self, path: Path) -> str | None:
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def create_exclusive(self, path: Path, content: str) -> None:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)

    def remove(self, path: Path) -> None:
        path.unlink()
