"""File helper class used throughout :mod:`ECLrestart`."""
from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from mmap import ACCESS_READ, mmap
from pathlib import Path

from ..errors import FileOpenError

__all__ = ["File"]

logger = getLogger(__name__)


class File:
    """High-level convenience wrapper around :class:`pathlib.Path`."""

    def __init__(self, filename, role=None):
        """Initialize the File.

        Args:
            filename: Path-like object or :class:`File` to wrap.
            role: Description prepended to the printable representation.
        """
        if isinstance(filename, File):
            filename = filename.path
        self.path = Path(filename).resolve() if filename else None
        self.role = role.strip() + " " if role else ""
        logger.debug("Creating %r", self)

    def __repr__(self):
        """Return a developer-friendly representation."""
        return f"<{self.__class__.__name__}, file={self.path}, role={self.role or None}>"

    def __str__(self):
        """Return a human-readable representation."""
        return f"{self.role}{self.name}"

    def __getattr__(self, item):
        """Delegate missing attributes to ``path``."""
        if item == "path":
            raise AttributeError(item)
        try:
            return getattr(self.path or Path(), item)
        except AttributeError as error:
            raise AttributeError(
                f"'{self.__class__.__name__}' object has no attribute '{item}'"
            ) from error

    @contextmanager
    def mmap(self):
        """Memory-map the file for reading."""
        with open(self.path, mode="rb") as file:
            with mmap(file.fileno(), length=0, access=ACCESS_READ) as filemap:
                yield filemap

    def is_file(self):
        """Return whether the path points to a file."""
        if not self.path:
            return False
        return self.path.is_file()

    def exists(self, raise_error=False):
        """Return whether the path exists.

        Args:
            raise_error: Raise :class:`FileOpenError` when the file is missing.
        """
        if self.is_file():
            return True
        if raise_error:
            if self.path and self.path.parent.is_dir():
                raise FileOpenError(self.path, f"is missing in folder {self.path.parent}")
            raise FileOpenError(self.path, "not found")
        return False

    def size(self):
        """Return the file size in bytes, or ``None`` if it does not exist."""
        if not self.path or not self.path.exists():
            return None
        return self.path.stat().st_size

    def write_bytes(self, data, append=False):
        """Write bytes to disk, appending if ``append`` is set."""
        with open(self.path, "ab" if append else "wb") as file:
            file.write(data)
