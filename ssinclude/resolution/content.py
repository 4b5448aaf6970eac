"""Content access used by the expander to load included files."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from ssinclude.resolution.paths import normalize_path


@runtime_checkable
class ContentProvider(Protocol):
    """Existence check and text read for an absolute path.

    ``read_text`` raises ``OSError`` (or ``UnicodeDecodeError``) when the
    file cannot be read.
    """

    def exists(self, path: str) -> bool: ...

    def read_text(self, path: str) -> str: ...


class FileSystemContentProvider:
    """Read files from the local file system."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)


class InMemoryContentProvider:
    """Serve documents held in memory, keyed by normalized path."""

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self.files: dict[str, str] = {}
        for path, content in (files or {}).items():
            self.add(path, content)

    def add(self, path: str | Path, content: str) -> None:
        self.files[normalize_path(path)] = content

    def remove(self, path: str | Path) -> None:
        self.files.pop(normalize_path(path), None)

    def exists(self, path: str) -> bool:
        return normalize_path(path) in self.files

    def read_text(self, path: str) -> str:
        try:
            return self.files[normalize_path(path)]
        except KeyError:
            msg = f"No such document: {normalize_path(path)}"
            raise FileNotFoundError(msg) from None
