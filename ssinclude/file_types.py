"""File type table used to decide which included files are expanded again."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePath
from types import MappingProxyType

FileTypeMap = Mapping[str, tuple[str, ...]]

DEFAULT_FILE_TYPE_MAP: FileTypeMap = MappingProxyType(
    {
        "html": (".html", ".htm", ".shtml"),
        "js": (".js", ".mjs", ".cjs", ".ts", ".tsx", ".jsx", ".mts", ".cts"),
        "css": (".css", ".scss", ".sass", ".less", ".styl"),
        "json": (".json", ".jsonc"),
        "xml": (".xml", ".xhtml"),
        "text": (".txt", ".md", ".markdown"),
    }
)


def merge_file_type_map(overrides: Mapping[str, Iterable[str]] | None = None) -> FileTypeMap:
    """Build a fresh table from the defaults plus ``overrides``.

    An override replaces the default extension list of the same type name.
    The default table is never modified.
    """
    merged: dict[str, tuple[str, ...]] = dict(DEFAULT_FILE_TYPE_MAP)
    for type_name, extensions in (overrides or {}).items():
        merged[type_name.lower()] = tuple(ext.lower() for ext in extensions)
    return MappingProxyType(merged)


def get_file_extension(file_path: str | PurePath) -> str | None:
    """Return the lower-cased extension including the dot, or None.

    The extension is whatever follows the last dot of the file name; a
    trailing dot or a name without dots has no extension.
    """
    text = str(file_path).replace("\\", "/").rsplit("/", 1)[-1]
    last_dot = text.rfind(".")
    if last_dot == -1:
        return None
    ext = text[last_dot:]
    return ext.lower() if len(ext) > 1 else None


def matches_file_type(
    file_path: str | PurePath,
    file_types: Iterable[str],
    file_type_map: FileTypeMap = DEFAULT_FILE_TYPE_MAP,
) -> bool:
    """Check whether ``file_path`` belongs to any of the enabled ``file_types``."""
    ext = get_file_extension(file_path)
    if not ext:
        return False

    for file_type in file_types:
        if ext in file_type_map.get(file_type.lower(), ()):
            return True

    return False


def is_html_file(file_path: str | PurePath) -> bool:
    """Check the path against the default html family (top-level documents)."""
    ext = get_file_extension(file_path)
    return ext in DEFAULT_FILE_TYPE_MAP["html"] if ext else False
