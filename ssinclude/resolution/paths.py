"""Include target resolution and path normalization."""

from __future__ import annotations

import os
from pathlib import Path

ROOT_MARKER = "/"


def resolve_include_path(raw_target: str, including_file: str | Path, root: str | Path) -> str:
    """Resolve a ``virtual`` target to an absolute candidate path.

    Targets starting with ``/`` are addressed from the project root, anything
    else from the directory holding ``including_file``. Existence is not
    checked.
    """
    if raw_target.startswith(ROOT_MARKER):
        # Joining a second absolute component would drop the root.
        relative = raw_target[len(ROOT_MARKER) :]
        return os.path.normpath(os.path.join(os.path.abspath(root), relative.lstrip("/\\")))

    including_dir = os.path.dirname(os.path.abspath(including_file))
    return os.path.normpath(os.path.join(including_dir, raw_target))


def normalize_path(path: str | Path) -> str:
    """Return the comparable form of ``path``.

    Absolute, lexically normalized, with every separator folded to ``/``.
    Case and symlinks are left untouched.
    """
    folded = str(path).replace("\\", "/")
    return os.path.abspath(folded).replace("\\", "/")


def same_path(left: str | Path, right: str | Path) -> bool:
    return normalize_path(left) == normalize_path(right)
