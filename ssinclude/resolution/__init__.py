"""Include resolution package."""

from .content import ContentProvider, FileSystemContentProvider, InMemoryContentProvider
from .dependency_index import DependencyIndex, DependencyNode
from .diagnostics import CircularInclude, Diagnostic, FileNotFound, MaxDepthExceeded
from .expander import ExpansionContext, ExpansionResult, IncludeExpander, process_ssi
from .paths import normalize_path, resolve_include_path
from .workspace import DocumentAccessError, DocumentResult, Workspace, WorkspaceReport

__all__ = [
    "CircularInclude",
    "ContentProvider",
    "DependencyIndex",
    "DependencyNode",
    "Diagnostic",
    "DocumentAccessError",
    "DocumentResult",
    "ExpansionContext",
    "ExpansionResult",
    "FileNotFound",
    "FileSystemContentProvider",
    "InMemoryContentProvider",
    "IncludeExpander",
    "MaxDepthExceeded",
    "Workspace",
    "WorkspaceReport",
    "normalize_path",
    "process_ssi",
    "resolve_include_path",
]
