"""Workspace for expanding many top-level documents and tracking invalidation."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from ssinclude.config import SsiOptions
from ssinclude.file_types import is_html_file
from ssinclude.resolution.content import ContentProvider, FileSystemContentProvider
from ssinclude.resolution.dependency_index import DependencyIndex
from ssinclude.resolution.diagnostics import count_diagnostics, render_comment
from ssinclude.resolution.expander import IncludeExpander
from ssinclude.resolution.paths import normalize_path

logger = logging.getLogger(__name__)


class DocumentAccessError(OSError):
    """A top-level document could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read document {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass
class DocumentResult:
    """Result of expanding a single top-level document."""

    path: str
    text: str = ""
    dependencies: frozenset[str] = frozenset()
    errors: list[str] = field(default_factory=list)
    expanded: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class WorkspaceReport:
    """Outcome of expanding every document in a workspace."""

    documents_expanded: int
    total_dependencies: int
    document_results: dict[str, DocumentResult]
    failed_documents: list[str] = field(default_factory=list)
    statistics: dict = field(default_factory=dict)


class Workspace:
    """A project root holding top-level documents that share one dependency index."""

    def __init__(
        self,
        root: str | Path | None = None,
        options: SsiOptions | None = None,
        content_provider: ContentProvider | None = None,
        index: DependencyIndex | None = None,
    ) -> None:
        """Initialize workspace.

        Args:
            root: Project root used for ``/``-prefixed targets (current directory by default).
            options: Expansion options.
            content_provider: Source of document and include contents.
            index: Dependency index to record into; a fresh one by default.

        """
        self.root = Path(root) if root else Path.cwd()
        self.options = options or SsiOptions()
        self.content_provider = content_provider or FileSystemContentProvider()
        self.index = index or DependencyIndex()
        self.expander = IncludeExpander(self.options, self.content_provider)
        self.documents: dict[str, DocumentResult] = {}

    def _absolute(self, file_path: str | Path) -> str:
        path = Path(file_path)
        if not path.is_absolute():
            path = self.root / path
        return normalize_path(path)

    def add_file(self, file_path: str | Path) -> str:
        """Register a top-level document and return its normalized path."""
        key = self._absolute(file_path)
        self.documents.setdefault(key, DocumentResult(path=key))
        return key

    def add_directory(
        self,
        directory: str | Path | None = None,
        pattern: str = "*",
        recursive: bool = True,
    ) -> list[str]:
        """Register every html document below ``directory`` matching ``pattern``."""
        dir_path = Path(directory) if directory else self.root
        if not dir_path.is_absolute():
            dir_path = self.root / dir_path

        files = dir_path.rglob(pattern) if recursive else dir_path.glob(pattern)

        added = []
        for file_path in sorted(files):
            if file_path.is_file() and is_html_file(file_path):
                added.append(self.add_file(file_path))

        logger.info("Registered %d documents from %s", len(added), dir_path)
        return added

    def read_document(self, file_path: str | Path) -> str:
        """Read a top-level document through the content provider."""
        key = self._absolute(file_path)
        try:
            if not self.content_provider.exists(key):
                raise DocumentAccessError(key, "no such file")
            return self.content_provider.read_text(key)
        except DocumentAccessError:
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentAccessError(key, str(e)) from e

    def expand_file(self, file_path: str | Path) -> DocumentResult:
        """Expand one document and record its dependencies in the index.

        A document that cannot be read yields an error result whose text is
        the rendered error; nothing is raised.
        """
        key = self.add_file(file_path)
        result = DocumentResult(path=key)

        try:
            content = self.read_document(key)
        except DocumentAccessError as e:
            logger.error("%s", e)
            result.text = render_comment(str(e))
            result.errors.append(str(e))
            self.index.forget(key)
        else:
            expansion = self.expander.expand_document(key, content, self.root)
            result.text = expansion.text
            result.dependencies = expansion.dependencies
            self.index.record(key, expansion.dependencies)
            result.expanded = True
            logger.debug("Expanded %s (%d dependencies)", key, len(expansion.dependencies))

        self.documents[key] = result
        return result

    def expand_all(self, parallel: bool = True, max_workers: int | None = None) -> WorkspaceReport:
        """Expand every registered document.

        Args:
            parallel: Whether to expand documents in parallel.
            max_workers: Maximum number of parallel workers.

        Returns:
            WorkspaceReport with per-document results and statistics.

        """
        paths = list(self.documents)
        results: dict[str, DocumentResult] = {}

        if parallel and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_path = {executor.submit(self.expand_file, path): path for path in paths}
                for future in as_completed(future_to_path):
                    path = future_to_path[future]
                    results[path] = future.result()
        else:
            for path in paths:
                results[path] = self.expand_file(path)

        ordered = {path: results[path] for path in paths}
        report = WorkspaceReport(
            documents_expanded=sum(1 for r in ordered.values() if r.ok),
            total_dependencies=len(set().union(*(r.dependencies for r in ordered.values()))),
            document_results=ordered,
            failed_documents=[path for path, r in ordered.items() if not r.ok],
        )
        self._calculate_statistics(report)
        logger.info(
            "Expanded %d of %d documents",
            report.documents_expanded,
            len(ordered),
        )
        return report

    def _calculate_statistics(self, report: WorkspaceReport) -> None:
        """Calculate workspace statistics."""
        report.statistics["document_count"] = len(report.document_results)
        report.statistics["failed_count"] = len(report.failed_documents)
        report.statistics["dependency_count"] = report.total_dependencies

        totals = {"circular_include": 0, "max_depth_exceeded": 0, "file_not_found": 0}
        for result in report.document_results.values():
            for kind, count in count_diagnostics(result.text).items():
                totals[kind] += count
        report.statistics["diagnostics"] = totals
        report.statistics["total_diagnostics"] = sum(totals.values())

        report.statistics.update(self.index.get_statistics())

    def affected_documents(self, changed_path: str | Path) -> frozenset[str]:
        """Top-level documents whose output depends on ``changed_path``.

        A registered document counts as affected by its own change.
        """
        key = self._absolute(changed_path)
        affected = set(self.index.lookup(key))
        if key in self.documents:
            affected.add(key)
        return frozenset(affected)

    def refresh(self, changed_path: str | Path) -> dict[str, DocumentResult]:
        """Re-expand every document affected by a change to ``changed_path``."""
        affected = sorted(self.affected_documents(changed_path))
        logger.info("%s changed, re-expanding %d documents", changed_path, len(affected))
        return {path: self.expand_file(path) for path in affected}

    def write_output(self, out_dir: str | Path) -> list[Path]:
        """Write expanded documents below ``out_dir``, mirroring their place under the root."""
        out_root = Path(out_dir)
        root = normalize_path(self.root)
        written = []

        for path, result in self.documents.items():
            if not result.expanded and not result.errors:
                result = self.expand_file(path)
            try:
                relative = Path(path).relative_to(root)
            except ValueError:
                relative = Path(Path(path).name)
            target = out_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.text, encoding="utf-8")
            written.append(target)

        logger.info("Wrote %d documents to %s", len(written), out_root)
        return written
