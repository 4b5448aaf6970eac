"""Recursive SSI include expansion with cycle and depth protection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ssinclude.config import SsiOptions
from ssinclude.file_types import DEFAULT_FILE_TYPE_MAP, FileTypeMap, matches_file_type
from ssinclude.resolution.content import ContentProvider, FileSystemContentProvider
from ssinclude.resolution.diagnostics import CircularInclude, FileNotFound, MaxDepthExceeded
from ssinclude.resolution.paths import normalize_path, resolve_include_path
from ssinclude.scanner import DirectiveScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionContext:
    """Per-level expansion state.

    Each recursive call gets its own context through ``descend``; the ancestor
    chain is a tuple, so sibling branches never see each other's chain.
    """

    project_root: str
    ancestor_chain: tuple[str, ...] = ()
    depth: int = 0
    max_depth: int = 10
    type_names: tuple[str, ...] = ()
    type_table: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_FILE_TYPE_MAP)

    @classmethod
    def from_options(cls, project_root: str | Path, options: SsiOptions) -> ExpansionContext:
        return cls(
            project_root=normalize_path(project_root),
            max_depth=options.max_depth,
            type_names=options.include_file_types,
            type_table=options.file_type_map,
        )

    def descend(self, normalized_path: str) -> ExpansionContext:
        """Context for the files included by ``normalized_path``."""
        return ExpansionContext(
            project_root=self.project_root,
            ancestor_chain=(*self.ancestor_chain, normalized_path),
            depth=self.depth + 1,
            max_depth=self.max_depth,
            type_names=self.type_names,
            type_table=self.type_table,
        )

    def should_expand(self, file_path: str) -> bool:
        """Check whether an included file is itself scanned for directives."""
        if not self.type_names:
            return False
        return matches_file_type(file_path, self.type_names, self.type_table)


@dataclass(frozen=True)
class ExpansionResult:
    """Expanded text and every include target encountered below it."""

    text: str
    dependencies: frozenset[str] = frozenset()


@dataclass
class _Replacement:
    start: int
    end: int
    text: str


class IncludeExpander:
    """Expand ``<!--#include virtual="..." -->`` directives.

    The expander keeps no state between calls; one instance can serve many
    documents, from several threads if the content provider allows it.
    """

    def __init__(
        self,
        options: SsiOptions | None = None,
        content_provider: ContentProvider | None = None,
        scanner: DirectiveScanner | None = None,
    ) -> None:
        self.options = options or SsiOptions()
        self.content_provider = content_provider or FileSystemContentProvider()
        self.scanner = scanner or DirectiveScanner()

    def expand_document(
        self,
        file_path: str | Path,
        content: str,
        root: str | Path,
    ) -> ExpansionResult:
        """Expand a top-level document located at ``file_path`` under ``root``."""
        context = ExpansionContext.from_options(root, self.options)
        return self.expand(str(file_path), content, context)

    def expand(self, file_path: str, content: str, context: ExpansionContext) -> ExpansionResult:
        """Expand ``content`` (the text of ``file_path``) within ``context``.

        Failures of individual directives are rendered inline and never raised.
        """
        normalized = normalize_path(file_path)

        if normalized in context.ancestor_chain:
            diagnostic = CircularInclude.from_ancestors(context.ancestor_chain, normalized)
            logger.warning("%s", diagnostic)
            return ExpansionResult(text=diagnostic.render())

        if context.depth >= context.max_depth:
            diagnostic = MaxDepthExceeded(limit=context.max_depth)
            logger.warning("%s while expanding %s", diagnostic, normalized)
            return ExpansionResult(text=diagnostic.render())

        child_context = context.descend(normalized)
        directives = self.scanner.scan(content)
        if not directives:
            return ExpansionResult(text=content)

        dependencies: set[str] = set()
        replacements: list[_Replacement] = []

        # Last directive first; the stored offsets of earlier ones stay valid.
        for directive in reversed(directives):
            resolved = resolve_include_path(directive.raw_target, file_path, context.project_root)
            normalized_target = normalize_path(resolved)
            dependencies.add(normalized_target)

            included = self._load(normalized_target)
            if included is None:
                diagnostic = FileNotFound(path=normalized_target)
                logger.debug("%s (from %s)", diagnostic, normalized)
                replacements.append(_Replacement(directive.start, directive.end, diagnostic.render()))
                continue

            if context.should_expand(normalized_target):
                logger.debug("Expanding %s included from %s", normalized_target, normalized)
                child = self.expand(normalized_target, included, child_context)
                dependencies.update(child.dependencies)
                replacement = child.text
            else:
                logger.debug("Inserting %s verbatim into %s", normalized_target, normalized)
                replacement = included

            replacements.append(_Replacement(directive.start, directive.end, replacement))

        return ExpansionResult(
            text=self._splice(content, replacements),
            dependencies=frozenset(dependencies),
        )

    def _load(self, path: str) -> str | None:
        """Read an included file, or None when it cannot be accessed."""
        try:
            if not self.content_provider.exists(path):
                return None
            return self.content_provider.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None

    @staticmethod
    def _splice(content: str, replacements: list[_Replacement]) -> str:
        """Rebuild ``content`` with each ``[start, end)`` window replaced."""
        parts: list[str] = []
        position = 0
        for replacement in sorted(replacements, key=lambda r: r.start):
            parts.append(content[position : replacement.start])
            parts.append(replacement.text)
            position = replacement.end
        parts.append(content[position:])
        return "".join(parts)


def process_ssi(
    file_path: str | Path,
    content: str,
    options: SsiOptions | None = None,
    root: str | Path | None = None,
    content_provider: ContentProvider | None = None,
) -> ExpansionResult:
    """Expand a top-level document in one call.

    Args:
        file_path: Absolute path of the document (relative targets resolve from it).
        content: The document text.
        options: Expansion options; defaults apply when omitted.
        root: Project root for ``/``-prefixed targets (current directory by default).
        content_provider: Where included files are read from (file system by default).

    Returns:
        ExpansionResult with the expanded text and the dependency set.

    """
    expander = IncludeExpander(options, content_provider)
    return expander.expand_document(file_path, content, root if root is not None else Path.cwd())
