"""Dependency index mapping top-level documents to the files they include."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ssinclude.resolution.paths import normalize_path


@dataclass
class DependencyNode:
    """Node in the dependency index."""

    name: str
    type: str  # 'document' or 'include'
    dependencies: set[str] = field(default_factory=set)
    dependents: set[str] = field(default_factory=set)


class DependencyIndex:
    """Track which top-level documents depend on which included files.

    All mutation goes through ``record`` (and ``forget``), lookups through
    ``lookup``; both take the same lock, so one index can be shared by
    concurrent expansions.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, DependencyNode] = {}
        self._lock = threading.Lock()

    def record(self, document: str | Path, dependencies: Iterable[str | Path]) -> None:
        """Store the dependency set of ``document``, replacing any previous one."""
        doc_key = normalize_path(document)
        new_deps = {normalize_path(dep) for dep in dependencies}

        with self._lock:
            node = self.nodes.get(doc_key)
            if node is None:
                node = DependencyNode(name=doc_key, type="document")
                self.nodes[doc_key] = node
            else:
                node.type = "document"
                self._unlink(doc_key, node.dependencies - new_deps)

            for dep in new_deps:
                dep_node = self.nodes.get(dep)
                if dep_node is None:
                    dep_node = DependencyNode(name=dep, type="include")
                    self.nodes[dep] = dep_node
                dep_node.dependents.add(doc_key)

            node.dependencies = new_deps

    def lookup(self, dependency: str | Path) -> frozenset[str]:
        """Return the top-level documents whose expansion read ``dependency``."""
        dep_key = normalize_path(dependency)
        with self._lock:
            node = self.nodes.get(dep_key)
            return frozenset(node.dependents) if node else frozenset()

    def forget(self, document: str | Path) -> None:
        """Drop ``document`` and its outgoing edges."""
        doc_key = normalize_path(document)
        with self._lock:
            node = self.nodes.get(doc_key)
            if node is None or node.type != "document":
                return
            self._unlink(doc_key, node.dependencies)
            node.dependencies = set()
            if node.dependents:
                # Still included by another document.
                node.type = "include"
            else:
                del self.nodes[doc_key]

    def _unlink(self, doc_key: str, stale: Iterable[str]) -> None:
        for dep in stale:
            dep_node = self.nodes.get(dep)
            if dep_node is None:
                continue
            dep_node.dependents.discard(doc_key)
            if dep_node.type == "include" and not dep_node.dependents:
                del self.nodes[dep]

    def dependencies_of(self, document: str | Path) -> frozenset[str]:
        """Get the recorded dependency set of a document."""
        with self._lock:
            node = self.nodes.get(normalize_path(document))
            return frozenset(node.dependencies) if node else frozenset()

    def documents(self) -> list[str]:
        """Get all recorded top-level documents."""
        with self._lock:
            return sorted(key for key, node in self.nodes.items() if node.type == "document")

    def get_statistics(self) -> dict:
        """Get index statistics."""
        with self._lock:
            documents = [n for n in self.nodes.values() if n.type == "document"]
            includes = [n for n in self.nodes.values() if n.type == "include"]
            shared = [n for n in self.nodes.values() if len(n.dependents) > 1]

            return {
                "total_nodes": len(self.nodes),
                "document_count": len(documents),
                "include_count": len(includes),
                "total_edges": sum(len(n.dependencies) for n in self.nodes.values()),
                "shared_includes": len(shared),
            }

    def export_dot(self) -> str:
        """Export the index to DOT format for visualization."""
        lines = ["digraph SsiDependencies {"]
        lines.append("  rankdir=LR;")
        lines.append("  node [shape=box];")

        with self._lock:
            nodes = sorted(self.nodes.items())

        for node_key, node in nodes:
            if node.type == "document":
                style = "shape=folder,style=filled,fillcolor=lightblue"
            else:
                style = "shape=note,style=filled,fillcolor=lightyellow"

            safe_key = node_key.replace('"', '\\"')
            safe_label = Path(node.name).name.replace('"', '\\"')
            lines.append(f'  "{safe_key}" [label="{safe_label}",{style}];')

        for node_key, node in nodes:
            safe_key = node_key.replace('"', '\\"')
            for dep in sorted(node.dependencies):
                safe_dep = dep.replace('"', '\\"')
                lines.append(f'  "{safe_key}" -> "{safe_dep}";')

        lines.append("}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        with self._lock:
            return {
                key: {
                    "type": node.type,
                    "dependencies": sorted(node.dependencies),
                    "dependents": sorted(node.dependents),
                }
                for key, node in sorted(self.nodes.items())
            }
