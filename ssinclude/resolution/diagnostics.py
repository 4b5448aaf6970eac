"""Inline diagnostics rendered in place of failing directives."""

from __future__ import annotations

from dataclasses import dataclass

ERROR_PREFIX = "SSI Error:"


def render_comment(message: str) -> str:
    """Wrap ``message`` in the markup comment used for every SSI error."""
    return f"<!-- {ERROR_PREFIX} {message} -->"


@dataclass(frozen=True)
class Diagnostic:
    """Base class for expansion diagnostics."""

    kind = "diagnostic"

    @property
    def message(self) -> str:
        raise NotImplementedError

    def render(self) -> str:
        return render_comment(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class CircularInclude(Diagnostic):
    """A file was reached again while it was still being expanded.

    ``chain`` runs from the first occurrence of the repeated path through the
    repetition, so it starts and ends with the same path.
    """

    chain: tuple[str, ...]
    kind = "circular_include"

    @classmethod
    def from_ancestors(cls, ancestors: tuple[str, ...], repeated: str) -> CircularInclude:
        start = ancestors.index(repeated)
        return cls(chain=(*ancestors[start:], repeated))

    @property
    def message(self) -> str:
        return f"Circular include detected: {' -> '.join(self.chain)}"


@dataclass(frozen=True)
class MaxDepthExceeded(Diagnostic):
    """Nesting reached the configured limit (``limit`` is the setting, not the chain length)."""

    limit: int
    kind = "max_depth_exceeded"

    @property
    def message(self) -> str:
        return f"Maximum include depth ({self.limit}) exceeded"


@dataclass(frozen=True)
class FileNotFound(Diagnostic):
    """The normalized target could not be accessed or read."""

    path: str
    kind = "file_not_found"

    @property
    def message(self) -> str:
        return f"File not found: {self.path}"


# Message prefixes as they appear in rendered output, keyed by diagnostic kind.
RENDERED_PREFIXES = {
    CircularInclude.kind: f"<!-- {ERROR_PREFIX} Circular include detected:",
    MaxDepthExceeded.kind: f"<!-- {ERROR_PREFIX} Maximum include depth (",
    FileNotFound.kind: f"<!-- {ERROR_PREFIX} File not found:",
}


def count_diagnostics(text: str) -> dict[str, int]:
    """Count rendered diagnostics of each kind in expanded output."""
    return {kind: text.count(prefix) for kind, prefix in RENDERED_PREFIXES.items()}
