"""Directive definitions for the SSI scanner."""

from __future__ import annotations

import attrs


@attrs.define(frozen=True)
class Directive:
    """A single ``<!--#include virtual="..." -->`` occurrence.

    ``start`` and ``end`` are offsets into the scanned buffer, ``end`` being
    exclusive, so ``text[start:end]`` is the whole directive.
    """

    raw_target: str
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def text(self, buffer: str) -> str:
        """Return the directive source as it appears in ``buffer``."""
        return buffer[self.start : self.end]

    def __str__(self) -> str:
        return f"Directive(virtual={self.raw_target!r}, {self.start}:{self.end})"
