"""Single-pass scanner for SSI include directives."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ssinclude.scanner.directives import Directive

if TYPE_CHECKING:
    from collections.abc import Iterator

# <!--#include virtual="path" --> with free whitespace around "=" and the parameter.
INCLUDE_PATTERN = re.compile(r'<!--#include\s+virtual\s*=\s*"([^"]+)"\s*-->')


class DirectiveScanner:
    """Locate include directives in a text buffer.

    The grammar has no nesting marker, so matches never overlap and are
    reported in document order with their original offsets. Other comments,
    including other SSI commands, are left alone.
    """

    def __init__(self, pattern: re.Pattern[str] = INCLUDE_PATTERN) -> None:
        self.pattern = pattern

    def iter_directives(self, text: str) -> Iterator[Directive]:
        """Yield directives lazily in document order."""
        for match in self.pattern.finditer(text):
            yield Directive(raw_target=match.group(1), start=match.start(), end=match.end())

    def scan(self, text: str) -> list[Directive]:
        """Return every directive in ``text``."""
        return list(self.iter_directives(text))

    def has_directives(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def scan_directives(text: str) -> list[Directive]:
    """Scan ``text`` with the default include grammar."""
    return DirectiveScanner().scan(text)
