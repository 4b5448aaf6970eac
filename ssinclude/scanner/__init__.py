"""Directive scanning package."""

from ssinclude.scanner.directives import Directive
from ssinclude.scanner.scanner import INCLUDE_PATTERN, DirectiveScanner, scan_directives

__all__ = ["INCLUDE_PATTERN", "Directive", "DirectiveScanner", "scan_directives"]
