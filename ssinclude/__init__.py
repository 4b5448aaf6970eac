"""ssinclude - Resolve server-side include directives in documents."""

import logging

from ssinclude.config import ConfigError, SsiOptions, load_config
from ssinclude.file_types import DEFAULT_FILE_TYPE_MAP, matches_file_type, merge_file_type_map
from ssinclude.resolution import (
    DependencyIndex,
    ExpansionResult,
    IncludeExpander,
    Workspace,
    normalize_path,
    process_ssi,
)
from ssinclude.scanner import Directive, DirectiveScanner
from ssinclude.version import (
    SSINCLUDE_VERSION,
    SSINCLUDE_VERSION_MAJOR,
    SSINCLUDE_VERSION_MINOR,
    SSINCLUDE_VERSION_PATCH,
    get_version_string,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = SSINCLUDE_VERSION
__all__ = [
    "DEFAULT_FILE_TYPE_MAP",
    "SSINCLUDE_VERSION",
    "SSINCLUDE_VERSION_MAJOR",
    "SSINCLUDE_VERSION_MINOR",
    "SSINCLUDE_VERSION_PATCH",
    "ConfigError",
    "DependencyIndex",
    "Directive",
    "DirectiveScanner",
    "ExpansionResult",
    "IncludeExpander",
    "SsiOptions",
    "Workspace",
    "get_version_string",
    "load_config",
    "matches_file_type",
    "merge_file_type_map",
    "normalize_path",
    "process_ssi",
]
