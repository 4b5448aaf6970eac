"""Version information for ssinclude."""

SSINCLUDE_VERSION_MAJOR = 1
SSINCLUDE_VERSION_MINOR = 0
SSINCLUDE_VERSION_PATCH = 0
SSINCLUDE_VERSION = f"{SSINCLUDE_VERSION_MAJOR}.{SSINCLUDE_VERSION_MINOR}.{SSINCLUDE_VERSION_PATCH}"

# Only the Apache mod_include "include virtual" form is understood.
SSI_DIALECT = "include-virtual"


def get_version_string() -> str:
    """Version line shown by ``ssinclude --version``."""
    return f"ssinclude {SSINCLUDE_VERSION} ({SSI_DIALECT} directives)"
