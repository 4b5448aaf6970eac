"""Example: Expanding include directives in a single document."""

import tempfile
from pathlib import Path

from ssinclude import SsiOptions, process_ssi

site = {
    "partials/head.html": '<meta charset="utf-8">\n<title>Example</title>',
    "partials/nav.html": '<nav><a href="/">Home</a><!--#include virtual="nav-extra.html" --></nav>',
    "partials/nav-extra.html": '<a href="/about.html">About</a>',
    "index.html": """<!DOCTYPE html>
<html>
<head>
<!--#include virtual="/partials/head.html" -->
</head>
<body>
<!--#include virtual="/partials/nav.html" -->
<main>Hello!</main>
<!--#include virtual="/partials/footer.html" -->
</body>
</html>
""",
}

with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    for name, content in site.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    index = root / "index.html"

    # Included files are inserted verbatim by default
    result = process_ssi(index, index.read_text(), root=root)
    print("Verbatim includes:")
    print(result.text)

    # Expand html includes again, so the nested nav directive is resolved too
    options = SsiOptions.create(include_file_types=["html"], max_depth=5)
    result = process_ssi(index, index.read_text(), options, root=root)
    print("Nested includes:")
    print(result.text)

    print("Dependencies:")
    for dep in sorted(result.dependencies):
        print(f"  {Path(dep).relative_to(root.as_posix())}")
