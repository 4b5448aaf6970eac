"""Example: Tracking which pages must be rebuilt when a partial changes."""

from ssinclude import SsiOptions, Workspace
from ssinclude.resolution import InMemoryContentProvider

provider = InMemoryContentProvider(
    {
        "/site/index.html": '<!--#include virtual="/partials/header.html" --><h1>Home</h1>',
        "/site/about.html": '<!--#include virtual="/partials/header.html" --><h1>About</h1>',
        "/site/contact.html": '<!--#include virtual="/partials/form.html" -->',
        "/site/partials/header.html": '<header><!--#include virtual="logo.html" --></header>',
        "/site/partials/logo.html": '<img src="/logo.png">',
    }
)

workspace = Workspace("/site", SsiOptions.create(include_file_types=["html"]), provider)
for page in ("index.html", "about.html", "contact.html"):
    workspace.add_file(page)

report = workspace.expand_all()
for path, result in report.document_results.items():
    print(f"{path}: {result.text}")

print(f"Diagnostics: {report.statistics['diagnostics']}")

# Changing the logo affects every page that pulls in the header
print("Affected by logo.html:", sorted(workspace.affected_documents("/site/partials/logo.html")))

provider.add("/site/partials/logo.html", '<img src="/logo-v2.png">')
for path, result in workspace.refresh("/site/partials/logo.html").items():
    print(f"Refreshed {path}: {result.text}")

print()
print(workspace.index.export_dot())
