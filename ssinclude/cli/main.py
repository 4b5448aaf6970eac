"""CLI interface for ssinclude."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ssinclude.cli.commands.workspace import workspace
from ssinclude.cli.options import build_options, expansion_options, setup_logging
from ssinclude.config import ConfigError, SsiOptions
from ssinclude.resolution import IncludeExpander, normalize_path
from ssinclude.version import SSINCLUDE_VERSION, get_version_string

console = Console(stderr=True)


def _expand(file: str, root: str | None, options: SsiOptions) -> tuple[str, frozenset[str]]:
    """Read ``file`` and expand it, returning text and dependencies."""
    file_path = Path(file).absolute()
    root_path = Path(root).absolute() if root else file_path.parent
    content = file_path.read_text(encoding="utf-8")

    expander = IncludeExpander(options)
    result = expander.expand_document(file_path, content, root_path)
    return result.text, result.dependencies


def _dependency_tree(file: str, root: str | None, dependencies: frozenset[str]) -> Tree:
    """Render dependencies grouped by directory."""
    tree = Tree(f"[bold]{escape(normalize_path(file))}[/bold]")
    base = normalize_path(root) if root else normalize_path(Path(file).absolute().parent)

    by_dir: dict[str, list[Path]] = {}
    for dep in sorted(dependencies):
        dep_path = Path(dep)
        try:
            directory = dep_path.parent.relative_to(base).as_posix()
        except ValueError:
            directory = dep_path.parent.as_posix()
        by_dir.setdefault(directory, []).append(dep_path)

    for directory, dep_paths in sorted(by_dir.items()):
        branch = tree.add(f"[cyan]{escape(directory)}/[/cyan]")
        for dep_path in dep_paths:
            marker = "" if dep_path.is_file() else " [red](missing)[/red]"
            branch.add(f"{escape(dep_path.name)}{marker}")

    return tree


@click.group()
@click.version_option(version=SSINCLUDE_VERSION, prog_name="ssinclude", message=get_version_string())
@click.option("--verbose", "-v", count=True, help="Increase log output (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """ssinclude - Expand <!--#include virtual="..." --> directives."""
    setup_logging(verbose)


cli.add_command(workspace)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", "-r", type=click.Path(exists=True, file_okay=False), help="Project root")
@click.option("--output", "-o", type=click.Path(), help="Output file (default: stdout)")
@expansion_options
def expand(
    file: str,
    root: str | None,
    output: str | None,
    config_file: str | None,
    max_depth: int | None,
    include_types: tuple[str, ...],
) -> None:
    """Expand include directives in FILE."""
    try:
        options = build_options(config_file, max_depth, include_types)
        text, dependencies = _expand(file, root, options)
    except (ConfigError, OSError, UnicodeDecodeError) as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise click.Abort from None

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]✅ Wrote {output} ({len(dependencies)} dependencies)[/green]")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", "-r", type=click.Path(exists=True, file_okay=False), help="Project root")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json", "tree"]),
    default="text",
    help="Output format",
)
@expansion_options
def deps(
    file: str,
    root: str | None,
    format: str,
    config_file: str | None,
    max_depth: int | None,
    include_types: tuple[str, ...],
) -> None:
    """List every file FILE depends on through include directives."""
    try:
        options = build_options(config_file, max_depth, include_types)
        _, dependencies = _expand(file, root, options)
    except (ConfigError, OSError, UnicodeDecodeError) as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise click.Abort from None

    if format == "json":
        payload = {"document": normalize_path(Path(file).absolute()), "dependencies": sorted(dependencies)}
        click.echo(json.dumps(payload, indent=2))
    elif format == "tree":
        Console().print(_dependency_tree(file, root, dependencies))
    else:
        for dep in sorted(dependencies):
            click.echo(dep)
