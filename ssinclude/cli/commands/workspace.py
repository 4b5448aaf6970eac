"""Workspace CLI commands."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ssinclude.cli.options import build_options, expansion_options
from ssinclude.config import ConfigError
from ssinclude.resolution import Workspace

console = Console(stderr=True)


@click.group()
def workspace() -> None:
    """Workspace commands for expanding many documents."""


def _load_workspace(directory, pattern, recursive, config_file, max_depth, include_types):
    """Create a workspace with every html document under DIRECTORY."""
    try:
        options = build_options(config_file, max_depth, include_types)
    except ConfigError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise click.Abort from None

    ws = Workspace(root=Path(directory).absolute(), options=options)
    ws.add_directory(pattern=pattern, recursive=recursive)
    return ws


def _format_text_report(report, root):
    """Format report as a rich table."""
    table = Table(title="Workspace Expansion Report")
    table.add_column("Document")
    table.add_column("Dependencies", justify="right")
    table.add_column("Status")

    for path, result in report.document_results.items():
        try:
            name = Path(path).relative_to(root).as_posix()
        except ValueError:
            name = path
        status = "[green]ok[/green]" if result.ok else f"[red]{escape(result.errors[0])}[/red]"
        table.add_row(escape(name), str(len(result.dependencies)), status)

    return table


@workspace.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--output", "-o", type=click.Path(file_okay=False), required=True, help="Output directory")
@click.option("--pattern", "-p", default="*", help="File pattern to match")
@click.option(
    "--recursive/--no-recursive",
    "-r/-R",
    default=True,
    help="Scan subdirectories",
)
@click.option("--parallel/--sequential", default=True, help="Expand documents in parallel")
@expansion_options
def build(directory, output, pattern, recursive, parallel, config_file, max_depth, include_types) -> None:
    """Expand every html document in DIRECTORY into OUTPUT."""
    ws = _load_workspace(directory, pattern, recursive, config_file, max_depth, include_types)
    console.print(f"Found {len(ws.documents)} documents")

    report = ws.expand_all(parallel=parallel)
    written = ws.write_output(output)

    console.print(_format_text_report(report, ws.root))
    diagnostics = report.statistics.get("total_diagnostics", 0)
    if diagnostics:
        console.print(f"[yellow]⚠️  {diagnostics} SSI error(s) rendered inline[/yellow]")
    console.print(f"[green]✅ Wrote {len(written)} documents to {escape(output)}[/green]")


@workspace.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for graph")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["dot", "json"]),
    default="dot",
    help="Output format",
)
@click.option("--pattern", "-p", default="*", help="File pattern to match")
@expansion_options
def graph(directory, output, format, pattern, config_file, max_depth, include_types) -> None:
    """Generate the include dependency graph for DIRECTORY."""
    ws = _load_workspace(directory, pattern, True, config_file, max_depth, include_types)
    ws.expand_all(parallel=True)

    if format == "dot":
        output_text = ws.index.export_dot()
    else:  # json
        output_text = json.dumps(
            {"nodes": ws.index.to_dict(), "statistics": ws.index.get_statistics()},
            indent=2,
        )

    if output:
        Path(output).write_text(output_text)
        console.print(f"Graph written to: {escape(output)}")
        if format == "dot":
            console.print(f"Visualize with: dot -Tpng {escape(output)} -o graph.png")
    else:
        click.echo(output_text)


@workspace.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.argument("changed_file", type=click.Path())
@click.option("--pattern", "-p", default="*", help="File pattern to match")
@expansion_options
def affected(directory, changed_file, pattern, config_file, max_depth, include_types) -> None:
    """List documents in DIRECTORY that must be rebuilt when CHANGED_FILE changes."""
    ws = _load_workspace(directory, pattern, True, config_file, max_depth, include_types)
    ws.expand_all(parallel=True)

    changed = Path(changed_file)
    if not changed.is_absolute():
        changed = Path.cwd() / changed

    for path in sorted(ws.affected_documents(changed)):
        click.echo(path)
