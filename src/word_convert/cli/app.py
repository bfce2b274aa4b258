"""
Main CLI application for word-convert.

Provides a Typer-based command-line interface for converting Word documents
to plain text, HTML and Markdown.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from ..config import WordConvertConfig, get_config_manager
from ..converters.content_to_format import FormatRenderer
from ..core.document_model import OutputFormat
from ..core.outline import build_outline
from ..exceptions import DocumentProcessingError
from ..processor import DocumentProcessor

# Initialize Typer app
app = typer.Typer(
    name="word-convert",
    help="Convert Word documents to clean plain text, HTML and Markdown",
    add_completion=False,
    rich_markup_mode="rich"
)

# Global console for rich output
console = Console()

_SYNTAX = {
    OutputFormat.HTML: "html",
    OutputFormat.MARKDOWN: "markdown",
}


def _setup_logging(config: WordConvertConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(verbose: bool = False, pipe_tables: Optional[bool] = None) -> DocumentProcessor:
    config = get_config_manager().load_config()
    if pipe_tables is not None:
        config = replace(config, pipe_tables=pipe_tables)
    _setup_logging(config, verbose)
    return DocumentProcessor(config=config)


def _parse_format(value: Optional[str], processor: DocumentProcessor) -> OutputFormat:
    if value is None:
        return processor.config.default_format
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        console.print(f"[red]Error: Unknown format '{value}'. Choose one of: {choices}[/red]")
        raise typer.Exit(1)


@app.command()
def convert(
    files: List[Path] = typer.Argument(..., help="Word documents to convert"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: plaintext, html, markdown"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for converted files"),
    pipe_tables: Optional[bool] = typer.Option(None, "--pipe-tables/--inline-tables", help="Render Markdown tables as pipe tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
) -> None:
    """
    Convert one or more Word documents.

    Each document is written to the output directory as <name>.<txt|html|md>.
    """
    processor = _load(verbose, pipe_tables)
    fmt = _parse_format(output_format, processor)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Converting documents...", total=None)
        results = []
        for file_path in files:
            progress.update(task, description=f"Converting {file_path.name}...")
            results.append(processor.process_file(file_path))

    summary = Table(title="Conversion Results")
    summary.add_column("File", style="cyan")
    summary.add_column("Status")
    summary.add_column("Output / Error", style="white")
    summary.add_column("Time", style="blue", justify="right")

    failures = 0
    for result in results:
        elapsed = f"{result.processing_time:.0f} ms"
        if not result.success:
            failures += 1
            summary.add_row(result.filename, "[red]failed[/red]", result.error or "", elapsed)
            continue

        try:
            target = processor.write_output(result, fmt, output_dir)
        except (OSError, DocumentProcessingError) as e:
            failures += 1
            summary.add_row(result.filename, "[red]failed[/red]", f"Could not write output: {e}", elapsed)
        else:
            summary.add_row(result.filename, "[green]ok[/green]", str(target), elapsed)

    console.print(summary)

    if failures:
        console.print(f"[red]{failures} of {len(results)} file(s) failed[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Converted {len(results)} file(s) to {fmt.label}[/green]")


@app.command()
def preview(
    file_path: Path = typer.Argument(..., help="Word document to preview"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: plaintext, html, markdown"),
    pipe_tables: Optional[bool] = typer.Option(None, "--pipe-tables/--inline-tables", help="Render Markdown tables as pipe tables"),
) -> None:
    """
    Print the converted document without writing any file.
    """
    processor = _load(pipe_tables=pipe_tables)
    fmt = _parse_format(output_format, processor)

    result = processor.process_file(file_path)
    if not result.success or result.output is None:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    rendered = processor.render(result.output, fmt)
    body = Syntax(rendered, _SYNTAX[fmt], word_wrap=True) if fmt in _SYNTAX else rendered
    console.print(Panel(body, title=f"{result.output.title} ({fmt.label})", border_style="blue"))


@app.command()
def outline(
    file_path: Path = typer.Argument(..., help="Word document to outline"),
) -> None:
    """
    Show the heading structure of a document.
    """
    processor = _load()
    result = processor.process_file(file_path)
    if not result.success or result.output is None:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    content = result.output
    tree = Tree(f"[bold cyan]{content.title}[/bold cyan]")

    def add_nodes(parent: Tree, nodes) -> None:
        for node in nodes:
            label = f"{node.title} [dim]({len(node.sections)} blocks)[/dim]"
            add_nodes(parent.add(label), node.children)

    add_nodes(tree, build_outline(content))
    console.print(tree)

    stats = content.get_stats()
    console.print(
        f"Words: {stats['word_count']}, Headings: {stats['heading_count']}, "
        f"Lists: {stats['list_count']}, Tables: {stats['table_count']}"
    )


@app.command()
def formats() -> None:
    """
    List the available output formats.
    """
    table = Table(title="Output Formats")
    table.add_column("Format", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Extension", style="yellow")

    for info in FormatRenderer.available_formats():
        table.add_row(info["key"], info["label"], f".{info['extension']}")

    console.print(table)


@app.command()
def config(
    init: bool = typer.Option(False, "--init", help="Create a default configuration file"),
) -> None:
    """
    Show the current configuration.
    """
    manager = get_config_manager()

    if init:
        path = manager.create_default_config()
        console.print(f"[green]Created default configuration at {path}[/green]")

    info_table = Table(title="Configuration", show_header=False)
    info_table.add_column("Setting", style="cyan")
    info_table.add_column("Value", style="green")

    for key, value in manager.get_config_info().items():
        info_table.add_row(key, str(value))

    console.print(info_table)


if __name__ == "__main__":
    app()
