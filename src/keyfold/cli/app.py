"""
Main CLI application for keyfold.

Provides a Typer-based command-line interface for folding markup documents
around a chosen set of keywords.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..converters.markup_parser import MarkupParseError, MarkupParser
from ..core.document_model import MarkupDocument
from ..core.extractor import KeyExtractor
from ..core.keywords import KeywordSet, parse_keywords
from ..core.orchestrator import RefoldOrchestrator
from ..view.fold_view import FoldView
from ..view.report import FoldReport
from .selector import StaticSelector

# Initialize Typer app
app = typer.Typer(
    name="keyfold",
    help="Fold the parts of a markup document that do not match chosen keywords",
    add_completion=False,
    rich_markup_mode="rich",
)

# Global console for rich output
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    keyfold: keyword-driven folding of markup documents.
    """
    from ..config import load_config

    level = "DEBUG" if verbose else load_config().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_document(file_path: Path) -> MarkupDocument:
    """Parse ``file_path`` or exit with an error message."""
    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    try:
        return MarkupParser().parse_file(file_path)
    except (MarkupParseError, OSError) as e:
        console.print(f"[red]Error reading document: {e}[/red]")
        raise typer.Exit(1)


def _selection(values: Optional[List[str]]) -> KeywordSet:
    """Merge repeated ``--show`` values, each of which may hold several keywords."""
    keywords: set = set()
    for value in values or []:
        keywords |= parse_keywords(value.replace(",", " "))
    return frozenset(keywords)


@app.command()
def keywords(
    file_path: Path = typer.Argument(..., help="Markup document to scan"),
    attribute: Optional[str] = typer.Option(None, "--attribute", "-a", help="Keyword attribute name"),
    as_json: bool = typer.Option(False, "--json", help="Print keywords as a JSON list"),
) -> None:
    """
    List every keyword used anywhere in a document.
    """
    from ..config import load_config

    document = _load_document(file_path)
    extractor = KeyExtractor(document, attribute or load_config().keyword_attribute)
    universe = sorted(extractor.subtree_keys(document.root()))

    if as_json:
        console.print_json(json.dumps(universe))
        return

    if not universe:
        console.print(f"[yellow]No keywords found in {file_path}[/yellow]")
        return

    counts = {keyword: 0 for keyword in universe}
    for node in document.iter_nodes():
        for keyword in extractor.direct_keys(node):
            counts[keyword] += 1

    table = Table(title=f"Keywords in {file_path.name}")
    table.add_column("Keyword", style="cyan")
    table.add_column("Elements", style="green", justify="right")
    for keyword in universe:
        table.add_row(escape(keyword), str(counts[keyword]))
    console.print(table)


@app.command()
def fold(
    file_path: Path = typer.Argument(..., help="Markup document to fold"),
    show: Optional[List[str]] = typer.Option(None, "--show", "-s", help="Keyword(s) to keep visible; repeatable"),
    attribute: Optional[str] = typer.Option(None, "--attribute", "-a", help="Keyword attribute name"),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format: text, json"),
    output_file: Optional[Path] = typer.Option(None, "--output", "-o", help="Save output to file"),
) -> None:
    """
    Fold a document around the given keywords and print the result.

    Every element that neither carries one of the keywords nor contains an
    element that does is folded.
    """
    from ..config import load_config

    if output_format not in ("text", "json"):
        console.print(f"[red]Error: Unknown format {output_format!r} (use text or json)[/red]")
        raise typer.Exit(1)

    config = load_config()
    document = _load_document(file_path)
    view = FoldView(document, marker=config.fold_marker)
    chosen = _selection(show)

    orchestrator = RefoldOrchestrator(
        document,
        view,
        StaticSelector(chosen),
        attribute=attribute or config.keyword_attribute,
    )
    orchestrator.refold()

    if output_format == "json":
        output = FoldReport.from_view(view, orchestrator.state).to_json()
    else:
        output = view.render()

    if output_file:
        output_file.write_text(output, encoding="utf-8")
        console.print(f"[green]Output saved to {output_file}[/green]")
    elif output_format == "json":
        console.print_json(output)
    else:
        console.print(Syntax(output, "xml", theme="monokai"))


@app.command(name="open")
def open_document(
    file_path: Path = typer.Argument(..., help="Markup document to open"),
) -> None:
    """
    Open a document in an interactive folding session.
    """
    from ..config import load_config
    from .session import InteractiveSession

    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    session = InteractiveSession(load_config().session, console=console)
    if not session.start_session(file_path):
        raise typer.Exit(1)


@app.command()
def info() -> None:
    """
    Show information about keyfold.
    """
    from ..config import get_config_manager

    config_info = get_config_manager().get_config_info()

    info_text = f"""[bold cyan]keyfold - keyword-driven folding[/bold cyan]

Hides every part of a markup document that does not carry, anywhere inside
it, one of the keywords you choose.

[bold]Current Configuration:[/bold]
• Keyword attribute: {config_info['keyword_attribute']}
• Fold marker: {config_info['fold_marker']}
• Config File: {'✓ Exists' if config_info['config_exists'] else '✗ Not Found'}

[bold]Commands:[/bold]
• [cyan]keyfold keywords <file>[/cyan] - List keywords in a document
• [cyan]keyfold fold <file> --show <kw>[/cyan] - Print the folded document
• [cyan]keyfold open <file>[/cyan] - Interactive folding session
• [cyan]keyfold config --show[/cyan] - Show configuration"""

    console.print(Panel(info_text, border_style="blue"))


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    create_default: bool = typer.Option(False, "--create-default", help="Create default config file"),
    set_attribute: Optional[str] = typer.Option(None, "--set-attribute", help="Set the keyword attribute name"),
    set_marker: Optional[str] = typer.Option(None, "--set-marker", help="Set the fold marker"),
) -> None:
    """
    Manage keyfold configuration.
    """
    from ..config import get_config_manager, load_config

    config_manager = get_config_manager()

    if create_default:
        config_manager.create_default_config()
        console.print(f"[green]Created default configuration at {config_manager.config_file}[/green]")
        return

    if show:
        current_config = load_config()
        config_info = config_manager.get_config_info()
        config_display = f"""[bold]keyfold Configuration[/bold]

[bold cyan]Folding:[/bold cyan]
• Keyword attribute: {current_config.session.keyword_attribute}
• Fold marker: {current_config.session.fold_marker}
• Prompt: {current_config.session.prompt}

[bold yellow]Session:[/bold yellow]
• Show status: {current_config.session.show_status}
• Render after refold: {current_config.session.render_after_refold}

[bold green]Logging:[/bold green]
• Level: {current_config.log_level}

[bold magenta]Files:[/bold magenta]
• Config File: {config_info['config_file']}
• Exists: {'Yes' if config_info['config_exists'] else 'No'}"""
        console.print(Panel(config_display, border_style="green"))
        return

    if set_attribute is not None or set_marker is not None:
        current_config = load_config()

        if set_attribute is not None:
            if not set_attribute.strip() or any(c.isspace() for c in set_attribute):
                console.print("[red]Attribute name must be a single non-empty word[/red]")
                raise typer.Exit(1)
            current_config.session.keyword_attribute = set_attribute
            console.print(f"[green]Set keyword attribute to {set_attribute}[/green]")

        if set_marker is not None:
            current_config.session.fold_marker = set_marker
            console.print(f"[green]Set fold marker to {set_marker!r}[/green]")

        config_manager.save_config(current_config)
        console.print("[green]Configuration saved[/green]")
        return

    console.print("Use [cyan]keyfold config --show[/cyan] to see full configuration")
    console.print("Use [cyan]keyfold config --create-default[/cyan] to create a default config file")


if __name__ == "__main__":
    app()
