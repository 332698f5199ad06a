"""
Interactive session for keyword folding.

Keeps one document open together with its fold view and visibility state,
and lets the user refold it repeatedly with slash commands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from ..converters.markup_parser import MarkupParseError, MarkupParser
from ..core.document_model import MarkupDocument
from ..core.extractor import DEFAULT_KEYWORD_ATTRIBUTE
from ..core.keywords import format_keywords
from ..core.orchestrator import DEFAULT_PROMPT, KeywordSelector, RefoldOrchestrator
from ..core.visibility import VisibilityState
from ..view.fold_view import DEFAULT_FOLD_MARKER, FoldView
from .selector import PromptSelector


@dataclass
class SessionConfig:
    """Configuration for interactive sessions."""

    keyword_attribute: str = DEFAULT_KEYWORD_ATTRIBUTE
    fold_marker: str = DEFAULT_FOLD_MARKER
    prompt: str = DEFAULT_PROMPT

    # Display settings
    show_status: bool = True
    render_after_refold: bool = True


@dataclass
class SessionState:
    """Current state of the interactive session."""

    document: Optional[MarkupDocument] = None
    document_path: Optional[Path] = None
    view: Optional[FoldView] = None
    orchestrator: Optional[RefoldOrchestrator] = None
    visibility: VisibilityState = field(default_factory=VisibilityState)

    # Statistics
    refolds: int = 0


class InteractiveSession:
    """
    Interactive keyword folding session.

    The visibility state belongs to the session, so it survives ``/reload``:
    after re-reading the file the previous selection is still offered, and
    the keyword universe stays stale until ``/refresh``.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        console: Optional[Console] = None,
        selector: Optional[KeywordSelector] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        self.config = config or SessionConfig()
        self.console = console or Console()
        self.selector = selector or PromptSelector(self.console)
        self.input_func = input_func or self.console.input
        self.parser = MarkupParser()

        self.state = SessionState()
        self.is_running = False
        self.logger = logging.getLogger(__name__)

    def start_session(self, document_path: Optional[Path] = None) -> bool:
        """
        Open ``document_path`` if given and run the command loop.

        Returns False without entering the loop when the document cannot be
        opened.
        """
        self.is_running = True
        self._show_welcome()

        if document_path and not self.open_document(document_path):
            self.console.print(f"[red]Failed to open {document_path}[/red]")
            self.is_running = False
            return False

        try:
            self._interaction_loop()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Session interrupted by user[/yellow]")
        finally:
            self.is_running = False
        return True

    def _show_welcome(self) -> None:
        welcome_text = """
# keyfold interactive mode

Fold every part of the document that does not carry one of the keywords you
choose. Use `/refold` to pick keywords, `/help` for all commands.
        """
        self.console.print(Panel(Markdown(welcome_text.strip()), border_style="blue", padding=(1, 2)))

    def _interaction_loop(self) -> None:
        while self.is_running:
            try:
                command = self._get_user_input()
            except EOFError:
                break

            if not command:
                continue

            try:
                self.handle_command(command)
            except (MarkupParseError, OSError) as e:
                self.console.print(f"[red]Error: {e}[/red]")
            except Exception as e:
                self.logger.error(f"Command {command!r} failed: {e}", exc_info=True)
                self.console.print(f"[red]Command failed: {e}[/red]")

    def _get_user_input(self) -> str:
        status = ""
        if self.config.show_status and self.state.document is not None:
            shown = escape(format_keywords(self.state.visibility.visible_keywords)) or "nothing"
            status = f"\n[dim]{self.state.document_path or 'document'}, showing: {shown}[/dim]"
        return self.input_func(f"{status}\n[bold cyan]keyfold>[/bold cyan] ").strip()

    def handle_command(self, command: str) -> None:
        """Run one slash command."""
        parts = command.lstrip("/").split()
        cmd = parts[0].lower() if parts else ""
        args = parts[1:]

        if cmd == "help":
            self._show_help()

        elif cmd == "open":
            if args:
                self.open_document(Path(" ".join(args)))
            else:
                self.console.print("[red]Usage: /open <filename>[/red]")

        elif cmd in ("quit", "exit"):
            self.is_running = False

        elif self.state.orchestrator is None:
            self.console.print("[red]No document is open. Use '/open <filename>' first.[/red]")

        elif cmd == "refold":
            self.refold(args)

        elif cmd == "refresh":
            keywords = self.state.orchestrator.refresh_keyword_universe()
            self.console.print(f"[green]✓[/green] {len(keywords)} keyword(s): {escape(format_keywords(keywords))}")

        elif cmd == "reload":
            self.reload_document()

        elif cmd == "show":
            self.console.print(self._render())

        elif cmd == "unfold":
            self.state.view.unfold_all()
            self.console.print("[green]✓[/green] Everything unfolded")

        elif cmd == "status":
            self._show_status()

        else:
            self.console.print(f"[red]Unknown command: /{cmd}[/red]")
            self.console.print("Use [cyan]/help[/cyan] to see available commands")

    def open_document(self, doc_path: Path) -> bool:
        """Open a document, starting with a fresh visibility state."""
        if not doc_path.exists():
            self.console.print(f"[red]File not found: {doc_path}[/red]")
            return False

        try:
            document = self.parser.parse_file(doc_path)
        except (MarkupParseError, OSError) as e:
            self.console.print(f"[red]Error opening document: {e}[/red]")
            return False

        self.state.visibility = VisibilityState()
        self._attach(document, doc_path)

        stats = document.get_stats()
        self.console.print(
            f"[green]✓[/green] Opened [cyan]{doc_path.name}[/cyan] "
            f"({stats['node_count']} elements, root <{stats['root_tag']}>)"
        )
        return True

    def reload_document(self) -> None:
        """Re-read the open document from disk, keeping the visibility state."""
        if self.state.document_path is None:
            self.console.print("[red]The open document has no file to reload[/red]")
            return

        document = self.parser.parse_file(self.state.document_path)
        self._attach(document, self.state.document_path)
        self.console.print(
            f"[green]✓[/green] Reloaded [cyan]{self.state.document_path.name}[/cyan]; "
            "use [cyan]/refresh[/cyan] to pick up keyword changes"
        )

    def attach_document(self, document: MarkupDocument) -> None:
        """Use an already parsed document."""
        self.state.visibility = VisibilityState()
        self._attach(document, document.source_path)

    def _attach(self, document: MarkupDocument, doc_path: Optional[Path]) -> None:
        view = FoldView(document, marker=self.config.fold_marker)
        self.state.document = document
        self.state.document_path = doc_path
        self.state.view = view
        self.state.orchestrator = RefoldOrchestrator(
            document,
            view,
            self.selector,
            state=self.state.visibility,
            attribute=self.config.keyword_attribute,
            prompt=self.config.prompt,
        )

    def refold(self, keywords: Optional[List[str]] = None) -> None:
        """Refold the open document, prompting for keywords unless some are given."""
        if keywords:
            chosen = self.state.orchestrator.apply(keywords)
        else:
            chosen = self.state.orchestrator.refold()
        self.state.refolds += 1

        hidden = len(self.state.view.outermost_ranges())
        shown = escape(format_keywords(chosen)) or "nothing"
        self.console.print(f"[green]✓[/green] Showing {shown} ({hidden} folded region(s))")

        if self.config.render_after_refold:
            self.console.print(self._render())

    def _render(self) -> Syntax:
        return Syntax(self.state.view.render(), "xml", theme="monokai", line_numbers=False)

    def _show_status(self) -> None:
        stats = self.state.document.get_stats()
        visibility = self.state.visibility
        status_text = f"""[bold]File:[/bold] {stats['source_path'] or '-'}
[bold]Elements:[/bold] {stats['node_count']} (depth {stats['max_depth']})
[bold]Keywords:[/bold] {escape(format_keywords(visibility.all_keywords)) or '-'}
[bold]Shown:[/bold] {escape(format_keywords(visibility.visible_keywords)) or '-'}
[bold]Folded regions:[/bold] {len(self.state.view.outermost_ranges())}
[bold]Refolds:[/bold] {self.state.refolds}"""
        self.console.print(Panel.fit(status_text, title="Document Status", border_style="blue"))

    def _show_help(self) -> None:
        help_text = """
## Available Commands

• `/open <filename>` - Open a markup document
• `/refold [keywords]` - Choose keywords (or use the given ones) and refold
• `/refresh` - Re-read every keyword after editing the document
• `/reload` - Re-read the document from disk
• `/show` - Print the folded document
• `/unfold` - Remove every fold
• `/status` - Show document and keyword status
• `/quit` or `/exit` - Exit the session
        """
        self.console.print(Markdown(help_text.strip()))
