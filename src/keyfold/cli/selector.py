"""
Keyword selectors used by the refold operation.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ..core.keywords import EMPTY, KeywordSet, format_keywords, keyword_set, union

_SEPARATORS = re.compile(r"[\s,]+")
_SPECIAL = ("+", "-", "*", "\\")


def quote_keyword(keyword: str) -> str:
    """Escape a keyword so that ``parse_selection`` reads it back literally."""
    return "\\" + keyword if keyword.startswith(_SPECIAL) else keyword


def parse_selection(text: str, current: KeywordSet, candidates: KeywordSet) -> KeywordSet:
    """
    Interpret a typed keyword selection.

    - empty input keeps ``current``
    - ``-`` clears the selection, ``*`` selects every known keyword
    - plain names replace the selection
    - ``+name`` / ``-name`` add to or remove from the selection (or from the
      plain names given alongside them)
    - a leading backslash takes the rest of a token literally, so ``\\-v``
      selects the keyword ``-v``
    """
    text = text.strip()
    if not text:
        return current
    if text == "-":
        return EMPTY
    if text == "*":
        return union(current, candidates)

    plain = set()
    added = set()
    removed = set()
    for token in _SEPARATORS.split(text):
        if not token:
            continue
        if token.startswith("\\"):
            if len(token) > 1:
                plain.add(token[1:])
        elif token.startswith("+") and len(token) > 1:
            added.add(token[1:])
        elif token.startswith("-") and len(token) > 1:
            removed.add(token[1:])
        else:
            plain.add(token)

    base = set(plain) if plain else set(current)
    return frozenset((base | added) - removed)


class StaticSelector:
    """Always answers with the same selection."""

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        self.keywords = keyword_set(keywords)

    def choose_subset(self, current: KeywordSet, candidates: KeywordSet, prompt: str) -> KeywordSet:
        return self.keywords


class PromptSelector:
    """
    Terminal multi-select for keywords.

    Shows every keyword with the currently shown ones marked, then reads a
    new selection. Cancelling with Ctrl+C or Ctrl+D keeps the current one.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def choose_subset(self, current: KeywordSet, candidates: KeywordSet, prompt: str) -> KeywordSet:
        self.console.print(self._keyword_table(current, candidates))

        try:
            answer = Prompt.ask(
                f"[bold cyan]{prompt}[/bold cyan] [dim](names, +add, -remove, * all, - none)[/dim]",
                console=self.console,
                default=" ".join(quote_keyword(keyword) for keyword in sorted(current)),
                show_default=bool(current),
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[yellow]Selection cancelled, keeping current keywords[/yellow]")
            return current

        chosen = parse_selection(answer, current, candidates)
        unknown = chosen - current - candidates
        if unknown:
            self.console.print(f"[yellow]Not in the document: {escape(format_keywords(unknown))}[/yellow]")
        return chosen

    def _keyword_table(self, current: KeywordSet, candidates: KeywordSet) -> Table:
        table = Table(title="Keywords", show_header=True)
        table.add_column("Shown", style="green", justify="center")
        table.add_column("Keyword", style="cyan")

        for keyword in sorted(union(current, candidates)):
            table.add_row("✓" if keyword in current else "", escape(keyword))

        if not current and not candidates:
            table.add_row("", "[dim]no keywords found[/dim]")
        return table
