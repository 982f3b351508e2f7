"""Report rendering for comparison results.

A formatter is any object with ``format(result_set) -> str``.  Built-in
variants render an aligned text table for terminals, an HTML table for
browser or notebook contexts, and a Markdown table for reports.

Formatters are pure: the same result set always renders to the same text.
"""

from __future__ import annotations

import enum
import html
from typing import Protocol, runtime_checkable

from funcbench.formatting import format_elapsed, format_memory, format_table
from funcbench.results import TestResultSet

HEADERS = ["Function", "Elapsed (s)", "Memory (MB)"]


@runtime_checkable
class ResultFormatter(Protocol):
    """Renders a result set into display text."""

    def format(self, result_set: TestResultSet) -> str: ...


def _rows(result_set: TestResultSet) -> list[list[str]]:
    return [
        [r.label, format_elapsed(r.elapsed_seconds), format_memory(r.memory_delta_mb)]
        for r in result_set
    ]


# ---------------------------------------------------------------------------
# Built-in formatters
# ---------------------------------------------------------------------------


class TableFormatter:
    """Column-aligned plain text table for a terminal.

    Labels longer than *max_label_width* are truncated with ``...`` so one
    long label cannot push the numeric columns off screen.
    """

    def __init__(
        self,
        *,
        title: str | None = None,
        indent: int = 2,
        max_label_width: int = 60,
    ) -> None:
        self.title = title
        self.indent = indent
        self.max_label_width = max_label_width

    def format(self, result_set: TestResultSet) -> str:
        lines: list[str] = []
        if self.title:
            lines.append(self.title)
            lines.append("─" * len(self.title))
        lines.append(
            format_table(
                HEADERS,
                _rows(result_set),
                alignments=["l", "r", "r"],
                max_col_width={0: self.max_label_width},
                indent=self.indent,
                separator="─",
            )
        )
        return "\n".join(lines) + "\n"


class HTMLFormatter:
    """HTML ``<table>`` markup for browser or notebook output."""

    def __init__(
        self, *, title: str | None = None, css_class: str = "funcbench-results"
    ) -> None:
        self.title = title
        self.css_class = css_class

    def format(self, result_set: TestResultSet) -> str:
        lines = [f'<table class="{html.escape(self.css_class, quote=True)}">']
        if self.title:
            lines.append(f"  <caption>{html.escape(self.title)}</caption>")
        lines.append("  <thead>")
        lines.append("    <tr>" + "".join(f"<th>{html.escape(h)}</th>" for h in HEADERS) + "</tr>")
        lines.append("  </thead>")
        lines.append("  <tbody>")
        for label, elapsed, memory in _rows(result_set):
            lines.append(
                f"    <tr><td>{html.escape(label)}</td>"
                f"<td>{elapsed}</td><td>{memory}</td></tr>"
            )
        lines.append("  </tbody>")
        lines.append("</table>")
        return "\n".join(lines) + "\n"


class MarkdownFormatter:
    """Markdown pipe table, suitable for READMEs and issues."""

    def __init__(self, *, title: str | None = None) -> None:
        self.title = title

    def format(self, result_set: TestResultSet) -> str:
        lines: list[str] = []
        if self.title:
            lines.extend([f"# {self.title}", ""])
        lines.append("| " + " | ".join(HEADERS) + " |")
        lines.append("|---|---:|---:|")
        for label, elapsed, memory in _rows(result_set):
            label = label.replace("|", "\\|")
            lines.append(f"| {label} | {elapsed} | {memory} |")
        return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class FormatterKind(enum.Enum):
    """Built-in formatter variants."""

    TABULAR = "table"
    MARKUP = "html"
    MARKDOWN = "markdown"

    def create(self, *, title: str | None = None) -> ResultFormatter:
        """Instantiate the formatter for this kind."""
        if self is FormatterKind.TABULAR:
            return TableFormatter(title=title)
        if self is FormatterKind.MARKUP:
            return HTMLFormatter(title=title)
        return MarkdownFormatter(title=title)


FormatterChoice = FormatterKind | ResultFormatter | str | None


def resolve_formatter(
    choice: FormatterChoice, *, is_terminal: bool, title: str | None = None
) -> ResultFormatter:
    """Resolve a formatter choice to a concrete formatter.

    An explicit choice always wins.  With no choice (or ``'auto'``), a
    terminal gets the text table and anything else gets HTML.  *title* is
    given to built-in formatters; formatter objects are returned as is.

    Raises:
        TypeError: If *choice* is neither a FormatterKind, a formatter
            name, nor an object with a ``format`` method.
        ValueError: If *choice* is an unknown formatter name.
    """
    # str has a format() method of its own, so names are handled first.
    if isinstance(choice, str):
        choice = formatter_kind_from_name(choice)
    if choice is None:
        choice = FormatterKind.TABULAR if is_terminal else FormatterKind.MARKUP
    if isinstance(choice, FormatterKind):
        return choice.create(title=title)
    if isinstance(choice, ResultFormatter):
        return choice
    raise TypeError(f"Not a result formatter: {choice!r}")


def formatter_kind_from_name(name: str) -> FormatterKind | None:
    """Map a formatter name (``'auto'``, ``'table'``, ``'html'``, ``'markdown'``).

    Returns None for ``'auto'``, meaning context-based selection.

    Raises:
        ValueError: If the name is unknown.
    """
    normalized = name.strip().lower()
    if normalized == "auto":
        return None
    try:
        return FormatterKind(normalized)
    except ValueError:
        valid = ", ".join(["auto"] + [k.value for k in FormatterKind])
        raise ValueError(f"Unknown formatter '{name}'. Choose from: {valid}") from None
