"""Shared text formatting helpers for funcbench.

Provides value formatting for elapsed times and memory deltas, and the
aligned text table used by the terminal report.
"""

from __future__ import annotations

from decimal import Decimal


def format_elapsed(seconds: Decimal) -> str:
    """Format an elapsed time with its fixed precision: ``'0.0123'``."""
    return f"{seconds:.4f}"


def format_memory(megabytes: float) -> str:
    """Format a memory delta in MB with an explicit sign: ``'+0.0012'``."""
    return f"{megabytes:+.4f}"


def format_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
    max_col_width: dict[int, int] | None = None,
    indent: int = 2,
    separator: str | None = None,
) -> str:
    """Format a list of rows as an aligned text table.

    Auto-calculates column widths from content. Truncates columns that
    exceed *max_col_width* (with ``'...'`` suffix). Right-aligns columns
    marked ``'r'`` in *alignments*.

    Args:
        headers: Column header strings.
        rows: List of rows, each a list of cell strings.
        alignments: Per-column alignment, ``'l'`` or ``'r'``.
        max_col_width: Column index to max width mapping.
        indent: Number of leading spaces per line.
        separator: If given, a rule of this character is drawn under the
            header, spanning the table width.

    Returns:
        The formatted table as a string.
    """
    if not headers:
        return ""

    ncols = len(headers)
    if alignments is None:
        alignments = ["l"] * ncols
    alignments = list(alignments)
    while len(alignments) < ncols:
        alignments.append("l")

    max_widths = max_col_width or {}

    proc_headers = list(headers)
    proc_rows: list[list[str]] = []
    for row in rows:
        padded = list(row) + [""] * (ncols - len(row))
        proc_rows.append(padded[:ncols])

    for ci, max_w in max_widths.items():
        if ci < ncols:
            proc_headers[ci] = truncate(proc_headers[ci], max_w)
            for row in proc_rows:
                row[ci] = truncate(row[ci], max_w)

    widths = [len(h) for h in proc_headers]
    for row in proc_rows:
        for ci, cell in enumerate(row):
            widths[ci] = max(widths[ci], len(cell))

    prefix = " " * indent

    def _format_cell(text: str, width: int, align: str) -> str:
        if align == "r":
            return text.rjust(width)
        return text.ljust(width)

    lines: list[str] = []
    header_line = "  ".join(
        _format_cell(proc_headers[i], widths[i], alignments[i]) for i in range(ncols)
    )
    lines.append((prefix + header_line).rstrip())
    if separator:
        lines.append(prefix + separator * (sum(widths) + 2 * (ncols - 1)))

    for row in proc_rows:
        row_line = "  ".join(_format_cell(row[i], widths[i], alignments[i]) for i in range(ncols))
        lines.append((prefix + row_line).rstrip())

    return "\n".join(lines)


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to *max_len*, adding *suffix* if truncated."""
    if len(text) <= max_len:
        return text
    if max_len <= len(suffix):
        return suffix[:max_len]
    return text[: max_len - len(suffix)] + suffix
