"""Export comparison results to CSV, JSON and Markdown.

CSV format: one row per candidate, for spreadsheets and pandas.
JSON format: the iteration count plus every result, for tooling.
Markdown format: a summary table for READMEs and issues.

All exporters return strings; writing them anywhere is up to the caller.
"""

from __future__ import annotations

import csv
import io
import json

from funcbench.display import MarkdownFormatter
from funcbench.results import TestResultSet

EXPORT_FORMATS = ("csv", "json", "markdown")


def export_csv(result_set: TestResultSet) -> str:
    """Export results as CSV.

    Columns:
        label, elapsed_seconds, memory_delta_mb
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["label", "elapsed_seconds", "memory_delta_mb"])
    for r in result_set:
        writer.writerow([r.label, f"{r.elapsed_seconds:.4f}", f"{r.memory_delta_mb:.4f}"])
    return output.getvalue()


def export_json(result_set: TestResultSet, *, num_runs: int | None = None) -> str:
    """Export results as an indented JSON document."""
    data = result_set.to_dict()
    if num_runs is not None:
        data = {"num_runs": num_runs, **data}
    return json.dumps(data, indent=2) + "\n"


def export_markdown(
    result_set: TestResultSet,
    *,
    title: str = "",
    num_runs: int | None = None,
) -> str:
    """Export results as a Markdown report."""
    lines: list[str] = []
    if title:
        lines.append(f"# {title}")
        lines.append("")
    if num_runs is not None:
        lines.append(f"Iterations per function: {num_runs}")
        lines.append("")
    lines.append(MarkdownFormatter().format(result_set).rstrip("\n"))
    return "\n".join(lines) + "\n"


def export_results(
    result_set: TestResultSet,
    fmt: str,
    *,
    title: str = "",
    num_runs: int | None = None,
) -> str:
    """Dispatch to the exporter for *fmt*.

    *title* heads the Markdown report. CSV and JSON have no title.

    Raises:
        ValueError: If *fmt* is not one of :data:`EXPORT_FORMATS`.
    """
    if fmt == "csv":
        return export_csv(result_set)
    if fmt == "json":
        return export_json(result_set, num_runs=num_runs)
    if fmt == "markdown":
        return export_markdown(result_set, title=title, num_runs=num_runs)
    raise ValueError(f"Unknown export format '{fmt}'. Choose from: {', '.join(EXPORT_FORMATS)}")
