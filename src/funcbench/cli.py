"""Command-line interface for funcbench.

Subcommands:
    funcbench run       Compare candidates from a profile or the command line
    funcbench formats   List the built-in report formatters
"""

from __future__ import annotations

from pathlib import Path

import click

from funcbench import __version__
from funcbench.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """funcbench: compare the speed and memory cost of Python callables."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, path_type=Path),
    help="YAML profile defining candidates.",
)
@click.option(
    "--candidate",
    "inline_candidates",
    type=str,
    multiple=True,
    help="Inline candidate: 'label=module:attribute' (repeatable).",
)
@click.option(
    "--runs",
    "num_runs",
    type=int,
    default=None,
    help="Iterations per candidate (default: 5000).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["auto", "table", "html", "markdown"]),
    default=None,
    help="Report format (default: auto, picked from the terminal).",
)
@click.option(
    "--export",
    "export_fmt",
    type=click.Choice(["csv", "json", "markdown"]),
    default=None,
    help="Print results in a machine-readable format instead of a report.",
)
@click.option("--name", type=str, default=None, help="Title for the comparison.")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show errors.")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write DEBUG logs to this file.",
)
def run(
    profile_path: Path | None,
    inline_candidates: tuple[str, ...],
    num_runs: int | None,
    fmt: str | None,
    export_fmt: str | None,
    name: str | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Compare candidate callables.

    \b
    Examples:
        # From a YAML profile
        funcbench run --profile strings.yaml

        # Inline candidates
        funcbench run --runs 1000 \\
            --candidate "join=mybench.strings:join_items" \\
            --candidate "concat=mybench.strings:concat_items"
    """
    from funcbench.config import (
        ComparisonConfig,
        build_comparison,
        config_from_profile,
        load_profile,
        parse_inline_candidate,
        validate_config,
    )
    from funcbench.errors import FuncbenchError
    from funcbench.export import export_results

    log = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    cli_overrides: dict[str, object] = {"name": name, "num_runs": num_runs, "formatter": fmt}
    try:
        if profile_path:
            config = config_from_profile(load_profile(profile_path), cli_overrides=cli_overrides)
        else:
            config = ComparisonConfig(name=name or "", formatter=fmt or "auto")
            if num_runs is not None:
                config.num_runs = num_runs

        for spec in inline_candidates:
            label, target = parse_inline_candidate(spec)
            config.candidates[label] = target
    except FuncbenchError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    errors = validate_config(config)
    for w in (e for e in errors if e.severity == "warning"):
        log.warning("Config warning: %s: %s", w.field, w.message)
    fatal = [e for e in errors if e.severity == "error"]
    if fatal:
        for e in fatal:
            click.echo(f"Error: {e.field}: {e.message}", err=True)
        raise SystemExit(1)

    try:
        comparison = build_comparison(config)
        if export_fmt:
            results = comparison.run()
            click.echo(
                export_results(results, export_fmt, title=config.name, num_runs=config.num_runs),
                nl=False,
            )
        else:
            comparison.exec(title=config.name or None)
    except FuncbenchError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        click.echo("\nComparison interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904


# ---------------------------------------------------------------------------
# formats
# ---------------------------------------------------------------------------


@main.command()
def formats() -> None:
    """List the built-in report formatters."""
    from funcbench.display import FormatterKind

    click.echo("auto       table in a terminal, html otherwise")
    for kind in FormatterKind:
        click.echo(f"{kind.value:<10s} {type(kind.create()).__name__}")
