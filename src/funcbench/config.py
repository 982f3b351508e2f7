"""Comparison configuration and profile loading.

Handles:
- Loading comparison profiles from YAML files.
- Parsing inline candidate definitions from CLI arguments.
- Merging CLI options with profile defaults.
- Importing candidates from ``module:attribute`` paths.
- Validating the final configuration before execution.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from funcbench.display import formatter_kind_from_name
from funcbench.errors import ProfileError
from funcbench.logging import get_logger
from funcbench.runner import DEFAULT_NUM_RUNS, Candidate, FunctionComparison

log = get_logger("config")


# ---------------------------------------------------------------------------
# ComparisonConfig
# ---------------------------------------------------------------------------


@dataclass
class ComparisonConfig:
    """Resolved configuration for a comparison run."""

    name: str = ""
    num_runs: int = DEFAULT_NUM_RUNS
    formatter: str = "auto"  # "auto", "table", "html" or "markdown"

    # label -> "module:attribute", in run order
    candidates: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: ComparisonConfig) -> list[ValidationError]:
    """Validate a comparison configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not config.candidates:
        errors.append(
            ValidationError(
                field="candidates",
                message=(
                    "No candidates defined. "
                    "Use --profile or --candidate to define at least one."
                ),
                severity="warning",
            )
        )

    for label, target in config.candidates.items():
        if not label or not label.strip():
            errors.append(
                ValidationError(field="candidates", message="Candidate labels must be non-empty.")
            )
        if ":" not in target:
            errors.append(
                ValidationError(
                    field=f"candidates.{label}",
                    message=f"Candidate '{label}' must be 'module:attribute', got '{target}'.",
                )
            )

    # Zero or negative runs only measure loop overhead.
    if config.num_runs <= 0:
        errors.append(
            ValidationError(
                field="num_runs",
                message=f"num_runs is {config.num_runs}; candidates will not be called.",
                severity="warning",
            )
        )

    try:
        formatter_kind_from_name(config.formatter)
    except ValueError as exc:
        errors.append(ValidationError(field="formatter", message=str(exc)))

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a comparison profile from a YAML file.

    Profile format::

        name: "string joining"
        num_runs: 10000
        formatter: table

        candidates:
          join: "mybench.strings:join_items"
          concat: "mybench.strings:concat_items"

    Returns:
        The parsed YAML as a dict.

    Raises:
        FileNotFoundError: If the profile does not exist.
        ProfileError: If the file is not a YAML mapping.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    try:
        data = yaml.safe_load(profile_path.read_text())
    except yaml.YAMLError as exc:
        raise ProfileError(f"Invalid YAML in {profile_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ProfileError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> ComparisonConfig:
    """Build a ComparisonConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values for ``name``,
    ``num_runs`` and ``formatter``.  Keys set to None are ignored.
    """
    cli = cli_overrides or {}

    num_runs = cli.get("num_runs")
    if num_runs is None:
        num_runs = profile_data.get("num_runs", DEFAULT_NUM_RUNS)
    if not isinstance(num_runs, int) or isinstance(num_runs, bool):
        raise ProfileError(f"'num_runs' must be an integer, got {num_runs!r}")

    config = ComparisonConfig(
        name=cli.get("name") or str(profile_data.get("name") or ""),
        num_runs=num_runs,
        formatter=cli.get("formatter") or str(profile_data.get("formatter") or "auto"),
    )

    candidates_data = profile_data.get("candidates", {}) or {}
    if not isinstance(candidates_data, dict):
        raise ProfileError("Profile 'candidates' must be a mapping of label -> module:attribute")

    for label, target in candidates_data.items():
        if not isinstance(target, str):
            raise ProfileError(
                f"Candidate '{label}' must be a 'module:attribute' string, "
                f"got {type(target).__name__}"
            )
        config.candidates[str(label)] = target.strip()

    return config


# ---------------------------------------------------------------------------
# Inline candidates and import resolution
# ---------------------------------------------------------------------------


def parse_inline_candidate(spec: str) -> tuple[str, str]:
    """Parse ``'label=module:attribute'`` from the command line.

    A bare ``'module:attribute'`` uses the attribute path as its label.

    Raises:
        ProfileError: If the target has no ``':'`` separator.
    """
    if "=" in spec:
        label, target = spec.split("=", 1)
        label = label.strip()
    else:
        label, target = spec.strip(), spec
    target = target.strip()
    if ":" not in target or not label:
        raise ProfileError(f"Invalid candidate '{spec}'. Expected 'label=module:attribute'.")
    return label, target


def resolve_candidate(target: str) -> Candidate:
    """Import the callable named by ``'module:attribute'``.

    Dotted attributes are followed, so ``'pkg.mod:Class.method'`` works.

    Raises:
        ProfileError: If the module fails to import (any error raised
            while it executes counts), the attribute is
            missing, or it is not callable.
    """
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise ProfileError(f"Invalid candidate path '{target}'. Expected 'module:attribute'.")

    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as exc:
        raise ProfileError(f"Cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ProfileError(f"'{module_name}' has no attribute '{attr_path}'") from exc

    if not callable(obj):
        raise ProfileError(f"'{target}' is not callable")
    return obj


def build_comparison(config: ComparisonConfig) -> FunctionComparison:
    """Create a FunctionComparison with the configured candidates registered."""
    comparison = FunctionComparison(num_runs=config.num_runs)
    for label, target in config.candidates.items():
        log.debug("Resolving candidate '%s' -> %s", label, target)
        comparison.add_function(label, resolve_candidate(target))
    comparison.set_formatter(formatter_kind_from_name(config.formatter))
    return comparison
