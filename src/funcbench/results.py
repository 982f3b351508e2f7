"""Comparison result data structures.

Hierarchy::

    TestResultSet (one comparison run)
      → results: list[TestRunResult] (one per candidate, registration order)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


# ---------------------------------------------------------------------------
# Candidate-level result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TestRunResult:
    """Measured outcome of one candidate's full iteration loop."""

    __test__ = False  # keep pytest from collecting this as a test class

    label: str
    elapsed_seconds: Decimal  # truncated to 4 decimal places
    memory_delta_mb: float  # end minus start; negative if memory was freed

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict.

        ``elapsed_seconds`` is written as a string to keep its fixed
        precision intact.
        """
        return {
            "label": self.label,
            "elapsed_seconds": str(self.elapsed_seconds),
            "memory_delta_mb": self.memory_delta_mb,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestRunResult:
        """Deserialize from a dict."""
        return cls(
            label=data["label"],
            elapsed_seconds=Decimal(str(data["elapsed_seconds"])),
            memory_delta_mb=float(data.get("memory_delta_mb", 0.0)),
        )


# ---------------------------------------------------------------------------
# Run-level collection
# ---------------------------------------------------------------------------


@dataclass
class TestResultSet:
    """Ordered results of one comparison run.

    Only ever appended to while a run is in progress.  Formatters treat
    it as read-only.
    """

    __test__ = False

    _results: list[TestRunResult] = field(default_factory=list)

    def add_result(self, result: TestRunResult) -> None:
        """Append the result for the next candidate."""
        self._results.append(result)

    @property
    def results(self) -> tuple[TestRunResult, ...]:
        """All results in execution order."""
        return tuple(self._results)

    @property
    def labels(self) -> list[str]:
        return [r.label for r in self._results]

    def __iter__(self) -> Iterator[TestRunResult]:
        return iter(tuple(self._results))

    def __len__(self) -> int:
        return len(self._results)

    def __bool__(self) -> bool:
        return bool(self._results)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {"results": [r.to_dict() for r in self._results]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResultSet:
        """Deserialize from a dict."""
        result_set = cls()
        for item in data.get("results", []):
            result_set.add_result(TestRunResult.from_dict(item))
        return result_set
