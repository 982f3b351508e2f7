"""Function comparison engine.

Runs each registered candidate a fixed number of times, back to back on
the calling thread, and records the wall-clock time and memory delta of
the whole loop.  Candidates run in registration order; the next one does
not start until the previous one's loop has been measured.

Failures are never swallowed: the first exception raised by a candidate
aborts the run and propagates as a :class:`CandidateExecutionError`
naming the candidate.
"""

from __future__ import annotations

import sys
import warnings
from collections.abc import Callable
from typing import IO, Any

import click

from funcbench.display import FormatterChoice, resolve_formatter
from funcbench.errors import CandidateExecutionError
from funcbench.logging import get_logger
from funcbench.results import TestResultSet, TestRunResult
from funcbench.timing import (
    Clock,
    MemoryProbe,
    bytes_to_mb,
    elapsed_seconds,
    now,
    rss_memory_bytes,
)

log = get_logger("runner")

DEFAULT_NUM_RUNS = 5000
LOAD_DEFAULT_NUM_RUNS = 500

Candidate = Callable[[], Any]


class FunctionComparison:
    """Compares the performance of several zero-argument callables.

    Usage::

        comparison = FunctionComparison()
        comparison.add_function("join", lambda: ",".join(items))
        comparison.add_function("concat", concat_items)
        comparison.set_num_runs(1000)
        comparison.exec()

    Args:
        num_runs: Iterations per candidate.
        clock: Timestamp source, seconds as float.
        memory_probe: Returns current memory usage in bytes.  Defaults to
            the resident set size of the process.
    """

    def __init__(
        self,
        *,
        num_runs: int = DEFAULT_NUM_RUNS,
        clock: Clock = now,
        memory_probe: MemoryProbe = rss_memory_bytes,
    ) -> None:
        self._num_runs = num_runs
        self._functions: dict[str, Candidate] = {}
        self._formatter: FormatterChoice = None
        self._clock = clock
        self._memory_probe = memory_probe

    @classmethod
    def load(cls, num_runs: int = LOAD_DEFAULT_NUM_RUNS) -> FunctionComparison:
        """Create a comparison preconfigured with *num_runs* iterations."""
        comparison = cls()
        comparison.set_num_runs(num_runs)
        return comparison

    # -- registration -------------------------------------------------------

    def add_function(self, label: str, func: Candidate) -> FunctionComparison:
        """Register *func* under *label*, replacing any earlier registration.

        A replaced candidate keeps its original position in the run order.

        Raises:
            TypeError: If *func* is not callable.
        """
        if not callable(func):
            raise TypeError(f"Candidate '{label}' is not callable: {func!r}")
        if label in self._functions:
            log.debug("Replacing candidate '%s'", label)
        self._functions[label] = func
        return self

    @property
    def labels(self) -> list[str]:
        """Registered labels in run order."""
        return list(self._functions)

    # -- configuration ------------------------------------------------------

    @property
    def num_runs(self) -> int:
        """The number of times each candidate is called per run."""
        return self._num_runs

    @num_runs.setter
    def num_runs(self, value: int) -> None:
        self._num_runs = value

    def set_num_runs(self, num_runs: int) -> None:
        """Set the number of times each candidate is called.

        Zero or negative values are allowed and produce runs that only
        measure the loop overhead.
        """
        self._num_runs = num_runs

    def get_num_runs(self) -> int:
        """Return the number of times each candidate is called."""
        return self._num_runs

    def set_formatter(self, formatter: FormatterChoice) -> None:
        """Set the formatter used by :meth:`exec`.

        Accepts a :class:`~funcbench.display.FormatterKind`, a formatter
        name, or any object with ``format(result_set) -> str``.  ``None``
        restores context-based selection.
        """
        self._formatter = formatter

    # -- execution ----------------------------------------------------------

    def run(self) -> TestResultSet:
        """Measure every registered candidate.

        Returns:
            One TestRunResult per candidate, in registration order.

        Raises:
            CandidateExecutionError: If any candidate raises.  No results
                are returned for the run.
        """
        result_set = TestResultSet()
        log.debug(
            "Running %d candidate(s) x %d iteration(s)", len(self._functions), self._num_runs
        )
        for label, func in list(self._functions.items()):
            result_set.add_result(self._run_function(label, func))
        return result_set

    def _run_function(self, label: str, func: Candidate) -> TestRunResult:
        start_mem = self._memory_probe()
        start_time = self._clock()

        iteration = 0
        try:
            for iteration in range(1, self._num_runs + 1):
                func()
        except Exception as exc:
            log.error("Candidate '%s' failed on iteration %d: %s", label, iteration, exc)
            raise CandidateExecutionError(label, iteration, exc) from exc

        memory = self._memory_probe() - start_mem
        end_time = self._clock()

        result = TestRunResult(
            label=label,
            elapsed_seconds=elapsed_seconds(start_time, end_time),
            memory_delta_mb=bytes_to_mb(memory),
        )
        log.debug(
            "%s: %s s, %+.4f MB", label, result.elapsed_seconds, result.memory_delta_mb
        )
        return result

    def exec(
        self,
        *,
        is_terminal: bool | None = None,
        file: IO[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Run the comparison and write the rendered report.

        The formatter set with :meth:`set_formatter` is used when present.
        Otherwise it is picked from the output context: a text table for an
        interactive terminal, HTML for anything else.

        Args:
            is_terminal: Whether output goes to an interactive terminal.
                Defaults to ``isatty()`` of *file* (or standard output).
            file: Stream to write to.  Defaults to standard output.
            title: Heading for the built-in formatters.  Custom formatter
                objects render as they are.

        Returns:
            The rendered report.
        """
        stream = file if file is not None else sys.stdout
        if is_terminal is None:
            is_terminal = _isatty(stream)
        formatter = resolve_formatter(self._formatter, is_terminal=is_terminal, title=title)

        text = formatter.format(self.run())
        click.echo(text, file=stream, nl=False)
        return text

    # -- deprecated ---------------------------------------------------------

    def set_function_a(self, label: str, func: Candidate) -> None:
        """Deprecated alias of :meth:`add_function`."""
        warnings.warn(
            "set_function_a() is deprecated; use add_function()",
            DeprecationWarning,
            stacklevel=2,
        )
        self.add_function(label, func)

    def set_function_b(self, label: str, func: Candidate) -> None:
        """Deprecated alias of :meth:`add_function`."""
        warnings.warn(
            "set_function_b() is deprecated; use add_function()",
            DeprecationWarning,
            stacklevel=2,
        )
        self.add_function(label, func)


def _isatty(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:  # closed stream
        return False
