"""Exception types raised by funcbench."""

from __future__ import annotations


class FuncbenchError(Exception):
    """Base class for funcbench errors."""


class CandidateExecutionError(FuncbenchError):
    """A candidate raised while it was being measured.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, label: str, iteration: int, cause: BaseException) -> None:
        self.label = label
        self.iteration = iteration
        super().__init__(
            f"Candidate '{label}' failed on iteration {iteration}: "
            f"{type(cause).__name__}: {cause}"
        )


class ProfileError(FuncbenchError, ValueError):
    """A comparison profile is malformed or names an unresolvable candidate."""
