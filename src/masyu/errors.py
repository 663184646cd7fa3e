"""
Solver errors and search limits.
"""

from __future__ import annotations


class MalformedPuzzleError(ValueError):
    """Raised when a puzzle description does not match its declared dimensions."""


class InvariantViolation(RuntimeError):
    """
    Raised when grid bookkeeping would break its own invariants, e.g. an edge
    that pushes a cell above degree 2 or a loop traversal that cannot continue.
    """


class SearchLimitReached(RuntimeError):
    """
    Raised inside a solver when a configured time or node bound is crossed.
    """

    def __init__(
        self,
        message: str = "Search limit reached",
        *,
        limit: float | int | None = None,
        observed: float | int | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(message)
        self.limit = limit
        self.observed = observed
        self.context = context
