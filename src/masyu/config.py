"""Solver limits with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_ITERATIONS = 10_000
DEFAULT_CP_WORKERS = 1


def _read_positive(name: str, cast, default):
    """
    Resolve a positive number from the environment.

    Missing, unparsable and non-positive values fall back to ``default``.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        return default
    if value > 0:
        return value
    return default


@dataclass
class SolverConfig:
    time_limit: Optional[float] = None  # seconds, per solve attempt
    max_nodes: Optional[int] = None  # backtracking only
    max_iterations: int = DEFAULT_MAX_ITERATIONS  # cutting-plane rounds
    num_workers: int = DEFAULT_CP_WORKERS  # CP-SAT search workers

    @classmethod
    def from_env(cls) -> "SolverConfig":
        """
        Build a config from ``MASYU_*`` environment variables.

        Priority for each field:
        1) MASYU_TIME_LIMIT / MASYU_MAX_NODES / MASYU_MAX_ITERATIONS / MASYU_CP_WORKERS
        2) the dataclass default
        """
        return cls(
            time_limit=_read_positive("MASYU_TIME_LIMIT", float, None),
            max_nodes=_read_positive("MASYU_MAX_NODES", int, None),
            max_iterations=_read_positive("MASYU_MAX_ITERATIONS", int, DEFAULT_MAX_ITERATIONS),
            num_workers=_read_positive("MASYU_CP_WORKERS", int, DEFAULT_CP_WORKERS),
        )
