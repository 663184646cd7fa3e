"""Top-level Masyu solve interface.

Expose `solve_puzzle(puzzle, method=...)` that accepts a parsed `Puzzle`, the
plain-text puzzle format, or a loader record with a "puzzle" field.
"""

from typing import Any, Optional

from src.masyu.backtracking import BacktrackingSolver
from src.masyu.config import SolverConfig
from src.masyu.cp_solver import ConstraintProgrammingSolver
from src.masyu.grid import GridState
from src.masyu.model import Puzzle, SolveResult
from src.masyu.parser import parse_puzzle

METHODS = ("dfs", "cp")


def _as_puzzle(puzzle: Any) -> Puzzle:
    if isinstance(puzzle, Puzzle):
        return puzzle
    if isinstance(puzzle, str):
        return parse_puzzle(puzzle)
    if isinstance(puzzle, dict):
        return parse_puzzle(str(puzzle.get("puzzle", "") or ""), name=str(puzzle.get("id", "")))
    raise TypeError("solve_puzzle expects a Puzzle, puzzle text or puzzle dictionary")


def solve_puzzle(
    puzzle: Any, method: str = "dfs", config: Optional[SolverConfig] = None
) -> SolveResult:
    """
    Solve a puzzle with the chosen engine and return a SolveResult.
    Accepts:
      - Puzzle instances (used directly)
      - Puzzle text in the "h w" + rows format
      - Raw puzzle dictionaries with a "puzzle" text field
    Malformed input raises MalformedPuzzleError before any search starts.
    """
    parsed = _as_puzzle(puzzle)
    config = config or SolverConfig.from_env()

    if method == "dfs":
        return BacktrackingSolver(GridState.from_puzzle(parsed), config=config).solve()
    if method == "cp":
        return ConstraintProgrammingSolver(parsed, config=config).solve()
    raise ValueError(f"Unknown method {method!r}; expected one of {', '.join(METHODS)}")


__all__ = ["solve_puzzle", "METHODS"]
