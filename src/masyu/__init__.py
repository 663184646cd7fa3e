"""Masyu grid model, rule checks, and the two solving engines."""

from .model import Cell, CellMarking, Direction, Edge, Puzzle, SolveResult
from .errors import InvariantViolation, MalformedPuzzleError, SearchLimitReached
from .config import SolverConfig
from .grid import GridState
from .backtracking import BacktrackingSolver
from .cp_solver import ConstraintProgrammingSolver
from .parser import parse_puzzle
from .render import render_grid

__all__ = [
    "Cell",
    "CellMarking",
    "Direction",
    "Edge",
    "Puzzle",
    "SolveResult",
    "InvariantViolation",
    "MalformedPuzzleError",
    "SearchLimitReached",
    "SolverConfig",
    "GridState",
    "BacktrackingSolver",
    "ConstraintProgrammingSolver",
    "parse_puzzle",
    "render_grid",
]
