"""Masyu core data structures: markings, cells, directions, edges, puzzles, results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Tuple

from .errors import MalformedPuzzleError


class CellMarking(Enum):
    NONE = "."
    BLACK = "b"
    WHITE = "w"

    @classmethod
    def from_token(cls, token: str) -> "CellMarking":
        # Anything that is not a circle token is an empty cell.
        if token == "b":
            return cls.BLACK
        if token == "w":
            return cls.WHITE
        return cls.NONE

    @property
    def is_circle(self) -> bool:
        return self is not CellMarking.NONE


class Direction(Enum):
    """Grid directions in the fixed order the search tries them."""

    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    marking: CellMarking = CellMarking.NONE

    def step(self, direction: Direction) -> Tuple[int, int]:
        return self.row + direction.dr, self.col + direction.dc


class Edge(NamedTuple):
    """Edge between two orthogonally adjacent cells.

    ``H`` edges join (row, col) and (row, col + 1); ``V`` edges join
    (row, col) and (row + 1, col).
    """

    axis: str
    row: int
    col: int

    def endpoints(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        if self.axis == "H":
            return (self.row, self.col), (self.row, self.col + 1)
        return (self.row, self.col), (self.row + 1, self.col)


@dataclass(frozen=True)
class Puzzle:
    height: int
    width: int
    markings: Tuple[Tuple[CellMarking, ...], ...]
    name: str = ""

    def __post_init__(self) -> None:
        if self.height < 1 or self.width < 1:
            raise MalformedPuzzleError(
                f"Grid dimensions must be positive, got {self.height}x{self.width}"
            )
        if len(self.markings) != self.height:
            raise MalformedPuzzleError(
                f"Expected {self.height} rows, got {len(self.markings)}"
            )
        for index, row in enumerate(self.markings):
            if len(row) != self.width:
                raise MalformedPuzzleError(
                    f"Row {index} has {len(row)} cells, expected {self.width}"
                )

    @classmethod
    def from_rows(cls, rows: List[List[Any]], name: str = "") -> "Puzzle":
        """Build a puzzle from rows of tokens or ``CellMarking`` values."""
        markings = tuple(
            tuple(
                value if isinstance(value, CellMarking) else CellMarking.from_token(str(value))
                for value in row
            )
            for row in rows
        )
        height = len(markings)
        width = len(markings[0]) if markings else 0
        return cls(height=height, width=width, markings=markings, name=name)

    def marking_at(self, row: int, col: int) -> CellMarking:
        return self.markings[row][col]

    @property
    def circle_count(self) -> int:
        return sum(1 for row in self.markings for m in row if m.is_circle)


@dataclass
class SolveResult:
    """Outcome of one solve attempt. ``grid`` is only set when ``solved`` is True."""

    solved: bool
    status: str
    method: str
    grid: Optional[Any] = None
    nodes_visited: int = 0
    iterations: int = 0
    cuts_added: int = 0
    elapsed_seconds: float = 0.0
    details: dict = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.solved
