"""Edge and degree bookkeeping for a Masyu grid."""

from typing import Dict, Iterator, List, Optional, Set, Tuple

from .errors import InvariantViolation
from .model import Cell, CellMarking, Direction, Edge, Puzzle


class EndpointStack:
    """Last-in-first-out set of open path ends with O(1) membership."""

    def __init__(self) -> None:
        self._order: List[Cell] = []
        self._members: Set[Cell] = set()

    def push(self, cell: Cell) -> None:
        if cell in self._members:
            return
        self._order.append(cell)
        self._members.add(cell)

    def discard(self, cell: Cell) -> None:
        if cell not in self._members:
            return
        self._members.remove(cell)
        # Removals almost always hit the top of the stack.
        for index in range(len(self._order) - 1, -1, -1):
            if self._order[index] == cell:
                del self._order[index]
                break

    def last(self) -> Optional[Cell]:
        return self._order[-1] if self._order else None

    def clear(self) -> None:
        self._order.clear()
        self._members.clear()

    def __contains__(self, cell: object) -> bool:
        return cell in self._members

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._order))


class GridState:
    """
    Mutable edge/degree tables for an h x w grid.

    ``horizontal[r][c]`` is the edge between (r, c) and (r, c + 1);
    ``vertical[r][c]`` is the edge between (r, c) and (r + 1, c).
    Every set edge adds one to the degree of both of its cells, degrees never
    exceed 2, and ``endpoints`` always holds the cells of degree 1.
    """

    def __init__(self, height: int, width: int, markings=None) -> None:
        self.height = height
        self.width = width
        if markings is None:
            markings = [[CellMarking.NONE] * width for _ in range(height)]
        self.cells: List[List[Cell]] = [
            [Cell(r, c, markings[r][c]) for c in range(width)] for r in range(height)
        ]
        self.horizontal: List[List[bool]] = [[False] * (width - 1) for _ in range(height)]
        self.vertical: List[List[bool]] = [[False] * width for _ in range(height - 1)]
        self.degree: List[List[int]] = [[0] * width for _ in range(height)]
        self.endpoints = EndpointStack()
        self.circle_count = sum(1 for cell in self.iter_cells() if cell.marking.is_circle)

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle) -> "GridState":
        return cls(puzzle.height, puzzle.width, puzzle.markings)

    # -- queries -----------------------------------------------------------

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def degree_of(self, cell: Cell) -> int:
        return self.degree[cell.row][cell.col]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def marked_cells(self) -> List[Cell]:
        return [cell for cell in self.iter_cells() if cell.marking.is_circle]

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        row, col = cell.step(direction)
        if not self.is_inside(row, col):
            return None
        return self.cells[row][col]

    def edge_towards(self, cell: Cell, direction: Direction) -> Optional[Edge]:
        """Edge leaving ``cell`` in ``direction``; None when it would leave the grid."""
        row, col = cell.step(direction)
        if not self.is_inside(row, col):
            return None
        if direction is Direction.UP:
            return Edge("V", row, col)
        if direction is Direction.DOWN:
            return Edge("V", cell.row, cell.col)
        if direction is Direction.LEFT:
            return Edge("H", row, col)
        return Edge("H", cell.row, cell.col)

    def has_edge(self, cell: Cell, direction: Direction) -> bool:
        edge = self.edge_towards(cell, direction)
        return edge is not None and self.is_set(edge)

    def is_set(self, edge: Edge) -> bool:
        if edge.axis == "H":
            return self.horizontal[edge.row][edge.col]
        return self.vertical[edge.row][edge.col]

    def used_directions(self, cell: Cell) -> List[Direction]:
        return [d for d in Direction if self.has_edge(cell, d)]

    def all_edges(self) -> Iterator[Edge]:
        for r in range(self.height):
            for c in range(self.width - 1):
                yield Edge("H", r, c)
        for r in range(self.height - 1):
            for c in range(self.width):
                yield Edge("V", r, c)

    def edges(self) -> List[Edge]:
        return [edge for edge in self.all_edges() if self.is_set(edge)]

    def assignment(self) -> Tuple[Tuple[Tuple[bool, ...], ...], Tuple[Tuple[bool, ...], ...]]:
        """Hashable snapshot of both edge tables."""
        return (
            tuple(tuple(row) for row in self.horizontal),
            tuple(tuple(row) for row in self.vertical),
        )

    def degree_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for row in self.degree:
            for value in row:
                counts[value] = counts.get(value, 0) + 1
        return counts

    # -- mutation ----------------------------------------------------------

    def set_horizontal_edge(self, row: int, col: int, value: bool) -> None:
        if self.horizontal[row][col] == value:
            return
        self._apply(self.cells[row][col], self.cells[row][col + 1], value)
        self.horizontal[row][col] = value

    def set_vertical_edge(self, row: int, col: int, value: bool) -> None:
        if self.vertical[row][col] == value:
            return
        self._apply(self.cells[row][col], self.cells[row + 1][col], value)
        self.vertical[row][col] = value

    def set_edge(self, cell: Cell, direction: Direction, value: bool) -> Edge:
        edge = self.edge_towards(cell, direction)
        if edge is None:
            raise IndexError(f"No edge from ({cell.row}, {cell.col}) going {direction.name}")
        self.set(edge, value)
        return edge

    def set(self, edge: Edge, value: bool) -> None:
        if edge.axis == "H":
            self.set_horizontal_edge(edge.row, edge.col, value)
        else:
            self.set_vertical_edge(edge.row, edge.col, value)

    def clear(self) -> None:
        for row in self.horizontal:
            row[:] = [False] * len(row)
        for row in self.vertical:
            row[:] = [False] * len(row)
        for row in self.degree:
            row[:] = [0] * len(row)
        self.endpoints.clear()

    def _apply(self, a: Cell, b: Cell, value: bool) -> None:
        delta = 1 if value else -1
        if value and (self.degree_of(a) >= 2 or self.degree_of(b) >= 2):
            raise InvariantViolation(
                f"Edge ({a.row}, {a.col})-({b.row}, {b.col}) would exceed degree 2"
            )
        self.degree[a.row][a.col] += delta
        self.degree[b.row][b.col] += delta
        self._update_endpoint(a)
        self._update_endpoint(b)

    def _update_endpoint(self, cell: Cell) -> None:
        if self.degree_of(cell) == 1:
            self.endpoints.push(cell)
        else:
            self.endpoints.discard(cell)
