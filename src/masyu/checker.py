"""Rule predicates over a GridState: circle rules, completion and loop structure."""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from .errors import InvariantViolation
from .grid import GridState
from .model import Cell, CellMarking, Direction, Edge


@dataclass
class Loop:
    cells: List[Cell] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    circles: int = 0

    def __len__(self) -> int:
        return len(self.edges)


def is_straight(grid: GridState, cell: Cell) -> bool:
    used = grid.used_directions(cell)
    return len(used) == 2 and used[0].opposite is used[1]


def _finished_neighbor(grid: GridState, cell: Cell, direction: Direction) -> Optional[Cell]:
    neighbor = grid.neighbor(cell, direction)
    if neighbor is None or grid.degree_of(neighbor) != 2:
        return None
    return neighbor


def check_black(grid: GridState, cell: Cell) -> bool:
    """Black circles turn, then go straight through both neighbours."""
    if cell.marking is not CellMarking.BLACK or grid.degree_of(cell) < 2:
        return True

    used = grid.used_directions(cell)
    if len(used) != 2 or used[0].opposite is used[1]:
        return False

    for direction in used:
        neighbor = grid.neighbor(cell, direction)
        if neighbor is None:
            return False
        if grid.degree_of(neighbor) != 2:
            # Not finished yet; checked again once it is.
            continue
        if not grid.has_edge(neighbor, direction.opposite):
            return False
        if not is_straight(grid, neighbor):
            return False
    return True


def check_white(grid: GridState, cell: Cell) -> bool:
    """White circles go straight, and the loop turns in at least one neighbour."""
    if cell.marking is not CellMarking.WHITE or grid.degree_of(cell) < 2:
        return True

    used = grid.used_directions(cell)
    if len(used) != 2 or used[0].opposite is not used[1]:
        return False

    first = _finished_neighbor(grid, cell, used[0])
    second = _finished_neighbor(grid, cell, used[1])
    if first is None or second is None:
        return True

    for neighbor, direction in ((first, used[0]), (second, used[1])):
        if not grid.has_edge(neighbor, direction.opposite):
            return False
    return not (is_straight(grid, first) and is_straight(grid, second))


def check_all_circles(grid: GridState) -> bool:
    for cell in grid.iter_cells():
        if grid.degree_of(cell) != 2:
            continue
        if not check_black(grid, cell) or not check_white(grid, cell):
            return False
    return True


def all_circles_finished(grid: GridState) -> bool:
    return all(grid.degree_of(cell) == 2 for cell in grid.marked_cells())


def single_loop(grid: GridState) -> bool:
    """
    All degrees are 0 or 2 and at least one cell is on the loop.

    Enough for an incrementally grown path; assignments produced all at once
    also need ``trace_loops`` to rule out disjoint cycles.
    """
    at_least_one = False
    for row in grid.degree:
        for value in row:
            if value not in (0, 2):
                return False
            if value == 2:
                at_least_one = True
    return at_least_one


def trace_loops(grid: GridState) -> List[Loop]:
    """Follow every degree-2 component and return the cycles found."""
    visited: Set[Cell] = set()
    loops: List[Loop] = []
    for start in grid.iter_cells():
        if start in visited or grid.degree_of(start) != 2:
            continue
        loops.append(_follow(grid, start, visited))
    return loops


def _follow(grid: GridState, start: Cell, visited: Set[Cell]) -> Loop:
    loop = Loop()
    current = start
    arrived_from: Optional[Direction] = None
    while True:
        if grid.degree_of(current) != 2:
            raise InvariantViolation(
                f"Loop traversal reached ({current.row}, {current.col}) with degree "
                f"{grid.degree_of(current)}"
            )
        visited.add(current)
        loop.cells.append(current)
        if current.marking.is_circle:
            loop.circles += 1

        exits = [d for d in grid.used_directions(current) if d is not arrived_from]
        if len(exits) != (2 if arrived_from is None else 1):
            raise InvariantViolation(
                f"Loop traversal cannot leave ({current.row}, {current.col}) cleanly"
            )
        direction = exits[0]
        loop.edges.append(grid.edge_towards(current, direction))
        current = grid.neighbor(current, direction)
        arrived_from = direction.opposite
        if current == start:
            return loop
        if current in visited:
            raise InvariantViolation(
                f"Loop traversal revisited ({current.row}, {current.col})"
            )


def is_solution(grid: GridState) -> bool:
    if not (single_loop(grid) and all_circles_finished(grid) and check_all_circles(grid)):
        return False
    return len(trace_loops(grid)) == 1
