"""ASCII rendering of a grid: each cell is drawn at the centre of a 2x2 block."""

from typing import List

from .grid import GridState
from .model import CellMarking

_CENTRE = {
    CellMarking.NONE: "+",
    CellMarking.WHITE: "w",
    CellMarking.BLACK: "b",
}


def render_grid(grid: GridState) -> str:
    buf: List[List[str]] = [[" "] * (2 * grid.width + 1) for _ in range(2 * grid.height + 1)]

    for cell in grid.iter_cells():
        cx, cy = 2 * cell.row + 1, 2 * cell.col + 1
        buf[cx][cy] = _CENTRE[cell.marking]

        if cell.row < grid.height - 1 and grid.vertical[cell.row][cell.col]:
            buf[cx + 1][cy] = "|"
        if cell.col < grid.width - 1 and grid.horizontal[cell.row][cell.col]:
            buf[cx][cy + 1] = "-"

    return "\n".join("".join(row).rstrip() for row in buf)
