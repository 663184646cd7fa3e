from src.masyu.grid import GridState
from src.masyu.model import Edge
from src.masyu.parser import parse_puzzle
from src.masyu.render import render_grid

from puzzles import PERIMETER_3X3


def test_render_empty_grid_shows_circles():
    grid = GridState.from_puzzle(parse_puzzle("2 2\nb .\n. w\n"))
    assert render_grid(grid).split("\n") == ["", " b +", "", " + w", ""]


def test_render_solved_perimeter():
    grid = GridState.from_puzzle(parse_puzzle(PERIMETER_3X3))
    for edge in [Edge("H", 0, 0), Edge("H", 0, 1), Edge("H", 2, 0), Edge("H", 2, 1),
                 Edge("V", 0, 0), Edge("V", 1, 0), Edge("V", 0, 2), Edge("V", 1, 2)]:
        grid.set(edge, True)

    assert render_grid(grid).split("\n") == [
        "",
        " b-+-+",
        " |   |",
        " + + w",
        " |   |",
        " +-+-+",
        "",
    ]
