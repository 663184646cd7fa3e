import pytest

from src.masyu.errors import MalformedPuzzleError
from src.masyu.model import CellMarking, Puzzle
from src.masyu.parser import format_puzzle, parse_puzzle


def test_parse_basic_grid():
    puzzle = parse_puzzle("2 3\nb . w\nx - W\n", name="demo")

    assert puzzle.height == 2
    assert puzzle.width == 3
    assert puzzle.name == "demo"
    assert puzzle.markings[0] == (CellMarking.BLACK, CellMarking.NONE, CellMarking.WHITE)
    # Only lowercase b/w are circles.
    assert puzzle.markings[1] == (CellMarking.NONE,) * 3
    assert puzzle.circle_count == 2


def test_blank_lines_and_extra_spacing_are_ignored():
    puzzle = parse_puzzle("\n  2   2 \n\nb   w\n\n.  .\n\n")
    assert puzzle.marking_at(0, 1) is CellMarking.WHITE


@pytest.mark.parametrize(
    "text",
    [
        "",
        "3\nb . .\n",
        "two 2\n. .\n. .\n",
        "2 2\n. .\n",
        "2 2\n. .\n. .\n. .\n",
        "2 2\n. . .\n. .\n",
        "0 0\n",
    ],
)
def test_malformed_inputs(text):
    with pytest.raises(MalformedPuzzleError):
        parse_puzzle(text)


def test_puzzle_validates_its_own_shape():
    with pytest.raises(MalformedPuzzleError):
        Puzzle(height=2, width=2, markings=((CellMarking.NONE,) * 2,))


def test_format_puzzle_writes_the_text_format():
    text = "2 2\nb .\n. w\n"
    assert format_puzzle(parse_puzzle(text)) == text
