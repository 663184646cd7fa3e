"""Puzzle parser: convert the plain-text grid format into a Puzzle.

Format::

    5 5
    b . . . .
    . . w . .
    ...

The first non-blank line holds height and width; each following non-blank
line holds one row of whitespace-separated tokens. ``b`` is a black circle,
``w`` a white circle, any other token an empty cell.
"""

from __future__ import annotations

from typing import List

from .errors import MalformedPuzzleError
from .model import CellMarking, Puzzle


def parse_puzzle(text: str, name: str = "") -> Puzzle:
    lines = [line.split() for line in text.splitlines()]
    lines = [tokens for tokens in lines if tokens]
    if not lines:
        raise MalformedPuzzleError("Puzzle text is empty")

    header, rows = lines[0], lines[1:]
    if len(header) != 2:
        raise MalformedPuzzleError(f"Header must be 'height width', got {' '.join(header)!r}")
    try:
        height, width = int(header[0]), int(header[1])
    except ValueError:
        raise MalformedPuzzleError(f"Header must hold two integers, got {' '.join(header)!r}")

    if len(rows) != height:
        raise MalformedPuzzleError(f"Declared {height} rows but found {len(rows)}")

    markings: List[tuple] = []
    for index, tokens in enumerate(rows):
        if len(tokens) != width:
            raise MalformedPuzzleError(
                f"Row {index} has {len(tokens)} tokens, expected {width}"
            )
        markings.append(tuple(CellMarking.from_token(token) for token in tokens))

    return Puzzle(height=height, width=width, markings=tuple(markings), name=name)


def format_puzzle(puzzle: Puzzle) -> str:
    """Inverse of ``parse_puzzle``; empty cells are written as ``.``."""
    lines = [f"{puzzle.height} {puzzle.width}"]
    for row in puzzle.markings:
        lines.append(" ".join(marking.value for marking in row))
    return "\n".join(lines) + "\n"
