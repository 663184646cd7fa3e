"""Unit tests for edge/degree bookkeeping."""

import pytest

from src.masyu.errors import InvariantViolation
from src.masyu.grid import EndpointStack, GridState
from src.masyu.model import Cell, CellMarking, Direction, Edge


def test_setting_edge_updates_degrees_and_endpoints():
    grid = GridState(3, 3)
    grid.set_horizontal_edge(0, 0, True)

    assert grid.degree[0][0] == 1
    assert grid.degree[0][1] == 1
    assert grid.cell(0, 0) in grid.endpoints
    assert grid.endpoints.last() == grid.cell(0, 1)


def test_setting_edge_twice_is_a_no_op():
    grid = GridState(3, 3)
    grid.set_vertical_edge(1, 2, True)
    grid.set_vertical_edge(1, 2, True)
    assert grid.degree[1][2] == 1
    assert grid.degree[2][2] == 1

    grid.set_vertical_edge(0, 0, False)
    assert grid.degree_counts() == {0: 7, 1: 2}


def test_endpoint_stack_follows_the_growing_path():
    grid = GridState(3, 3)
    grid.set_horizontal_edge(0, 0, True)
    grid.set_horizontal_edge(0, 1, True)

    assert grid.cell(0, 1) not in grid.endpoints
    assert list(grid.endpoints) == [grid.cell(0, 0), grid.cell(0, 2)]
    assert grid.endpoints.last() == grid.cell(0, 2)

    grid.set_horizontal_edge(0, 1, False)
    assert grid.cell(0, 2) not in grid.endpoints
    assert grid.endpoints.last() == grid.cell(0, 1)
    assert len(grid.endpoints) == 2


def test_degree_above_two_is_refused_without_mutation():
    grid = GridState(3, 3)
    grid.set_horizontal_edge(1, 0, True)
    grid.set_horizontal_edge(1, 1, True)
    before = grid.assignment()

    with pytest.raises(InvariantViolation):
        grid.set_vertical_edge(0, 1, True)

    assert grid.assignment() == before
    assert grid.degree[1][1] == 2
    assert grid.degree[0][1] == 0


def test_direction_helpers_map_to_edge_tables():
    grid = GridState(3, 3)
    centre = grid.cell(1, 1)

    assert grid.edge_towards(centre, Direction.UP) == Edge("V", 0, 1)
    assert grid.edge_towards(centre, Direction.DOWN) == Edge("V", 1, 1)
    assert grid.edge_towards(centre, Direction.LEFT) == Edge("H", 1, 0)
    assert grid.edge_towards(centre, Direction.RIGHT) == Edge("H", 1, 1)
    assert grid.edge_towards(grid.cell(0, 0), Direction.UP) is None

    grid.set_edge(centre, Direction.LEFT, True)
    grid.set_edge(centre, Direction.DOWN, True)
    assert grid.used_directions(centre) == [Direction.DOWN, Direction.LEFT]
    assert grid.has_edge(grid.cell(1, 0), Direction.RIGHT)
    assert set(grid.edges()) == {Edge("H", 1, 0), Edge("V", 1, 1)}


def test_clear_resets_every_table():
    grid = GridState(2, 2)
    for edge in grid.all_edges():
        grid.set(edge, True)
    assert grid.degree_counts() == {2: 4}

    grid.clear()
    assert grid.edges() == []
    assert grid.degree_counts() == {0: 4}
    assert len(grid.endpoints) == 0


def test_markings_and_inside_checks():
    markings = [
        [CellMarking.BLACK, CellMarking.NONE],
        [CellMarking.NONE, CellMarking.WHITE],
    ]
    grid = GridState(2, 2, markings)
    assert grid.circle_count == 2
    assert grid.marked_cells() == [
        Cell(0, 0, CellMarking.BLACK),
        Cell(1, 1, CellMarking.WHITE),
    ]
    assert grid.is_inside(1, 1)
    assert not grid.is_inside(2, 0)
    assert not grid.is_inside(0, -1)


def test_endpoint_stack_discard_from_the_middle():
    stack = EndpointStack()
    a, b, c = Cell(0, 0), Cell(0, 1), Cell(0, 2)
    stack.push(a)
    stack.push(b)
    stack.push(c)
    stack.push(a)

    stack.discard(b)
    assert list(stack) == [a, c]
    assert b not in stack
    stack.discard(b)
    assert stack.last() == c
