"""Constraint-programming engine with lazy sub-loop elimination.

The whole puzzle is encoded once as a boolean model over edge variables.
Each round solves the model, copies the assignment into a fresh GridState
and traces its cycles. Cycles that miss a circle are forbidden with a cut
(``sum(loop edges) < len(loop)``) and the model is solved again, until a
single loop through every circle comes back or the model turns infeasible.
"""

import time
from typing import Any, Dict, List, Optional

from . import checker
from .backend import BackendStatus, ConstraintBackend, OrToolsBackend
from .config import SolverConfig
from .errors import InvariantViolation
from .grid import GridState
from .model import CellMarking, Direction, Edge, Puzzle, SolveResult
from src.utils.trace import Tracer, get_tracer


class ConstraintProgrammingSolver:
    METHOD = "cp"

    def __init__(
        self,
        puzzle: Puzzle,
        backend: Optional[ConstraintBackend] = None,
        config: Optional[SolverConfig] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self.puzzle = puzzle
        self.config = config or SolverConfig()
        self.backend = backend or OrToolsBackend(num_workers=self.config.num_workers)
        self.tracer = tracer or get_tracer()
        # Geometry only; edges are never set on this grid.
        self.layout = GridState.from_puzzle(puzzle)
        self.edge_vars: Dict[Edge, Any] = {}
        self.degree_vars: Dict[tuple, Any] = {}
        self.cuts: List[List[Edge]] = []
        self.iterations = 0
        self._built = False

    # -- model -------------------------------------------------------------

    def build_model(self) -> None:
        if self._built:
            return
        backend = self.backend
        layout = self.layout

        for edge in layout.all_edges():
            self.edge_vars[edge] = backend.new_bool_var(f"{edge.axis}_{edge.row}_{edge.col}")

        for cell in layout.iter_cells():
            deg = backend.new_int_var(0, 2, f"deg_{cell.row}_{cell.col}")
            self.degree_vars[(cell.row, cell.col)] = deg
            incident = [self.edge_vars[e] for e in self._incident_edges(cell)]
            backend.add_sum_equals(deg, incident)
            backend.add_not_equal(deg, 1)
            if cell.marking.is_circle:
                backend.add_equal(deg, 2)

        for cell in layout.iter_cells():
            if cell.marking is CellMarking.WHITE:
                self._add_white_rules(cell)
            elif cell.marking is CellMarking.BLACK:
                self._add_black_rules(cell)

        if layout.circle_count == 0 and self.edge_vars:
            backend.add_sum_at_least(list(self.edge_vars.values()), 1)

        self._built = True

    def _incident_edges(self, cell) -> List[Edge]:
        edges = []
        for direction in Direction:
            edge = self.layout.edge_towards(cell, direction)
            if edge is not None:
                edges.append(edge)
        return edges

    def _var(self, cell, direction: Direction, steps: int = 1) -> Optional[Any]:
        """Edge variable ``steps`` edges away from ``cell`` in ``direction``."""
        layout = self.layout
        current = cell
        for _ in range(steps - 1):
            current = layout.neighbor(current, direction)
            if current is None:
                return None
        edge = layout.edge_towards(current, direction)
        return self.edge_vars[edge] if edge is not None else None

    def _add_white_rules(self, cell) -> None:
        backend = self.backend
        for first, second in ((Direction.UP, Direction.DOWN), (Direction.LEFT, Direction.RIGHT)):
            near_a = self._var(cell, first)
            near_b = self._var(cell, second)
            if near_a is None and near_b is None:
                continue
            if near_a is None or near_b is None:
                # Cannot pass straight along this axis, so it stays unused.
                backend.add_equal(near_b if near_a is None else near_a, 0)
                continue
            # Straight through the circle.
            backend.add_equal(near_a, near_b)
            # A turn on at least one side; when only one side can continue
            # straight, the other side turns anyway.
            far_a = self._var(cell, first, steps=2)
            far_b = self._var(cell, second, steps=2)
            if far_a is not None and far_b is not None:
                backend.add_forbid_both(far_a, far_b, enforced_by=near_b)

    def _add_black_rules(self, cell) -> None:
        backend = self.backend
        for first, second in ((Direction.UP, Direction.DOWN), (Direction.LEFT, Direction.RIGHT)):
            near_a = self._var(cell, first)
            near_b = self._var(cell, second)
            if near_a is not None and near_b is not None:
                backend.add_different(near_a, near_b)

        for direction in Direction:
            near = self._var(cell, direction)
            if near is None:
                continue
            far = self._var(cell, direction, steps=2)
            if far is not None:
                backend.add_implication(near, far)
            else:
                backend.add_equal(near, 0)

    # -- search ------------------------------------------------------------

    def solve(self) -> SolveResult:
        start = time.perf_counter()
        self.build_model()
        deadline = (
            start + self.config.time_limit if self.config.time_limit is not None else None
        )

        while True:
            if self.iterations >= self.config.max_iterations:
                return self._result(None, "iteration_limit", start)

            time_left = None
            if deadline is not None:
                time_left = deadline - time.perf_counter()
                if time_left <= 0:
                    return self._result(None, "timeout", start)

            self.iterations += 1
            status = self.backend.solve(time_limit=time_left)
            self.tracer.log_solver_call(self.iterations, status.value, self.backend.wall_time)

            if status is BackendStatus.INFEASIBLE:
                return self._result(None, "no_solution", start)
            if not status.has_solution:
                return self._result(None, "timeout", start)

            grid = self._grid_from_assignment()
            if not grid.edges():
                # Only reachable on grids too thin to hold any loop.
                return self._result(None, "no_solution", start)
            if self._eliminate_subloops(grid):
                if not checker.is_solution(grid):
                    raise InvariantViolation("Accepted assignment does not form a valid loop")
                self.tracer.log_solution_found(edge_count=len(grid.edges()), method=self.METHOD)
                return self._result(grid, "solved", start)

    def _grid_from_assignment(self) -> GridState:
        grid = GridState.from_puzzle(self.puzzle)
        for edge, var in self.edge_vars.items():
            if self.backend.value(var):
                grid.set(edge, True)
        return grid

    def _eliminate_subloops(self, grid: GridState) -> bool:
        """Cut every loop that misses a circle; True when a single loop covers them all."""
        loops = checker.trace_loops(grid)
        total = grid.circle_count
        complete = [loop for loop in loops if loop.circles == total]

        to_cut = [loop for loop in loops if loop.circles != total]
        if not to_cut and len(loops) > 1:
            # No circles at all: keep the first loop, forbid the rest.
            to_cut = loops[1:]

        for loop in to_cut:
            self._add_cut(loop)

        return len(loops) == 1 and len(complete) == 1

    def _add_cut(self, loop: checker.Loop) -> None:
        terms = [self.edge_vars[edge] for edge in loop.edges]
        self.backend.add_sum_less_than(terms, len(terms))
        self.cuts.append(list(loop.edges))
        self.tracer.log_cut_added(self.iterations, len(terms), loop.circles)

    def _result(self, grid: Optional[GridState], status: str, start: float) -> SolveResult:
        return SolveResult(
            solved=grid is not None,
            status=status,
            method=self.METHOD,
            grid=grid,
            iterations=self.iterations,
            cuts_added=len(self.cuts),
            elapsed_seconds=time.perf_counter() - start,
        )
