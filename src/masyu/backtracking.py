"""Depth-first backtracking over edge placements with circle-rule pruning."""

import sys
import time
from typing import Optional

from . import checker
from .config import SolverConfig
from .errors import SearchLimitReached
from .grid import GridState
from .model import Cell, Direction, SolveResult
from src.utils.trace import Tracer, get_tracer


class BacktrackingSolver:
    """
    Grow a single path from one endpoint until it closes into a valid loop.

    The search mutates ``grid`` in place and retracts every edge of a failed
    branch. On success the winning edges stay installed.
    """

    METHOD = "dfs"

    def __init__(
        self,
        grid: GridState,
        config: Optional[SolverConfig] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self.grid = grid
        self.config = config or SolverConfig()
        self.tracer = tracer or get_tracer()
        self.nodes_visited = 0
        self._deadline: Optional[float] = None

    def solve(self) -> SolveResult:
        if any(value for row in self.grid.degree for value in row):
            raise ValueError("BacktrackingSolver expects a grid without edges")

        self.nodes_visited = 0
        start = time.perf_counter()
        self._deadline = (
            start + self.config.time_limit if self.config.time_limit is not None else None
        )
        self._ensure_recursion_depth()

        seed = self._seed_cell()
        if seed is None:
            return self._result(False, "no_solution", start)
        self.grid.endpoints.push(seed)

        try:
            solved = self._backtrack(depth=0)
        except SearchLimitReached as exc:
            self.grid.clear()
            return self._result(False, "timeout", start, reason=str(exc))

        if not solved:
            self.grid.clear()
            return self._result(False, "no_solution", start)

        self.tracer.log_solution_found(edge_count=len(self.grid.edges()), method=self.METHOD)
        return self._result(True, "solved", start)

    def _seed_cell(self) -> Optional[Cell]:
        marked = self.grid.marked_cells()
        if marked:
            return marked[0]
        # Without circles any loop will do; every 2x2 corner holds one.
        if self.grid.height >= 2 and self.grid.width >= 2:
            return self.grid.cell(0, 0)
        return None

    def _backtrack(self, depth: int) -> bool:
        grid = self.grid
        self.nodes_visited += 1
        self._check_limits()

        if checker.all_circles_finished(grid) and checker.single_loop(grid):
            return True

        endpoint = grid.endpoints.last()
        if endpoint is None:
            return False

        for direction in Direction:
            neighbor = grid.neighbor(endpoint, direction)
            if neighbor is None:
                continue
            if grid.has_edge(endpoint, direction):
                continue
            if grid.degree_of(endpoint) >= 2 or grid.degree_of(neighbor) >= 2:
                continue

            edge = grid.set_edge(endpoint, direction, True)
            self.tracer.log_place_edge(edge, endpoint, depth)

            if checker.check_all_circles(grid):
                if self._backtrack(depth + 1):
                    return True
            else:
                self.tracer.log_prune(edge, depth)

            grid.set(edge, False)
            self.tracer.log_retract_edge(edge, depth)

        self.tracer.log_backtrack(endpoint, depth)
        return False

    def _check_limits(self) -> None:
        max_nodes = self.config.max_nodes
        if max_nodes is not None and self.nodes_visited > max_nodes:
            raise SearchLimitReached(
                "Backtracking node limit reached",
                limit=max_nodes,
                observed=self.nodes_visited,
                context=self.METHOD,
            )
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise SearchLimitReached(
                "Backtracking time limit reached",
                limit=self.config.time_limit,
                observed=self.nodes_visited,
                context=self.METHOD,
            )

    def _ensure_recursion_depth(self) -> None:
        # One frame per placed edge; a loop has at most one edge per cell.
        needed = self.grid.height * self.grid.width + 100
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)

    def _result(self, solved: bool, status: str, start: float, reason: str = "") -> SolveResult:
        return SolveResult(
            solved=solved,
            status=status,
            method=self.METHOD,
            grid=self.grid if solved else None,
            nodes_visited=self.nodes_visited,
            elapsed_seconds=time.perf_counter() - start,
            details={"reason": reason} if reason else {},
        )
