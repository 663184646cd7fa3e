"""Constraint solver backends used by the constraint-programming engine.

``ConstraintBackend`` lists the only capabilities the model builder needs.
``OrToolsBackend`` maps them onto OR-Tools CP-SAT.
"""

from enum import Enum
from typing import Any, Optional, Sequence

from ortools.sat.python import cp_model


class BackendStatus(Enum):
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    UNKNOWN = "unknown"

    @property
    def has_solution(self) -> bool:
        return self in (BackendStatus.OPTIMAL, BackendStatus.FEASIBLE)


class ConstraintBackend:
    """Variable creation, linear/implication constraints, solve and value access."""

    def new_bool_var(self, name: str) -> Any:
        raise NotImplementedError

    def new_int_var(self, lower: int, upper: int, name: str) -> Any:
        raise NotImplementedError

    def add_sum_equals(self, target: Any, terms: Sequence[Any]) -> None:
        """target == sum(terms)"""
        raise NotImplementedError

    def add_not_equal(self, var: Any, value: int) -> None:
        raise NotImplementedError

    def add_equal(self, var: Any, other: Any) -> None:
        """var == other, where other is a variable or an int."""
        raise NotImplementedError

    def add_different(self, a: Any, b: Any) -> None:
        raise NotImplementedError

    def add_implication(self, a: Any, b: Any) -> None:
        """a => b"""
        raise NotImplementedError

    def add_forbid_both(self, a: Any, b: Any, enforced_by: Any) -> None:
        """not (a and b) whenever enforced_by holds."""
        raise NotImplementedError

    def add_sum_less_than(self, terms: Sequence[Any], bound: int) -> None:
        """sum(terms) < bound"""
        raise NotImplementedError

    def add_sum_at_least(self, terms: Sequence[Any], bound: int) -> None:
        """sum(terms) >= bound"""
        raise NotImplementedError

    def solve(self, time_limit: Optional[float] = None) -> BackendStatus:
        raise NotImplementedError

    def value(self, var: Any) -> int:
        raise NotImplementedError

    @property
    def wall_time(self) -> float:
        return 0.0


_STATUS_MAP = {
    cp_model.OPTIMAL: BackendStatus.OPTIMAL,
    cp_model.FEASIBLE: BackendStatus.FEASIBLE,
    cp_model.INFEASIBLE: BackendStatus.INFEASIBLE,
}


class OrToolsBackend(ConstraintBackend):
    """CP-SAT backend; one model, a fresh ``CpSolver`` per solve call."""

    def __init__(self, num_workers: int = 1, random_seed: int = 0) -> None:
        self.model = cp_model.CpModel()
        self.num_workers = num_workers
        self.random_seed = random_seed
        self._solver: Optional[cp_model.CpSolver] = None
        self._wall_time = 0.0

    def new_bool_var(self, name: str):
        return self.model.NewBoolVar(name)

    def new_int_var(self, lower: int, upper: int, name: str):
        return self.model.NewIntVar(lower, upper, name)

    def add_sum_equals(self, target, terms):
        self.model.Add(target == sum(terms))

    def add_not_equal(self, var, value):
        self.model.Add(var != value)

    def add_equal(self, var, other):
        self.model.Add(var == other)

    def add_different(self, a, b):
        self.model.Add(a != b)

    def add_implication(self, a, b):
        self.model.AddImplication(a, b)

    def add_forbid_both(self, a, b, enforced_by):
        self.model.AddBoolOr([a.Not(), b.Not()]).OnlyEnforceIf(enforced_by)

    def add_sum_less_than(self, terms, bound):
        self.model.Add(sum(terms) < bound)

    def add_sum_at_least(self, terms, bound):
        self.model.Add(sum(terms) >= bound)

    def solve(self, time_limit: Optional[float] = None) -> BackendStatus:
        solver = cp_model.CpSolver()
        if time_limit is not None:
            solver.parameters.max_time_in_seconds = float(time_limit)
        solver.parameters.num_workers = int(self.num_workers)
        solver.parameters.random_seed = int(self.random_seed)
        solver.parameters.log_search_progress = False
        status = solver.Solve(self.model)
        self._solver = solver
        self._wall_time = solver.WallTime()
        return _STATUS_MAP.get(status, BackendStatus.UNKNOWN)

    def value(self, var) -> int:
        if self._solver is None:
            raise RuntimeError("value() called before solve()")
        return int(self._solver.Value(var))

    @property
    def wall_time(self) -> float:
        return self._wall_time
