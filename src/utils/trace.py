"""Tracing module: logs Masyu solver steps and writes to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'place_edge', 'retract_edge', 'prune', 'solver_call', 'cut_added', etc.
    edge: Optional[str] = None
    cell: Optional[str] = None
    depth: Optional[int] = None
    iteration: Optional[int] = None
    status: Optional[str] = None
    size: Optional[int] = None  # edges in a loop or solution
    reason: Optional[str] = None


def _fmt(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, tuple) and len(value) == 3 and isinstance(value[0], str):
        return f"{value[0]}({value[1]},{value[2]})"
    if hasattr(value, "row") and hasattr(value, "col"):
        return f"({value.row},{value.col})"
    return str(value)


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **kwargs: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **kwargs,
        ))

    def log_place_edge(self, edge: Any, cell: Any, depth: int):
        """Log an edge tentatively added by the backtracking search."""
        if not self.enabled:
            return
        self._record('place_edge', edge=_fmt(edge), cell=_fmt(cell), depth=depth)

    def log_retract_edge(self, edge: Any, depth: int):
        """Log an edge removed while backtracking."""
        if not self.enabled:
            return
        self._record('retract_edge', edge=_fmt(edge), depth=depth)

    def log_prune(self, edge: Any, depth: int, reason: str = "Circle rule violated"):
        """Log a placement rejected by the circle rules."""
        if not self.enabled:
            return
        self._record('prune', edge=_fmt(edge), depth=depth, reason=reason)

    def log_backtrack(self, cell: Any, depth: int, reason: str = "No valid extension"):
        """Log a dead end at an endpoint."""
        if not self.enabled:
            return
        self._record('backtrack', cell=_fmt(cell), depth=depth, reason=reason)

    def log_solver_call(self, iteration: int, status: str, wall_time: float):
        """Log one call into the constraint solver."""
        if not self.enabled:
            return
        self._record(
            'solver_call',
            iteration=iteration,
            status=status,
            reason=f"Wall time {wall_time:.4f}s",
        )

    def log_cut_added(self, iteration: int, loop_length: int, circles: int):
        """Log a sub-loop forbidden by a cutting constraint."""
        if not self.enabled:
            return
        self._record(
            'cut_added',
            iteration=iteration,
            size=loop_length,
            reason=f"Loop passes {circles} circles",
        )

    def log_solution_found(self, edge_count: int, method: str = ""):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', size=edge_count, reason=method or None)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'edge', 'cell',
            'depth', 'iteration', 'status', 'size', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()

            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_placements': action_counts.get('place_edge', 0),
            'num_backtracks': action_counts.get('retract_edge', 0),
            'num_solver_calls': action_counts.get('solver_call', 0),
            'num_cuts': action_counts.get('cut_added', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer; it records nothing until enabled."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=False)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
