"""CLI entrypoint: load puzzle(s), run solver(s), and report metrics."""

import argparse
import csv
from pathlib import Path

from solver import METHODS, solve_puzzle
from src.masyu.config import SolverConfig
from src.masyu.loader import load_puzzles
from src.masyu.render import render_grid
from src.utils.trace import Tracer, enable_tracing, get_tracer, reset_tracer

SUFFIXES = [".txt", ".json", ".jsonl", ".parquet", ".csv"]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Solve Masyu puzzles")
    parser.add_argument("input", type=Path, help="Path to a puzzle file or a directory of puzzles")
    parser.add_argument(
        "--method",
        choices=[*METHODS, "both"],
        default="dfs",
        help="Backtracking search (dfs), constraint programming (cp), or both.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write a results CSV")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the step trace CSV")
    parser.add_argument("--time-limit", type=float, default=None, help="Seconds per solve attempt")
    parser.add_argument("--max-iterations", type=int, default=None, help="Cutting-plane round limit (cp)")
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Do not print the solved grid.",
    )
    return parser.parse_args(argv)


def format_solution(result) -> dict:
    if not result.solved:
        return {"status": result.status, "edges": ""}
    edges = " ".join(f"{e.axis}{e.row},{e.col}" for e in result.grid.edges())
    return {"status": result.status, "edges": edges}


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "method", "status", "edges", "nodes", "iterations", "cuts", "steps", "seconds"])

        for r in results:
            writer.writerow([
                r["id"],
                r["method"],
                r["status"],
                r["edges"],
                r["nodes"],
                r["iterations"],
                r["cuts"],
                r["steps"],
                f"{r['seconds']:.4f}",
            ])


def _build_config(args) -> SolverConfig:
    config = SolverConfig.from_env()
    if args.time_limit is not None:
        config.time_limit = args.time_limit
    if args.max_iterations is not None:
        config.max_iterations = args.max_iterations
    return config


def main(argv=None):
    args = parse_args(argv)
    config = _build_config(args)
    methods = list(METHODS) if args.method == "both" else [args.method]
    puzzles = []
    results = []

    if args.input.is_file():
        puzzles = load_puzzles(str(args.input))
    elif args.input.is_dir():
        for file_path in sorted(args.input.iterdir()):
            if file_path.suffix in SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {args.input} is neither file nor directory")

    trace_steps = []

    for puzzle in puzzles:
        puzzle_id = puzzle.get("id", "unknown")
        for method in methods:
            reset_tracer()
            enable_tracing()
            tracer = get_tracer()

            try:
                result = solve_puzzle(puzzle, method=method, config=config)
            except Exception as e:
                print(f"ERROR: Failed to solve puzzle {puzzle_id} with {method}: {e}")
                results.append({
                    "id": puzzle_id,
                    "method": method,
                    "status": "error",
                    "edges": "",
                    "nodes": -1,
                    "iterations": -1,
                    "cuts": -1,
                    "steps": -1,
                    "seconds": 0.0,
                })
                continue

            if result.solved:
                if not args.no_render:
                    print(render_grid(result.grid))
                print(f"{puzzle_id} [{method}] solved in {result.elapsed_seconds * 1000:.1f} ms")
            else:
                print(f"{puzzle_id} [{method}] no solution ({result.status})")

            results.append({
                "id": puzzle_id,
                "method": method,
                **format_solution(result),
                "nodes": result.nodes_visited,
                "iterations": result.iterations,
                "cuts": result.cuts_added,
                "steps": tracer.summary()["total_steps"],
                "seconds": result.elapsed_seconds,
            })
            trace_steps.extend(tracer.steps)
    reset_tracer()

    if args.trace is not None:
        batch = Tracer()
        batch.steps = trace_steps
        batch.to_csv(args.trace)

    if args.output:
        write_results_csv(results, args.output)
    return results


if __name__ == "__main__":
    main()
