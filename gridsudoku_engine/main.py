import argparse
import random
import sys
import time
from typing import List, Optional

from loguru import logger

from gridsudoku_engine.board import format_grid, parse_grid, pretty
from gridsudoku_engine.generator import DEFAULT_NODE_BUDGET, generate
from gridsudoku_engine.models import Difficulty, Shape
from gridsudoku_engine.reports import build_validation_report

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate and validate sudoku grids of any box shape.")
    p.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="loguru level for stderr output")
    sub = p.add_subparsers(dest="command", required=True)

    def add_shape_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--edge", type=int, default=9, help="grid edge length")
        sp.add_argument("--sub-rows", type=int, default=None, help="box rows (default: most square box)")
        sp.add_argument("--sub-cols", type=int, default=None, help="box cols (default: edge / sub-rows)")
        sp.add_argument(
            "--difficulty",
            choices=[d.value for d in Difficulty],
            default=Difficulty.MEDIUM.value,
        )

    g = sub.add_parser("generate", help="Generate a puzzle and its solution")
    add_shape_args(g)
    g.add_argument("--seed", type=int, default=None, help="seed for reproducible puzzles")
    g.add_argument("--node-budget", type=int, default=DEFAULT_NODE_BUDGET,
                   help="max placements per uniqueness check")

    v = sub.add_parser("validate", help="Check a grid against the placement rules")
    add_shape_args(v)
    v.add_argument("--grid", required=True, help="grid text (edge<=9: digits + . or 0; else numbers)")
    v.add_argument("--solution", required=False, help="known solution, same format as --grid")
    v.add_argument("--givens", required=False, help="original puzzle; its filled cells must not change")

    return p.parse_args(argv)


def shape_from_args(args: argparse.Namespace) -> Shape:
    sub_rows, sub_cols = args.sub_rows, args.sub_cols
    if sub_rows is None and sub_cols is None:
        return Shape.for_edge(args.edge, args.difficulty)
    # a missing side is derived; bad values are left for Shape to reject
    if sub_rows is None:
        sub_rows = args.edge // sub_cols if sub_cols > 0 else sub_cols
    elif sub_cols is None:
        sub_cols = args.edge // sub_rows if sub_rows > 0 else sub_rows
    return Shape(args.edge, sub_rows, sub_cols, args.difficulty)


def run_generate(args: argparse.Namespace) -> int:
    shape = shape_from_args(args)
    rng = random.Random(args.seed)

    start = time.time()
    result = generate(shape, rng, node_budget=args.node_budget)
    elapsed = time.time() - start
    logger.info("Generated {}x{} puzzle in {:.2f}s", shape.edge, shape.edge, elapsed)

    print("\nPUZZLE:\n")
    print(pretty(shape, result.puzzle))
    print("\nSOLUTION:\n")
    print(pretty(shape, result.solution))
    print()
    print("=" * 60)
    print(f"Shape: {shape.edge}x{shape.edge}, boxes {shape.sub_rows}x{shape.sub_cols}, {shape.difficulty.value}")
    print(f"Carving: {result.strategy.value}, removed {result.removed}/{shape.cell_count} cells")
    print(f"Puzzle:   {format_grid(result.puzzle)}")
    print(f"Solution: {format_grid(result.solution)}")
    print("=" * 60)
    return 0


def run_validate(args: argparse.Namespace) -> int:
    shape = shape_from_args(args)
    grid = parse_grid(args.grid, shape.edge)
    solution = parse_grid(args.solution, shape.edge) if args.solution else None
    givens = parse_grid(args.givens, shape.edge) if args.givens else None

    print("\nGRID:\n")
    print(pretty(shape, grid))
    print()

    report = build_validation_report(shape, grid, solution, puzzle=givens)
    print("VALIDATION REPORT")
    print("-" * 60)
    print("Status: FAIL" if report.has_violation else "Status: PASS")
    print(report.explanation)
    print(f"Complete: {'yes' if report.is_complete else 'no'}")
    if report.is_consistent is not None:
        print(f"Consistent with solution: {'yes' if report.is_consistent else 'no'}")
    print("-" * 60)
    return 1 if report.has_violation else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)
    logger.enable("gridsudoku_engine")

    try:
        if args.command == "generate":
            return run_generate(args)
        return run_validate(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
