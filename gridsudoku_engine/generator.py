from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from loguru import logger

from gridsudoku_engine.board import boxes, copy_grid
from gridsudoku_engine.models import (
    CarvingStrategy,
    Difficulty,
    GeneratedPuzzle,
    Grid,
    PresetMask,
    Shape,
)
from gridsudoku_engine.solver import SearchBudgetExceeded, count_solutions, fill_grid

# Integer percentages: a 10-cell box at 70% keeps exactly 7.
REMOVAL_PERCENT: Dict[Difficulty, int] = {
    Difficulty.EASY: 40,
    Difficulty.MEDIUM: 55,
    Difficulty.HARD: 70,
}

KEEP_PERCENT: Dict[Difficulty, int] = {
    Difficulty.EASY: 70,
    Difficulty.MEDIUM: 50,
    Difficulty.HARD: 30,
}

UNIQUE_CARVING_MAX_EDGE = 9
DEFAULT_NODE_BUDGET = 200_000


def removal_quota(shape: Shape) -> int:
    """floor(edge^2 * removal ratio)"""
    return shape.cell_count * REMOVAL_PERCENT[shape.difficulty] // 100


def keep_per_box(shape: Shape) -> int:
    """ceil(cells per box * keep ratio)"""
    return -(-shape.box_cell_count * KEEP_PERCENT[shape.difficulty] // 100)


def select_strategy(difficulty: Difficulty, edge: int) -> CarvingStrategy:
    if edge <= UNIQUE_CARVING_MAX_EDGE and Difficulty(difficulty) != Difficulty.EASY:
        return CarvingStrategy.UNIQUE
    return CarvingStrategy.FIXED_RATIO


def carve_unique(
    shape: Shape,
    solution: Grid,
    rng: random.Random,
    node_budget: Optional[int] = DEFAULT_NODE_BUDGET,
) -> Tuple[Grid, PresetMask]:
    """
    Remove cells in random order while the puzzle keeps exactly one solution.

    Stops at the removal quota or when every position has been tried; a
    quota that cannot be met just leaves more givens.
    """
    n = shape.edge
    puzzle = copy_grid(solution)
    preset = [[True] * n for _ in range(n)]
    quota = removal_quota(shape)

    positions = [(r, c) for r in range(n) for c in range(n)]
    rng.shuffle(positions)

    removed = 0
    restored = 0
    for (r, c) in positions:
        if removed >= quota:
            break
        original = puzzle[r][c]
        puzzle[r][c] = 0
        try:
            unique = count_solutions(shape, puzzle, limit=2, node_budget=node_budget) == 1
        except SearchBudgetExceeded as e:
            logger.debug("Keeping ({}, {}) as a given: {}", r, c, e)
            unique = False
        if unique:
            preset[r][c] = False
            removed += 1
        else:
            puzzle[r][c] = original
            restored += 1

    logger.debug(
        "Unique carving removed {}/{} cells ({} restored) on a {}x{} grid",
        removed, quota, restored, n, n,
    )
    return puzzle, preset


def carve_fixed_ratio(shape: Shape, solution: Grid, rng: random.Random) -> Tuple[Grid, PresetMask]:
    """Keep a fixed number of random cells in every box; no uniqueness guarantee."""
    n = shape.edge
    puzzle = copy_grid(solution)
    preset = [[True] * n for _ in range(n)]
    keep = keep_per_box(shape)

    for cells in boxes(shape):
        positions = cells[:]
        rng.shuffle(positions)
        for (r, c) in positions[keep:]:
            puzzle[r][c] = 0
            preset[r][c] = False

    logger.debug("Fixed-ratio carving kept {} of {} cells per box", keep, shape.box_cell_count)
    return puzzle, preset


def generate(
    shape: Shape,
    rng: Optional[random.Random] = None,
    node_budget: Optional[int] = DEFAULT_NODE_BUDGET,
) -> GeneratedPuzzle:
    """
    Solved grid -> carved puzzle -> {puzzle, solution, preset}.

    Pass a seeded random.Random for reproducible output; each concurrent
    caller should own its rng.
    """
    rng = rng or random.Random()
    solution = fill_grid(shape, rng)

    strategy = select_strategy(shape.difficulty, shape.edge)
    logger.debug(
        "Generating {}x{} ({}x{} boxes, {}) with {} carving",
        shape.edge, shape.edge, shape.sub_rows, shape.sub_cols,
        shape.difficulty.value, strategy.value,
    )
    if strategy == CarvingStrategy.UNIQUE:
        puzzle, preset = carve_unique(shape, solution, rng, node_budget)
    else:
        puzzle, preset = carve_fixed_ratio(shape, solution, rng)

    removed = sum(1 for row in preset for given in row if not given)
    return GeneratedPuzzle(puzzle, solution, preset, strategy, removed)
