from __future__ import annotations

import random
from typing import List, Optional

from loguru import logger

from gridsudoku_engine.board import box_index, check_grid, copy_grid, empty_grid
from gridsudoku_engine.models import RC, Grid, Shape
from gridsudoku_engine.validator import is_placement_legal

# silent unless the application calls logger.enable("gridsudoku_engine")
logger.disable("gridsudoku_engine")


class SearchBudgetExceeded(RuntimeError):
    """Solution counting tried more placements than its node budget allows."""


# ------------------ bitmask helpers ------------------
def bit(d: int) -> int:
    return 1 << (d - 1)


def popcount(x: int) -> int:
    return int(x).bit_count()


def mask_to_digits(mask: int, edge: int) -> List[int]:
    return [d for d in range(1, edge + 1) if mask & bit(d)]


# ------------------ randomized fill ------------------
def fill_grid(shape: Shape, rng: Optional[random.Random] = None) -> Grid:
    """
    Build a complete grid: cells visited row-major, candidates 1..edge tried
    in shuffled order, place / recurse / undo on dead ends.
    """
    rng = rng or random.Random()
    n = shape.edge
    grid = empty_grid(n)
    values = list(range(1, n + 1))

    def fill(pos: int) -> bool:
        if pos == n * n:
            return True
        r, c = divmod(pos, n)
        order = values[:]
        rng.shuffle(order)
        for v in order:
            if is_placement_legal(shape, grid, r, c, v):
                grid[r][c] = v
                if fill(pos + 1):
                    return True
                grid[r][c] = 0
        return False

    if not fill(0):
        # unreachable for a valid Shape
        raise RuntimeError(f"Failed to fill a {n}x{n} grid.")
    return grid


# ------------------ solution counting ------------------
def count_solutions(
    shape: Shape,
    grid: Grid,
    limit: Optional[int] = 2,
    node_budget: Optional[int] = None,
) -> int:
    """
    Count completions of grid, stopping once `limit` are found (None = all).

    Runs on a private copy. The search branches on the empty cell with the
    fewest candidates. Raises SearchBudgetExceeded after `node_budget`
    placements.
    """
    check_grid(shape, grid)
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1.")

    n = shape.edge
    full = (1 << n) - 1
    work = copy_grid(grid)
    row_used = [0] * n
    col_used = [0] * n
    box_used = [0] * n
    empties: List[RC] = []
    box_of = [[box_index(shape, r, c) for c in range(n)] for r in range(n)]

    for r in range(n):
        for c in range(n):
            v = work[r][c]
            if v == 0:
                empties.append((r, c))
                continue
            b = bit(v)
            bi = box_of[r][c]
            if (row_used[r] & b) or (col_used[c] & b) or (box_used[bi] & b):
                return 0  # givens already clash
            row_used[r] |= b
            col_used[c] |= b
            box_used[bi] |= b

    count = 0
    nodes = 0

    def search() -> bool:
        """Returns True when the limit is reached."""
        nonlocal count, nodes

        best: Optional[RC] = None
        best_mask = 0
        best_n = n + 1
        for (r, c) in empties:
            if work[r][c] != 0:
                continue
            mask = full & ~(row_used[r] | col_used[c] | box_used[box_of[r][c]])
            k = popcount(mask)
            if k == 0:
                return False
            if k < best_n:
                best, best_mask, best_n = (r, c), mask, k
                if k == 1:
                    break

        if best is None:
            count += 1
            return limit is not None and count >= limit

        r, c = best
        bi = box_of[r][c]
        for d in mask_to_digits(best_mask, n):
            nodes += 1
            if node_budget is not None and nodes > node_budget:
                raise SearchBudgetExceeded(
                    f"Solution count exceeded {node_budget} placements ({count} found so far)."
                )
            b = bit(d)
            work[r][c] = d
            row_used[r] |= b
            col_used[c] |= b
            box_used[bi] |= b
            stop = search()
            work[r][c] = 0
            row_used[r] &= ~b
            col_used[c] &= ~b
            box_used[bi] &= ~b
            if stop:
                return True
        return False

    search()
    logger.trace("count_solutions: {} solution(s), {} placement(s)", count, nodes)
    return count


def has_unique_solution(shape: Shape, grid: Grid, node_budget: Optional[int] = None) -> bool:
    return count_solutions(shape, grid, limit=2, node_budget=node_budget) == 1
