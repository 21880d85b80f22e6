import random

import pytest

from gridsudoku_engine.board import empty_grid
from gridsudoku_engine.models import Shape
from gridsudoku_engine.solver import (
    SearchBudgetExceeded,
    count_solutions,
    fill_grid,
    has_unique_solution,
)
from gridsudoku_engine.validator import is_complete

# ---------- fill_grid ----------


@pytest.mark.parametrize("edge, sub_rows, sub_cols", [(1, 1, 1), (4, 2, 2), (6, 2, 3), (6, 3, 2), (8, 2, 4), (9, 3, 3)])
def test_fill_grid_produces_complete_grid(edge, sub_rows, sub_cols):
    shape = Shape(edge, sub_rows, sub_cols)
    grid = fill_grid(shape, random.Random(7))

    assert is_complete(shape, grid)
    for row in grid:
        assert sorted(row) == list(range(1, edge + 1))


def test_fill_grid_is_reproducible_with_a_seed():
    shape = Shape(9, 3, 3)

    assert fill_grid(shape, random.Random(42)) == fill_grid(shape, random.Random(42))


def test_fill_grid_is_randomized():
    shape = Shape(9, 3, 3)
    grids = {tuple(map(tuple, fill_grid(shape, random.Random(seed)))) for seed in range(5)}

    assert len(grids) > 1


# ---------- count_solutions ----------


def test_solved_grid_has_one_solution(solved_9x9):
    shape = Shape(9, 3, 3)

    assert count_solutions(shape, solved_9x9) == 1
    assert has_unique_solution(shape, solved_9x9)


def test_empty_4x4_has_288_completions():
    shape = Shape(4, 2, 2)

    assert count_solutions(shape, empty_grid(4), limit=None) == 288


def test_count_stops_at_limit():
    shape = Shape(4, 2, 2)

    assert count_solutions(shape, empty_grid(4)) == 2
    assert count_solutions(shape, empty_grid(4), limit=5) == 5
    assert not has_unique_solution(shape, empty_grid(4))


def test_single_hole_has_one_solution(solved_9x9):
    shape = Shape(9, 3, 3)
    solved_9x9[4][4] = 0

    assert count_solutions(shape, solved_9x9, limit=None) == 1


def test_clashing_givens_have_no_solution():
    shape = Shape(4, 2, 2)
    grid = empty_grid(4)
    grid[0][0] = 1
    grid[0][1] = 1

    assert count_solutions(shape, grid) == 0


def test_count_does_not_mutate_input():
    shape = Shape(4, 2, 2)
    grid = empty_grid(4)
    grid[0][0] = 2

    count_solutions(shape, grid, limit=None)

    assert grid == [[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]


def test_node_budget_aborts_search():
    shape = Shape(9, 3, 3)

    with pytest.raises(SearchBudgetExceeded):
        count_solutions(shape, empty_grid(9), limit=None, node_budget=10)


def test_count_rejects_bad_input():
    shape = Shape(4, 2, 2)
    grid = empty_grid(4)
    grid[1][1] = 9

    with pytest.raises(ValueError):
        count_solutions(shape, grid)
    with pytest.raises(ValueError):
        count_solutions(shape, empty_grid(4), limit=0)
    with pytest.raises(ValueError):
        count_solutions(shape, empty_grid(3))
