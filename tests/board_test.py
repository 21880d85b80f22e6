import pytest

from gridsudoku_engine.board import (
    box_index,
    boxes,
    check_grid,
    check_mask,
    empty_grid,
    format_grid,
    parse_grid,
    preset_from_puzzle,
    pretty,
)
from gridsudoku_engine.models import Shape

# ---------- Geometry ----------


def test_box_index_for_rectangular_boxes():
    shape = Shape(6, 2, 3)

    assert box_index(shape, 0, 0) == 0
    assert box_index(shape, 1, 5) == 1
    assert box_index(shape, 2, 0) == 2
    assert box_index(shape, 5, 5) == 5


def test_boxes_are_ordered_top_left_to_bottom_right():
    shape = Shape(6, 3, 2)
    all_boxes = boxes(shape)

    assert len(all_boxes) == 6
    assert all_boxes[0] == [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)]
    assert all_boxes[1][0] == (0, 2)
    assert all_boxes[3][0] == (3, 0)
    covered = {cell for box in all_boxes for cell in box}
    assert len(covered) == 36


def test_check_grid_rejects_wrong_dimensions():
    shape = Shape(4, 2, 2)

    check_grid(shape, empty_grid(4))
    with pytest.raises(ValueError):
        check_grid(shape, empty_grid(3))
    with pytest.raises(ValueError):
        check_grid(shape, [[0] * 4, [0] * 4, [0] * 4, [0] * 3])


# ---------- Text codec ----------


def test_parse_compact_grid_with_dots_and_whitespace():
    grid = parse_grid("12.. 34.. .... ...0", 4)

    assert grid == [[1, 2, 0, 0], [3, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]


def test_parse_grid_rejects_bad_input():
    with pytest.raises(ValueError):
        parse_grid("123", 4)
    with pytest.raises(ValueError):
        parse_grid("1x" + "0" * 14, 4)
    with pytest.raises(ValueError):
        parse_grid("5" + "0" * 15, 4)


def test_parse_large_grid_uses_separated_numbers():
    text = ",".join(["12"] + ["0"] * 143)
    grid = parse_grid(text, 12)

    assert grid[0][0] == 12
    assert sum(v for row in grid for v in row) == 12
    assert format_grid(grid).splitlines()[0].split()[0] == "12"


def test_format_grid_compact(solved_9x9):
    text = format_grid(solved_9x9)

    assert len(text) == 81
    assert text.startswith("534678912")
    assert parse_grid(text, 9) == solved_9x9


def test_pretty_draws_box_separators():
    shape = Shape(4, 2, 2)
    text = pretty(shape, [[1, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 4]])
    lines = text.splitlines()

    assert lines[0] == "1 2 | . ."
    assert set(lines[2]) == {"-"}
    assert lines[-1] == ". . | . 4"


def test_check_grid_rejects_values_outside_range():
    shape = Shape(4, 2, 2)
    grid = empty_grid(4)
    grid[3][3] = 5

    with pytest.raises(ValueError):
        check_grid(shape, grid)
    grid[3][3] = -1
    with pytest.raises(ValueError):
        check_grid(shape, grid)


def test_preset_from_puzzle_and_mask_check():
    shape = Shape(4, 2, 2)
    preset = preset_from_puzzle([[1, 0, 0, 0], [0, 0, 0, 2], [0, 0, 0, 0], [0, 0, 0, 0]])

    assert preset[0] == [True, False, False, False]
    assert preset[1][3]
    check_mask(shape, preset)
    with pytest.raises(ValueError):
        check_mask(shape, preset[:3])
