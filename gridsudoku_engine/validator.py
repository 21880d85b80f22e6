from __future__ import annotations
from typing import List, Sequence, Set

from gridsudoku_engine.board import box_cells_at, box_origin, boxes, check_cell, check_grid
from gridsudoku_engine.models import RC, Conflict, ConflictType, Grid, Shape, ValidationResult


def _scan_unit(grid: Grid, unit: Sequence[RC], kind: ConflictType, out: List[Conflict]) -> None:
    # only the later occurrence of a repeated value is reported
    seen: Set[int] = set()
    for (r, c) in unit:
        v = grid[r][c]
        if v == 0:
            continue
        if v in seen:
            out.append(Conflict(r, c, v, kind))
        else:
            seen.add(v)


def validate(shape: Shape, grid: Grid) -> ValidationResult:
    """
    Rule check of a possibly partial grid.

    Rows are scanned row-major, columns column-major and boxes top-left to
    bottom-right (row-major inside a box). A value already seen in the current
    row/column/box produces a conflict at the current cell, so for a pair of
    duplicates only the second one is flagged. A cell repeated in several
    rule families appears once per family.
    """
    check_grid(shape, grid)
    n = shape.edge
    conflicts: List[Conflict] = []

    for r in range(n):
        _scan_unit(grid, [(r, c) for c in range(n)], ConflictType.ROW, conflicts)
    for c in range(n):
        _scan_unit(grid, [(r, c) for r in range(n)], ConflictType.COLUMN, conflicts)
    for cells in boxes(shape):
        _scan_unit(grid, cells, ConflictType.BOX, conflicts)

    return ValidationResult(not conflicts, conflicts)


def is_complete(shape: Shape, grid: Grid) -> bool:
    check_grid(shape, grid)
    if any(v == 0 for row in grid for v in row):
        return False
    return validate(shape, grid).is_valid


def is_consistent_with_solution(grid: Grid, solution: Grid) -> bool:
    """Every filled cell of grid matches solution; empty cells are unconstrained."""
    if len(grid) != len(solution) or any(len(a) != len(b) for a, b in zip(grid, solution)):
        raise ValueError("grid and solution dimensions differ.")
    return all(
        v == 0 or v == solution[r][c]
        for r, row in enumerate(grid)
        for c, v in enumerate(row)
    )


def is_placement_legal(shape: Shape, grid: Grid, r: int, c: int, v: int) -> bool:
    """Can v go at (r, c) without repeating in its row, column or box? The cell itself is ignored."""
    n = shape.edge
    for cc in range(n):
        if cc != c and grid[r][cc] == v:
            return False
    for rr in range(n):
        if rr != r and grid[rr][c] == v:
            return False
    br, bc = box_origin(shape, r, c)
    for (rr, cc) in box_cells_at(shape, br, bc):
        if (rr, cc) != (r, c) and grid[rr][cc] == v:
            return False
    return True


def conflict_cells(shape: Shape, grid: Grid, r: int, c: int) -> List[Conflict]:
    """
    Every peer of (r, c) holding the same value, tagged with the shared unit.
    Unlike validate() this is symmetric: both cells of a duplicate pair see
    each other. A peer sharing row and box is listed once per unit.
    """
    check_grid(shape, grid)
    check_cell(shape, r, c)
    v = grid[r][c]
    if v == 0:
        return []

    n = shape.edge
    found: List[Conflict] = []
    for cc in range(n):
        if cc != c and grid[r][cc] == v:
            found.append(Conflict(r, cc, v, ConflictType.ROW))
    for rr in range(n):
        if rr != r and grid[rr][c] == v:
            found.append(Conflict(rr, c, v, ConflictType.COLUMN))
    br, bc = box_origin(shape, r, c)
    for (rr, cc) in box_cells_at(shape, br, bc):
        if (rr, cc) != (r, c) and grid[rr][cc] == v:
            found.append(Conflict(rr, cc, v, ConflictType.BOX))
    return found


def has_conflict_at(shape: Shape, grid: Grid, r: int, c: int) -> bool:
    check_grid(shape, grid)
    check_cell(shape, r, c)
    v = grid[r][c]
    return v != 0 and not is_placement_legal(shape, grid, r, c, v)
