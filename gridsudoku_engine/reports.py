from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from gridsudoku_engine.board import box_index, check_grid, check_mask, preset_from_puzzle
from gridsudoku_engine.models import RC, Conflict, ConflictType, Grid, PresetMask, Shape
from gridsudoku_engine.validator import is_consistent_with_solution, validate


@dataclass(frozen=True)
class ValidationReport:
    has_violation: bool
    tampered: List[RC]
    is_complete: bool
    is_consistent: Optional[bool]  # None when no solution was supplied
    conflicts: List[Conflict]
    explanation: str


def _unit_number(shape: Shape, conflict: Conflict) -> int:
    if conflict.kind == ConflictType.ROW:
        return conflict.row + 1
    if conflict.kind == ConflictType.COLUMN:
        return conflict.col + 1
    return box_index(shape, conflict.row, conflict.col) + 1


def describe_conflict(shape: Shape, conflict: Conflict) -> str:
    unit = conflict.kind.value
    return (
        f"{unit.capitalize()} rule violation: digit {conflict.value} repeats in "
        f"{unit} {_unit_number(shape, conflict)} at (r{conflict.row+1}, c{conflict.col+1})."
    )


def find_tampered_givens(
    shape: Shape,
    grid: Grid,
    puzzle: Grid,
    preset: Optional[PresetMask] = None,
) -> List[RC]:
    """
    Preset cells whose value in grid differs from the puzzle.
    Without a mask every nonzero puzzle cell counts as a given.
    """
    check_grid(shape, grid)
    check_grid(shape, puzzle, "puzzle")
    if preset is None:
        preset = preset_from_puzzle(puzzle)
    check_mask(shape, preset)
    return [
        (r, c)
        for r in range(shape.edge)
        for c in range(shape.edge)
        if preset[r][c] and grid[r][c] != puzzle[r][c]
    ]


def build_validation_report(
    shape: Shape,
    grid: Grid,
    solution: Optional[Grid] = None,
    puzzle: Optional[Grid] = None,
    preset: Optional[PresetMask] = None,
) -> ValidationReport:
    """
    1) Given tampering (a preset cell of puzzle was changed), when puzzle is supplied
    2) Rule violations (duplicate value in row/column/box)
    3) Completion and (optionally) agreement with a known solution
    Cells in the explanation are 1-indexed.
    """
    if preset is not None and puzzle is None:
        raise ValueError("preset needs the puzzle it marks.")
    tampered = find_tampered_givens(shape, grid, puzzle, preset) if puzzle is not None else []
    result = validate(shape, grid)
    complete = result.is_valid and not any(v == 0 for row in grid for v in row)
    consistent = is_consistent_with_solution(grid, solution) if solution is not None else None

    lines: List[str] = []
    if tampered:
        lines.append(
            "Given tampering detected: a given is a fixed clue and must never be changed.\n"
            f"Edited given cells (1-indexed): {[(r + 1, c + 1) for (r, c) in tampered]}."
        )
    if result.is_valid and not tampered:
        lines.append("No violations detected (no given tampering, no row/column/box duplicates).")
    elif not result.is_valid:
        lines.append(f"{len(result.conflicts)} conflict{'' if len(result.conflicts) == 1 else 's'} detected:")
        lines.extend("- " + describe_conflict(shape, c) for c in result.conflicts)
        lines.append(f"Rule: each value 1–{shape.edge} may appear at most once per row, column and box.")

    if complete:
        lines.append("The grid is complete and solved.")
    if consistent is False:
        lines.append("Some entries differ from the known solution.")

    return ValidationReport(
        has_violation=bool(tampered) or not result.is_valid,
        tampered=tampered,
        is_complete=complete,
        is_consistent=consistent,
        conflicts=result.conflicts,
        explanation="\n".join(lines),
    )
