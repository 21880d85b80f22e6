from __future__ import annotations
from typing import List, Sequence

from gridsudoku_engine.models import RC, Grid, PresetMask, Shape


def empty_grid(edge: int) -> Grid:
    return [[0] * edge for _ in range(edge)]


def copy_grid(grid: Sequence[Sequence[int]]) -> Grid:
    return [list(row) for row in grid]


def box_index(shape: Shape, r: int, c: int) -> int:
    # boxes numbered left to right, top to bottom
    return (r // shape.sub_rows) * shape.sub_rows + (c // shape.sub_cols)


def box_origin(shape: Shape, r: int, c: int) -> RC:
    return r - (r % shape.sub_rows), c - (c % shape.sub_cols)


def box_cells_at(shape: Shape, br: int, bc: int) -> List[RC]:
    """Cells of the box whose top-left corner is (br, bc), row-major."""
    return [(r, c)
            for r in range(br, br + shape.sub_rows)
            for c in range(bc, bc + shape.sub_cols)]


def boxes(shape: Shape) -> List[List[RC]]:
    return [
        box_cells_at(shape, br, bc)
        for br in range(0, shape.edge, shape.sub_rows)
        for bc in range(0, shape.edge, shape.sub_cols)
    ]


def check_grid(shape: Shape, grid: Sequence[Sequence[int]], name: str = "grid") -> None:
    """Precondition: grid is edge x edge with values in 0..edge. Raises ValueError otherwise."""
    if len(grid) != shape.edge:
        raise ValueError(f"{name} must have {shape.edge} rows, got {len(grid)}.")
    for r, row in enumerate(grid):
        if len(row) != shape.edge:
            raise ValueError(f"{name} row {r} must have {shape.edge} columns, got {len(row)}.")
        for c, v in enumerate(row):
            if not 0 <= v <= shape.edge:
                raise ValueError(f"{name} cell ({r}, {c}) holds {v}, outside 0..{shape.edge}.")


def check_mask(shape: Shape, mask: Sequence[Sequence[bool]], name: str = "preset") -> None:
    if len(mask) != shape.edge or any(len(row) != shape.edge for row in mask):
        raise ValueError(f"{name} must be {shape.edge}x{shape.edge}.")


def preset_from_puzzle(puzzle: Grid) -> PresetMask:
    return [[v != 0 for v in row] for row in puzzle]


def check_cell(shape: Shape, r: int, c: int) -> None:
    if not (0 <= r < shape.edge and 0 <= c < shape.edge):
        raise ValueError(f"Cell ({r}, {c}) is outside a {shape.edge}x{shape.edge} grid.")


# ------------------ text codec ------------------
def parse_grid(s: str, edge: int) -> Grid:
    """
    edge <= 9: compact string of edge*edge chars, digits with '.' or '0' for empty.
    edge > 9: integers separated by whitespace or commas, 0 for empty.
    """
    if edge <= 9:
        s = "".join(ch for ch in s if not ch.isspace())
        if len(s) != edge * edge:
            raise ValueError(
                f"Expected {edge * edge} characters after removing whitespace, got {len(s)}"
            )
        tokens = ["0" if ch == "." else ch for ch in s]
    else:
        tokens = s.replace(",", " ").split()
        if len(tokens) != edge * edge:
            raise ValueError(f"Expected {edge * edge} values, got {len(tokens)}")

    values: List[int] = []
    for tok in tokens:
        if not tok.isdigit():
            raise ValueError(f"Invalid value '{tok}' in grid.")
        v = int(tok)
        if v > edge:
            raise ValueError(f"Value {v} out of range 0..{edge}.")
        values.append(v)
    return [values[r * edge:(r + 1) * edge] for r in range(edge)]


def format_grid(grid: Grid) -> str:
    edge = len(grid)
    if edge <= 9:
        return "".join(str(v) for row in grid for v in row)
    return "\n".join(" ".join(str(v) for v in row) for row in grid)


def pretty(shape: Shape, grid: Grid) -> str:
    width = len(str(shape.edge))
    lines = []
    for r in range(shape.edge):
        if r and r % shape.sub_rows == 0:
            lines.append(None)
        row = []
        for c in range(shape.edge):
            if c and c % shape.sub_cols == 0:
                row.append("|")
            v = grid[r][c]
            row.append((str(v) if v != 0 else ".").rjust(width))
        lines.append(" ".join(row))
    rule = "-" * max(len(line) for line in lines if line is not None)
    return "\n".join(rule if line is None else line for line in lines)
