from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

RC = Tuple[int, int]  # (row, col)
Grid = List[List[int]]
PresetMask = List[List[bool]]


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ConflictType(str, Enum):
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


class CarvingStrategy(str, Enum):
    UNIQUE = "unique"
    FIXED_RATIO = "fixed_ratio"


@dataclass(frozen=True)
class Shape:
    """
    Grid geometry plus difficulty:
    - edge x edge cells, values 1..edge
    - edge boxes of sub_rows x sub_cols cells
    """
    edge: int
    sub_rows: int
    sub_cols: int
    difficulty: Difficulty = Difficulty.MEDIUM

    def __post_init__(self) -> None:
        for name in ("edge", "sub_rows", "sub_cols"):
            v = getattr(self, name)
            if type(v) != int or v <= 0:
                raise ValueError(f"{name} must be a positive int, got {v!r}")
        if self.sub_rows * self.sub_cols != self.edge:
            raise ValueError(
                f"Box {self.sub_rows}x{self.sub_cols} does not tile a grid of edge {self.edge}."
            )
        # accept plain strings ("hard") from callers and the CLI
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))

    @staticmethod
    def for_edge(edge: int, difficulty: Difficulty = Difficulty.MEDIUM) -> "Shape":
        """Most square box for the edge, rows <= cols (6 -> 2x3, 12 -> 3x4)."""
        if type(edge) != int or edge <= 0:
            raise ValueError(f"edge must be a positive int, got {edge!r}")
        sub_rows = 1
        for d in range(1, edge + 1):
            if d * d > edge:
                break
            if edge % d == 0:
                sub_rows = d
        return Shape(edge, sub_rows, edge // sub_rows, difficulty)

    @property
    def cell_count(self) -> int:
        return self.edge * self.edge

    @property
    def box_cell_count(self) -> int:
        return self.sub_rows * self.sub_cols


@dataclass(frozen=True)
class Conflict:
    row: int
    col: int
    value: int
    kind: ConflictType


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    conflicts: List[Conflict] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratedPuzzle:
    puzzle: Grid
    solution: Grid
    preset: PresetMask
    strategy: CarvingStrategy
    removed: int
