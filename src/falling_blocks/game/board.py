from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np


EMPTY = 0


@dataclass(frozen=True)
class ClearResult:
    board: "Board"
    lines_cleared: int


class Board:
    """Immutable snapshot of the playfield.

    Cells hold 0 when empty or the color token of a landed piece. Every
    operation returns a new snapshot; the backing array is read-only.
    Row 0 is the top of the well.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: np.ndarray) -> None:
        if cells.ndim != 2 or cells.shape[0] < 1 or cells.shape[1] < 1:
            raise ValueError(f"board needs a non-empty 2D grid, got shape {cells.shape}")
        frozen = np.array(cells, dtype=np.int8, copy=True)
        frozen.setflags(write=False)
        self._cells = frozen

    @classmethod
    def empty(cls, width: int = 10, height: int = 20) -> "Board":
        if width < 1 or height < 1:
            raise ValueError(f"board size must be positive, got {width}x{height}")
        return cls(np.zeros((int(height), int(width)), dtype=np.int8))

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    def __getitem__(self, index):
        return self._cells[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self._cells.shape, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, filled={int(np.count_nonzero(self._cells))})"

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def is_empty(self) -> bool:
        return not self._cells.any()

    def is_valid_move(self, shape: np.ndarray, x: int, y: int) -> bool:
        """Check a shape anchored at (x, y).

        Cells above the top edge (y < 0) are allowed and never collide.
        """
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if not shape[dy, dx]:
                    continue
                bx, by = x + dx, y + dy
                if bx < 0 or bx >= self.width or by >= self.height:
                    return False
                if by >= 0 and self._cells[by, bx] != EMPTY:
                    return False
        return True

    def place_piece(self, shape: np.ndarray, x: int, y: int, token: int) -> "Board":
        grid = self._cells.copy()
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                by = y + dy
                if shape[dy, dx] and by >= 0:
                    grid[by, x + dx] = token
        return Board(grid)

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self._cells != EMPTY, axis=1))[0]]

    def clear_lines(self) -> ClearResult:
        full_rows = self.full_rows()
        if not full_rows:
            return ClearResult(board=self, lines_cleared=0)
        num = len(full_rows)
        # Remove full rows and pad with empty rows at the top
        kept = np.delete(self._cells, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        return ClearResult(board=Board(np.vstack((new_rows, kept))), lines_cleared=num)

    def max_height(self) -> int:
        non_empty_rows = np.where(np.any(self._cells != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])
