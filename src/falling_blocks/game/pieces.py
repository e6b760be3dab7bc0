from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

import numpy as np


T = TypeVar("T")


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def rotate_cw(shape: Shape) -> Shape:
    # transpose, then reverse each row
    return np.ascontiguousarray(shape.T[:, ::-1])


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}
for _shape in BASE_SHAPES.values():
    _shape.setflags(write=False)

COLORS = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: int = 0  # 0..3, clockwise quarter turns

    def shape(self) -> Shape:
        s = BASE_SHAPES[self.kind]
        for _ in range(self.rotation % 4):
            s = rotate_cw(s)
        return s

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def token(self) -> int:
        return int(self.kind)

    def rotated(self) -> "Piece":
        return Piece(self.kind, (self.rotation + 1) % 4)


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: orientation plus the anchor of its shape matrix.

    ``y`` may be negative while the piece sits partially above the board.
    """

    piece: Piece
    x: int
    y: int

    def shape(self) -> Shape:
        return self.piece.shape()

    @property
    def color(self) -> str:
        return self.piece.color

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.piece, self.x + dx, self.y + dy)

    def rotated(self) -> "ActivePiece":
        return ActivePiece(self.piece.rotated(), self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


class PieceCatalog:
    """Uniform draws over the seven tetrominoes.

    Every draw is independent: there is no bag and no repeat suppression.
    """

    KINDS: Tuple[TetrominoType, ...] = (
        TetrominoType.I,
        TetrominoType.O,
        TetrominoType.T,
        TetrominoType.S,
        TetrominoType.Z,
        TetrominoType.J,
        TetrominoType.L,
    )

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> None:
        self.rng: RandomSource = rng if rng is not None else random.Random(seed)

    def draw(self) -> Piece:
        kind = self.rng.choice(self.KINDS)
        return Piece(kind=TetrominoType(kind), rotation=0)
