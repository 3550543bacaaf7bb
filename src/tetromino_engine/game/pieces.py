from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    L = 6
    J = 7


Shape = np.ndarray


def _frozen(shape: Shape) -> Shape:
    out = np.array(shape, dtype=np.int8, copy=True)
    out.setflags(write=False)
    return out


def rotate_cw(shape: Shape) -> Shape:
    """Rotate an R x C shape 90 degrees clockwise into a new C x R shape."""
    return _frozen(np.rot90(shape, 1, axes=(1, 0)))


@dataclass(frozen=True)
class TetrominoSpec:
    shape: Shape
    color: int


def _build_catalog() -> Mapping[TetrominoType, TetrominoSpec]:
    base = {
        TetrominoType.I: [[1, 1, 1, 1]],
        TetrominoType.O: [[1, 1], [1, 1]],
        TetrominoType.T: [[0, 1, 0], [1, 1, 1]],
        TetrominoType.S: [[0, 1, 1], [1, 1, 0]],
        TetrominoType.Z: [[1, 1, 0], [0, 1, 1]],
        TetrominoType.L: [[1, 0], [1, 0], [1, 1]],
        TetrominoType.J: [[0, 1], [0, 1], [1, 1]],
    }
    catalog = {}
    for kind, rows in base.items():
        assert rows and all(len(r) == len(rows[0]) > 0 for r in rows), kind
        shape = _frozen(rows)
        assert int(shape.sum()) == 4, kind
        catalog[kind] = TetrominoSpec(shape=shape, color=int(kind))
    assert set(catalog) == set(TetrominoType)
    return MappingProxyType(catalog)


TETROMINOES = _build_catalog()


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        """Piece in its canonical catalog orientation."""
        return cls(kind, TETROMINOES[kind].shape)

    @property
    def color(self) -> int:
        return TETROMINOES[self.kind].color

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return shape_cells(self.shape, origin_x, origin_y)


def shape_cells(shape: Shape, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
    h, w = shape.shape
    cells: List[Tuple[int, int]] = []
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells
