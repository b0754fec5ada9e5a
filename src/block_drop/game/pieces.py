from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


Color = Tuple[int, int, int]


class TileType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    TileType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.bool_),
    TileType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.bool_),
    TileType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.bool_),
    TileType.O: np.array([[1, 1], [1, 1]], dtype=np.bool_),
    TileType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.bool_),
    TileType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.bool_),
    TileType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.bool_),
}

BASE_COLORS: Dict[TileType, Color] = {
    TileType.I: (0, 240, 240),
    TileType.J: (0, 0, 240),
    TileType.L: (240, 160, 0),
    TileType.O: (240, 240, 0),
    TileType.S: (0, 240, 0),
    TileType.T: (160, 0, 240),
    TileType.Z: (240, 0, 0),
}


def _shade(color: Color, factor: float) -> Color:
    if factor >= 1.0:
        return tuple(min(255, int(c + (255 - c) * (factor - 1.0))) for c in color)  # type: ignore[return-value]
    return tuple(int(c * factor) for c in color)  # type: ignore[return-value]


@dataclass(frozen=True)
class TileSpec:
    """Precomputed catalog entry for one tile type.

    ``masks[r]`` is the occupancy of the square bounding box at rotation r and
    ``insets[r]`` holds the (top, left, right, bottom) empty margins.
    """

    kind: TileType
    dimension: int
    masks: Tuple[Shape, Shape, Shape, Shape]
    insets: Tuple[Tuple[int, int, int, int], ...]
    spawn_column: int
    spawn_row: int
    base_color: Color
    light_color: Color
    dark_color: Color


def _insets(mask: Shape) -> Tuple[int, int, int, int]:
    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    size = mask.shape[0]
    return (
        int(rows[0]),
        int(cols[0]),
        int(size - 1 - cols[-1]),
        int(size - 1 - rows[-1]),
    )


def _build_spec(kind: TileType) -> TileSpec:
    base = BASE_SHAPES[kind]
    masks = tuple(_rot90(base, r).copy() for r in range(4))
    for m in masks:
        m.setflags(write=False)
    insets = tuple(_insets(m) for m in masks)
    dimension = int(base.shape[0])
    color = BASE_COLORS[kind]
    return TileSpec(
        kind=kind,
        dimension=dimension,
        masks=masks,  # type: ignore[arg-type]
        insets=insets,
        spawn_column=5 - (dimension >> 1),
        spawn_row=insets[0][0],
        base_color=color,
        light_color=_shade(color, 1.3),
        dark_color=_shade(color, 0.7),
    )


# Entry n-1 belongs to the tile with tag n; tag 0 is the empty cell.
CATALOG: Tuple[TileSpec, ...] = tuple(_build_spec(kind) for kind in TileType)


def _entry(kind: TileType) -> TileSpec:
    return CATALOG[int(kind) - 1]


def dimension(kind: TileType) -> int:
    return _entry(kind).dimension


def is_filled(kind: TileType, x: int, y: int, rotation: int) -> bool:
    """Return whether cell (x, y) of the bounding box is filled.

    ``rotation`` must already be normalized to 0..3.
    """
    return bool(_entry(kind).masks[rotation][y, x])


def shape(kind: TileType, rotation: int) -> Shape:
    return _entry(kind).masks[rotation]


def filled_cells(kind: TileType, rotation: int) -> List[Tuple[int, int]]:
    ys, xs = np.nonzero(_entry(kind).masks[rotation])
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def top_inset(kind: TileType, rotation: int) -> int:
    return _entry(kind).insets[rotation][0]


def left_inset(kind: TileType, rotation: int) -> int:
    return _entry(kind).insets[rotation][1]


def right_inset(kind: TileType, rotation: int) -> int:
    return _entry(kind).insets[rotation][2]


def bottom_inset(kind: TileType, rotation: int) -> int:
    return _entry(kind).insets[rotation][3]


def spawn_column(kind: TileType) -> int:
    return _entry(kind).spawn_column


def spawn_row(kind: TileType) -> int:
    return _entry(kind).spawn_row


def colors(kind: TileType) -> Tuple[Color, Color, Color]:
    tile = _entry(kind)
    return tile.base_color, tile.light_color, tile.dark_color


def random_tile(rng: random.Random) -> TileType:
    return rng.choice(list(TileType))
