"""
瓦片与移动记录的值类型
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from game.geometry import Cell

# 瓦片id只增不减，合并后旧id作废
_tile_ids = itertools.count(1)


class Direction(Enum):
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def num_rotations(self) -> int:
        """旋转成向左压缩所需的四分之一圈数"""
        return _ROTATIONS[self]


_ROTATIONS = {
    Direction.WEST: 0,
    Direction.SOUTH: 1,
    Direction.EAST: 2,
    Direction.NORTH: 3,
}


def is_power_of_two(num) -> bool:
    return isinstance(num, int) and num >= 2 and num & (num - 1) == 0


@dataclass(frozen=True)
class Tile:
    num: int
    id: int = field(default_factory=lambda: next(_tile_ids))

    def __post_init__(self):
        if not is_power_of_two(self.num):
            raise ValueError(f"tile value must be a power of two >= 2, got {self.num!r}")

    def doubled(self) -> "Tile":
        """合并产物：新id，数值翻倍"""
        return Tile(self.num * 2)


@dataclass(frozen=True)
class GridTile:
    cell: Cell
    tile: Tile


@dataclass(frozen=True)
class GridTileMovement:
    """
    一次移动中单个瓦片的变化
    from_grid_tile为None表示新瓦片（合并产物或新生成）
    """
    from_grid_tile: Optional[GridTile]
    to_grid_tile: GridTile

    @classmethod
    def add(cls, grid_tile: GridTile) -> "GridTileMovement":
        return cls(None, grid_tile)

    @classmethod
    def shift(cls, from_grid_tile: GridTile, to_grid_tile: GridTile) -> "GridTileMovement":
        return cls(from_grid_tile, to_grid_tile)

    @classmethod
    def noop(cls, grid_tile: GridTile) -> "GridTileMovement":
        return cls(grid_tile, grid_tile)

    @property
    def is_add(self) -> bool:
        return self.from_grid_tile is None

    @property
    def is_shift(self) -> bool:
        return not self.is_add and self.from_grid_tile.cell != self.to_grid_tile.cell

    @property
    def is_noop(self) -> bool:
        return not self.is_add and self.from_grid_tile.cell == self.to_grid_tile.cell
