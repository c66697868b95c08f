"""
棋盘坐标与旋转
所有方向的移动都先旋转成"向左压缩"，因此旋转公式是整个引擎的基础
"""

from typing import Callable, List, NamedTuple, Optional, Tuple, TypeVar

from config import GameConfig

GRID_SIZE = GameConfig.GRID_SIZE

T = TypeVar("T")


class Cell(NamedTuple):
    row: int
    col: int


def rotated_cell_at(row: int, col: int, num_rotations: int) -> Cell:
    """
    返回旋转num_rotations个四分之一圈后(row, col)对应的原始坐标

    参数:
    row, col: 旋转后棋盘中的坐标
    num_rotations: 0-3之间的整数

    返回:
    原始（未旋转）棋盘中的Cell
    """
    if num_rotations == 0:
        return Cell(row, col)
    if num_rotations == 1:
        return Cell(GRID_SIZE - 1 - col, row)
    if num_rotations == 2:
        return Cell(GRID_SIZE - 1 - row, GRID_SIZE - 1 - col)
    if num_rotations == 3:
        return Cell(col, GRID_SIZE - 1 - row)
    raise ValueError(f"num_rotations must be an integer in [0,3], got {num_rotations!r}")


def map_grid(grid, transform: Callable[[int, int, T], T]) -> Tuple[Tuple[T, ...], ...]:
    """对每个格子调用transform(row, col, value)，返回新棋盘"""
    return tuple(
        tuple(transform(row, col, value) for col, value in enumerate(values))
        for row, values in enumerate(grid)
    )


def rotate_grid(grid, num_rotations: int):
    """旋转整个棋盘，new[r][c] = grid[rotated_cell_at(r, c)]"""
    def pick(row, col, _):
        source = rotated_cell_at(row, col, num_rotations)
        return grid[source.row][source.col]

    return map_grid(grid, pick)


def empty_grid():
    """每次调用都返回一个新的空棋盘"""
    return tuple((None,) * GRID_SIZE for _ in range(GRID_SIZE))


def empty_cells(grid) -> List[Cell]:
    """按行优先顺序收集所有空格"""
    return [
        Cell(row, col)
        for row, values in enumerate(grid)
        for col, value in enumerate(values)
        if value is None
    ]


def place_tile(grid, cell: Cell, tile: Optional[T]):
    """返回在cell处放置tile后的新棋盘"""
    return map_grid(grid, lambda row, col, value: tile if (row, col) == cell else value)
