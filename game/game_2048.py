import numpy as np
from typing import List, NamedTuple, Optional, Tuple

from game.geometry import GRID_SIZE, map_grid, rotate_grid, rotated_cell_at
from game.model import Direction, GridTile, GridTileMovement, Tile


class _RowScan(NamedTuple):
    """单行扫描状态：当前行的瓦片、等待合并的列、下一个空位列"""
    tiles: Tuple[Optional[Tile], ...]
    pending_merge_col: Optional[int]
    next_free_col: Optional[int]


def _with_cells(tiles, updates):
    return tuple(updates.get(col, tile) for col, tile in enumerate(tiles))


def _scan_cell(scan, row, col, num_rotations):
    """
    处理旋转后棋盘第row行第col列的格子

    返回:
    (新的扫描状态, 本格产生的移动记录)
    记录中的坐标已经换算回原始棋盘
    """
    tile = scan.tiles[col]
    if tile is None:
        # 记住遇到的第一个空位
        if scan.next_free_col is None:
            return scan._replace(next_free_col=col), ()
        return scan, ()

    current = GridTile(rotated_cell_at(row, col, num_rotations), tile)
    pending = scan.pending_merge_col
    free = scan.next_free_col

    if pending is None:
        if free is None:
            # 前面没有空位，原地不动
            return scan._replace(pending_merge_col=col), (GridTileMovement.noop(current),)
        # 移动到最靠左的空位
        target = GridTile(rotated_cell_at(row, free, num_rotations), tile)
        tiles = _with_cells(scan.tiles, {free: tile, col: None})
        return _RowScan(tiles, free, free + 1), (GridTileMovement.shift(current, target),)

    if scan.tiles[pending].num == tile.num:
        # 先移动到合并位置，再在该位置生成翻倍的新瓦片
        target_cell = rotated_cell_at(row, pending, num_rotations)
        merged = tile.doubled()
        movements = (
            GridTileMovement.shift(current, GridTile(target_cell, tile)),
            GridTileMovement.add(GridTile(target_cell, merged)),
        )
        tiles = _with_cells(scan.tiles, {pending: merged, col: None})
        # 合并后的格子本次移动不能再合并
        return _RowScan(tiles, None, col if free is None else free), movements

    if free is None:
        return scan._replace(pending_merge_col=pending + 1), (GridTileMovement.noop(current),)
    target = GridTile(rotated_cell_at(row, free, num_rotations), tile)
    tiles = _with_cells(scan.tiles, {free: tile, col: None})
    return _RowScan(tiles, pending + 1, free + 1), (GridTileMovement.shift(current, target),)


def compact_row(tiles, row, num_rotations):
    """向左压缩单行，返回新行和移动记录"""
    scan = _RowScan(tuple(tiles), None, None)
    movements = []
    for col in range(GRID_SIZE):
        scan, emitted = _scan_cell(scan, row, col, num_rotations)
        movements.extend(emitted)
    return scan.tiles, movements


def make_move(grid, direction: Direction):
    """
    计算向direction移动后的棋盘和移动记录
    不修改输入棋盘，也不生成新瓦片

    参数:
    grid: GRID_SIZE x GRID_SIZE 的瓦片棋盘（空格为None）
    direction: 移动方向

    返回:
    (new_grid, movements) movements按向左压缩时的行优先扫描顺序排列
    """
    num_rotations = direction.num_rotations

    # 旋转棋盘，使所有方向都按"从右向左滑动"处理
    rotated = rotate_grid(grid, num_rotations)

    rows = []
    movements: List[GridTileMovement] = []
    for row, tiles in enumerate(rotated):
        new_row, row_movements = compact_row(tiles, row, num_rotations)
        rows.append(new_row)
        movements.extend(row_movements)

    # 旋转回原始方向
    new_grid = rotate_grid(tuple(rows), -num_rotations % 4)
    return new_grid, movements


def has_grid_changed(movements) -> bool:
    """只要有新瓦片或者有瓦片换了位置，棋盘就发生了变化"""
    return any(
        movement.from_grid_tile is None
        or movement.from_grid_tile.cell != movement.to_grid_tile.cell
        for movement in movements
    )


def merge_score(movements) -> int:
    """合并得分：所有新瓦片的数值之和（必须在追加新生成瓦片之前计算）"""
    return sum(movement.to_grid_tile.tile.num for movement in movements if movement.is_add)


def check_valid_directions(grid):
    """
    检查每个方向是否为有效移动
    通过模拟每个方向的移动来检查

    返回:
    valid_directions: 长度为4的数组，顺序与Direction定义一致 (0=无效, 1=有效)
    """
    valid_directions = np.zeros(len(Direction), dtype=np.int32)
    for index, direction in enumerate(Direction):
        _, movements = make_move(grid, direction)
        valid_directions[index] = 1 if has_grid_changed(movements) else 0
    return valid_directions


def is_game_over(grid) -> bool:
    """四个方向都无法移动时游戏结束"""
    return not check_valid_directions(grid).any()


def grid_to_array(grid):
    """转换为numpy整数棋盘，空格为0"""
    return np.array(
        [[0 if tile is None else tile.num for tile in row] for row in grid],
        dtype=np.int64,
    )


def grid_from_array(values):
    """
    从整数棋盘创建瓦片棋盘，每个瓦片获得新id

    参数:
    values: GRID_SIZE x GRID_SIZE 的整数数组或嵌套列表，0表示空格
    """
    board = np.asarray(values)
    if board.shape != (GRID_SIZE, GRID_SIZE):
        raise ValueError(f"board must be {GRID_SIZE}x{GRID_SIZE}, got shape {board.shape}")
    return map_grid(board.tolist(), lambda row, col, num: None if num == 0 else Tile(int(num)))
