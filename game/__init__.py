"""
游戏模块
包含2048棋盘几何、瓦片模型、移动引擎和瓦片生成
会话控制在game.session中，需要单独导入
"""

from .geometry import GRID_SIZE, Cell, empty_grid, rotate_grid, rotated_cell_at
from .model import Direction, GridTile, GridTileMovement, Tile
from .game_2048 import (check_valid_directions, grid_from_array, grid_to_array, has_grid_changed,
                        is_game_over, make_move, merge_score)
from .spawn import create_random_added_tile, insert_tile

__all__ = [
    'GRID_SIZE', 'Cell', 'empty_grid', 'rotate_grid', 'rotated_cell_at',
    'Direction', 'GridTile', 'GridTileMovement', 'Tile',
    'check_valid_directions', 'grid_from_array', 'grid_to_array', 'has_grid_changed',
    'is_game_over', 'make_move', 'merge_score',
    'create_random_added_tile', 'insert_tile',
]
