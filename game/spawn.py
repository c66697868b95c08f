import random

from config import GameConfig
from game.geometry import empty_cells, place_tile
from game.model import GridTile, GridTileMovement, Tile


def create_random_added_tile(grid, rng=None, four_probability=GameConfig.SPAWN_FOUR_PROBABILITY):
    """
    在随机空格生成一个新瓦片（90%为2，10%为4）
    不修改棋盘，棋盘已满时返回None
    """
    rng = rng or random
    cells = empty_cells(grid)
    if not cells:
        return None
    cell = rng.choice(cells)
    num = 2 if rng.random() >= four_probability else 4
    return GridTileMovement.add(GridTile(cell, Tile(num)))


def insert_tile(grid, movement):
    """把新增瓦片的移动记录合并进棋盘"""
    grid_tile = movement.to_grid_tile
    return place_tile(grid, grid_tile.cell, grid_tile.tile)
