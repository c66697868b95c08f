"""
游戏会话控制
依次调用移动引擎、瓦片生成和结束判断，并维护分数与步数
"""

import random
from dataclasses import dataclass, replace
from enum import Enum

from config import GameConfig
from direction.extractor import DirectionExtractor
from game.game_2048 import has_grid_changed, is_game_over, make_move, merge_score
from game.geometry import Cell, empty_grid
from game.model import GridTile, GridTileMovement
from game.spawn import create_random_added_tile, insert_tile


class SessionStatus(Enum):
    IDLE = "IDLE"
    IN_PROGRESS = "IN_PROGRESS"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class GameState:
    current_score: int = 0
    best_score: int = 0
    move_count: int = 0
    is_game_over: bool = False
    is_debug_on: bool = False
    is_voice_on: bool = False
    direction: str = ""
    status: SessionStatus = SessionStatus.IDLE


class GameSession:
    """
    单局游戏的状态机

    参数:
        repository: 存档协作者，需要提供save_state/load_state
        extractor: 文本到方向的提取器，需要提供extract_direction
        rng: random.Random实例，固定种子即可复现整局
        four_probability: 生成4的概率
    """
    def __init__(self, repository, extractor=None, rng=None, seed=GameConfig.SEED,
                 four_probability=GameConfig.SPAWN_FOUR_PROBABILITY):
        self.repository = repository
        self.extractor = extractor if extractor is not None else DirectionExtractor()
        self.rng = rng if rng is not None else random.Random(seed)
        self.four_probability = four_probability

        self.grid = empty_grid()
        self.grid_tile_movements = []
        self.state = GameState()
        self.direction_source = None
        self._listeners = []

    def add_listener(self, listener):
        """listener(movements, state)在每次棋盘更新后调用"""
        self._listeners.append(listener)

    def _publish(self):
        for listener in self._listeners:
            listener(self.grid_tile_movements, self.state)

    def _status_for(self, game_over):
        return SessionStatus.GAME_OVER if game_over else SessionStatus.IN_PROGRESS

    def resume(self):
        """恢复存档，没有存档时开始新游戏"""
        saved = self.repository.load_state()
        if saved is None:
            self.start_new_game()
            return False

        self.grid = saved.grid
        self.grid_tile_movements = [
            GridTileMovement.noop(GridTile(Cell(row, col), tile))
            for row, tiles in enumerate(self.grid)
            for col, tile in enumerate(tiles)
            if tile is not None
        ]
        game_over = is_game_over(self.grid)
        self.state = replace(
            self.state,
            current_score=saved.current_score,
            best_score=saved.best_score,
            is_game_over=game_over,
            status=self._status_for(game_over),
        )
        self._publish()
        return True

    def start_new_game(self):
        saved = self.repository.load_state() if self.state.status == SessionStatus.IDLE else None
        best_score = max(self.state.best_score, saved.best_score if saved else 0)

        grid = empty_grid()
        movements = []
        for _ in range(GameConfig.NUM_INITIAL_TILES):
            # 依次插入，第二个瓦片能看到第一个
            added = create_random_added_tile(grid, self.rng, self.four_probability)
            if added is None:
                break
            grid = insert_tile(grid, added)
            movements.append(added)

        self.grid = grid
        self.grid_tile_movements = movements
        self.state = replace(
            self.state,
            current_score=0,
            best_score=best_score,
            move_count=0,
            is_game_over=False,
            status=SessionStatus.IN_PROGRESS,
        )
        self.repository.save_state(self.grid, 0, best_score)
        self._publish()

    def apply_move(self, direction):
        """
        执行一次移动

        返回:
        True表示移动被接受；无变化的移动被忽略，棋盘、分数和步数都保持不变
        """
        if self.state.status == SessionStatus.IDLE:
            return False
        self.state = replace(self.state, direction=direction.name)

        new_grid, movements = make_move(self.grid, direction)
        if not has_grid_changed(movements):
            return False

        # 得分只统计合并产物，必须在加入新生成瓦片之前计算
        current_score = self.state.current_score + merge_score(movements)
        best_score = max(self.state.best_score, current_score)
        move_count = self.state.move_count + 1

        added = create_random_added_tile(new_grid, self.rng, self.four_probability)
        if added is not None:
            new_grid = insert_tile(new_grid, added)
            movements.append(added)

        self.grid = new_grid
        self.grid_tile_movements = movements
        game_over = is_game_over(new_grid)
        self.state = replace(
            self.state,
            current_score=current_score,
            best_score=best_score,
            move_count=move_count,
            is_game_over=game_over,
            status=self._status_for(game_over),
        )
        self.repository.save_state(self.grid, current_score, best_score)
        self._publish()
        return True

    def apply_voice_command(self, text):
        """
        处理语音文本

        返回:
        识别出方向时返回True（即使该方向无法移动），否则返回False
        """
        direction = self.extractor.extract_direction(text)
        if direction is None:
            return False
        self.apply_move(direction)
        return True

    def set_direction_source(self, source):
        self.direction_source = source

    def enable_voice(self, enabled):
        self.state = replace(self.state, is_voice_on=enabled)
        if self.direction_source is None:
            return
        if enabled:
            self.direction_source.start()
        else:
            self.direction_source.stop()

    def set_debug(self, debug):
        self.state = replace(self.state, is_debug_on=debug)
