"""
工具模块
包含存档、对局记录与回放、随机模拟和可视化工具
"""

from .storage import GameRepository, MemoryRepository, SavedState
from .game_log import GameRecorder, ReplayMismatchError, load_game_log, replay_game
from .simulation import simulate_random_games

__all__ = ['GameRepository', 'MemoryRepository', 'SavedState',
           'GameRecorder', 'ReplayMismatchError', 'load_game_log', 'replay_game',
           'simulate_random_games']
