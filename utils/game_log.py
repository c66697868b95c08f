import json
import random
from datetime import datetime
from pathlib import Path

from config import PathConfig
from game.game_2048 import grid_to_array
from game.geometry import GRID_SIZE
from game.model import Direction
from game.session import GameSession
from utils.storage import MemoryRepository


class ReplayMismatchError(Exception):
    """回放得到的棋盘与记录不一致"""

    def __init__(self, step, expected, actual):
        super().__init__(f"step {step}: expected board {expected}, got {actual}")
        self.step = step
        self.expected = expected
        self.actual = actual


class GameRecorder:
    """
    对局记录
    只记录被接受的移动，配合相同种子即可完整回放

    参数:
        seed: 会话使用的随机种子
        log_dir: 记录保存目录
    """
    def __init__(self, seed, log_dir=PathConfig.LOG_DIR):
        self.seed = seed
        self.log_dir = Path(log_dir)
        self.game_log = []
        self.score = 0

    def attach(self, session):
        session.add_listener(self.on_update)

    def on_update(self, movements, state):
        board = [[0] * GRID_SIZE for _ in range(GRID_SIZE)]
        for movement in movements:
            cell = movement.to_grid_tile.cell
            board[cell.row][cell.col] = max(board[cell.row][cell.col], movement.to_grid_tile.tile.num)
        self.score = state.current_score
        if state.move_count == 0:
            # 新游戏或恢复存档，重新开始记录
            self.game_log = [{'step': 0, 'board': board, 'score': 0, 'direction': None}]
            return
        self.game_log.append({
            'step': state.move_count,
            'board': board,
            'score': state.current_score,
            'direction': state.direction,
        })

    def save_log(self):
        """保存对局记录"""
        if not self.game_log:
            return None

        self.log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.log_dir / f"2048_seed{self.seed}_{timestamp}.json"

        data = {
            'seed': self.seed,
            'final_score': self.score,
            'steps': len(self.game_log) - 1,
            'max_tile': max(max(row) for row in self.game_log[-1]['board']),
            'log': self.game_log,
            'timestamp': timestamp,
        }
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        print(f"\n对局记录已保存: {filepath}")
        return filepath


def load_game_log(replay_file, log_dir=PathConfig.LOG_DIR):
    """读取对局记录，找不到时到记录目录下查找"""
    filepath = Path(replay_file)
    if not filepath.exists():
        filepath = Path(log_dir) / replay_file
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def replay_game(data, on_step=None):
    """
    用记录中的种子和方向重新进行一局，并逐步核对棋盘

    参数:
        data: load_game_log返回的记录
        on_step: 每一步后调用on_step(step, session)

    返回:
    回放结束时的GameSession
    """
    log = data.get('log', [])
    session = GameSession(MemoryRepository(), rng=random.Random(data.get('seed')))
    session.start_new_game()

    for step in log:
        if step.get('direction'):
            session.apply_move(Direction[step['direction']])
        actual = grid_to_array(session.grid).tolist()
        if actual != step['board']:
            raise ReplayMismatchError(step.get('step'), step['board'], actual)
        if on_step is not None:
            on_step(step.get('step'), session)
    return session
