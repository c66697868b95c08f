import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from config import PathConfig
from game.game_2048 import grid_from_array, grid_to_array


@dataclass(frozen=True)
class SavedState:
    grid: tuple
    current_score: int
    best_score: int


class MemoryRepository:
    """
    进程内存档，用于模拟和测试
    """
    def __init__(self, saved_state=None):
        self.saved_state = saved_state
        self.save_count = 0

    def save_state(self, grid, current_score, best_score):
        self.saved_state = SavedState(grid, int(current_score), int(best_score))
        self.save_count += 1

    def load_state(self) -> Optional[SavedState]:
        return self.saved_state


class GameRepository:
    """
    JSON文件存档
    棋盘以整数形式保存（0为空格），读取时瓦片id重新生成
    """
    def __init__(self, path=PathConfig.SAVE_FILE):
        self.path = Path(path)

    def save_state(self, grid, current_score, best_score):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            'grid': grid_to_array(grid).tolist(),
            'current_score': int(current_score),
            'best_score': int(best_score),
            'saved_at': datetime.now().strftime("%Y%m%d_%H%M%S"),
        }
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load_state(self) -> Optional[SavedState]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return SavedState(
                grid=grid_from_array(data['grid']),
                current_score=int(data.get('current_score', 0)),
                best_score=int(data.get('best_score', 0)),
            )
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            print(f"读取存档失败，将开始新游戏: {e}")
            return None
