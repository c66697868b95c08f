import random

import numpy as np

from config import SimulationConfig
from game.game_2048 import grid_to_array
from game.model import Direction
from game.session import GameSession
from utils.storage import MemoryRepository


def simulate_random_games(games=SimulationConfig.GAMES, max_moves=SimulationConfig.MAX_MOVES,
                          seed=SimulationConfig.SEED, verbose=True):
    """
    用随机方向进行多局游戏，统计分数、最大瓦片和步数

    参数:
        games: 对局数量
        max_moves: 每局最多尝试的方向次数
        seed: 随机种子，每局使用seed + game
        verbose: 是否打印进度

    返回:
    包含各项统计列表的字典
    """
    if verbose:
        print("\n" + "=" * 60)
        print("Simulating random-direction games...")
        print(f"Games: {games}")
        print(f"Max moves per game: {max_moves}")
        print(f"Seed: {seed}")
        print("=" * 60)

    scores = []
    max_tiles = []
    move_counts = []
    spawned = {2: 0, 4: 0}
    directions = list(Direction)

    for game in range(games):
        game_seed = None if seed is None else seed + game
        rng = random.Random(game_seed)
        session = GameSession(MemoryRepository(), rng=random.Random(game_seed))

        def count_spawns(movements, state):
            # 只有最后一条新增记录可能是新生成的瓦片
            if state.move_count > 0 and movements and movements[-1].is_add:
                spawned[movements[-1].to_grid_tile.tile.num] += 1

        session.add_listener(count_spawns)
        session.start_new_game()

        attempts = 0
        while not session.state.is_game_over and attempts < max_moves:
            session.apply_move(rng.choice(directions))
            attempts += 1

        board = grid_to_array(session.grid)
        scores.append(session.state.current_score)
        max_tiles.append(int(np.max(board)))
        move_counts.append(session.state.move_count)

        if verbose:
            print(f"Game {game + 1}/{games} | Score: {session.state.current_score} | "
                  f"Max tile: {max_tiles[-1]} | Moves: {session.state.move_count}")

    total_spawned = spawned[2] + spawned[4]
    four_ratio = spawned[4] / total_spawned if total_spawned else 0.0

    if verbose and scores:
        print("=" * 60)
        print(f"Average score: {np.mean(scores):.2f} ± {np.std(scores):.2f}")
        print(f"Best score: {max(scores)}")
        print(f"Average max tile: {np.mean(max_tiles):.1f}")
        print(f"Spawned 4 ratio: {four_ratio:.3f}")
        print("=" * 60)

    return {
        'scores': scores,
        'max_tiles': max_tiles,
        'move_counts': move_counts,
        'four_ratio': four_ratio,
    }
