#!/usr/bin/env python3
"""
2048游戏项目主入口文件
使用方法:
    python run.py play        # 开始游戏
    python run.py simulate    # 随机方向模拟并统计
    python run.py replay FILE # 回放对局记录
    python run.py help        # 显示帮助信息
"""

import argparse

from config import GameConfig, PathConfig, SimulationConfig
from game.game_2048 import grid_to_array


def create_directories():
    """创建必要的目录"""
    from pathlib import Path

    dirs_to_create = [
        Path(PathConfig.SAVE_FILE).parent,
        Path(PathConfig.LOG_DIR),
        Path(PathConfig.PLOT_DIR),
    ]

    for dir_path in dirs_to_create:
        dir_path.mkdir(parents=True, exist_ok=True)
        print(f"目录已创建/存在: {dir_path}")


def play_mode(seed=None, record=False, prefer=None):
    """游戏模式"""
    print("=" * 60)
    print("2048游戏模式")
    print("=" * 60)

    from play import InteractiveGame

    create_directories()
    InteractiveGame(seed=seed, record=record, prefer=prefer).play()


def simulate_mode(games, max_moves, seed, save_plot=SimulationConfig.SAVE_PLOT):
    """模拟模式"""
    print("=" * 60)
    print("2048随机模拟模式")
    print("=" * 60)

    from utils.simulation import simulate_random_games

    results = simulate_random_games(games=games, max_moves=max_moves, seed=seed)
    if save_plot and results['scores']:
        from utils.visualization import plot_simulation_results

        create_directories()
        plot_simulation_results(results, show_plot=SimulationConfig.SHOW_PLOT)
    return results


def replay_mode(replay_file):
    """回放模式"""
    print("=" * 60)
    print("2048对局回放模式")
    print("=" * 60)

    from utils.game_log import ReplayMismatchError, load_game_log, replay_game

    try:
        data = load_game_log(replay_file)
    except (OSError, ValueError) as e:
        print(f"读取对局记录失败: {e}")
        return None

    print(f"种子: {data.get('seed')} | 分数: {data.get('final_score', 0)}")

    def show_step(step, session):
        print(f"\n第{step}步 方向: {session.state.direction or '-'} | 分数: {session.state.current_score}")
        print(grid_to_array(session.grid))

    try:
        session = replay_game(data, on_step=show_step)
    except ReplayMismatchError as e:
        print(f"回放出错: {e}")
        return None

    print("回放完成！")
    return session


def show_help():
    """显示帮助信息"""
    help_text = """
2048游戏项目

使用方法:
    python run.py <命令> [选项]

命令:
    play [--seed N] [--record] [--source keyboard|text]
                        开始游戏（有窗口时使用键盘，否则使用文本命令）
    simulate [--games N] [--max-moves N] [--seed N] [--no-plot]
                        随机方向模拟多局并统计
    replay FILE         回放对局记录
    help                显示此帮助信息

示例:
    python run.py play                            # 继续上次的游戏
    python run.py play --seed 42 --record         # 记录一局新游戏
    python run.py simulate --games 500            # 模拟500局
    python run.py replay 2048_seed42_xxx.json     # 回放

配置:
    所有配置参数都在 config.py 文件中定义，可以修改该文件来调整参数。

输出目录:
    - 2048_save/: 游戏存档
    - 2048_logs/: 对局记录
    - plots/: 模拟结果图
    """
    print(help_text)


def main(argv=None):
    """主函数"""
    parser = argparse.ArgumentParser(description="2048游戏", add_help=False)
    parser.add_argument('command', nargs='?', default='help',
                        choices=['play', 'simulate', 'replay', 'help'],
                        help='要执行的命令')
    parser.add_argument('replay_file', nargs='?', default=None,
                        help='对局记录路径(用于replay命令)')
    parser.add_argument('--seed', type=int, default=None, help='随机种子')
    parser.add_argument('--record', action='store_true', help='记录对局')
    parser.add_argument('--source', choices=['keyboard', 'text'], default=None, help='方向输入源')
    parser.add_argument('--games', type=int, default=SimulationConfig.GAMES, help='模拟对局数量')
    parser.add_argument('--max-moves', type=int, default=SimulationConfig.MAX_MOVES, help='每局最多尝试次数')
    parser.add_argument('--no-plot', action='store_true', help='不保存模拟结果图')

    args = parser.parse_args(argv)

    if args.command == 'play':
        seed = args.seed if args.seed is not None else GameConfig.SEED
        play_mode(seed=seed, record=args.record, prefer=args.source)
    elif args.command == 'simulate':
        seed = args.seed if args.seed is not None else SimulationConfig.SEED
        simulate_mode(args.games, args.max_moves, seed, save_plot=not args.no_plot)
    elif args.command == 'replay':
        if args.replay_file:
            replay_mode(args.replay_file)
        else:
            print("请指定回放文件")
    elif args.command == 'help':
        show_help()
    else:
        print(f"未知命令: {args.command}")
        show_help()


if __name__ == '__main__':
    main()
