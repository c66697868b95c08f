import os
import time
import numpy as np
import matplotlib.pyplot as plt

from config import PathConfig


def plot_simulation_results(results, show_plot=False, plot_dir=PathConfig.PLOT_DIR):
    """
    绘制模拟结果
    """
    scores = results['scores']
    max_tiles = results['max_tiles']
    move_counts = results['move_counts']

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))

    # 计算移动平均
    window_size = min(20, len(scores))
    if window_size > 0:
        moving_avg = np.convolve(scores, np.ones(window_size)/window_size, mode='valid')
        moving_avg_x = range(window_size-1, len(scores))
    else:
        moving_avg = []
        moving_avg_x = []

    # 1. Score curve
    axes[0, 0].plot(scores, alpha=0.3, color='blue', label='Score')
    if len(moving_avg) > 0:
        axes[0, 0].plot(moving_avg_x, moving_avg, color='red', linewidth=2, label=f'Moving Average (window={window_size})')
    axes[0, 0].set_xlabel('Game')
    axes[0, 0].set_ylabel('Score')
    axes[0, 0].set_title('Random Play - Score per Game')
    axes[0, 0].legend()
    axes[0, 0].grid(True, alpha=0.3)

    # 2. Moves per game
    axes[0, 1].plot(move_counts, color='orange')
    axes[0, 1].set_xlabel('Game')
    axes[0, 1].set_ylabel('Accepted Moves')
    axes[0, 1].set_title('Moves per Game')
    axes[0, 1].grid(True, alpha=0.3)

    # 3. Score distribution
    axes[1, 0].hist(scores, bins=30, edgecolor='black', alpha=0.7)
    if scores:
        axes[1, 0].axvline(np.mean(scores), color='red', linestyle='--',
                           label=f'Mean: {np.mean(scores):.2f}')
        axes[1, 0].legend()
    axes[1, 0].set_xlabel('Score')
    axes[1, 0].set_ylabel('Frequency')
    axes[1, 0].set_title('Score Distribution')
    axes[1, 0].grid(True, alpha=0.3)

    # 4. Max tile distribution
    tiles, counts = np.unique(max_tiles, return_counts=True)
    axes[1, 1].bar([str(int(tile)) for tile in tiles], counts, color='green', alpha=0.7)
    axes[1, 1].set_xlabel('Max Tile')
    axes[1, 1].set_ylabel('Games')
    axes[1, 1].set_title(f'Max Tile Reached (spawned 4 ratio: {results.get("four_ratio", 0):.3f})')
    axes[1, 1].grid(True, alpha=0.3)

    plt.tight_layout()

    # 保存图像
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    os.makedirs(plot_dir, exist_ok=True)
    plot_path = os.path.join(plot_dir, f"random_play_{len(scores)}_games_{timestamp}.png")
    plt.savefig(plot_path, dpi=150, bbox_inches='tight')
    print(f"模拟结果图已保存到: {plot_path}")

    if show_plot:
        plt.show()
    else:
        plt.close(fig)

    return plot_path
