"""
2048语音/滑动游戏配置文件
包含所有可调参数的默认值
"""


class GameConfig:
    """游戏规则配置"""

    # 棋盘尺寸（固定4x4）
    GRID_SIZE = 4

    # 新游戏开始时生成的瓦片数量
    NUM_INITIAL_TILES = 2

    # 生成4的概率（其余为2）
    SPAWN_FOUR_PROBABILITY = 0.1

    # 随机种子（None表示不固定）
    SEED = None


class SimulationConfig:
    """随机对局模拟配置"""

    GAMES = 200
    MAX_MOVES = 5000
    SEED = 42
    SAVE_PLOT = True
    SHOW_PLOT = False


class DisplayConfig:
    """pygame窗口配置"""

    WINDOW_TITLE = "2048"
    CELL_SIZE = 100
    CELL_MARGIN = 12
    HEADER_HEIGHT = 80
    FPS = 60

    BACKGROUND_COLOR = (187, 173, 160)
    EMPTY_COLOR = (205, 193, 180)
    TEXT_DARK = (119, 110, 101)
    TEXT_LIGHT = (249, 246, 242)

    # 瓦片颜色，超出范围时使用最后一种
    TILE_COLORS = {
        2: (238, 228, 218),
        4: (237, 224, 200),
        8: (242, 177, 121),
        16: (245, 149, 99),
        32: (246, 124, 95),
        64: (246, 94, 59),
        128: (237, 207, 114),
        256: (237, 204, 97),
        512: (237, 200, 80),
        1024: (237, 197, 63),
        2048: (237, 194, 46),
    }
    SUPER_TILE_COLOR = (60, 58, 50)


class PathConfig:
    """路径配置"""

    # 存档文件路径
    SAVE_FILE = "2048_save/state.json"

    # 对局记录保存路径
    LOG_DIR = "2048_logs"

    # 图表保存路径
    PLOT_DIR = "plots"
