import random
import sys

from config import DisplayConfig, GameConfig, PathConfig
from direction.factory import get_direction_source
from direction.text_source import TextDirectionSource
from game.game_2048 import grid_to_array
from game.geometry import GRID_SIZE
from game.session import GameSession
from utils.game_log import GameRecorder
from utils.storage import GameRepository


class InteractiveGame:
    """
    交互式2048

    参数:
        seed: 随机种子
        record: 是否记录对局（记录时总是开始新游戏，保证可以回放）
        prefer: "keyboard" / "text"，None表示自动检测
        save_file: 存档路径
        stream: 文本模式下的输入流
    """
    def __init__(self, seed=GameConfig.SEED, record=False, prefer=None,
                 save_file=PathConfig.SAVE_FILE, stream=None):
        if record and seed is None:
            # 回放需要固定种子
            seed = random.randrange(2 ** 31)
        self.seed = seed
        self.record = record
        self.session = GameSession(GameRepository(save_file), rng=random.Random(seed))
        self.recorder = GameRecorder(seed) if record else None
        if self.recorder is not None:
            self.recorder.attach(self.session)
        self.source = get_direction_source(self.on_direction, prefer=prefer, stream=stream)
        self.session.set_direction_source(self.source)

    def on_direction(self, direction):
        if self.session.state.is_game_over:
            return
        self.session.apply_move(direction)
        if self.session.state.is_game_over:
            print(f"\n游戏结束！最终分数: {self.session.state.current_score}")
            if self.recorder is not None:
                self.recorder.save_log()

    def play(self):
        """开始游戏"""
        print(f"2048游戏 - 种子: {self.seed}")
        if self.record:
            self.session.start_new_game()
        elif self.session.resume():
            print("已恢复上次的游戏")

        self.source.init()
        if isinstance(self.source, TextDirectionSource):
            self._play_console()
        else:
            self._play_window()
        self.source.destroy()

    def _play_console(self):
        print("控制: 输入 up/down/left/right（或 north/south/east/west），Ctrl-D退出")
        print("=" * 40)
        print_board(self.session)
        self.session.add_listener(lambda movements, state: print_board(self.session))
        self.session.enable_voice(True)
        self.source.run(should_continue=lambda: not self.session.state.is_game_over)

    def _play_window(self):
        import pygame

        print("控制: 方向键或WASD移动, ESC或者Q退出")
        print("=" * 40)
        size = GRID_SIZE * DisplayConfig.CELL_SIZE + (GRID_SIZE + 1) * DisplayConfig.CELL_MARGIN
        screen = pygame.display.set_mode((size, size + DisplayConfig.HEADER_HEIGHT))
        pygame.display.set_caption(DisplayConfig.WINDOW_TITLE)
        font = pygame.font.SysFont(None, 48)
        small_font = pygame.font.SysFont(None, 32)
        clock = pygame.time.Clock()

        self.session.enable_voice(True)
        while self.source.poll():
            draw_board(screen, font, small_font, self.session)
            pygame.display.flip()
            clock.tick(DisplayConfig.FPS)
        self.session.enable_voice(False)


def print_board(session):
    state = session.state
    print(f"\n分数: {state.current_score} | 最高分: {state.best_score} | 步数: {state.move_count}")
    for row in grid_to_array(session.grid):
        print(" ".join(f"{num if num else '.':>5}" for num in row))


def tile_color(num):
    return DisplayConfig.TILE_COLORS.get(num, DisplayConfig.SUPER_TILE_COLOR)


def draw_board(screen, font, small_font, session):
    import pygame

    cell, margin = DisplayConfig.CELL_SIZE, DisplayConfig.CELL_MARGIN
    screen.fill(DisplayConfig.BACKGROUND_COLOR)

    state = session.state
    header = f"Score {state.current_score}   Best {state.best_score}"
    if state.is_game_over:
        header += "   GAME OVER"
    screen.blit(small_font.render(header, True, DisplayConfig.TEXT_LIGHT), (margin, margin * 2))

    for row, values in enumerate(grid_to_array(session.grid)):
        for col, num in enumerate(values):
            x = margin + col * (cell + margin)
            y = DisplayConfig.HEADER_HEIGHT + margin + row * (cell + margin)
            color = tile_color(int(num)) if num else DisplayConfig.EMPTY_COLOR
            pygame.draw.rect(screen, color, (x, y, cell, cell), border_radius=6)
            if num:
                text_color = DisplayConfig.TEXT_DARK if num <= 4 else DisplayConfig.TEXT_LIGHT
                text = font.render(str(int(num)), True, text_color)
                screen.blit(text, text.get_rect(center=(x + cell // 2, y + cell // 2)))


if __name__ == "__main__":
    if len(sys.argv) > 1:
        try:
            seed = int(sys.argv[1])
        except ValueError:
            print("使用默认种子42")
            seed = 42
        InteractiveGame(seed=seed, record=True).play()
    else:
        InteractiveGame(seed=42, record=True).play()
