import pygame
from pygame.locals import K_DOWN, K_ESCAPE, K_LEFT, K_RIGHT, K_UP, K_a, K_d, K_q, K_s, K_w, KEYDOWN, QUIT

from direction.source import DirectionSource
from game.model import Direction

# 按键映射
KEY_TO_DIRECTION = {
    K_UP: Direction.NORTH, K_w: Direction.NORTH,     # 上
    K_RIGHT: Direction.EAST, K_d: Direction.EAST,    # 右
    K_DOWN: Direction.SOUTH, K_s: Direction.SOUTH,   # 下
    K_LEFT: Direction.WEST, K_a: Direction.WEST,     # 左
}

QUIT_KEYS = (K_q, K_ESCAPE)


class KeyboardDirectionSource(DirectionSource):
    """方向键或WASD输入，需要已经打开的pygame窗口"""

    def __init__(self, listener):
        super().__init__(listener)
        self.quit_requested = False

    def init(self):
        pygame.init()

    def poll(self, events=None):
        """
        处理pygame事件

        返回:
        False表示用户请求退出
        """
        if events is None:
            events = pygame.event.get()
        for event in events:
            if event.type == QUIT:
                self.quit_requested = True
            elif event.type == KEYDOWN:
                if event.key in QUIT_KEYS:
                    self.quit_requested = True
                elif event.key in KEY_TO_DIRECTION:
                    self._deliver(KEY_TO_DIRECTION[event.key])
        return not self.quit_requested

    def destroy(self):
        super().destroy()
        pygame.quit()
