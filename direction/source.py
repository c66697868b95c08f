from abc import ABC, abstractmethod


class DirectionSource(ABC):
    """
    方向输入源接口
    具体实现（键盘、语音文本等）在启动时由factory选择，游戏只依赖这个接口

    参数:
        listener: 识别出方向时调用listener(direction)
    """
    def __init__(self, listener):
        self.listener = listener
        self.enabled = False

    @abstractmethod
    def init(self):
        """准备底层资源"""

    def start(self):
        self.enabled = True

    def stop(self):
        self.enabled = False

    def destroy(self):
        self.stop()

    def _deliver(self, direction):
        if self.enabled and direction is not None:
            self.listener(direction)
            return True
        return False
