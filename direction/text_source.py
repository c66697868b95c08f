import sys

from direction.extractor import DirectionExtractor
from direction.source import DirectionSource


class TextDirectionSource(DirectionSource):
    """
    文本方向源（控制台输入或语音识别转写）

    识别结果分为部分结果和最终结果。同一句话内最多交出一个方向，
    收到最终结果后重新开始监听下一句话
    """
    def __init__(self, listener, extractor=None, stream=None):
        super().__init__(listener)
        self.extractor = extractor or DirectionExtractor()
        self.stream = stream
        self.start_map = True

    def init(self):
        if self.stream is None:
            self.stream = sys.stdin

    def start(self):
        super().start()
        self.on_ready()

    def on_ready(self):
        """开始新的一句话"""
        self.start_map = True

    def feed(self, text, is_final=True):
        """
        处理一条识别结果

        返回:
        本条结果是否交出了方向
        """
        delivered = False
        if self.start_map:
            delivered = self._deliver(self.extractor.extract_direction(text))
            if delivered:
                self.start_map = False
        if is_final:
            self.on_ready()
        return delivered

    def run(self, should_continue=None):
        """逐行读取输入流直到结束或stop()"""
        if self.stream is None:
            self.init()
        for line in self.stream:
            if not self.enabled:
                break
            self.feed(line.strip(), is_final=True)
            if should_continue is not None and not should_continue():
                break
