from direction import capability
from direction.extractor import DirectionExtractor
from direction.text_source import TextDirectionSource

KEYBOARD = "keyboard"
TEXT = "text"


def get_direction_source(listener, prefer=None, extractor=None, stream=None):
    """
    根据运行环境选择方向源

    参数:
        listener: 识别出方向时的回调
        prefer: "keyboard" 或 "text"，None表示自动检测
        extractor: 文本方向源使用的提取器
        stream: 文本方向源读取的输入流
    """
    kind = prefer
    if kind is None:
        kind = KEYBOARD if capability.is_display_available() else TEXT

    if kind == KEYBOARD:
        # pygame只在需要窗口时才导入
        from direction.keyboard_source import KeyboardDirectionSource
        return KeyboardDirectionSource(listener)
    if kind == TEXT:
        return TextDirectionSource(listener, extractor or DirectionExtractor(), stream)
    raise ValueError(f"unknown direction source: {kind!r}")
