"""
方向输入模块
包含语音文本方向提取和各类方向源
"""

from .extractor import DirectionExtractor
from .source import DirectionSource
from .text_source import TextDirectionSource
from .factory import get_direction_source

__all__ = ['DirectionExtractor', 'DirectionSource', 'TextDirectionSource', 'get_direction_source']
