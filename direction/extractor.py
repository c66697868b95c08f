from game.model import Direction

# 按顺序匹配，先匹配到的优先
DIRECTION_KEYWORDS = (
    ("north", Direction.NORTH),
    ("up", Direction.NORTH),
    ("south", Direction.SOUTH),
    ("down", Direction.SOUTH),
    ("east", Direction.EAST),
    ("right", Direction.EAST),
    ("west", Direction.WEST),
    ("left", Direction.WEST),
)


class DirectionExtractor:
    """从语音识别文本中提取方向（不区分大小写的子串匹配）"""

    def __init__(self, keywords=DIRECTION_KEYWORDS):
        self.keywords = keywords

    def extract_direction(self, text):
        if not text:
            return None
        lowered = text.lower()
        for keyword, direction in self.keywords:
            if keyword in lowered:
                return direction
        return None
