"""出牌错误 - 所有错误均可恢复，抛出前不修改任何状态"""


class PlayError(Exception):
    """出牌/过牌被拒绝的基类"""

    reason = "PLAY_ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message or self.reason)


class NotYourTurnError(PlayError):
    """不是该座位的回合"""
    reason = "NOT_YOUR_TURN"


class NotInHandError(PlayError):
    """所出的牌不在手牌中"""
    reason = "NOT_IN_HAND"


class MustOpenWithStartingCardError(PlayError):
    """全局第一手必须包含方块3，且不能过牌"""
    reason = "MUST_OPEN_WITH_STARTING_CARD"


class IllegalPlayError(PlayError):
    """牌型、张数或大小不合规则"""
    reason = "ILLEGAL_PLAY"


class InvalidShapeError(IllegalPlayError):
    """无法识别的牌型"""
    reason = "INVALID_SHAPE"


class GameFinishedError(PlayError):
    """对局已结束"""
    reason = "GAME_FINISHED"
