"""游戏状态 - 一局锄大地的全部可变状态与事件"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from bigtwo.engine.hand_type import PlayedHand
from bigtwo.game.player import Player


class GamePhase(str, Enum):
    """游戏阶段"""
    WAITING = "WAITING"               # 等待开始
    DEALING = "DEALING"               # 发牌中
    AWAITING_PLAY = "AWAITING_PLAY"   # 等待当前座位出牌
    RESOLVING = "RESOLVING"           # 处理出牌/过牌
    FINISHED = "FINISHED"             # 已结束


class EventType(str, Enum):
    """对外发出的事件"""
    GAME_STARTED = "GAME_STARTED"
    PLAYER_TURN_STARTED = "PLAYER_TURN_STARTED"
    CARDS_PLAYED = "CARDS_PLAYED"
    PLAYER_PASSED = "PLAYER_PASSED"
    ROUND_REOPENED = "ROUND_REOPENED"
    INVALID_PLAY = "INVALID_PLAY"
    GAME_ENDED = "GAME_ENDED"


@dataclass
class GameEvent:
    """游戏事件记录"""
    type: EventType
    seat: Optional[int] = None     # 相关座位（一轮重开时为 None）
    data: Any = None               # PlayedHand / 错误原因 / 得分列表 / 座位列表


@dataclass
class GameState:
    """一局游戏的完整状态"""
    players: List[Player]
    phase: GamePhase = GamePhase.WAITING

    # 出牌相关
    current_player: int = 0                  # 当前出牌座位
    last_play: Optional[PlayedHand] = None   # 本轮需要压过的牌
    last_player: Optional[int] = None
    pass_count: int = 0                      # 连续过牌次数
    is_first_play: bool = True               # 全局第一手（必须含方块3）

    # 结算相关
    winner: Optional[int] = None
    base_penalties: List[int] = field(default_factory=list)
    scores: List[int] = field(default_factory=list)

    # 事件日志
    events: List[GameEvent] = field(default_factory=list)
    play_history: List[Tuple[int, PlayedHand]] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    @property
    def hand_sizes(self) -> List[int]:
        return [p.hand_size for p in self.players]

    def opponent_sizes(self, seat: int) -> List[int]:
        """除 seat 外其他座位的剩余张数"""
        return [p.hand_size for p in self.players if p.id != seat]
