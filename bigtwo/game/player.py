"""玩家模型 - 锄大地四个座位的数据结构"""

from collections import Counter
from enum import Enum
from dataclasses import dataclass, field
from typing import Iterable, List

from bigtwo.engine.card import Card, sort_cards


class SeatKind(str, Enum):
    """座位由谁控制"""
    HUMAN = "HUMAN"         # 真人（等待外部指令）
    COMPUTER = "COMPUTER"   # 电脑


class Difficulty(str, Enum):
    """电脑难度"""
    SIMPLE = "SIMPLE"
    ADVANCED = "ADVANCED"


@dataclass(frozen=True)
class SeatConfig:
    """开局时提供的座位配置"""
    name: str
    kind: SeatKind = SeatKind.COMPUTER
    difficulty: Difficulty = Difficulty.ADVANCED

    @property
    def is_human(self) -> bool:
        return self.kind == SeatKind.HUMAN


@dataclass
class Player:
    """一个座位及其手牌"""
    id: int                          # 座位号 0..3
    name: str                        # 显示名
    kind: SeatKind = SeatKind.COMPUTER
    difficulty: Difficulty = Difficulty.ADVANCED
    hand: List[Card] = field(default_factory=list)
    play_count: int = 0              # 本局出牌次数
    score: int = 0                   # 累计积分

    @classmethod
    def from_config(cls, seat: int, config: SeatConfig) -> "Player":
        return cls(id=seat, name=config.name, kind=config.kind, difficulty=config.difficulty)

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def is_human(self) -> bool:
        return self.kind == SeatKind.HUMAN

    def sort_hand(self) -> None:
        """手牌排序"""
        self.hand = sort_cards(self.hand)

    def add_cards(self, cards: Iterable[Card]) -> None:
        """加入手牌（忽略已有的牌）"""
        for card in cards:
            if card not in self.hand:
                self.hand.append(card)
        self.sort_hand()

    def remove_cards(self, cards: Iterable[Card]) -> None:
        """从手牌中移除指定的牌"""
        for card in cards:
            self.hand.remove(card)

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def has_cards(self, cards: Iterable[Card]) -> bool:
        """检查手牌中是否包含指定的牌（重复的牌视为不包含）"""
        held = Counter(self.hand)
        return all(held[card] >= n for card, n in Counter(cards).items())

    def clear_hand(self) -> None:
        self.hand.clear()

    def reset_for_new_game(self) -> None:
        """新一局重置"""
        self.hand.clear()
        self.play_count = 0
