"""牌型定义 - 锄大地8种合法牌型"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Tuple

from .card import Card, Rank


class HandType(str, Enum):
    """牌型枚举"""
    SINGLE = "SINGLE"                   # 单张
    PAIR = "PAIR"                       # 对子
    TRIPLE = "TRIPLE"                   # 三条
    STRAIGHT = "STRAIGHT"               # 顺子
    FLUSH = "FLUSH"                     # 同花
    FULL_HOUSE = "FULL_HOUSE"           # 葫芦（三带二）
    FOUR_OF_A_KIND = "FOUR_OF_A_KIND"   # 铁支（四带一）
    STRAIGHT_FLUSH = "STRAIGHT_FLUSH"   # 同花顺


# 炸弹类牌型：AI 通常留作收尾
BOMB_LIKE_TYPES = frozenset({HandType.FOUR_OF_A_KIND, HandType.STRAIGHT_FLUSH})


@dataclass(frozen=True)
class PlayedHand:
    """一手出牌的结构化表示"""
    type: HandType
    cards: Tuple[Card, ...]
    key: Tuple[int, int]   # (主牌点数, 花色)，同牌型比较大小用

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def main_rank(self) -> Rank:
        return Rank(self.key[0])

    @property
    def is_bomb_like(self) -> bool:
        return self.type in BOMB_LIKE_TYPES

    def card_list(self) -> List[Card]:
        return list(self.cards)

    def __repr__(self) -> str:
        cards_str = " ".join(c.display for c in self.cards)
        return f"[{self.type.value}] {cards_str}"
