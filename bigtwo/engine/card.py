"""牌的定义 - 锄大地52张扑克牌的数据模型"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional
import random


class Rank(IntEnum):
    """点数枚举（数值越大牌越大，2 最大）"""
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    TWO = 15


class Suit(IntEnum):
    """花色枚举：方块 < 梅花 < 红心 < 黑桃"""
    DIAMOND = 1
    CLUB = 2
    HEART = 3
    SPADE = 4


# 点数显示映射
RANK_DISPLAY = {
    Rank.THREE: "3", Rank.FOUR: "4", Rank.FIVE: "5",
    Rank.SIX: "6", Rank.SEVEN: "7", Rank.EIGHT: "8",
    Rank.NINE: "9", Rank.TEN: "10", Rank.JACK: "J",
    Rank.QUEEN: "Q", Rank.KING: "K", Rank.ACE: "A",
    Rank.TWO: "2",
}

# 花色显示映射
SUIT_DISPLAY = {
    Suit.DIAMOND: "♦", Suit.CLUB: "♣", Suit.HEART: "♥", Suit.SPADE: "♠",
}

HAND_SIZE = 13
SEAT_COUNT = 4
DECK_SIZE = HAND_SIZE * SEAT_COUNT


@dataclass(frozen=True, order=True)
class Card:
    """一张扑克牌，先比点数再比花色"""
    rank: Rank
    suit: Suit

    @property
    def display(self) -> str:
        return f"{SUIT_DISPLAY[self.suit]}{RANK_DISPLAY[self.rank]}"

    def __repr__(self) -> str:
        return self.display


# 方块3：持有者必须打出全局第一手
OPENING_CARD = Card(Rank.THREE, Suit.DIAMOND)
# 黑桃2：计分时加倍
SPADE_TWO = Card(Rank.TWO, Suit.SPADE)


def create_deck() -> List[Card]:
    """创建一副52张标准扑克牌（无大小王）"""
    deck = [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]
    assert len(deck) == DECK_SIZE, f"牌数错误: {len(deck)}"
    return deck


def shuffle_and_deal(
    deck: List[Card],
    rng: Optional[random.Random] = None,
    shuffle: bool = True,
) -> List[List[Card]]:
    """
    洗牌并发牌：返回四家各13张的手牌（已排序）。
    牌堆必须恰好是52张互不相同的牌，否则直接抛出 ValueError。
    shuffle=False 时按给定顺序每13张切一份（用于测试固定牌局）。
    """
    if len(deck) != DECK_SIZE or len(set(deck)) != DECK_SIZE:
        raise ValueError(f"牌数不足或有重复，无法发牌: {len(deck)}张")

    shuffled = list(deck)
    if shuffle:
        (rng or random).shuffle(shuffled)

    return [
        sort_cards(shuffled[i * HAND_SIZE:(i + 1) * HAND_SIZE])
        for i in range(SEAT_COUNT)
    ]


def sort_cards(cards: List[Card]) -> List[Card]:
    """按点数、花色排序手牌（从小到大）"""
    return sorted(cards)
