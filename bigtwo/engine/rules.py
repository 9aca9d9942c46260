"""规则集 - 南北方规则下的牌型大小、跟牌判定、首家与计分"""

from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .card import Card, OPENING_CARD, SPADE_TWO, HAND_SIZE
from .hand_type import HandType, PlayedHand
from .hand_detector import detect_hand


class RuleVariant(str, Enum):
    """规则类型"""
    SOUTHERN = "SOUTHERN"   # 南方规则：葫芦 > 同花
    NORTHERN = "NORTHERN"   # 北方规则：同花 > 葫芦


# 单张/对子/三条只与同牌型比较，统一记为 0
_SMALL_TYPES = (HandType.SINGLE, HandType.PAIR, HandType.TRIPLE)

SOUTHERN_ORDER: Dict[HandType, int] = {
    HandType.SINGLE: 0,
    HandType.PAIR: 0,
    HandType.TRIPLE: 0,
    HandType.STRAIGHT: 1,
    HandType.FLUSH: 2,
    HandType.FULL_HOUSE: 3,
    HandType.FOUR_OF_A_KIND: 4,
    HandType.STRAIGHT_FLUSH: 5,
}

NORTHERN_ORDER: Dict[HandType, int] = {
    **SOUTHERN_ORDER,
    HandType.FULL_HOUSE: 2,
    HandType.FLUSH: 3,
}

_ORDERS = {
    RuleVariant.SOUTHERN: SOUTHERN_ORDER,
    RuleVariant.NORTHERN: NORTHERN_ORDER,
}


def category_rank(shape: HandType, variant: RuleVariant = RuleVariant.SOUTHERN) -> int:
    """牌型在指定规则下的等级"""
    return _ORDERS[variant][shape]


def category_order(
    shape_a: HandType,
    shape_b: HandType,
    variant: RuleVariant = RuleVariant.SOUTHERN,
) -> int:
    """
    比较两种牌型的大小：返回 -1 / 0 / 1。
    单张、对子、三条之间不能互相比较，跨张数比较抛出 ValueError。
    """
    if shape_a != shape_b and (shape_a in _SMALL_TYPES or shape_b in _SMALL_TYPES):
        raise ValueError(f"不同张数的牌型无法比较: {shape_a.value} / {shape_b.value}")
    a = category_rank(shape_a, variant)
    b = category_rank(shape_b, variant)
    return (a > b) - (a < b)


def can_beat(
    current: PlayedHand,
    previous: PlayedHand,
    variant: RuleVariant = RuleVariant.SOUTHERN,
) -> bool:
    """
    判断 current 能否压过 previous。
    规则：
    1. 张数必须相同
    2. 牌型等级不低于上家
    3. 牌型相同时，主牌 (点数, 花色) 必须更大
    """
    if current.size != previous.size:
        return False
    order = category_order(current.type, previous.type, variant)
    if order != 0:
        return order > 0
    return current.key > previous.key


class RuleSet:
    """绑定一种规则类型的规则集，对局创建后不可更改"""

    def __init__(self, variant: RuleVariant = RuleVariant.SOUTHERN):
        self._variant = RuleVariant(variant)

    @property
    def variant(self) -> RuleVariant:
        return self._variant

    def __repr__(self) -> str:
        return f"RuleSet({self._variant.value})"

    # ============================================================
    #  牌型比较
    # ============================================================

    def category_order(self, shape_a: HandType, shape_b: HandType) -> int:
        return category_order(shape_a, shape_b, self._variant)

    def can_beat(self, current: PlayedHand, previous: PlayedHand) -> bool:
        return can_beat(current, previous, self._variant)

    def is_legal_follow(
        self, cards: Iterable[Card], previous: Optional[PlayedHand]
    ) -> bool:
        """
        跟牌是否合法。
        previous 为 None（首出或一轮重开）时只要是合法牌型即可。
        """
        hand = detect_hand(cards)
        if hand is None:
            return False
        if previous is None:
            return True
        return self.can_beat(hand, previous)

    # ============================================================
    #  首家
    # ============================================================

    @staticmethod
    def opening_seat(hands: Sequence[Iterable[Card]]) -> int:
        """持有方块3的座位号"""
        for seat, hand in enumerate(hands):
            if OPENING_CARD in hand:
                return seat
        raise ValueError("没有玩家持有方块3")

    # ============================================================
    #  计分
    # ============================================================

    def base_penalty(self, cards: Sequence[Card]) -> int:
        """
        单家基础牌分：
        n<8 → n；8≤n<10 → 2n；10≤n<13 → 3n；n=13 → 4n。
        剩 8 张及以上且持有黑桃2时加倍。
        北方规则下一张未出（恰好13张）再乘 4。
        """
        n = len(cards)
        if n < 8:
            points = n
        elif n < 10:
            points = 2 * n
        elif n < HAND_SIZE:
            points = 3 * n
        else:
            points = 4 * n

        if n >= 8 and SPADE_TWO in cards:
            points *= 2

        if self._variant == RuleVariant.NORTHERN and n == HAND_SIZE:
            points *= 4

        return points

    def base_penalties(self, final_hands: Sequence[Sequence[Card]], winner_seat: int) -> List[int]:
        return [
            0 if seat == winner_seat else self.base_penalty(hand)
            for seat, hand in enumerate(final_hands)
        ]

    def score(self, final_hands: Sequence[Sequence[Card]], winner_seat: int) -> List[int]:
        """
        结算：每家得分 = 其他各家基础牌分之和 - 3 × 自己的基础牌分。
        赢家的基础牌分记为 0。
        """
        penalties = self.base_penalties(final_hands, winner_seat)
        total = sum(penalties)
        return [(total - own) - 3 * own for own in penalties]
