"""牌型检测器 - 识别一组牌的牌型并构建 PlayedHand"""

from typing import Iterable, List, Optional
from collections import Counter

from .card import Card, Rank
from .errors import InvalidShapeError
from .hand_type import HandType, PlayedHand


def detect_hand(cards: Iterable[Card]) -> Optional[PlayedHand]:
    """
    识别一组牌的牌型。
    返回 PlayedHand 或 None（非法牌型）。
    结果只取决于牌的集合，与传入顺序无关。
    """
    cards = sorted(cards)
    if not cards or len(set(cards)) != len(cards):
        return None

    n = len(cards)
    rank_counts = Counter(c.rank for c in cards)

    if n == 1:
        return _detect_single(cards)
    if n in (2, 3):
        return _detect_same_rank(cards, n, rank_counts)
    if n == 5:
        # 按检测优先级依次尝试
        # 同花顺 > 铁支 > 葫芦 > 同花 > 顺子
        return (
            _detect_straight_flush(cards)
            or _detect_four_of_a_kind(cards, rank_counts)
            or _detect_full_house(cards, rank_counts)
            or _detect_flush(cards)
            or _detect_straight(cards)
        )
    return None


def classify(cards: Iterable[Card]) -> PlayedHand:
    """同 detect_hand，但非法牌型抛出 InvalidShapeError"""
    cards = list(cards)
    hand = detect_hand(cards)
    if hand is None:
        raise InvalidShapeError(f"无法识别的牌型: {cards}")
    return hand


# ============================================================
#  辅助函数
# ============================================================

def _top_key(cards: List[Card]) -> tuple:
    """最大一张牌的 (点数, 花色)"""
    top = max(cards)
    return (int(top.rank), int(top.suit))


def _group_key(cards: List[Card], rank: Rank) -> tuple:
    """主牌组的 (点数, 组内最大花色)"""
    return (int(rank), max(int(c.suit) for c in cards if c.rank == rank))


def _is_flush(cards: List[Card]) -> bool:
    return len({c.suit for c in cards}) == 1


def _is_straight(cards: List[Card]) -> bool:
    """5张点数连续（3..2 线性排列，A-2-3 不算连）"""
    ranks = sorted(c.rank for c in cards)
    return all(ranks[i + 1] - ranks[i] == 1 for i in range(len(ranks) - 1))


# ============================================================
#  单张 / 对子 / 三条
# ============================================================

def _detect_single(cards: List[Card]) -> PlayedHand:
    return PlayedHand(HandType.SINGLE, tuple(cards), _top_key(cards))


def _detect_same_rank(cards: List[Card], n: int, rc: Counter) -> Optional[PlayedHand]:
    """对子、三条：所有牌点数相同"""
    if len(rc) != 1:
        return None
    hand_type = HandType.PAIR if n == 2 else HandType.TRIPLE
    return PlayedHand(hand_type, tuple(cards), _top_key(cards))


# ============================================================
#  五张牌型
# ============================================================

def _detect_straight_flush(cards: List[Card]) -> Optional[PlayedHand]:
    if _is_flush(cards) and _is_straight(cards):
        return PlayedHand(HandType.STRAIGHT_FLUSH, tuple(cards), _top_key(cards))
    return None


def _detect_four_of_a_kind(cards: List[Card], rc: Counter) -> Optional[PlayedHand]:
    """铁支：四张同点 + 一张单牌"""
    quads = [r for r, cnt in rc.items() if cnt == 4]
    if not quads:
        return None
    return PlayedHand(HandType.FOUR_OF_A_KIND, tuple(cards), _group_key(cards, quads[0]))


def _detect_full_house(cards: List[Card], rc: Counter) -> Optional[PlayedHand]:
    """葫芦：三张同点 + 一对"""
    if sorted(rc.values()) != [2, 3]:
        return None
    triple_rank = next(r for r, cnt in rc.items() if cnt == 3)
    return PlayedHand(HandType.FULL_HOUSE, tuple(cards), _group_key(cards, triple_rank))


def _detect_flush(cards: List[Card]) -> Optional[PlayedHand]:
    if _is_flush(cards):
        return PlayedHand(HandType.FLUSH, tuple(cards), _top_key(cards))
    return None


def _detect_straight(cards: List[Card]) -> Optional[PlayedHand]:
    if _is_straight(cards):
        return PlayedHand(HandType.STRAIGHT, tuple(cards), _top_key(cards))
    return None
