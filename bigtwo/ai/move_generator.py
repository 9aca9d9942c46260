"""候选出牌生成 - 只按同点、连点、同花结构枚举，避免 2^13 子集爆炸"""

from itertools import combinations, product
from typing import Dict, List, Sequence

from bigtwo.engine.card import Card, Rank, Suit
from bigtwo.engine.hand_detector import detect_hand
from bigtwo.engine.hand_type import PlayedHand


def _by_rank(hand: Sequence[Card]) -> Dict[Rank, List[Card]]:
    groups: Dict[Rank, List[Card]] = {}
    for c in sorted(hand):
        groups.setdefault(c.rank, []).append(c)
    return groups


def _by_suit(hand: Sequence[Card]) -> Dict[Suit, List[Card]]:
    groups: Dict[Suit, List[Card]] = {}
    for c in sorted(hand):
        groups.setdefault(c.suit, []).append(c)
    return groups


def generate_singles(hand: Sequence[Card]) -> List[List[Card]]:
    return [[c] for c in sorted(hand)]


def generate_same_rank(hand: Sequence[Card], count: int) -> List[List[Card]]:
    """同点数的 count 张组合（对子 / 三条）"""
    plays = []
    for group in _by_rank(hand).values():
        plays.extend(list(combo) for combo in combinations(group, count))
    return plays


def generate_straights(hand: Sequence[Card]) -> List[List[Card]]:
    """每个5连点窗口内，各点数任选一张"""
    groups = _by_rank(hand)
    plays = []
    for low in range(Rank.THREE, Rank.TWO - 3):
        window = [Rank(r) for r in range(low, low + 5)]
        if all(r in groups for r in window):
            plays.extend(list(combo) for combo in product(*(groups[r] for r in window)))
    return plays


def generate_flushes(hand: Sequence[Card]) -> List[List[Card]]:
    """同花色任选5张（同花顺也在其中）"""
    plays = []
    for group in _by_suit(hand).values():
        if len(group) >= 5:
            plays.extend(list(combo) for combo in combinations(group, 5))
    return plays


def generate_full_houses(hand: Sequence[Card]) -> List[List[Card]]:
    """三条 + 另一点数的对子"""
    triples = generate_same_rank(hand, 3)
    pairs = generate_same_rank(hand, 2)
    return [
        three + pair
        for three in triples
        for pair in pairs
        if pair[0].rank != three[0].rank
    ]


def generate_four_of_a_kinds(hand: Sequence[Card]) -> List[List[Card]]:
    """四张同点 + 任一张单牌"""
    plays = []
    for four in generate_same_rank(hand, 4):
        for kicker in sorted(hand):
            if kicker.rank != four[0].rank:
                plays.append(four + [kicker])
    return plays


def generate_candidates(hand: Sequence[Card]) -> List[PlayedHand]:
    """
    枚举手牌中所有合法牌型，经 detect_hand 过滤并去重。
    结果顺序固定：按生成顺序（单张、对子、三条、顺子、同花、葫芦、铁支）。
    """
    raw = (
        generate_singles(hand)
        + generate_same_rank(hand, 2)
        + generate_same_rank(hand, 3)
        + generate_straights(hand)
        + generate_flushes(hand)
        + generate_full_houses(hand)
        + generate_four_of_a_kinds(hand)
    )

    seen = set()
    candidates: List[PlayedHand] = []
    for cards in raw:
        marker = frozenset(cards)
        if marker in seen:
            continue
        seen.add(marker)
        played = detect_hand(cards)
        if played is not None:
            candidates.append(played)
    return candidates
