"""电脑 AI 单元测试 - 候选生成、简单/进阶策略与合法性"""

import random

import pytest
from bigtwo.engine.card import Card, Rank, Suit, OPENING_CARD, create_deck, shuffle_and_deal
from bigtwo.engine.hand_type import HandType
from bigtwo.engine.hand_detector import detect_hand
from bigtwo.engine.rules import RuleSet, RuleVariant
from bigtwo.ai.move_generator import generate_candidates
from bigtwo.ai.simple_ai import SimpleAI
from bigtwo.ai.advanced_ai import AdvancedAI
from bigtwo.game.player import Player
from bigtwo.game.game_state import GameState


def c(rank: Rank, suit: Suit = Suit.SPADE) -> Card:
    return Card(rank=rank, suit=suit)


def four_of(rank: Rank) -> list[Card]:
    return [Card(rank, s) for s in Suit]


# 8 张手牌：除了 5 的铁支，没有能压顺子的牌型
BOMB_HAND = four_of(Rank.FIVE) + [
    c(Rank.THREE, Suit.CLUB), c(Rank.FOUR, Suit.DIAMOND),
    c(Rank.SEVEN, Suit.HEART), c(Rank.NINE),
]
HIGH_STRAIGHT = detect_hand([
    c(Rank.TEN, Suit.DIAMOND), c(Rank.JACK, Suit.CLUB), c(Rank.QUEEN, Suit.HEART),
    c(Rank.KING), c(Rank.ACE, Suit.DIAMOND),
])


# ============================================================
#  候选出牌生成
# ============================================================

class TestGenerateCandidates:

    def test_no_duplicates(self):
        candidates = generate_candidates(four_of(Rank.FIVE))
        markers = [frozenset(p.cards) for p in candidates]
        assert len(markers) == len(set(markers))
        # 4 单张 + 6 对子 + 4 三条，四张没有单牌不成铁支
        assert len(candidates) == 14

    def test_straight_flush_not_counted_twice(self):
        hand = [c(r, Suit.DIAMOND) for r in (Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN, Rank.EIGHT)]
        candidates = generate_candidates(hand)
        types = [p.type for p in candidates]
        assert types.count(HandType.STRAIGHT_FLUSH) == 2
        assert types.count(HandType.FLUSH) == 4
        assert HandType.STRAIGHT not in types

    def test_every_candidate_is_valid_subset(self):
        hand = shuffle_and_deal(create_deck(), rng=random.Random(7))[0]
        for p in generate_candidates(hand):
            assert set(p.cards) <= set(hand)
            assert detect_hand(p.cards) == p


# ============================================================
#  简单 AI
# ============================================================

class TestSimpleAI:

    def setup_method(self):
        self.ai = SimpleAI()

    def test_opening_plays_three_of_diamonds(self):
        hand = [OPENING_CARD, c(Rank.THREE, Suit.CLUB), c(Rank.FIVE)]
        assert self.ai.select_play(hand, None) == [OPENING_CARD]

    def test_free_lead_smallest_single(self):
        hand = [c(Rank.SEVEN, Suit.HEART), c(Rank.FIVE), c(Rank.SEVEN, Suit.DIAMOND)]
        assert self.ai.select_play(hand, None) == [c(Rank.FIVE)]

    def test_beats_single_with_smallest(self):
        prev = detect_hand([c(Rank.SIX, Suit.HEART)])
        hand = [c(Rank.FIVE), c(Rank.KING, Suit.CLUB), c(Rank.SEVEN, Suit.DIAMOND)]
        assert self.ai.select_play(hand, prev) == [c(Rank.SEVEN, Suit.DIAMOND)]

    def test_beats_pair_with_pair(self):
        prev = detect_hand([c(Rank.SIX, Suit.HEART), c(Rank.SIX, Suit.CLUB)])
        hand = [c(Rank.FOUR), c(Rank.SEVEN, Suit.DIAMOND), c(Rank.SEVEN, Suit.HEART), c(Rank.NINE)]
        played = self.ai.select_play(hand, prev)
        assert sorted(played) == [c(Rank.SEVEN, Suit.DIAMOND), c(Rank.SEVEN, Suit.HEART)]

    def test_passes_when_nothing_beats(self):
        prev = detect_hand([c(Rank.TWO)])
        assert self.ai.select_play([c(Rank.ACE), c(Rank.KING)], prev) == []

    def test_never_answers_five_card_play(self):
        assert self.ai.select_play(four_of(Rank.TWO) + [c(Rank.THREE)], HIGH_STRAIGHT) == []

    def test_decide_play_returns_none_on_pass(self):
        players = [Player(id=i, name=f"P{i}") for i in range(4)]
        players[1].hand = [c(Rank.THREE, Suit.CLUB)]
        state = GameState(players=players, current_player=1, last_play=detect_hand([c(Rank.TWO)]))
        assert self.ai.decide_play(players[1], state) is None


# ============================================================
#  进阶 AI
# ============================================================

class TestAdvancedAI:

    def setup_method(self):
        self.ai = AdvancedAI()

    def test_opening_contains_three_of_diamonds(self):
        hand = [OPENING_CARD, c(Rank.FOUR, Suit.CLUB), c(Rank.FIVE, Suit.HEART),
                c(Rank.SIX), c(Rank.SEVEN, Suit.DIAMOND), c(Rank.KING)]
        played = self.ai.select_play(hand, None)
        assert OPENING_CARD in played
        assert detect_hand(played) is not None

    def test_plays_out_whole_hand(self):
        prev = detect_hand([c(Rank.FIVE, Suit.HEART), c(Rank.FIVE, Suit.CLUB)])
        hand = [c(Rank.NINE, Suit.DIAMOND), c(Rank.NINE, Suit.CLUB)]
        assert sorted(self.ai.select_play(hand, prev)) == hand

    def test_prefers_regular_over_bomb(self):
        prev = detect_hand([
            c(Rank.THREE, Suit.CLUB), c(Rank.FOUR, Suit.DIAMOND), c(Rank.FIVE, Suit.HEART),
            c(Rank.SIX), c(Rank.SEVEN, Suit.CLUB),
        ])
        hand = four_of(Rank.NINE) + [
            c(Rank.TEN, Suit.DIAMOND), c(Rank.JACK, Suit.CLUB), c(Rank.QUEEN, Suit.HEART),
            c(Rank.KING), c(Rank.THREE, Suit.HEART),
        ]
        played = detect_hand(self.ai.select_play(hand, prev))
        assert played.type == HandType.STRAIGHT

    def test_keeps_bomb_when_opponents_safe(self):
        assert self.ai.select_play(BOMB_HAND, HIGH_STRAIGHT, (10, 10, 10)) == []

    def test_uses_bomb_when_opponent_nearly_out(self):
        played = detect_hand(self.ai.select_play(BOMB_HAND, HIGH_STRAIGHT, (10, 2, 10)))
        assert played.type == HandType.FOUR_OF_A_KIND
        assert played.main_rank == Rank.FIVE

    def test_must_answer_bomb_with_bomb(self):
        prev = detect_hand(four_of(Rank.FOUR) + [c(Rank.SIX, Suit.HEART)])
        played = detect_hand(self.ai.select_play(BOMB_HAND, prev, (10, 10, 10)))
        assert played.type == HandType.FOUR_OF_A_KIND
        assert RuleSet().can_beat(played, prev)

    def test_passes_when_nothing_beats(self):
        prev = detect_hand([c(Rank.TWO)])
        assert self.ai.select_play([c(Rank.ACE), c(Rank.KING)], prev) == []


# ============================================================
#  合法性：任意手牌、任意上家，AI 的选择都是合法跟牌
# ============================================================

@pytest.mark.parametrize("ai_cls", [SimpleAI, AdvancedAI])
@pytest.mark.parametrize("variant", list(RuleVariant))
@pytest.mark.parametrize("seed", range(4))
def test_choices_are_legal(ai_cls, variant, seed):
    rng = random.Random(seed)
    rules = RuleSet(variant)
    ai = ai_cls(rules)
    hands = shuffle_and_deal(create_deck(), rng=rng)

    for seat, hand in enumerate(hands):
        others = hands[(seat + 1) % 4]
        previous_options = [None] + rng.sample(generate_candidates(others), 10)
        for previous in previous_options:
            played = ai.select_play(hand, previous, (13, 13, 13))
            if not played:
                continue
            assert set(played) <= set(hand)
            assert rules.is_legal_follow(played, previous)
            if previous is None and OPENING_CARD in hand:
                assert OPENING_CARD in played
