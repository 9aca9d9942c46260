"""牌与发牌单元测试"""

import random

import pytest
from bigtwo.engine.card import (
    Card, Rank, Suit, OPENING_CARD, SPADE_TWO, create_deck, shuffle_and_deal,
)


class TestCard:
    """牌的大小顺序"""

    def test_rank_then_suit(self):
        assert Card(Rank.THREE, Suit.DIAMOND) < Card(Rank.THREE, Suit.CLUB)
        assert Card(Rank.THREE, Suit.CLUB) < Card(Rank.THREE, Suit.HEART)
        assert Card(Rank.THREE, Suit.HEART) < Card(Rank.THREE, Suit.SPADE)
        assert Card(Rank.THREE, Suit.SPADE) < Card(Rank.FOUR, Suit.DIAMOND)

    def test_extremes(self):
        deck = create_deck()
        assert min(deck) == OPENING_CARD
        assert max(deck) == SPADE_TWO

    def test_equality_and_hash(self):
        assert Card(Rank.ACE, Suit.HEART) == Card(Rank.ACE, Suit.HEART)
        assert len({Card(Rank.ACE, Suit.HEART), Card(Rank.ACE, Suit.HEART)}) == 1

    def test_display(self):
        assert Card(Rank.TEN, Suit.HEART).display == "♥10"
        assert repr(SPADE_TWO) == "♠2"


class TestDeal:
    """发牌不变量"""

    def test_deck_has_52_unique_cards(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    @pytest.mark.parametrize("seed", range(5))
    def test_hands_partition_the_deck(self, seed):
        hands = shuffle_and_deal(create_deck(), rng=random.Random(seed))
        assert len(hands) == 4
        assert all(len(h) == 13 for h in hands)
        union = set()
        for h in hands:
            assert union.isdisjoint(h)
            union.update(h)
        assert union == set(create_deck())

    def test_hands_are_sorted(self):
        for hand in shuffle_and_deal(create_deck(), rng=random.Random(1)):
            assert hand == sorted(hand)

    def test_same_seed_same_deal(self):
        a = shuffle_and_deal(create_deck(), rng=random.Random(42))
        b = shuffle_and_deal(create_deck(), rng=random.Random(42))
        assert a == b

    def test_unshuffled_deal_in_chunks(self):
        deck = create_deck()
        hands = shuffle_and_deal(deck, shuffle=False)
        assert hands[0] == sorted(deck[:13])
        assert all(c.suit == Suit.DIAMOND for c in hands[0])

    def test_short_deck_fails_fast(self):
        with pytest.raises(ValueError):
            shuffle_and_deal(create_deck()[:51])

    def test_duplicate_cards_fail_fast(self):
        deck = create_deck()
        deck[1] = deck[0]
        with pytest.raises(ValueError):
            shuffle_and_deal(deck)
