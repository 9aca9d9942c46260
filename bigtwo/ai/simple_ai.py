"""简单 AI - 只出单张和对子，能压就出最小的"""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from bigtwo.engine.card import Card, OPENING_CARD
from bigtwo.engine.hand_detector import detect_hand
from bigtwo.engine.hand_type import PlayedHand
from bigtwo.engine.rules import RuleSet
from bigtwo.ai.move_generator import generate_singles, generate_same_rank

if TYPE_CHECKING:
    from bigtwo.game.player import Player
    from bigtwo.game.game_state import GameState

logger = logging.getLogger(__name__)


class SimpleAI:
    """基于简单规则的 AI 策略"""

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or RuleSet()

    def decide_play(self, player: "Player", state: "GameState") -> Optional[List[Card]]:
        """出牌决策：返回要出的牌列表，None=不出(PASS)"""
        cards = self.select_play(player.hand, state.last_play, state.opponent_sizes(player.id))
        return cards or None

    def select_play(
        self,
        hand: Sequence[Card],
        previous: Optional[PlayedHand],
        opponent_sizes: Sequence[int] = (),
    ) -> List[Card]:
        """
        出牌决策（空列表 = 过牌）。
        候选只有单张和对子；上家出单张时才会用单张去压。
        """
        if not hand:
            return []

        candidates = [
            played
            for played in map(detect_hand, generate_singles(hand) + generate_same_rank(hand, 2))
            if played is not None
        ]

        # 持有方块3的首出必须带上方块3
        if previous is None and OPENING_CARD in hand:
            candidates = [p for p in candidates if OPENING_CARD in p.cards]

        if previous is not None:
            candidates = [p for p in candidates if self.rules.can_beat(p, previous)]

        if not candidates:
            logger.debug("SimpleAI: 压不过 %s，过牌", previous)
            return []

        best = min(candidates, key=lambda p: (p.key, p.size))
        return best.card_list()
