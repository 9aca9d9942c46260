"""进阶 AI - 枚举全部牌型后按启发式排序，炸弹类牌型尽量留作收尾"""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from bigtwo.engine.card import Card, OPENING_CARD
from bigtwo.engine.hand_type import PlayedHand
from bigtwo.engine.rules import RuleSet
from bigtwo.ai.move_generator import generate_candidates

if TYPE_CHECKING:
    from bigtwo.game.player import Player
    from bigtwo.game.game_state import GameState

logger = logging.getLogger(__name__)

# 手牌不多于此张数时，炸弹类牌型不再保留
SMALL_HAND = 5
# 对手剩余张数不多于此值时，允许用炸弹压制
OPPONENT_DANGER = 2


class AdvancedAI:
    """
    进阶 AI 策略。
    不做前瞻搜索也不猜测对手手牌，只在当前手牌的合法候选中挑选。
    """

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
        """出牌决策（空列表 = 过牌）"""
        if not hand:
            return []
        hand = sorted(hand)
        if previous is None:
            return self._opening_play(hand)
        return self._counter_play(hand, previous, opponent_sizes)

    # ============================================================
    #  首出 / 一轮重开后自由出牌
    # ============================================================

    def _opening_play(self, hand: List[Card]) -> List[Card]:
        """
        自由出牌：
        1. 持有方块3时只考虑包含方块3的牌型
        2. 普通牌型优先，炸弹类推后（手牌少或能直接出完时除外）
        3. 主牌小的优先，张数少的优先
        """
        candidates = generate_candidates(hand)

        if OPENING_CARD in hand:
            candidates = [p for p in candidates if OPENING_CARD in p.cards]
            if not candidates:
                logger.warning("AdvancedAI: 找不到包含方块3的牌型，兜底出单张方块3")
                return [OPENING_CARD]

        def priority(p: PlayedHand):
            held_back = p.is_bomb_like and not (
                len(hand) <= SMALL_HAND or len(hand) <= p.size + 1
            )
            return (held_back, p.key, p.size)

        best = min(candidates, key=priority)
        logger.debug("AdvancedAI: 自由出牌 %s", best)
        return best.card_list()

    # ============================================================
    #  跟牌
    # ============================================================

    def _counter_play(
        self,
        hand: List[Card],
        previous: PlayedHand,
        opponent_sizes: Sequence[int],
    ) -> List[Card]:
        """
        跟牌：
        1. 能一手出完直接出
        2. 否则出最小的普通牌型
        3. 只剩炸弹类可压时：上家是炸弹类则必须压；
           否则只在手牌少或对手快出完时使用
        """
        survivors = [
            p for p in generate_candidates(hand)
            if self.rules.can_beat(p, previous)
        ]
        if not survivors:
            logger.debug("AdvancedAI: 压不过 %s，过牌", previous)
            return []

        survivors.sort(key=lambda p: (p.key, p.size))

        winning = next((p for p in survivors if p.size == len(hand)), None)
        if winning is not None:
            logger.debug("AdvancedAI: 一手出完 %s", winning)
            return winning.card_list()

        regular = next((p for p in survivors if not p.is_bomb_like), None)
        if regular is not None:
            return regular.card_list()

        bomb = survivors[0]
        if previous.is_bomb_like:
            return bomb.card_list()

        min_opponent = min(opponent_sizes, default=None)
        if len(hand) <= SMALL_HAND or (
            min_opponent is not None and min_opponent <= OPPONENT_DANGER
        ):
            logger.debug("AdvancedAI: 使用炸弹类牌型 %s", bomb)
            return bomb.card_list()

        logger.debug("AdvancedAI: 保留炸弹类牌型，过牌")
        return []
