"""回合引擎 - 持有一局锄大地的权威状态，驱动发牌、出牌循环与结算"""

import logging
import random
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from bigtwo.engine.card import Card, OPENING_CARD, SEAT_COUNT, create_deck, shuffle_and_deal
from bigtwo.engine.errors import (
    PlayError, NotYourTurnError, NotInHandError, MustOpenWithStartingCardError,
    IllegalPlayError, InvalidShapeError, GameFinishedError,
)
from bigtwo.engine.hand_detector import detect_hand
from bigtwo.engine.hand_type import PlayedHand
from bigtwo.engine.rules import RuleSet
from bigtwo.ai.simple_ai import SimpleAI
from bigtwo.ai.advanced_ai import AdvancedAI
from bigtwo.game.player import Player, SeatConfig, Difficulty
from bigtwo.game.game_state import GameState, GamePhase, GameEvent, EventType

logger = logging.getLogger(__name__)

# 连续过牌达到此数，一轮重开
PASSES_TO_REOPEN = SEAT_COUNT - 1

DEFAULT_SEATS = [SeatConfig(name=f"电脑{i + 1}") for i in range(SEAT_COUNT)]


class AIStrategy(Protocol):
    """AI 决策接口（策略模式）"""

    def decide_play(self, player: Player, state: GameState) -> Optional[List[Card]]:
        """决定出牌：返回要出的牌列表，None=不出(PASS)"""
        ...

    def select_play(
        self,
        hand: Sequence[Card],
        previous: Optional[PlayedHand],
        opponent_sizes: Sequence[int] = (),
    ) -> List[Card]:
        """决定出牌：空列表=不出(PASS)"""
        ...


def make_strategy(difficulty: Difficulty, rules: Optional[RuleSet] = None) -> AIStrategy:
    """按难度创建电脑策略"""
    if Difficulty(difficulty) == Difficulty.SIMPLE:
        return SimpleAI(rules)
    return AdvancedAI(rules)


class TurnEngine:
    """
    回合引擎：一局锄大地的唯一写入者。
    submit_play / submit_pass 是仅有的状态修改入口，非法指令在修改状态前抛出 PlayError。
    """

    def __init__(
        self,
        seats: Optional[Sequence[SeatConfig]] = None,
        rules: Optional[RuleSet] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rules = rules or RuleSet()
        self._rng = rng or random.Random()
        self._callbacks: List[Callable[[GameEvent], None]] = []
        self.players: List[Player] = []
        self._configure_seats(seats or DEFAULT_SEATS)

    def _configure_seats(self, seats: Sequence[SeatConfig]) -> None:
        """换一桌人：原地替换 players 列表的内容，累计积分清零"""
        if len(seats) != SEAT_COUNT:
            raise ValueError(f"需要 {SEAT_COUNT} 个座位，实际 {len(seats)} 个")
        self.seats = list(seats)
        self.players[:] = [Player.from_config(i, cfg) for i, cfg in enumerate(self.seats)]
        self.strategies: Dict[int, AIStrategy] = {
            p.id: make_strategy(p.difficulty, self.rules)
            for p in self.players if not p.is_human
        }
        self.state = GameState(players=self.players)

    def on_event(self, callback: Callable[[GameEvent], None]) -> None:
        """注册事件回调"""
        self._callbacks.append(callback)

    def _emit(self, event_type: EventType, seat: Optional[int] = None, data=None) -> None:
        """触发事件通知"""
        event = GameEvent(event_type, seat, data)
        self.state.events.append(event)
        for cb in self._callbacks:
            cb(event)

    # ============================================================
    #  只读视图
    # ============================================================

    @property
    def acting_seat(self) -> int:
        return self.state.current_player

    @property
    def previous_play(self) -> Optional[PlayedHand]:
        return self.state.last_play

    @property
    def finished(self) -> bool:
        return self.state.finished

    def hand_of(self, seat: int) -> List[Card]:
        return list(self.players[seat].hand)

    # ============================================================
    #  发牌
    # ============================================================

    def start_new_game(
        self,
        seats: Optional[Sequence[SeatConfig]] = None,
        deck: Optional[List[Card]] = None,
    ) -> None:
        """
        洗牌发牌，持方块3者先出。
        传入 deck 时不洗牌，按顺序每13张发给一家。
        传入 seats 表示换一桌人：players 列表对象不变，其中的 Player 重建，累计积分清零。
        牌堆不是52张不重复的牌时直接抛出 ValueError。
        """
        hands = shuffle_and_deal(
            deck if deck is not None else create_deck(),
            rng=self._rng,
            shuffle=deck is None,
        )
        if seats is not None:
            self._configure_seats(seats)

        for p in self.players:
            p.reset_for_new_game()
        self.state = GameState(players=self.players, phase=GamePhase.DEALING)

        for player, hand in zip(self.players, hands):
            player.add_cards(hand)

        s = self.state
        s.current_player = self.rules.opening_seat([p.hand for p in self.players])
        s.phase = GamePhase.AWAITING_PLAY
        logger.info("新对局开始（%s），座位 %d 持方块3先出", self.rules.variant.value, s.current_player)

        self._emit(EventType.GAME_STARTED, data=list(self.seats))
        self._emit(EventType.PLAYER_TURN_STARTED, s.current_player)

    # ============================================================
    #  出牌 / 过牌
    # ============================================================

    def submit_play(self, seat: int, cards: Iterable[Card]) -> PlayedHand:
        """处理出牌，返回被接受的 PlayedHand"""
        cards = list(cards)
        s = self.state
        self._check_turn(seat)
        player = self.players[seat]

        if not cards:
            self._reject(seat, IllegalPlayError("出牌不能为空，过牌请用 submit_pass"))
        if not player.has_cards(cards):
            self._reject(seat, NotInHandError(f"手牌中没有 {cards}"))
        if s.is_first_play and OPENING_CARD not in cards:
            self._reject(seat, MustOpenWithStartingCardError("第一手必须包含方块3"))

        hand = detect_hand(cards)
        if hand is None:
            self._reject(seat, InvalidShapeError(f"无法识别的牌型: {cards}"))
        if s.last_play is not None and not self.rules.can_beat(hand, s.last_play):
            self._reject(seat, IllegalPlayError(f"{hand} 压不过 {s.last_play}"))

        # 合法出牌
        s.phase = GamePhase.RESOLVING
        player.remove_cards(cards)
        player.play_count += 1

        s.last_play = hand
        s.last_player = seat
        s.pass_count = 0
        s.is_first_play = False
        s.play_history.append((seat, hand))
        logger.debug("座位 %d 出牌 %s，剩余 %d 张", seat, hand, player.hand_size)

        self._emit(EventType.CARDS_PLAYED, seat, hand)

        # 检查是否出完
        if player.hand_size == 0:
            self._finish_game(seat)
        else:
            self._advance(seat)
        return hand

    def submit_pass(self, seat: int) -> None:
        """处理过牌"""
        s = self.state
        self._check_turn(seat)
        if s.is_first_play:
            self._reject(seat, MustOpenWithStartingCardError("第一手不能过牌"))

        s.phase = GamePhase.RESOLVING
        s.pass_count += 1
        logger.debug("座位 %d 过牌（连续 %d 次）", seat, s.pass_count)
        self._emit(EventType.PLAYER_PASSED, seat)

        if s.pass_count >= PASSES_TO_REOPEN:
            s.last_play = None
            s.last_player = None
            s.pass_count = 0
            logger.debug("连续过牌 %d 次，一轮重开", PASSES_TO_REOPEN)
            self._emit(EventType.ROUND_REOPENED)

        self._advance(seat)

    def submit_choice(self, seat: int, cards: Optional[Sequence[Card]]) -> Optional[PlayedHand]:
        """
        提交 AI 的选择：有牌则出牌，否则过牌。
        选择被拒绝时强制过牌；第一手不能过牌，则只出方块3。
        """
        if cards:
            try:
                return self.submit_play(seat, cards)
            except PlayError as e:
                logger.warning("座位 %d 的选择 %s 被拒绝(%s)，强制过牌", seat, list(cards), e.reason)
        if self.state.is_first_play:
            return self.submit_play(seat, [OPENING_CARD])
        self.submit_pass(seat)
        return None

    def _check_turn(self, seat: int) -> None:
        s = self.state
        if s.phase == GamePhase.FINISHED:
            self._reject(seat, GameFinishedError("对局已结束"))
        if s.phase != GamePhase.AWAITING_PLAY:
            self._reject(seat, NotYourTurnError("对局尚未开始"))
        if seat != s.current_player:
            self._reject(seat, NotYourTurnError(f"当前轮到座位 {s.current_player}"))

    def reject_command(self, seat: int, error: PlayError) -> None:
        """拒绝在引擎之外被判定无效的指令（如驱动器未在等待该座位）"""
        self._reject(seat, error)

    def _reject(self, seat: int, error: PlayError) -> None:
        """发出 INVALID_PLAY 事件并抛出错误，状态不变"""
        logger.info("座位 %s 的指令被拒绝: %s (%s)", seat, error.reason, error)
        self._emit(EventType.INVALID_PLAY, seat, error.reason)
        raise error

    def _advance(self, seat: int) -> None:
        s = self.state
        s.current_player = (seat + 1) % SEAT_COUNT
        s.phase = GamePhase.AWAITING_PLAY
        self._emit(EventType.PLAYER_TURN_STARTED, s.current_player)

    # ============================================================
    #  电脑回合
    # ============================================================

    def play_computer_turn(self) -> Optional[PlayedHand]:
        """让当前电脑座位做出决策并提交"""
        seat = self.state.current_player
        strategy = self.strategies.get(seat)
        if strategy is None:
            raise RuntimeError(f"座位 {seat} 由真人控制")
        cards = strategy.decide_play(self.players[seat], self.state)
        return self.submit_choice(seat, cards)

    # ============================================================
    #  结算阶段
    # ============================================================

    def _finish_game(self, winner_id: int) -> None:
        """游戏结束，计算得分"""
        s = self.state
        s.phase = GamePhase.FINISHED
        s.winner = winner_id

        final_hands = [p.hand for p in self.players]
        s.base_penalties = self.rules.base_penalties(final_hands, winner_id)
        s.scores = self.rules.score(final_hands, winner_id)
        for p, delta in zip(self.players, s.scores):
            p.score += delta

        logger.info("座位 %d 出完手牌，得分 %s", winner_id, s.scores)
        self._emit(EventType.GAME_ENDED, winner_id, list(s.scores))

    # ============================================================
    #  完整游戏入口
    # ============================================================

    def run_game(self, deck: Optional[List[Card]] = None) -> GameState:
        """运行一局全电脑对局，直到有人出完"""
        self.start_new_game(deck=deck)
        while not self.finished:
            if self.players[self.acting_seat].is_human:
                raise RuntimeError("run_game 只能驱动全电脑对局，真人座位请使用 GameDriver")
            self.play_computer_turn()
        return self.state
