"""异步对局驱动 - 电脑座位直接决策，真人座位等待指令，超时由进阶 AI 代打"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from bigtwo.engine.card import Card
from bigtwo.engine.errors import PlayError, NotYourTurnError, GameFinishedError
from bigtwo.ai.advanced_ai import AdvancedAI
from bigtwo.game.game_state import GameState
from bigtwo.game.turn_engine import TurnEngine

logger = logging.getLogger(__name__)

# 真人出牌等待上限（秒），超时由进阶 AI 代打
HUMAN_TIMEOUT = 15.0


@dataclass
class Command:
    """外部指令：cards 为 None 表示过牌"""
    seat: int
    cards: Optional[List[Card]] = None


class GameDriver:
    """
    单线程驱动循环，是 TurnEngine 唯一的调用者。
    真人指令只在该座位等待出牌时入队，其余时刻立即以 NotYourTurnError 拒绝；
    入队的指令由驱动循环按顺序交给引擎校验，
    被拒绝的指令不会推进回合，在剩余时间内继续等待。
    """

    def __init__(
        self,
        engine: TurnEngine,
        human_timeout: float = HUMAN_TIMEOUT,
        fallback: Optional[AdvancedAI] = None,
    ):
        self.engine = engine
        self.human_timeout = human_timeout
        self.fallback = fallback or AdvancedAI(engine.rules)
        self._commands: "asyncio.Queue[Command]" = asyncio.Queue()
        # 正在等待指令的真人座位，只有这个座位的指令会入队
        self._waiting_seat: Optional[int] = None

    @property
    def waiting_seat(self) -> Optional[int]:
        return self._waiting_seat

    # ============================================================
    #  外部指令
    # ============================================================

    def submit_play(self, seat: int, cards: Iterable[Card]) -> None:
        """出牌指令入队；不是该座位等待出牌时立即抛出 PlayError"""
        self._check_waiting(seat)
        self._commands.put_nowait(Command(seat, list(cards)))

    def submit_pass(self, seat: int) -> None:
        self._check_waiting(seat)
        self._commands.put_nowait(Command(seat))

    def _check_waiting(self, seat: int) -> None:
        if self.engine.finished:
            self.engine.reject_command(seat, GameFinishedError("对局已结束"))
        if seat != self._waiting_seat:
            self.engine.reject_command(
                seat, NotYourTurnError(f"座位 {seat} 不在等待出牌")
            )

    # ============================================================
    #  驱动循环
    # ============================================================

    async def run(self, deck: Optional[List[Card]] = None) -> GameState:
        """开局并驱动到结束"""
        engine = self.engine
        engine.start_new_game(deck=deck)

        while not engine.finished:
            seat = engine.acting_seat
            if engine.players[seat].is_human:
                await self._human_turn(seat)
            else:
                engine.play_computer_turn()
                # 让出事件循环，便于推送事件
                await asyncio.sleep(0)

        return engine.state

    async def _human_turn(self, seat: int) -> None:
        """等待真人指令，超时则由进阶 AI 代打"""
        self._waiting_seat = seat
        try:
            played = await self._wait_for_command()
        finally:
            # 本回合结束后不再接受该座位的指令，残留的也一并丢弃
            self._waiting_seat = None
            self._drain()

        if not played:
            logger.warning("座位 %d 超过 %.1f 秒未出牌，由进阶 AI 代打", seat, self.human_timeout)
            self._auto_play(seat)

    async def _wait_for_command(self) -> bool:
        """在剩余时间内依次尝试队列中的指令，有一条被接受返回 True"""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.human_timeout

        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return False
            try:
                command = await asyncio.wait_for(self._commands.get(), timeout=remaining)
            except asyncio.TimeoutError:
                return False

            try:
                self._apply(command)
            except PlayError as e:
                logger.info("座位 %d 的指令无效(%s)，继续等待", command.seat, e.reason)
                continue
            return True

    def _drain(self) -> None:
        while not self._commands.empty():
            stale = self._commands.get_nowait()
            logger.info("丢弃座位 %d 已过期的指令", stale.seat)

    def _apply(self, command: Command) -> None:
        if command.cards is None:
            self.engine.submit_pass(command.seat)
        else:
            self.engine.submit_play(command.seat, command.cards)

    def _auto_play(self, seat: int) -> None:
        state = self.engine.state
        cards = self.fallback.select_play(
            self.engine.hand_of(seat), state.last_play, state.opponent_sizes(seat)
        )
        self.engine.submit_choice(seat, cards)
