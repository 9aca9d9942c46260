"""WebSocket 服务 - 真人座位通过行消息出牌，引擎事件实时推送到各座位"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from bigtwo.config import GameConfig, load_config
from bigtwo.engine.errors import PlayError
from bigtwo.engine.rules import RuleSet
from bigtwo.game.driver import GameDriver
from bigtwo.game.game_state import EventType, GameEvent
from bigtwo.game.turn_engine import TurnEngine
from bigtwo.web.protocol import (
    MessageTag, cards_from_json, cards_to_json, decode_message,
    encode_message, event_to_message,
)

logger = logging.getLogger(__name__)


class Table:
    """一张牌桌：持有当前对局的驱动器和各座位连接"""

    def __init__(self, config: GameConfig):
        self.config = config
        self.connections: Dict[int, WebSocket] = {}
        self.driver: Optional[GameDriver] = None
        self._outbox: "asyncio.Queue[Tuple[Optional[int], str]]" = asyncio.Queue()
        self._tasks = set()

    @property
    def running(self) -> bool:
        return self.driver is not None and not self.driver.engine.finished

    def start_game(self) -> None:
        """开新一局，后台驱动到结束"""
        engine = TurnEngine(
            seats=self.config.seat_configs(),
            rules=RuleSet(self.config.variant),
        )
        engine.on_event(self._on_event)
        self.driver = GameDriver(engine, human_timeout=self.config.human_timeout)
        for coro in (self.driver.run(), self._pump()):
            task = asyncio.create_task(coro)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    # ============================================================
    #  事件推送
    # ============================================================

    def _on_event(self, event: GameEvent) -> None:
        """引擎回调是同步的，先放进发件队列"""
        line = event_to_message(event)
        if line is not None:
            self._outbox.put_nowait((None, line))

        engine = self.driver.engine
        if event.type == EventType.GAME_STARTED:
            for p in engine.players:
                if p.is_human:
                    self._outbox.put_nowait(
                        (p.id, encode_message(MessageTag.DEAL_CARDS, cards_to_json(p.hand)))
                    )
        elif event.type == EventType.CARDS_PLAYED and engine.players[event.seat].is_human:
            hand = engine.hand_of(event.seat)
            self._outbox.put_nowait(
                (event.seat, encode_message(MessageTag.UPDATE_HAND, cards_to_json(hand)))
            )

    async def _pump(self) -> None:
        """把发件队列中的消息发给单个座位或全部座位，对局结束后退出"""
        while True:
            seat, line = await self._outbox.get()
            if seat is None:
                targets = list(self.connections.items())
            else:
                targets = [(seat, self.connections[seat])] if seat in self.connections else []
            for target_seat, ws in targets:
                try:
                    await ws.send_text(line)
                except (WebSocketDisconnect, RuntimeError):
                    logger.info("座位 %d 连接已断开", target_seat)
                    self.disconnect(target_seat, ws)
            if line.startswith(MessageTag.GAME_ENDED.value):
                return

    def disconnect(self, seat: int, ws: WebSocket) -> None:
        """移除座位连接；该座位已重连时保留新连接"""
        if self.connections.get(seat) is ws:
            del self.connections[seat]

    # ============================================================
    #  客户端指令
    # ============================================================

    async def handle_line(self, seat: int, line: str) -> None:
        try:
            tag, payload = decode_message(line)
            if tag == MessageTag.START_GAME:
                if not self.running:
                    self.start_game()
            elif self.driver is None:
                raise ValueError("对局尚未开始")
            elif tag == MessageTag.PLAY_CARDS:
                self.driver.submit_play(seat, cards_from_json(payload))
            elif tag == MessageTag.PASS:
                self.driver.submit_pass(seat)
            else:
                raise ValueError(f"客户端不能发送 {tag.value}")
        except PlayError as e:
            # INVALID_PLAY 已随引擎事件广播
            logger.info("座位 %d 的指令被拒绝: %s", seat, e.reason)
        except ValueError as e:
            logger.info("座位 %d 的消息无法处理: %s", seat, e)
            ws = self.connections.get(seat)
            if ws is not None:
                await ws.send_text(
                    encode_message(MessageTag.INVALID_PLAY, {"seat": seat, "reason": "BAD_MESSAGE"})
                )


# ============================================================
#  FastAPI 应用
# ============================================================

app = FastAPI(title="锄大地")
table = Table(load_config())


@app.websocket("/ws/{seat}")
async def websocket_endpoint(ws: WebSocket, seat: int):
    """WebSocket 端点：一个连接对应一个座位"""
    await ws.accept()
    table.connections[seat] = ws
    try:
        while True:
            line = await ws.receive_text()
            await table.handle_line(seat, line)
    except (WebSocketDisconnect, RuntimeError):
        pass
    finally:
        table.disconnect(seat, ws)
