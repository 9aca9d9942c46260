"""消息协议 - 卡牌 JSON 序列化与 "TAG:payload" 行消息"""

import json
from enum import Enum
from typing import Any, List, Optional, Tuple

from bigtwo.engine.card import Card, Rank, Suit
from bigtwo.game.game_state import EventType, GameEvent


class MessageTag(str, Enum):
    """行消息标签"""
    PLAY_CARDS = "PLAY_CARDS"           # 客户端 → 服务端：出牌
    PASS = "PASS"                       # 客户端 → 服务端：过牌
    START_GAME = "START_GAME"           # 客户端 → 服务端：开局
    DEAL_CARDS = "DEAL_CARDS"           # 服务端 → 单个座位：手牌
    UPDATE_HAND = "UPDATE_HAND"         # 服务端 → 单个座位：出牌后的手牌
    GAME_STARTED = "GAME_STARTED"
    TURN_CHANGED = "TURN_CHANGED"
    CARD_PLAYED = "CARD_PLAYED"
    PLAYER_PASSED = "PLAYER_PASSED"
    ROUND_REOPENED = "ROUND_REOPENED"
    INVALID_PLAY = "INVALID_PLAY"
    GAME_ENDED = "GAME_ENDED"


# ============================================================
#  卡牌序列化
# ============================================================

def card_to_dict(c: Card) -> dict:
    """将 Card 序列化为 {"suit": "DIAMOND", "rank": 3}"""
    return {"suit": c.suit.name, "rank": int(c.rank)}


def card_from_dict(data: dict) -> Card:
    """反序列化，非法数据抛出 ValueError"""
    try:
        return Card(rank=Rank(int(data["rank"])), suit=Suit[str(data["suit"]).upper()])
    except (KeyError, TypeError) as e:
        raise ValueError(f"无法解析卡牌: {data}") from e


def cards_to_json(cards: List[Card]) -> str:
    return json.dumps([card_to_dict(c) for c in cards])


def cards_from_json(text: str) -> List[Card]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("卡牌列表必须是 JSON 数组")
    return [card_from_dict(item) for item in data]


# ============================================================
#  行消息
# ============================================================

def encode_message(tag: MessageTag, payload: Any = "") -> str:
    """编码为 TAG:payload；非字符串的 payload 转成 JSON"""
    if not isinstance(payload, str):
        payload = json.dumps(payload, ensure_ascii=False)
    return f"{MessageTag(tag).value}:{payload}"


def decode_message(line: str) -> Tuple[MessageTag, str]:
    """解析 TAG:payload，未知标签抛出 ValueError"""
    tag, sep, payload = line.strip().partition(":")
    if not sep:
        raise ValueError(f"消息缺少标签: {line!r}")
    return MessageTag(tag), payload


def event_to_message(event: GameEvent) -> Optional[str]:
    """引擎事件 → 广播用的行消息"""
    t = event.type
    if t == EventType.GAME_STARTED:
        return encode_message(MessageTag.GAME_STARTED, [seat.name for seat in event.data])
    if t == EventType.PLAYER_TURN_STARTED:
        return encode_message(MessageTag.TURN_CHANGED, str(event.seat))
    if t == EventType.CARDS_PLAYED:
        return encode_message(
            MessageTag.CARD_PLAYED,
            {
                "seat": event.seat,
                "type": event.data.type.value,
                "cards": [card_to_dict(c) for c in event.data.cards],
            },
        )
    if t == EventType.PLAYER_PASSED:
        return encode_message(MessageTag.PLAYER_PASSED, str(event.seat))
    if t == EventType.ROUND_REOPENED:
        return encode_message(MessageTag.ROUND_REOPENED)
    if t == EventType.INVALID_PLAY:
        return encode_message(MessageTag.INVALID_PLAY, {"seat": event.seat, "reason": event.data})
    if t == EventType.GAME_ENDED:
        return encode_message(MessageTag.GAME_ENDED, {"winner": event.seat, "scores": event.data})
    return None
