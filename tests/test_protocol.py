"""消息协议测试 - 卡牌 JSON 与 TAG:payload 行消息"""

import json

import pytest
from bigtwo.engine.card import Card, Rank, Suit, OPENING_CARD, SPADE_TWO
from bigtwo.engine.hand_detector import detect_hand
from bigtwo.game.game_state import EventType, GameEvent
from bigtwo.game.player import SeatConfig
from bigtwo.web.protocol import (
    MessageTag, card_to_dict, card_from_dict, cards_to_json, cards_from_json,
    encode_message, decode_message, event_to_message,
)


class TestCardJson:

    def test_card_to_dict(self):
        assert card_to_dict(OPENING_CARD) == {"suit": "DIAMOND", "rank": 3}
        assert card_to_dict(SPADE_TWO) == {"suit": "SPADE", "rank": 15}

    def test_card_from_dict_accepts_lowercase_suit(self):
        assert card_from_dict({"suit": "heart", "rank": 14}) == Card(Rank.ACE, Suit.HEART)

    @pytest.mark.parametrize("data", [
        {"suit": "STAR", "rank": 3},
        {"suit": "CLUB", "rank": 2},
        {"suit": "CLUB"},
        {"rank": "x", "suit": "CLUB"},
        None,
    ])
    def test_bad_card_raises_value_error(self, data):
        with pytest.raises(ValueError):
            card_from_dict(data)

    def test_cards_json(self):
        cards = [OPENING_CARD, Card(Rank.TEN, Suit.CLUB)]
        assert json.loads(cards_to_json(cards)) == [
            {"suit": "DIAMOND", "rank": 3}, {"suit": "CLUB", "rank": 10},
        ]
        assert cards_from_json(cards_to_json(cards)) == cards

    def test_cards_json_must_be_array(self):
        with pytest.raises(ValueError):
            cards_from_json('{"suit": "CLUB", "rank": 3}')

    def test_cards_json_malformed(self):
        with pytest.raises(ValueError):
            cards_from_json("not json")


class TestLineMessages:

    def test_encode_string_payload(self):
        assert encode_message(MessageTag.TURN_CHANGED, "2") == "TURN_CHANGED:2"

    def test_encode_json_payload(self):
        line = encode_message(MessageTag.GAME_ENDED, {"winner": 1, "scores": [3, -1]})
        tag, payload = decode_message(line)
        assert tag == MessageTag.GAME_ENDED
        assert json.loads(payload) == {"winner": 1, "scores": [3, -1]}

    def test_decode_keeps_colons_in_payload(self):
        tag, payload = decode_message('PLAY_CARDS:[{"suit":"DIAMOND","rank":3}]\n')
        assert tag == MessageTag.PLAY_CARDS
        assert cards_from_json(payload) == [OPENING_CARD]

    def test_decode_empty_payload(self):
        assert decode_message("PASS:") == (MessageTag.PASS, "")

    @pytest.mark.parametrize("line", ["PASS", "HELLO:1", ""])
    def test_decode_rejects_bad_lines(self, line):
        with pytest.raises(ValueError):
            decode_message(line)


class TestEventMessages:

    def test_game_started(self):
        event = GameEvent(EventType.GAME_STARTED, data=[SeatConfig(name="A"), SeatConfig(name="B")])
        assert event_to_message(event) == 'GAME_STARTED:["A", "B"]'

    def test_turn_and_pass(self):
        assert event_to_message(GameEvent(EventType.PLAYER_TURN_STARTED, 3)) == "TURN_CHANGED:3"
        assert event_to_message(GameEvent(EventType.PLAYER_PASSED, 1)) == "PLAYER_PASSED:1"
        assert event_to_message(GameEvent(EventType.ROUND_REOPENED)) == "ROUND_REOPENED:"

    def test_cards_played(self):
        hand = detect_hand([OPENING_CARD])
        tag, payload = decode_message(event_to_message(GameEvent(EventType.CARDS_PLAYED, 0, hand)))
        assert tag == MessageTag.CARD_PLAYED
        assert json.loads(payload) == {
            "seat": 0, "type": "SINGLE", "cards": [{"suit": "DIAMOND", "rank": 3}],
        }

    def test_invalid_play(self):
        line = event_to_message(GameEvent(EventType.INVALID_PLAY, 2, "NOT_YOUR_TURN"))
        tag, payload = decode_message(line)
        assert tag == MessageTag.INVALID_PLAY
        assert json.loads(payload) == {"seat": 2, "reason": "NOT_YOUR_TURN"}
