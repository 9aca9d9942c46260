"""终端渲染 - 把回合引擎的事件打印成锄大地牌局记录"""

import time
from typing import List, Sequence

from bigtwo.engine.card import Card, Suit
from bigtwo.engine.hand_type import HandType, PlayedHand
from bigtwo.engine.rules import RuleVariant
from bigtwo.game.player import Player
from bigtwo.game.game_state import GameState, GameEvent, EventType


# ANSI 颜色
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

RED_SUITS = (Suit.HEART, Suit.DIAMOND)

SHAPE_NAMES = {
    HandType.SINGLE: "单张",
    HandType.PAIR: "对子",
    HandType.TRIPLE: "三条",
    HandType.STRAIGHT: "顺子",
    HandType.FLUSH: "同花",
    HandType.FULL_HOUSE: "葫芦",
    HandType.FOUR_OF_A_KIND: "铁支",
    HandType.STRAIGHT_FLUSH: "同花顺",
}

VARIANT_NAMES = {
    RuleVariant.SOUTHERN: "南方规则",
    RuleVariant.NORTHERN: "北方规则",
}


def colored_card(c: Card) -> str:
    if c.suit in RED_SUITS:
        return f"{RED}{c.display}{RESET}"
    return c.display


def colored_cards(cards: Sequence[Card]) -> str:
    return " ".join(colored_card(c) for c in cards)


class TerminalRenderer:
    """终端渲染器，delay 为每手牌之后的停顿秒数（0 表示不停顿）"""

    def __init__(self, delay: float = 0.8):
        self.delay = delay

    def pause(self, seconds: float = 0) -> None:
        if self.delay:
            time.sleep(seconds or self.delay)

    def seat_label(self, player: Player) -> str:
        return f"{CYAN}{BOLD}[{player.id}] {player.name}{RESET}"

    def print_header(self, title: str) -> None:
        bar = "═" * 56
        print(f"\n{YELLOW}{BOLD}{bar}\n  {title}\n{bar}{RESET}\n")

    # ============================================================
    #  事件
    # ============================================================

    def show_deal(self, players: List[Player], variant: RuleVariant) -> None:
        self.print_header(f"🃏 发牌完成（{VARIANT_NAMES[variant]}）")
        for p in players:
            print(f"  {self.seat_label(p)}: {colored_cards(p.hand)}")
        print()

    def show_play(self, player: Player, hand: PlayedHand) -> None:
        shape = SHAPE_NAMES[hand.type]
        if hand.is_bomb_like:
            shape = f"{BOLD}{shape}{RESET}"
        left = f"{YELLOW}{player.hand_size}{RESET}" if player.hand_size <= 2 else str(player.hand_size)
        print(f"  {self.seat_label(player)} {shape}: {colored_cards(hand.cards)}  (余 {left} 张)")

    def show_pass(self, player: Player) -> None:
        print(f"  {self.seat_label(player)} {DIM}过{RESET}")

    def show_reopen(self) -> None:
        print(f"  {GREEN}连续三家过牌，重新开始一轮{RESET}")

    def show_invalid(self, players: List[Player], seat, reason: str) -> None:
        """seat 可能来自客户端，不在 0..3 时只打印座位号"""
        if isinstance(seat, int) and 0 <= seat < len(players):
            label = self.seat_label(players[seat])
        else:
            label = f"[{seat}]"
        print(f"  {label} {RED}无效出牌: {reason}{RESET}")

    def show_result(self, state: GameState) -> None:
        """结算表：剩余张数、基础牌分、本局得分、累计积分"""
        self.print_header("🏆 本局结束")
        print(f"  {self.seat_label(state.players[state.winner])} 出完手牌\n")
        print(f"  {'座位':<10}{'剩余':>6}{'牌分':>6}{'得分':>8}{'累计':>8}")
        for p, penalty, score in zip(state.players, state.base_penalties, state.scores):
            print(f"  {p.name:<10}{p.hand_size:>6}{penalty:>6}{score:>+8}{p.score:>8}")
        print()

    def make_event_callback(self, players: List[Player], variant: RuleVariant):
        """返回注册到 TurnEngine.on_event() 的回调"""

        def callback(event: GameEvent) -> None:
            if event.type == EventType.GAME_STARTED:
                self.show_deal(players, variant)
            elif event.type == EventType.CARDS_PLAYED:
                self.show_play(players[event.seat], event.data)
                self.pause()
            elif event.type == EventType.PLAYER_PASSED:
                self.show_pass(players[event.seat])
                self.pause(self.delay / 3)
            elif event.type == EventType.ROUND_REOPENED:
                self.show_reopen()
            elif event.type == EventType.INVALID_PLAY:
                self.show_invalid(players, event.seat, event.data)

        return callback
