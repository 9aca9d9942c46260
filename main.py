"""锄大地电脑对局 - 主入口"""

import argparse
import logging
import random

from bigtwo.config import load_config
from bigtwo.engine.rules import RuleSet, RuleVariant
from bigtwo.game.player import Difficulty
from bigtwo.game.turn_engine import TurnEngine
from bigtwo.ui.renderer import TerminalRenderer


def run_one_game(engine: TurnEngine, renderer: TerminalRenderer) -> None:
    """运行一局完整对局"""
    renderer.print_header("🀄 锄大地对局开始")
    state = engine.run_game()
    renderer.show_result(state)


def main():
    """命令行入口"""
    config = load_config()

    parser = argparse.ArgumentParser(description="锄大地电脑对局")
    parser.add_argument("--rounds", type=int, default=1, help="对局数 (默认1)")
    parser.add_argument("--variant", choices=["southern", "northern"],
                        default=config.variant.value.lower(), help="规则类型 (默认南方)")
    parser.add_argument("--difficulty", choices=["simple", "advanced"],
                        default=config.difficulty.value.lower(), help="电脑难度 (默认进阶)")
    parser.add_argument("--delay", type=float, default=0.8, help="出牌延迟秒数 (默认0.8)")
    parser.add_argument("--fast", action="store_true", help="快速模式 (无延迟)")
    parser.add_argument("--seed", type=int, default=None, help="随机种子 (复现牌局)")
    parser.add_argument("--log-level", default="WARNING", help="日志级别 (默认WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config.variant = RuleVariant(args.variant.upper())
    config.difficulty = Difficulty(args.difficulty.upper())
    # 命令行只驱动全电脑对局
    config.human_seats = []

    renderer = TerminalRenderer(delay=0.0 if args.fast else args.delay)
    engine = TurnEngine(
        seats=config.seat_configs(),
        rules=RuleSet(config.variant),
        rng=random.Random(args.seed),
    )
    engine.on_event(renderer.make_event_callback(engine.players, config.variant))

    for i in range(args.rounds):
        if args.rounds > 1:
            print(f"\n{'=' * 60}")
            print(f"  第 {i + 1}/{args.rounds} 局")
            print(f"{'=' * 60}")
        run_one_game(engine, renderer)


if __name__ == "__main__":
    main()
