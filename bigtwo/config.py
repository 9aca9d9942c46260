"""对局配置 - 规则类型、真人超时与座位布局，可由环境变量覆盖"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from bigtwo.engine.card import SEAT_COUNT
from bigtwo.engine.rules import RuleVariant
from bigtwo.game.player import Difficulty, SeatConfig, SeatKind
from bigtwo.game.driver import HUMAN_TIMEOUT


@dataclass
class GameConfig:
    """一局对局的配置，开局后不再修改"""
    variant: RuleVariant = RuleVariant.SOUTHERN
    human_timeout: float = HUMAN_TIMEOUT
    human_seats: List[int] = field(default_factory=list)
    difficulty: Difficulty = Difficulty.ADVANCED

    def seat_configs(self, names: Optional[Sequence[str]] = None) -> List[SeatConfig]:
        """按配置生成四个座位"""
        seats = []
        for i in range(SEAT_COUNT):
            if i in self.human_seats:
                name = names[i] if names else f"玩家{i + 1}"
                seats.append(SeatConfig(name=name, kind=SeatKind.HUMAN))
            else:
                name = names[i] if names else f"电脑{i + 1}"
                seats.append(SeatConfig(name=name, difficulty=self.difficulty))
        return seats


def _parse_seats(text: str) -> List[int]:
    seats = [int(part) for part in text.split(",") if part.strip()]
    for seat in seats:
        if not 0 <= seat < SEAT_COUNT:
            raise ValueError(f"座位号超出范围: {seat}")
    return seats


def load_config(env=None) -> GameConfig:
    """
    从环境变量读取配置：
    BIGTWO_VARIANT=southern|northern
    BIGTWO_HUMAN_TIMEOUT=15
    BIGTWO_HUMAN_SEATS=0,2
    BIGTWO_DIFFICULTY=simple|advanced
    """
    env = os.environ if env is None else env
    config = GameConfig()
    if env.get("BIGTWO_VARIANT"):
        config.variant = RuleVariant(env["BIGTWO_VARIANT"].upper())
    if env.get("BIGTWO_HUMAN_TIMEOUT"):
        config.human_timeout = float(env["BIGTWO_HUMAN_TIMEOUT"])
    if env.get("BIGTWO_HUMAN_SEATS"):
        config.human_seats = _parse_seats(env["BIGTWO_HUMAN_SEATS"])
    if env.get("BIGTWO_DIFFICULTY"):
        config.difficulty = Difficulty(env["BIGTWO_DIFFICULTY"].upper())
    return config
