"""配置测试 - 默认值与环境变量覆盖"""

import pytest
from bigtwo.config import GameConfig, load_config
from bigtwo.engine.rules import RuleVariant
from bigtwo.game.driver import HUMAN_TIMEOUT
from bigtwo.game.player import Difficulty, SeatKind


def test_defaults():
    config = load_config({})
    assert config.variant == RuleVariant.SOUTHERN
    assert config.human_timeout == HUMAN_TIMEOUT
    assert config.human_seats == []
    assert config.difficulty == Difficulty.ADVANCED


def test_env_overrides():
    config = load_config({
        "BIGTWO_VARIANT": "northern",
        "BIGTWO_HUMAN_TIMEOUT": "2.5",
        "BIGTWO_HUMAN_SEATS": "0, 2",
        "BIGTWO_DIFFICULTY": "simple",
    })
    assert config.variant == RuleVariant.NORTHERN
    assert config.human_timeout == 2.5
    assert config.human_seats == [0, 2]
    assert config.difficulty == Difficulty.SIMPLE


@pytest.mark.parametrize("env", [
    {"BIGTWO_VARIANT": "eastern"},
    {"BIGTWO_HUMAN_SEATS": "4"},
    {"BIGTWO_HUMAN_TIMEOUT": "soon"},
])
def test_bad_values_raise(env):
    with pytest.raises(ValueError):
        load_config(env)


def test_seat_configs():
    config = GameConfig(human_seats=[1], difficulty=Difficulty.SIMPLE)
    seats = config.seat_configs()
    assert len(seats) == 4
    assert [s.kind for s in seats] == [
        SeatKind.COMPUTER, SeatKind.HUMAN, SeatKind.COMPUTER, SeatKind.COMPUTER,
    ]
    assert seats[0].difficulty == Difficulty.SIMPLE
    assert seats[1].name == "玩家2"


def test_seat_configs_with_names():
    seats = GameConfig().seat_configs(names=["东", "南", "西", "北"])
    assert [s.name for s in seats] == ["东", "南", "西", "北"]
