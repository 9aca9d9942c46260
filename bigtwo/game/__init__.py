# 游戏流程控制模块
from .player import Player, SeatConfig, SeatKind, Difficulty
from .game_state import GameState, GamePhase, GameEvent, EventType
from .turn_engine import TurnEngine, AIStrategy, make_strategy
from .driver import GameDriver, Command
