"""Game module for Block Drop.

Exports the headless game core:
- TileType: Enum of the seven piece shapes, backed by the piece catalog
- Board: Fixed grid with placement validation and line clearing
- Clock: Cycle-based timing source driving piece descent
- GameRules: Scoring, speed and cooldown configuration
- BlockDropGame: Controller for spawn, fall, lock and scoring
"""

from .pieces import TileType
from .grid import Board, COL_COUNT, ROW_COUNT, VISIBLE_ROW_COUNT, HIDDEN_ROW_COUNT
from .clock import Clock, InvalidRateError
from .rules import GameRules
from .core import BlockDropGame, Command, GameState, GameView

__all__ = [
    "TileType",
    "Board",
    "COL_COUNT",
    "ROW_COUNT",
    "VISIBLE_ROW_COUNT",
    "HIDDEN_ROW_COUNT",
    "Clock",
    "InvalidRateError",
    "GameRules",
    "BlockDropGame",
    "Command",
    "GameState",
    "GameView",
]
