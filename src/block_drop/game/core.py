from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Protocol

from . import pieces
from .clock import Clock
from .grid import Board
from .pieces import TileType
from .rules import GameRules


logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP_START = 4
    SOFT_DROP_STOP = 5
    PAUSE_TOGGLE = 6
    START = 7


class GameState(Enum):
    NEW_GAME = "new_game"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class BoardLike(Protocol):
    width: int
    height: int

    def is_valid_and_empty(self, kind: TileType, col: int, row: int, rotation: int) -> bool: ...

    def add_piece(self, kind: TileType, col: int, row: int, rotation: int) -> None: ...

    def check_lines(self) -> int: ...

    def clear(self) -> None: ...


class ClockLike(Protocol):
    def update(self) -> None: ...

    def has_elapsed_cycle(self) -> bool: ...

    def set_cycles_per_second(self, cycles_per_second: float) -> None: ...

    def set_paused(self, paused: bool) -> None: ...

    def reset(self) -> None: ...


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot of the controller handed to the renderer."""

    state: GameState
    score: int
    level: int
    game_speed: float
    piece_type: Optional[TileType]
    piece_col: int
    piece_row: int
    piece_rotation: int
    next_type: Optional[TileType]

    @property
    def is_paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def is_new_game(self) -> bool:
        return self.state is GameState.NEW_GAME

    @property
    def is_game_over(self) -> bool:
        return self.state is GameState.GAME_OVER


class BlockDropGame:
    """Spawn, fall, lock, clear and score loop for a single player.

    The board, clock and random source are collaborators passed in by the
    caller. A new instance waits in the new-game state with its clock paused
    until ``Command.START`` arrives.
    """

    def __init__(
        self,
        board: Optional[BoardLike] = None,
        clock: Optional[ClockLike] = None,
        rules: Optional[GameRules] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.rules = rules or GameRules()
        self.board: BoardLike = board if board is not None else Board()
        self.clock: ClockLike = clock if clock is not None else Clock(self.rules.initial_speed)
        self.rng = rng or random.Random(seed)

        self.score = 0
        self.level = self.rules.level_for_speed(self.rules.initial_speed)
        self.game_speed = self.rules.initial_speed
        self.drop_cooldown = 0
        self.soft_drop_held = False

        self.is_paused = False
        self.is_new_game = True
        self.is_game_over = False

        self.current_type: Optional[TileType] = None
        self.current_col = 0
        self.current_row = 0
        self.current_rotation = 0
        self.next_type: Optional[TileType] = None

        self.clock.set_paused(True)

    @property
    def state(self) -> GameState:
        if self.is_new_game:
            return GameState.NEW_GAME
        if self.is_game_over:
            return GameState.GAME_OVER
        if self.is_paused:
            return GameState.PAUSED
        return GameState.PLAYING

    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    def view(self) -> GameView:
        return GameView(
            state=self.state,
            score=self.score,
            level=self.level,
            game_speed=self.game_speed,
            piece_type=self.current_type,
            piece_col=self.current_col,
            piece_row=self.current_row,
            piece_rotation=self.current_rotation,
            next_type=self.next_type,
        )

    # Lifecycle

    def reset_game(self) -> None:
        self.level = 1
        self.score = 0
        self.game_speed = self.rules.initial_speed
        self.drop_cooldown = 0
        self.next_type = pieces.random_tile(self.rng)
        self.is_new_game = False
        self.is_game_over = False
        self.is_paused = False
        self.board.clear()
        self.clock.reset()
        self.clock.set_cycles_per_second(self.game_speed)
        self.clock.set_paused(False)
        logger.info("new game started")
        self.spawn_piece()

    def spawn_piece(self) -> None:
        assert self.next_type is not None
        self.current_type = self.next_type
        self.current_col = pieces.spawn_column(self.current_type)
        self.current_row = pieces.spawn_row(self.current_type)
        self.current_rotation = 0
        self.next_type = pieces.random_tile(self.rng)

        if not self.board.is_valid_and_empty(
            self.current_type, self.current_col, self.current_row, self.current_rotation
        ):
            self.is_game_over = True
            self.clock.set_paused(True)
            logger.info("game over: score=%d level=%d", self.score, self.level)

    # Simulation

    def update_game(self) -> None:
        if self.drop_cooldown > 0:
            self._count_down_cooldown()
            return

        assert self.current_type is not None
        if self.board.is_valid_and_empty(
            self.current_type, self.current_col, self.current_row + 1, self.current_rotation
        ):
            self.current_row += 1
            return

        self.board.add_piece(self.current_type, self.current_col, self.current_row, self.current_rotation)
        cleared = self.board.check_lines()
        if cleared > 0:
            self.score += self.rules.score_for_lines(cleared)

        self.game_speed = self.rules.next_speed(self.game_speed)
        self.drop_cooldown = self.rules.drop_cooldown
        self._apply_drop_rate()
        self.clock.reset()
        self.level = self.rules.level_for_speed(self.game_speed)
        logger.debug(
            "locked %s at (%d, %d) r%d, cleared=%d score=%d speed=%.3f",
            self.current_type.name,
            self.current_col,
            self.current_row,
            self.current_rotation,
            cleared,
            self.score,
            self.game_speed,
        )
        self.spawn_piece()

    def frame(self) -> None:
        """Advance one render frame: at most one simulation tick, then cooldown."""
        self.clock.update()
        if self.clock.has_elapsed_cycle() and self.is_playing():
            self.update_game()
        if self.drop_cooldown > 0:
            self._count_down_cooldown()

    def _count_down_cooldown(self) -> None:
        self.drop_cooldown -= 1
        if self.drop_cooldown == 0 and self.soft_drop_held and self.is_playing():
            self._apply_drop_rate()

    def _apply_drop_rate(self) -> None:
        if self.soft_drop_held and self.drop_cooldown == 0:
            self.clock.set_cycles_per_second(self.rules.soft_drop_rate)
        else:
            self.clock.set_cycles_per_second(self.game_speed)

    # Player input

    def move(self, dx: int) -> bool:
        assert self.current_type is not None
        new_col = self.current_col + dx
        if self.board.is_valid_and_empty(self.current_type, new_col, self.current_row, self.current_rotation):
            self.current_col = new_col
            return True
        return False

    def rotate_piece(self, direction: int) -> bool:
        """Rotate by ``direction`` (+1 clockwise, -1 counter-clockwise).

        The piece is pushed back inside the board using its insets at the new
        rotation. Horizontal and vertical pushes are computed independently
        and the result is validated once. Nothing changes when the pushed
        position is still blocked.
        """
        if direction not in (1, -1):
            raise ValueError(f"rotation direction must be +1 or -1, got {direction!r}")
        assert self.current_type is not None
        kind = self.current_type
        new_rotation = (self.current_rotation + direction) % 4
        new_col = self.current_col
        new_row = self.current_row
        dim = pieces.dimension(kind)

        left = pieces.left_inset(kind, new_rotation)
        right = pieces.right_inset(kind, new_rotation)
        top = pieces.top_inset(kind, new_rotation)
        bottom = pieces.bottom_inset(kind, new_rotation)

        if new_col + left < 0:
            new_col -= new_col + left
        elif new_col + dim - right > self.board.width:
            new_col -= new_col + dim - right - self.board.width

        if new_row + top < 0:
            new_row -= new_row + top
        elif new_row + dim - bottom > self.board.height:
            new_row -= new_row + dim - bottom - self.board.height

        if self.board.is_valid_and_empty(kind, new_col, new_row, new_rotation):
            self.current_rotation = new_rotation
            self.current_col = new_col
            self.current_row = new_row
            return True
        return False

    def handle(self, command: Command) -> None:
        if command == Command.START:
            if self.is_new_game or self.is_game_over:
                self.reset_game()
        elif command == Command.PAUSE_TOGGLE:
            if not self.is_game_over and not self.is_new_game:
                self.is_paused = not self.is_paused
                self.clock.set_paused(self.is_paused)
                if not self.is_paused and self.soft_drop_held:
                    self._apply_drop_rate()
                logger.info("game %s", "paused" if self.is_paused else "resumed")
        elif command == Command.SOFT_DROP_STOP:
            self.soft_drop_held = False
            if not self.is_new_game and not self.is_game_over:
                self.clock.set_cycles_per_second(self.game_speed)
                self.clock.reset()
        elif command in (
            Command.MOVE_LEFT,
            Command.MOVE_RIGHT,
            Command.ROTATE_CW,
            Command.ROTATE_CCW,
            Command.SOFT_DROP_START,
        ):
            if command == Command.SOFT_DROP_START:
                self.soft_drop_held = True
            if not self.is_playing():
                return
            if command == Command.MOVE_LEFT:
                self.move(-1)
            elif command == Command.MOVE_RIGHT:
                self.move(1)
            elif command == Command.ROTATE_CW:
                self.rotate_piece(1)
            elif command == Command.ROTATE_CCW:
                self.rotate_piece(-1)
            elif self.drop_cooldown == 0:
                self.clock.set_cycles_per_second(self.rules.soft_drop_rate)
        else:
            raise ValueError(f"unknown command: {command!r}")
