from __future__ import annotations

import random
from typing import Callable, List, Tuple, Union

import pytest

from block_drop.game import COL_COUNT, ROW_COUNT, BlockDropGame, TileType


Call = Tuple[TileType, int, int, int]


class FakeTime:
    """Manually advanced time source, in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, millis: float) -> None:
        self.now += millis / 1000.0


class FakeBoard:
    def __init__(self, valid: Union[bool, Callable[[TileType, int, int, int], bool]] = True, lines: int = 0) -> None:
        self.width = COL_COUNT
        self.height = ROW_COUNT
        self.valid = valid
        self.lines = lines
        self.valid_calls: List[Call] = []
        self.added: List[Call] = []
        self.check_lines_calls = 0
        self.clear_calls = 0

    def is_valid_and_empty(self, kind: TileType, col: int, row: int, rotation: int) -> bool:
        self.valid_calls.append((kind, col, row, rotation))
        if callable(self.valid):
            return self.valid(kind, col, row, rotation)
        return self.valid

    def add_piece(self, kind: TileType, col: int, row: int, rotation: int) -> None:
        self.added.append((kind, col, row, rotation))

    def check_lines(self) -> int:
        self.check_lines_calls += 1
        return self.lines

    def clear(self) -> None:
        self.clear_calls += 1


class FakeClock:
    def __init__(self) -> None:
        self.pending = 0
        self.paused = False
        self.rates: List[float] = []
        self.paused_calls: List[bool] = []
        self.reset_calls = 0
        self.update_calls = 0

    def update(self) -> None:
        self.update_calls += 1

    def has_elapsed_cycle(self) -> bool:
        if self.pending > 0:
            self.pending -= 1
            return True
        return False

    def set_cycles_per_second(self, cycles_per_second: float) -> None:
        self.rates.append(cycles_per_second)

    def set_paused(self, paused: bool) -> None:
        self.paused = paused
        self.paused_calls.append(paused)

    def reset(self) -> None:
        self.reset_calls += 1


class FixedChoice(random.Random):
    """Random source whose ``choice`` always returns the same tile."""

    def __init__(self, kind: TileType) -> None:
        super().__init__(0)
        self.kind = kind

    def choice(self, seq):  # type: ignore[override]
        return self.kind


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def board() -> FakeBoard:
    return FakeBoard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def game(board: FakeBoard, clock: FakeClock) -> BlockDropGame:
    """A game mid-play with an I piece at (5, 10) and O queued next."""
    g = BlockDropGame(board=board, clock=clock, rng=random.Random(0))
    g.is_new_game = False
    g.current_type = TileType.I
    g.current_col = 5
    g.current_row = 10
    g.current_rotation = 0
    g.next_type = TileType.O
    clock.paused = False
    clock.paused_calls.clear()
    return g
