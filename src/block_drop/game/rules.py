from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    points_per_line: int = 100
    initial_speed: float = 1.0
    speed_step: float = 0.035
    level_factor: float = 1.70
    drop_cooldown: int = 25
    soft_drop_rate: float = 25.0
    frames_per_second: int = 50

    def score_for_lines(self, lines: int) -> int:
        # Flat per line; no bonus for multi-line clears.
        if lines <= 0:
            return 0
        return self.points_per_line * lines

    def level_for_speed(self, speed: float) -> int:
        return int(math.floor(speed * self.level_factor))

    def next_speed(self, speed: float) -> float:
        return speed + self.speed_step
