from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from runfolio.settings import RunTuning


class RunPhase(str, Enum):
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class RunState:
    base_speed: float
    speed_increment: float
    lane_limit: float = 3.0
    lane_step: float = 1.0
    speed_band_size: float = 100.0

    distance_traveled: float = 0.0
    speed: float = 0.0
    player_lane: float = 0.0
    character_forward: float = 0.0
    game_over: bool = False
    game_started: bool = False
    phase: RunPhase = RunPhase.RUNNING
    # Highest 100-unit band that already bumped the speed.
    speed_band: int = 0

    def __post_init__(self) -> None:
        if self.speed <= 0.0:
            self.speed = float(self.base_speed)

    @classmethod
    def from_tuning(cls, tuning: RunTuning) -> "RunState":
        return cls(
            base_speed=float(tuning.base_speed),
            speed_increment=float(tuning.speed_increment),
            lane_limit=float(tuning.lane_limit),
            lane_step=float(tuning.lane_step),
            speed_band_size=float(tuning.speed_band),
        )

    def is_running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    def step_left(self) -> None:
        self.player_lane = max(-self.lane_limit, self.player_lane - self.lane_step)

    def step_right(self) -> None:
        self.player_lane = min(self.lane_limit, self.player_lane + self.lane_step)

    def advance(self) -> bool:
        """
        Move one frame forward. Returns True when a new distance band was crossed
        and the speed ramped up.
        """

        self.character_forward += self.speed
        self.distance_traveled += self.speed

        band = int(math.floor(self.distance_traveled / self.speed_band_size))
        if band <= self.speed_band:
            return False
        # One increment per crossed boundary, even if a single frame skips several.
        self.speed += self.speed_increment * (band - self.speed_band)
        self.speed_band = band
        return True

    def end(self) -> None:
        self.game_over = True
        self.phase = RunPhase.ENDED

    def reset_values(self) -> None:
        self.distance_traveled = 0.0
        self.character_forward = 0.0
        self.speed = float(self.base_speed)
        self.speed_band = 0
        self.game_over = False
        self.phase = RunPhase.RUNNING
