from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable

from panda3d.core import LVector3f

from runfolio.common.aabb import AABB
from runfolio.game.checkpoints import DEFAULT_CHECKPOINTS, Checkpoint, CheckpointTracker
from runfolio.game.obstacles import Obstacle, ObstacleChanges, ObstacleField
from runfolio.game.run_state import RunPhase, RunState
from runfolio.game.scheduler import Scheduler, TimerHandle
from runfolio.settings import RunTuning


@dataclass
class FrameReport:
    """Everything the renderer needs to mirror one frame of the run."""

    phase: RunPhase
    character_pos: LVector3f
    camera_pos: LVector3f
    camera_target: LVector3f
    changes: ObstacleChanges = field(default_factory=ObstacleChanges)
    checkpoint: Checkpoint | None = None
    hit: Obstacle | None = None
    updated: bool = False

    @property
    def collided(self) -> bool:
        return self.hit is not None


class RunLoop:
    """
    The run: travel distance, speed, obstacles, checkpoints and the
    Running/Ended state machine.

    Two producers feed it: the per-frame callback (`frame`) and the spawn timer
    (`spawn_tick`). Both run on the host's single thread, so the obstacle field is
    only ever mutated from here.
    """

    def __init__(
        self,
        *,
        tuning: RunTuning,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        checkpoints: tuple[Checkpoint, ...] = DEFAULT_CHECKPOINTS,
        on_checkpoint: Callable[[Checkpoint], None] | None = None,
        on_game_over: Callable[[Obstacle], None] | None = None,
    ) -> None:
        self.tuning = tuning
        self.state = RunState.from_tuning(tuning)
        self.obstacles = ObstacleField(tuning=tuning)
        self.checkpoints = CheckpointTracker(checkpoints)
        self._scheduler = scheduler
        self._rng = rng if rng is not None else random.Random()
        self._on_checkpoint = on_checkpoint
        self._on_game_over = on_game_over
        self._spawn_timer: TimerHandle | None = None
        self.character_ready = False
        # Held while a blocking dialog is up; neither producer touches the run.
        self.paused = False
        self.runs_started = 0

    # Lifecycle

    def start(self) -> None:
        self.obstacles.spawn_initial_batch(self._rng)
        self._restart_spawn_timer()
        self.runs_started = 1

    def stop(self) -> None:
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
            self._spawn_timer = None

    def reset(self) -> None:
        self.state.reset_values()
        self.checkpoints.reset()
        self.obstacles.clear()
        self.obstacles.spawn_initial_batch(self._rng)
        self._restart_spawn_timer()
        self.runs_started += 1

    def _restart_spawn_timer(self) -> None:
        self.stop()
        self._spawn_timer = self._scheduler.call_every(
            float(self.tuning.spawn_period),
            self.spawn_tick,
            name="obstacle-spawn",
        )

    def set_character_ready(self, ready: bool) -> None:
        self.character_ready = bool(ready)

    # Input

    def step_left(self) -> None:
        if self.state.is_running():
            self.state.step_left()

    def step_right(self) -> None:
        if self.state.is_running():
            self.state.step_right()

    # Producers

    def spawn_tick(self) -> Obstacle | None:
        if self.paused or not self.state.is_running():
            return None
        return self.obstacles.spawn_tick(
            self._rng,
            distance=self.state.distance_traveled,
            character_forward=self.state.character_forward,
        )

    def frame(self) -> FrameReport:
        st = self.state
        report = self._report()
        if self.paused or not self.character_ready or not st.is_running():
            report.changes = self.obstacles.drain_changes()
            return report

        st.advance()

        checkpoint = self.checkpoints.tick(st.distance_traveled)
        if checkpoint is not None and self._on_checkpoint is not None:
            self._on_checkpoint(checkpoint)

        self.obstacles.prune(character_forward=st.character_forward)

        hit = self.obstacles.first_hit(self.character_box())
        if hit is not None:
            st.end()

        report = self._report()
        report.updated = True
        report.checkpoint = checkpoint
        report.hit = hit
        report.changes = self.obstacles.drain_changes()
        if hit is not None and self._on_game_over is not None:
            self._on_game_over(hit)
        return report

    # Geometry

    def character_pos(self) -> LVector3f:
        return LVector3f(float(self.state.player_lane), float(self.state.character_forward), 0.0)

    def character_box(self) -> AABB:
        t = self.tuning
        pos = self.character_pos()
        return AABB(
            minimum=LVector3f(pos.x - t.character_half_lateral, pos.y - t.character_half_forward, 0.0),
            maximum=LVector3f(pos.x + t.character_half_lateral, pos.y + t.character_half_forward, t.character_height),
        )

    def _report(self) -> FrameReport:
        pos = self.character_pos()
        # Camera trails straight behind the lane centre, always aimed at the character.
        cam = LVector3f(0.0, pos.y - float(self.tuning.camera_back), float(self.tuning.camera_height))
        return FrameReport(
            phase=self.state.phase,
            character_pos=pos,
            camera_pos=cam,
            camera_target=LVector3f(pos),
        )
