from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable

from runfolio.common.diagnostics import DiagnosticLog
from runfolio.game.checkpoints import DEFAULT_CHECKPOINTS, Checkpoint
from runfolio.game.obstacles import Obstacle
from runfolio.game.panels import PanelPresenter
from runfolio.game.run_loop import RunLoop
from runfolio.game.scheduler import ManualScheduler
from runfolio.settings import RunTuning


@dataclass
class SimulationSummary:
    frames: int = 0
    seconds: float = 0.0
    runs: int = 0
    collisions: int = 0
    max_distance: float = 0.0
    peak_obstacles: int = 0
    checkpoints: list[str] = field(default_factory=list)
    prompts: int = 0

    def lines(self) -> list[str]:
        return [
            f"simulated: {self.seconds:.1f}s ({self.frames} frames)",
            f"runs: {self.runs} collisions: {self.collisions}",
            f"max distance: {self.max_distance:.1f}",
            f"peak obstacles: {self.peak_obstacles}",
            f"checkpoints: {', '.join(self.checkpoints) if self.checkpoints else '-'}",
            f"continue prompts: {self.prompts}",
        ]


class _LogPanelView:
    def __init__(self, *, log: DiagnosticLog, summary: SimulationSummary) -> None:
        self._log = log
        self._summary = summary

    def show_panel(self, checkpoint: Checkpoint) -> None:
        self._summary.checkpoints.append(checkpoint.kind)
        self._log.info(context="panel.show", message=checkpoint.title)

    def hide_panel(self) -> None:
        self._log.info(context="panel.hide", message="")

    def ask_continue(self, on_answer: Callable[[bool], None]) -> None:
        self._summary.prompts += 1
        on_answer(True)


def simulate(
    *,
    tuning: RunTuning,
    seconds: float,
    fps: float = 60.0,
    seed: int | None = None,
    checkpoints: tuple[Checkpoint, ...] = DEFAULT_CHECKPOINTS,
    steer: Callable[[RunLoop, random.Random], None] | None = None,
    log: DiagnosticLog | None = None,
) -> SimulationSummary:
    """
    Run the loop without a window: one `frame()` per 1/fps seconds of simulated time,
    timers fired by a manual scheduler, game over acknowledged immediately.
    """

    log = log or DiagnosticLog()
    summary = SimulationSummary()
    scheduler = ManualScheduler()
    rng = random.Random(seed)
    steer_rng = random.Random(None if seed is None else seed + 1)
    presenter = PanelPresenter(scheduler=scheduler, view=_LogPanelView(log=log, summary=summary), tuning=tuning)
    pending_reset: list[Obstacle] = []

    def _game_over(hit: Obstacle) -> None:
        summary.collisions += 1
        log.info(context="run.game_over", message=f"hit obstacle {hit.id}")
        pending_reset.append(hit)

    loop = RunLoop(
        tuning=tuning,
        scheduler=scheduler,
        rng=rng,
        checkpoints=checkpoints,
        on_checkpoint=presenter.present,
        on_game_over=_game_over,
    )
    loop.set_character_ready(True)
    loop.start()

    dt = 1.0 / max(1.0, float(fps))
    total_frames = int(max(0.0, float(seconds)) * max(1.0, float(fps)))
    for _ in range(total_frames):
        if steer is not None:
            steer(loop, steer_rng)
        loop.frame()
        summary.frames += 1
        summary.max_distance = max(summary.max_distance, loop.state.distance_traveled)
        summary.peak_obstacles = max(summary.peak_obstacles, len(loop.obstacles))
        if pending_reset:
            pending_reset.clear()
            loop.reset()
        scheduler.advance(dt)
        summary.peak_obstacles = max(summary.peak_obstacles, len(loop.obstacles))

    loop.stop()
    summary.seconds = summary.frames * dt
    summary.runs = loop.runs_started
    return summary


def random_steer(loop: RunLoop, rng: random.Random) -> None:
    """Crude autopilot: occasionally sidestep."""

    roll = rng.random()
    if roll < 0.02:
        loop.step_left()
    elif roll < 0.04:
        loop.step_right()
