from __future__ import annotations

from runfolio.headless import random_steer, simulate
from runfolio.settings import RunTuning


def test_simulation_respects_obstacle_cap() -> None:
    summary = simulate(tuning=RunTuning(), seconds=60.0, seed=3, steer=random_steer)
    assert summary.frames == 3600
    assert summary.runs >= 1
    assert summary.runs == summary.collisions + 1
    assert summary.peak_obstacles <= 10


def test_simulation_is_deterministic_with_seed() -> None:
    a = simulate(tuning=RunTuning(), seconds=20.0, seed=11, steer=random_steer)
    b = simulate(tuning=RunTuning(), seconds=20.0, seed=11, steer=random_steer)
    assert a == b


def test_clear_road_visits_every_panel_and_prompts_once() -> None:
    tuning = RunTuning(initial_obstacles=0, spawn_chance=0.0, dense_spawn_chance=0.0)
    summary = simulate(tuning=tuning, seconds=90.0, seed=1)
    assert summary.collisions == 0
    assert summary.runs == 1
    assert summary.checkpoints == ["about", "skills", "projects", "contact"]
    assert summary.prompts == 1
    assert summary.max_distance > 910.0
    assert summary.lines()[0].startswith("simulated: 90.0s")
