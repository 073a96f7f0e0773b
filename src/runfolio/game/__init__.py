"""Gameplay core: run state, obstacles, checkpoints and the run loop."""

from runfolio.game.checkpoints import Checkpoint, CheckpointTracker
from runfolio.game.obstacles import Obstacle, ObstacleField
from runfolio.game.run_loop import FrameReport, RunLoop
from runfolio.game.run_state import RunPhase, RunState

__all__ = [
    "Checkpoint",
    "CheckpointTracker",
    "FrameReport",
    "Obstacle",
    "ObstacleField",
    "RunLoop",
    "RunPhase",
    "RunState",
]
