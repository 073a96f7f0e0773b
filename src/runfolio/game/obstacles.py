from __future__ import annotations

import itertools
import random
from dataclasses import dataclass, field

from panda3d.core import LVector3f

from runfolio.common.aabb import AABB
from runfolio.settings import RunTuning


@dataclass(frozen=True)
class Obstacle:
    id: int
    lateral: float
    forward: float

    def aabb(self, tuning: RunTuning) -> AABB:
        r = float(tuning.obstacle_radius)
        h = float(tuning.obstacle_height)
        return AABB(
            minimum=LVector3f(self.lateral - r, self.forward - r, 0.0),
            maximum=LVector3f(self.lateral + r, self.forward + r, h),
        )


@dataclass
class ObstacleChanges:
    added: list[Obstacle] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.added and not self.removed


def spawn_chance_for(distance: float, tuning: RunTuning) -> float:
    if tuning.dense_start <= distance <= tuning.dense_end:
        return float(tuning.dense_spawn_chance)
    if distance >= tuning.spawn_min_distance:
        return float(tuning.spawn_chance)
    return 0.0


class ObstacleField:
    """
    Owner of every active obstacle.

    Membership changes are queued so the renderer can mirror them once per frame
    via `drain_changes()`; nothing else holds on to obstacles.
    """

    def __init__(self, *, tuning: RunTuning) -> None:
        self._tuning = tuning
        self._ids = itertools.count(1)
        self._active: dict[int, Obstacle] = {}
        self._changes = ObstacleChanges()

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self):
        return iter(list(self._active.values()))

    def get(self, obstacle_id: int) -> Obstacle | None:
        return self._active.get(obstacle_id)

    def is_full(self) -> bool:
        return len(self._active) >= int(self._tuning.max_obstacles)

    def add(self, *, lateral: float, forward: float) -> Obstacle | None:
        if self.is_full():
            return None
        obstacle = Obstacle(id=next(self._ids), lateral=float(lateral), forward=float(forward))
        self._active[obstacle.id] = obstacle
        self._changes.added.append(obstacle)
        return obstacle

    def remove(self, obstacle_id: int) -> bool:
        if self._active.pop(obstacle_id, None) is None:
            return False
        # Never spawned as far as the renderer knows: drop the pending add instead.
        pending = [o for o in self._changes.added if o.id != obstacle_id]
        if len(pending) != len(self._changes.added):
            self._changes.added = pending
        else:
            self._changes.removed.append(obstacle_id)
        return True

    def clear(self) -> None:
        for obstacle_id in list(self._active):
            self.remove(obstacle_id)

    def _random_lateral(self, rng: random.Random) -> float:
        limit = float(self._tuning.lane_limit)
        return rng.uniform(-limit, limit)

    def spawn_initial_batch(self, rng: random.Random) -> list[Obstacle]:
        t = self._tuning
        out: list[Obstacle] = []
        for _ in range(int(t.initial_obstacles)):
            lateral = self._random_lateral(rng)
            forward = rng.random() * float(t.initial_forward_max)
            obstacle = self.add(lateral=lateral, forward=forward)
            if obstacle is not None:
                out.append(obstacle)
        return out

    def spawn_tick(self, rng: random.Random, *, distance: float, character_forward: float) -> Obstacle | None:
        if self.is_full():
            return None
        t = self._tuning
        lateral = self._random_lateral(rng)
        ahead = float(t.spawn_forward_min) + rng.random() * float(t.spawn_forward_max - t.spawn_forward_min)
        if rng.random() >= spawn_chance_for(distance, t):
            return None
        return self.add(lateral=lateral, forward=float(character_forward) + ahead)

    def prune(self, *, character_forward: float) -> list[int]:
        cutoff = float(character_forward) - float(self._tuning.prune_distance)
        stale = [o.id for o in self._active.values() if o.forward < cutoff]
        for obstacle_id in stale:
            self.remove(obstacle_id)
        return stale

    def first_hit(self, box: AABB) -> Obstacle | None:
        for obstacle in self._active.values():
            if obstacle.aabb(self._tuning).intersects(box):
                return obstacle
        return None

    def drain_changes(self) -> ObstacleChanges:
        out = self._changes
        self._changes = ObstacleChanges()
        return out
