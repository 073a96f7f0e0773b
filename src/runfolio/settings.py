"""Gameplay tuning, optionally overridden from a JSON file under ~/.runfolio/."""

from __future__ import annotations

import json
import logging
import os
import secrets
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class RunTuning:
    # Speeds are world units per rendered frame.
    base_speed: float = 0.2
    speed_increment: float = 0.01
    speed_band: float = 100.0

    lane_limit: float = 3.0
    lane_step: float = 1.0

    max_obstacles: int = 10
    initial_obstacles: int = 10
    initial_forward_max: float = 500.0
    spawn_forward_min: float = 500.0
    spawn_forward_max: float = 1300.0
    spawn_period: float = 1.0
    spawn_min_distance: float = 100.0
    spawn_chance: float = 0.3
    dense_start: float = 200.0
    dense_end: float = 400.0
    dense_spawn_chance: float = 0.5
    prune_distance: float = 50.0

    panel_hide_delay: float = 5.0
    continue_prompt_delay: float = 1.0
    banner_seconds: float = 3.0

    camera_back: float = 5.0
    camera_height: float = 1.5

    # Hulls: half extents (lateral, forward) plus full height, standing on the road.
    character_half_lateral: float = 0.3
    character_half_forward: float = 0.25
    character_height: float = 1.8
    obstacle_radius: float = 0.5
    obstacle_height: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RunTuning":
        kwargs: dict[str, Any] = {}
        for fld in fields(cls):
            if fld.name not in payload:
                continue
            val = payload[fld.name]
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                logger.warning("Ignoring non-numeric tuning value %s=%r", fld.name, val)
                continue
            kwargs[fld.name] = int(val) if fld.type == "int" else float(val)
        return cls(**kwargs)


def config_dir() -> Path:
    """
    Directory for the optional tuning file.

    Override for tests/dev via `RUNFOLIO_CONFIG_DIR`.
    """

    override = os.environ.get("RUNFOLIO_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".runfolio"


def default_tuning_path() -> Path:
    return config_dir() / "tuning.json"


def load_tuning(path: Path | None = None) -> RunTuning:
    p = Path(path) if path is not None else default_tuning_path()
    if not p.exists():
        return RunTuning()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except Exception:
        logger.warning("Unreadable tuning file %s, using defaults.", p)
        return RunTuning()
    if not isinstance(payload, dict):
        return RunTuning()
    return RunTuning.from_dict(payload)


def save_tuning(tuning: RunTuning, path: Path | None = None) -> Path:
    p = Path(path) if path is not None else default_tuning_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(4)}.tmp")
    tmp.write_text(json.dumps(tuning.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    tmp.replace(p)
    return p
