from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Seed for obstacle placement and spawn rolls; None draws from the OS.
    seed: int | None = None
    # Asset folder holding the character model, road texture and sky image.
    # If None, falls back to <app root>/assets.
    assets_dir: str | None = None
    # Optional JSON tuning file (see settings.RunTuning). None means ~/.runfolio/tuning.json if present.
    tuning_path: str | None = None
    # Optional JSON file replacing the default portfolio checkpoint panels.
    checkpoints_path: str | None = None
    # Use a built-in box when the character model cannot be loaded, so the run is still playable.
    placeholder_character: bool = True
    # Append diagnostics to this file in addition to logging.
    diagnostics_path: str | None = None

    character_model: str = "male_running_20_frames_loop.glb"
    road_texture: str = "road.jpg"
    background_image: str = "sky.jpg"
