from __future__ import annotations

from runfolio.game.hooks import EventHooks
from runfolio.game.run_loop import RunLoop

RUN_CONTROLS_GROUP = "run-controls"

STEP_LEFT = "step_left"
STEP_RIGHT = "step_right"

# Discrete commands only; key repeat is whatever the OS delivers.
KEY_COMMANDS: dict[str, str] = {
    "arrow_left": STEP_LEFT,
    "arrow_left-repeat": STEP_LEFT,
    "a": STEP_LEFT,
    "arrow_right": STEP_RIGHT,
    "arrow_right-repeat": STEP_RIGHT,
    "d": STEP_RIGHT,
}


def command_for_key(key: str) -> str | None:
    return KEY_COMMANDS.get((key or "").strip().lower())


def install_run_controls(hooks: EventHooks, loop: RunLoop) -> None:
    actions = {
        STEP_LEFT: loop.step_left,
        STEP_RIGHT: loop.step_right,
    }
    hooks.unbind_group(RUN_CONTROLS_GROUP)
    for key, command in KEY_COMMANDS.items():
        hooks.bind(group=RUN_CONTROLS_GROUP, event=key, context=f"input.{command}", fn=actions[command])


def remove_run_controls(hooks: EventHooks) -> None:
    hooks.unbind_group(RUN_CONTROLS_GROUP)
