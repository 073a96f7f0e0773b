from __future__ import annotations

import random
from types import SimpleNamespace
from typing import Any, Callable

from direct.gui import DirectGuiGlobals as DGG

from runfolio.app import RunnerApp, _OverlayPanelView
from runfolio.app_config import RunConfig
from runfolio.common.diagnostics import DiagnosticLog
from runfolio.game.hooks import EventHooks
from runfolio.game.input_system import install_run_controls
from runfolio.game.run_loop import RunLoop
from runfolio.game.scheduler import ManualScheduler
from runfolio.settings import RunTuning
from runfolio.ui.dialogs import ModalDialogs
from runfolio.ui.theme import Theme


class _FakeBase:
    def __init__(self) -> None:
        self.handlers: dict[str, Callable[[], None]] = {}

    def accept(self, event: str, fn: Callable[[], None]) -> None:
        self.handlers[event] = fn

    def ignore(self, event: str) -> None:
        self.handlers.pop(event, None)


class _FakeDialog:
    def __init__(self, *, command: Callable[[Any], None], **kwargs: Any) -> None:
        self.command = command
        self.text = kwargs.get("text")

    def cleanup(self) -> None:
        pass


def _app(*, smoke: bool = False) -> tuple[RunnerApp, _FakeBase, list[_FakeDialog]]:
    opened: list[_FakeDialog] = []

    def make_dialog(**kwargs: Any) -> _FakeDialog:
        dlg = _FakeDialog(**kwargs)
        opened.append(dlg)
        return dlg

    base = _FakeBase()
    app = RunnerApp.__new__(RunnerApp)
    app.cfg = RunConfig(smoke=smoke)
    app.diagnostics = DiagnosticLog()
    app.error_console = SimpleNamespace(refresh=lambda: None)
    app.dialogs = ModalDialogs(theme=Theme(), ok_dialog=make_dialog, yes_no_dialog=make_dialog)
    app.hooks = EventHooks(base=base, safe_call=app._safe_call)
    app.scheduler = ManualScheduler()
    app.loop = RunLoop(
        tuning=RunTuning(),
        scheduler=app.scheduler,
        rng=random.Random(5),
        on_game_over=app._on_game_over,
    )
    app.loop.set_character_ready(True)
    install_run_controls(app.hooks, app.loop)
    return app, base, opened


def _crash(app: RunnerApp) -> None:
    app.loop.obstacles.add(lateral=float(app.loop.state.player_lane), forward=app.loop.state.character_forward + 0.2)
    assert app.loop.frame().collided


def test_game_over_waits_for_acknowledgement_then_resets() -> None:
    app, base, opened = _app()
    _crash(app)

    assert not app.loop.state.is_running()
    assert "arrow_left" not in base.handlers
    assert len(opened) == 1
    assert opened[0].text == "Game Over! Restarting..."

    opened[0].command(DGG.DIALOG_OK)
    assert app.loop.state.is_running()
    assert app.loop.state.distance_traveled == 0.0
    assert len(app.loop.obstacles) == 10
    base.handlers["arrow_left"]()
    assert app.loop.state.player_lane == -1
    assert app.diagnostics.items() == []


def test_continue_prompt_during_game_over_keeps_the_reset() -> None:
    app, base, opened = _app()
    answers: list[bool] = []
    _crash(app)

    _OverlayPanelView(app=app).ask_continue(answers.append)
    assert app.loop.paused
    assert len(opened) == 1
    assert app.dialogs.queued() == 1

    opened[0].command(DGG.DIALOG_OK)
    assert app.loop.state.is_running()
    assert "arrow_right" in base.handlers
    assert len(opened) == 2
    assert opened[1].text == "Do you want to continue playing?"

    opened[1].command(DGG.DIALOG_YES)
    assert answers == [True]
    assert not app.loop.paused
    assert app.loop.state.is_running()
    assert app.loop.frame().updated
    assert app.diagnostics.items() == []


def test_smoke_run_resets_without_dialog() -> None:
    app, base, opened = _app(smoke=True)
    _crash(app)
    assert opened == []
    assert app.loop.state.is_running()
    assert "d" in base.handlers


def test_shutdown_releases_run_and_overlays() -> None:
    app, base, opened = _app()
    app.loop.start()
    destroyed: list[str] = []
    for name in ("panel_ui", "hud", "error_console", "scene"):
        setattr(app, name, SimpleNamespace(destroy=lambda name=name: destroyed.append(name)))
    app.banner = SimpleNamespace(dismiss=lambda: destroyed.append("banner"))
    app._frame_handle = app.scheduler.every_frame(lambda: None, name="run-frame")
    app.dialogs.acknowledge(text="bye", on_close=lambda: None)

    app._shutdown()

    assert sorted(destroyed) == ["banner", "error_console", "hud", "panel_ui", "scene"]
    assert app.banner is None
    assert not app.dialogs.is_open()
    assert not app._frame_handle.active
    assert app.scheduler.pending("obstacle-spawn") == []
    assert base.handlers == {}
