from __future__ import annotations

import random
import sys
import traceback
from pathlib import Path
from typing import Callable

from direct.showbase.ShowBase import ShowBase
from panda3d.core import loadPrcFileData

from runfolio.app_config import RunConfig
from runfolio.common.diagnostics import DiagnosticLog
from runfolio.game.checkpoints import Checkpoint, load_checkpoints
from runfolio.game.hooks import EventHooks
from runfolio.game.input_system import install_run_controls, remove_run_controls
from runfolio.game.obstacles import Obstacle
from runfolio.game.panels import PanelPresenter
from runfolio.game.run_loop import RunLoop
from runfolio.game.scheduler import PandaScheduler, TimerHandle
from runfolio.paths import assets_dir
from runfolio.render.scene import RunnerScene
from runfolio.settings import load_tuning
from runfolio.ui.dialogs import ModalDialogs
from runfolio.ui.error_console_ui import ErrorConsoleUI
from runfolio.ui.overlay import BannerUI, HudUI, PortfolioPanelUI
from runfolio.ui.theme import Theme

GAME_OVER_TEXT = "Game Over! Restarting..."
CONTINUE_TEXT = "Do you want to continue playing?"


class _OverlayPanelView:
    """Checkpoint panels on screen; the continue prompt holds the run until answered."""

    def __init__(self, *, app: "RunnerApp") -> None:
        self._app = app

    def show_panel(self, checkpoint: Checkpoint) -> None:
        self._app.panel_ui.show_panel(checkpoint)

    def hide_panel(self) -> None:
        self._app.panel_ui.hide_panel()

    def ask_continue(self, on_answer: Callable[[bool], None]) -> None:
        app = self._app
        if app.cfg.smoke:
            on_answer(True)
            return
        app.loop.paused = True

        def _answered(keep_playing: bool) -> None:
            app.loop.paused = False
            on_answer(keep_playing)

        app.dialogs.ask_yes_no(
            text=CONTINUE_TEXT,
            on_answer=lambda keep_playing: app._safe_call("panel.continue", lambda: _answered(keep_playing)),
        )


class RunnerApp(ShowBase):
    def __init__(self, cfg: RunConfig) -> None:
        # Keep audio from being a dependency for smoke runs / CI.
        loadPrcFileData("", "audio-library-name null")
        loadPrcFileData("", "window-title runfolio")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()

        self.tuning = load_tuning(Path(cfg.tuning_path) if cfg.tuning_path else None)
        self.diagnostics = DiagnosticLog(
            max_items=30,
            persist_path=Path(cfg.diagnostics_path) if cfg.diagnostics_path else None,
        )
        self._diag_seen: tuple[int, float] = (0, 0.0)
        checkpoints = load_checkpoints(Path(cfg.checkpoints_path) if cfg.checkpoints_path else None)

        self.theme = Theme()
        self.panel_ui = PortfolioPanelUI(aspect2d=self.aspect2d, theme=self.theme)
        self.hud = HudUI(aspect2d=self.aspect2d, theme=self.theme)
        self.error_console = ErrorConsoleUI(aspect2d=self.aspect2d, theme=self.theme, log=self.diagnostics)
        self.dialogs = ModalDialogs(theme=self.theme)
        self.banner: BannerUI | None = None

        self.scheduler = PandaScheduler(task_mgr=self.taskMgr, safe_call=self._safe_call)
        self.presenter = PanelPresenter(
            scheduler=self.scheduler,
            view=_OverlayPanelView(app=self),
            tuning=self.tuning,
            on_continue_answer=self._on_continue_answer,
        )
        self.loop = RunLoop(
            tuning=self.tuning,
            scheduler=self.scheduler,
            rng=random.Random(cfg.seed),
            checkpoints=checkpoints,
            on_checkpoint=self.presenter.present,
            on_game_over=self._on_game_over,
        )
        self.hooks = EventHooks(base=self, safe_call=self._safe_call)

        assets = assets_dir(cfg.assets_dir)
        self.scene = RunnerScene(tuning=self.tuning, diagnostics=self.diagnostics)
        self.scene.build(
            loader=self.loader,
            render=self.render,
            camera=self.camera,
            assets=assets,
            model_name=cfg.character_model,
            road_name=cfg.road_texture,
            sky_name=cfg.background_image,
        )

        self._setup_input()
        self._show_banner()
        self.scene.load_character(
            loader=self.loader,
            path=assets / cfg.character_model,
            placeholder=cfg.placeholder_character,
            on_ready=self.loop.set_character_ready,
        )
        self.loop.start()
        self._frame_handle: TimerHandle = self.scheduler.every_frame(self._frame, name="run-frame")

        if cfg.smoke:
            self._smoke_frames = 10
            self.taskMgr.add(self._smoke_exit, "smoke-exit")

    def _setup_input(self) -> None:
        install_run_controls(self.hooks, self.loop)
        self.accept("f3", lambda: self._safe_call("errors.toggle", self.error_console.toggle))
        self.accept("escape", self.userExit)

    def _show_banner(self) -> None:
        self.banner = BannerUI(aspect2d=self.aspect2d, theme=self.theme)
        self.scheduler.call_later(float(self.tuning.banner_seconds), self._end_banner, name="banner")
        for evt in ("mouse1", "space", "enter"):
            self.accept(evt, lambda: self._safe_call("banner.dismiss", self._end_banner))

    def _end_banner(self) -> None:
        if self.banner is not None:
            self.banner.dismiss()
            self.banner = None
            for evt in ("mouse1", "space", "enter"):
                self.ignore(evt)
        self.loop.state.game_started = True

    def _frame(self) -> None:
        if not self.dialogs.is_open():
            report = self.loop.frame()
            self.scene.apply(report)
        st = self.loop.state
        self.hud.set_stats(distance=st.distance_traveled, speed=st.speed)
        latest = self.diagnostics.latest()
        seen = (len(self.diagnostics.items()), latest.ts if latest is not None else 0.0)
        if seen != self._diag_seen:
            self._diag_seen = seen
            self.error_console.refresh()

    def _on_game_over(self, hit: Obstacle) -> None:
        self.diagnostics.info(
            context="run.game_over",
            message=f"hit obstacle {hit.id} at {self.loop.state.distance_traveled:.1f}",
        )
        remove_run_controls(self.hooks)
        if self.cfg.smoke:
            self._restart_run()
            return
        self.dialogs.acknowledge(text=GAME_OVER_TEXT, on_close=lambda: self._safe_call("run.reset", self._restart_run))

    def _restart_run(self) -> None:
        self.loop.reset()
        install_run_controls(self.hooks, self.loop)

    def _on_continue_answer(self, keep_playing: bool) -> None:
        if not keep_playing:
            self.userExit()

    def userExit(self) -> None:
        self._safe_call("app.shutdown", self._shutdown)
        super().userExit()

    def _shutdown(self) -> None:
        self.loop.stop()
        self._frame_handle.cancel()
        remove_run_controls(self.hooks)
        if self.banner is not None:
            self.banner.dismiss()
            self.banner = None
        self.dialogs.destroy()
        self.panel_ui.destroy()
        self.hud.destroy()
        self.error_console.destroy()
        self.scene.destroy()
        self.diagnostics.close()

    def _safe_call(self, context: str, fn) -> None:
        try:
            fn()
        except Exception as e:
            self._handle_unhandled_error(context=context, exc=e)

    def _handle_unhandled_error(self, *, context: str, exc: BaseException) -> None:
        # Never let a callback take down the render loop.
        try:
            self.diagnostics.exception(context=context, exc=exc)
            self.error_console.refresh()
        except Exception:
            try:
                print(f"[FATAL] diagnostics failed: {traceback.format_exc()}", file=sys.stderr)
            except Exception:
                pass

    def _smoke_exit(self, task):  # type: ignore[no-untyped-def]
        self._smoke_frames -= 1
        if self._smoke_frames <= 0:
            self.userExit()
            return task.done
        return task.cont


def run(*, cfg: RunConfig) -> None:
    app = RunnerApp(cfg)
    app.run()
