from __future__ import annotations

from typing import Callable, Protocol

from runfolio.game.checkpoints import Checkpoint
from runfolio.game.scheduler import Scheduler, TimerHandle
from runfolio.settings import RunTuning


class PanelView(Protocol):
    def show_panel(self, checkpoint: Checkpoint) -> None: ...

    def hide_panel(self) -> None: ...

    def ask_continue(self, on_answer: Callable[[bool], None]) -> None: ...


class PanelPresenter:
    """
    Shows checkpoint panels one at a time.

    A new panel replaces the current one and cancels its pending hide. The contact panel
    asks whether to keep playing shortly after it hides.
    """

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        view: PanelView,
        tuning: RunTuning,
        on_continue_answer: Callable[[bool], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._view = view
        self._tuning = tuning
        self._on_continue_answer = on_continue_answer
        self._hide: TimerHandle | None = None
        self.current: Checkpoint | None = None

    def present(self, checkpoint: Checkpoint) -> None:
        if self._hide is not None:
            self._hide.cancel()
        self.current = checkpoint
        self._view.show_panel(checkpoint)
        self._hide = self._scheduler.call_later(
            float(self._tuning.panel_hide_delay),
            lambda: self._on_hide(checkpoint),
            name="panel-hide",
        )

    def _on_hide(self, checkpoint: Checkpoint) -> None:
        self._hide = None
        self.current = None
        self._view.hide_panel()
        if checkpoint.is_contact:
            self._scheduler.call_later(
                float(self._tuning.continue_prompt_delay),
                self._prompt_continue,
                name="continue-prompt",
            )

    def _prompt_continue(self) -> None:
        self._view.ask_continue(self._answer)

    def _answer(self, keep_playing: bool) -> None:
        if self._on_continue_answer is not None:
            self._on_continue_answer(bool(keep_playing))
