from __future__ import annotations

from collections import deque
from typing import Callable

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectDialog import OkDialog, YesNoDialog

from runfolio.ui.theme import Theme


class ModalDialogs:
    """
    Game-over acknowledgement and the continue prompt.

    One dialog is on screen at a time. A request made while another dialog is open waits
    in line and opens once the current one is answered, so an acknowledgement is never
    dropped. `is_open()` lets the host hold the run while the player reads.
    """

    def __init__(
        self,
        *,
        theme: Theme,
        ok_dialog: Callable[..., object] = OkDialog,
        yes_no_dialog: Callable[..., object] = YesNoDialog,
    ) -> None:
        self._theme = theme
        self._ok_dialog = ok_dialog
        self._yes_no_dialog = yes_no_dialog
        self._dialog = None
        self._waiting: deque[Callable[[], None]] = deque()

    def is_open(self) -> bool:
        return self._dialog is not None

    def queued(self) -> int:
        return len(self._waiting)

    def acknowledge(self, *, text: str, on_close: Callable[[], None]) -> None:
        def _open() -> None:
            self._dialog = self._ok_dialog(
                text=text,
                text_fg=self._theme.text,
                frameColor=self._theme.panel,
                fadeScreen=0.5,
                command=lambda _value: self._answered(on_close),
            )

        self._request(_open)

    def ask_yes_no(self, *, text: str, on_answer: Callable[[bool], None]) -> None:
        def _open() -> None:
            self._dialog = self._yes_no_dialog(
                text=text,
                text_fg=self._theme.text,
                frameColor=self._theme.panel,
                fadeScreen=0.5,
                command=lambda value: self._answered(lambda: on_answer(value == DGG.DIALOG_YES)),
            )

        self._request(_open)

    def _request(self, open_fn: Callable[[], None]) -> None:
        if self._dialog is None:
            open_fn()
        else:
            self._waiting.append(open_fn)

    def _answered(self, then: Callable[[], None]) -> None:
        self._cleanup_current()
        try:
            then()
        finally:
            if self._dialog is None and self._waiting:
                self._waiting.popleft()()

    def _cleanup_current(self) -> None:
        dlg = self._dialog
        self._dialog = None
        if dlg is None:
            return
        try:
            dlg.cleanup()
        except Exception:
            pass

    def destroy(self) -> None:
        self._waiting.clear()
        self._cleanup_current()
