from __future__ import annotations

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectFrame, DirectLabel
from panda3d.core import TextNode

from runfolio.common.diagnostics import DiagnosticLog
from runfolio.ui.theme import Theme


class ErrorConsoleUI:
    """
    Bottom-screen diagnostics strip.

    Hidden while the log is empty. Collapsed view shows the latest entry; expanded
    view (F3) shows the last few.
    """

    def __init__(self, *, aspect2d, theme: Theme, log: DiagnosticLog, feed_lines: int = 5) -> None:
        self._log = log
        self._feed_lines = max(1, int(feed_lines))
        self._expanded = False
        w = 3.2
        h = 0.12
        self._root = DirectFrame(
            parent=aspect2d,
            frameColor=(theme.panel[0], theme.panel[1], theme.panel[2], 0.90),
            relief=DGG.FLAT,
            frameSize=(0.0, w, 0.0, h),
            pos=(-1.6, 0.0, -0.96),
        )
        self._root["state"] = DGG.DISABLED
        self._label = DirectLabel(
            parent=self._root,
            text="",
            text_scale=theme.small_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.danger,
            frameColor=(0, 0, 0, 0),
            pos=(theme.pad * 0.5, 0.0, h * 0.35),
            text_wordwrap=86,
        )
        self._root.hide()

    def toggle(self) -> None:
        self._expanded = not self._expanded
        self.refresh()

    def refresh(self) -> None:
        items = self._log.items()
        if not items:
            self._root.hide()
            return
        if self._expanded:
            shown = items[-self._feed_lines :]
            self._label["text"] = "\n".join(it.summary_line() for it in reversed(shown))
        else:
            self._label["text"] = items[-1].summary_line()
        self._root.show()

    def destroy(self) -> None:
        try:
            self._root.destroy()
        except Exception:
            pass
