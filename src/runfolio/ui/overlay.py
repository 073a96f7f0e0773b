from __future__ import annotations

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectFrame, DirectLabel
from panda3d.core import TextNode

from runfolio.game.checkpoints import Checkpoint
from runfolio.ui.theme import Theme


class PortfolioPanelUI:
    """Checkpoint text block in the upper-left corner of the screen."""

    def __init__(self, *, aspect2d, theme: Theme) -> None:
        self._theme = theme
        w = 1.30
        h = 0.62
        self._root = DirectFrame(
            parent=aspect2d,
            frameColor=theme.outline,
            relief=DGG.FLAT,
            frameSize=(0.0, w, 0.0, h),
            pos=(-1.70, 0.0, 0.28),
        )
        self._root["state"] = DGG.DISABLED
        DirectFrame(
            parent=self._root,
            frameColor=theme.panel,
            relief=DGG.FLAT,
            frameSize=(theme.outline_w, w - theme.outline_w, theme.outline_w, h - theme.outline_w),
        )["state"] = DGG.DISABLED
        DirectFrame(
            parent=self._root,
            frameColor=theme.accent,
            relief=DGG.FLAT,
            frameSize=(theme.outline_w, w - theme.outline_w, h - theme.outline_w - theme.accent_h, h - theme.outline_w),
        )["state"] = DGG.DISABLED

        self._title = DirectLabel(
            parent=self._root,
            text="",
            text_scale=theme.title_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.text,
            frameColor=(0, 0, 0, 0),
            pos=(theme.pad, 0.0, h - theme.pad - theme.title_scale),
        )
        self._body = DirectLabel(
            parent=self._root,
            text="",
            text_scale=theme.body_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.text_muted,
            text_wordwrap=27,
            frameColor=(0, 0, 0, 0),
            pos=(theme.pad, 0.0, h - (theme.pad * 2.0) - (theme.title_scale * 2.0)),
        )
        self._root.hide()

    def show_panel(self, checkpoint: Checkpoint) -> None:
        self._title["text"] = checkpoint.title
        self._body["text"] = "\n".join(checkpoint.lines)
        self._root.show()

    def hide_panel(self) -> None:
        self._root.hide()

    def is_visible(self) -> bool:
        return not self._root.isHidden()

    def destroy(self) -> None:
        try:
            self._root.destroy()
        except Exception:
            pass


class BannerUI:
    """Instruction banner at the top of the screen; any key or click dismisses it early."""

    def __init__(self, *, aspect2d, theme: Theme, text: str = "Use Arrow Keys to Move!") -> None:
        self._label = DirectLabel(
            parent=aspect2d,
            text=text,
            text_scale=theme.title_scale,
            text_fg=theme.text,
            text_shadow=theme.shadow,
            text_align=TextNode.ACenter,
            frameColor=(0, 0, 0, 0),
            pos=(0.0, 0.0, 0.86),
        )
        self._label["state"] = DGG.DISABLED

    def is_visible(self) -> bool:
        return self._label is not None

    def dismiss(self) -> None:
        if self._label is None:
            return
        try:
            self._label.destroy()
        except Exception:
            pass
        self._label = None


class HudUI:
    """Small distance/speed readout in the top-right corner."""

    def __init__(self, *, aspect2d, theme: Theme) -> None:
        self._label = DirectLabel(
            parent=aspect2d,
            text="",
            text_scale=theme.small_scale,
            text_fg=theme.text,
            text_shadow=theme.shadow,
            text_align=TextNode.ARight,
            frameColor=(0, 0, 0, 0),
            pos=(1.70, 0.0, 0.92),
        )
        self._label["state"] = DGG.DISABLED

    def set_stats(self, *, distance: float, speed: float) -> None:
        self._label["text"] = f"{distance:7.1f} m   speed {speed:.2f}"

    def destroy(self) -> None:
        try:
            self._label.destroy()
        except Exception:
            pass
