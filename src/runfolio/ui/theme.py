from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float, float]


@dataclass(frozen=True)
class Theme:
    """
    Overlay theme tokens.

    Values are normalized floats (0..1), compatible with Panda3D color tuples;
    sizes are in aspect2d units.
    """

    pad: float = 0.045
    outline_w: float = 0.008
    accent_h: float = 0.010

    title_scale: float = 0.060
    body_scale: float = 0.044
    small_scale: float = 0.036

    panel: Color = (0.06, 0.07, 0.10, 0.86)
    outline: Color = (0.55, 0.58, 0.66, 1.0)
    accent: Color = (0.95, 0.42, 0.12, 1.0)
    text: Color = (0.96, 0.96, 0.94, 1.0)
    text_muted: Color = (0.70, 0.72, 0.76, 1.0)
    danger: Color = (1.0, 0.34, 0.47, 1.0)
    shadow: Color = (0.0, 0.0, 0.0, 0.60)
