from __future__ import annotations

from panda3d.core import LVector3f

from runfolio.common.aabb import AABB


def _box(x: float, y: float, z: float, hx: float = 0.5, hy: float = 0.5, hz: float = 0.5) -> AABB:
    return AABB.from_center(center=LVector3f(x, y, z), half_extents=LVector3f(hx, hy, hz))


def test_overlapping_boxes_intersect() -> None:
    a = _box(0.0, 0.0, 0.5)
    assert a.intersects(_box(0.4, 0.4, 0.5))
    assert _box(0.4, 0.4, 0.5).intersects(a)


def test_touching_faces_count_as_hit() -> None:
    a = AABB(minimum=LVector3f(0, 0, 0), maximum=LVector3f(1, 1, 1))
    b = AABB(minimum=LVector3f(1, 0, 0), maximum=LVector3f(2, 1, 1))
    assert a.intersects(b)


def test_separated_on_any_axis_means_no_hit() -> None:
    a = _box(0.0, 0.0, 0.5)
    assert not a.intersects(_box(2.0, 0.0, 0.5))
    assert not a.intersects(_box(0.0, 2.0, 0.5))
    assert not a.intersects(_box(0.0, 0.0, 3.0))
