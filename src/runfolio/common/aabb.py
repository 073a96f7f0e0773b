from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


@dataclass(frozen=True)
class AABB:
    minimum: LVector3f
    maximum: LVector3f

    @classmethod
    def from_center(cls, *, center: LVector3f, half_extents: LVector3f) -> "AABB":
        return cls(
            minimum=LVector3f(center - half_extents),
            maximum=LVector3f(center + half_extents),
        )

    def intersects(self, other: "AABB") -> bool:
        # Touching faces count as a hit.
        return (
            self.minimum.x <= other.maximum.x
            and self.maximum.x >= other.minimum.x
            and self.minimum.y <= other.maximum.y
            and self.maximum.y >= other.minimum.y
            and self.minimum.z <= other.maximum.z
            and self.maximum.z >= other.minimum.z
        )
