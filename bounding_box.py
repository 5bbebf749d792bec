from dataclasses import dataclass
from typing import Iterator

from geometry import ScreenPoint


@dataclass
class BoundingBox:
    """
    Axis-aligned integer box, bounds are inclusive.

    Iterating over the box yields every integer point inside it, row by row (x varies fastest).
    Each call to iter() starts a new traversal, so the same box can be walked several times.
    """

    min: ScreenPoint
    max: ScreenPoint

    @classmethod
    def from_points(cls, *points: ScreenPoint) -> "BoundingBox":
        return cls(
            ScreenPoint(min(p.x for p in points), min(p.y for p in points)),
            ScreenPoint(max(p.x for p in points), max(p.y for p in points)),
        )

    def clamp(self, low: ScreenPoint, high: ScreenPoint) -> "BoundingBox":
        """
        Restrict the box to [low, high] in place. Only the lower corner is raised and the upper corner lowered,
        so a box lying entirely outside of the range ends up inverted, which makes it empty.
        """
        self.min = ScreenPoint(max(self.min.x, low.x), max(self.min.y, low.y))
        self.max = ScreenPoint(min(self.max.x, high.x), min(self.max.y, high.y))
        return self

    @property
    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y

    def __iter__(self) -> Iterator[ScreenPoint]:
        for y in range(self.min.y, self.max.y + 1):
            for x in range(self.min.x, self.max.x + 1):
                yield ScreenPoint(x, y)
