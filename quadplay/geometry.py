"""Small 2D vector and rectangle types used by the physics and game modules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Scalar = Union[int, float]


@dataclass(frozen=True)
class Vec2:
    """An immutable two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[Vec2, Scalar]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Vec2, Scalar]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        return Vec2(self.x / other, self.y / other)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """Unit vector pointing the same way; a zero vector has no direction."""
        norm = self.length()
        if norm == 0.0 or not math.isfinite(norm):
            raise ValueError("cannot normalize a zero-length or non-finite vector")
        return Vec2(self.x / norm, self.y / norm)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def overlaps(self, other: Rect) -> bool:
        """True when the rectangles intersect; touching edges count."""
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.top <= other.bottom
            and self.bottom >= other.top
        )

    def contains(self, point: Vec2) -> bool:
        """True when the point lies inside; the right and bottom edges are excluded."""
        return (
            self.x <= point.x < self.x + self.w
            and self.y <= point.y < self.y + self.h
        )