"""Configuration types for particle emitters: curves, colours, shapes and atlases."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum

from quadplay.geometry import Vec2


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels, nominally in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b, self.a + other.a)

    def __mul__(self, factor: float) -> Color:
        return Color(self.r * factor, self.g * factor, self.b * factor, self.a * factor)

    __rmul__ = __mul__

    def lerp(self, other: Color, t: float) -> Color:
        """Blend towards `other`: t=0 gives self, t=1 gives other."""
        return self * (1.0 - t) + other * t

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


WHITE = Color(1.0, 1.0, 1.0, 1.0)


class Interpolation(Enum):
    """How key points of a curve are joined."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass(frozen=True)
class BatchedCurve:
    """A curve sampled at evenly spaced steps, ready for fast lookup."""

    points: tuple[float, ...]

    def get(self, t: float) -> float:
        """Value of the curve at `t` in 0..1, interpolating between samples."""
        if not self.points:
            raise ValueError("cannot sample an empty curve")
        last = len(self.points) - 1
        t_scaled = t * len(self.points)
        previous_ix = min(max(int(t_scaled), 0), last)
        next_ix = min(previous_ix + 1, last)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass
class Curve:
    """A piecewise curve given by (x, value) key points with x rising from 0 to 1."""

    points: list[tuple[float, float]] = field(default_factory=list)
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def batch(self) -> BatchedCurve:
        """Sample the curve every 1/resolution along x."""
        if self.interpolation is Interpolation.BEZIER:
            raise ValueError("bezier interpolation is not supported, use linear")
        if self.resolution <= 0:
            raise ValueError("curve resolution must be positive")

        step = 1.0 / self.resolution
        x = 0.0
        samples: list[float] = []
        for (start_x, start_y), (end_x, end_y) in zip(self.points, self.points[1:]):
            span = end_x - start_x
            while x <= end_x:
                t = (x - start_x) / span if span != 0 else 1.0
                samples.append(start_y + (end_y - start_y) * t)
                x += step
        return BatchedCurve(tuple(samples))


@dataclass(frozen=True)
class EmissionShape:
    """Region particles are born in, relative to the emitter position."""

    kind: str = "point"
    width: float = 0.0
    height: float = 0.0
    radius: float = 0.0

    @classmethod
    def point(cls) -> EmissionShape:
        return cls("point")

    @classmethod
    def rect(cls, width: float, height: float) -> EmissionShape:
        return cls("rect", width=width, height=height)

    @classmethod
    def sphere(cls, radius: float) -> EmissionShape:
        return cls("sphere", radius=radius)

    def __post_init__(self) -> None:
        if self.kind not in ("point", "rect", "sphere"):
            raise ValueError(f"unknown emission shape: {self.kind!r}")

    def random_point(self, rng: random.Random) -> Vec2:
        """A random offset inside the shape, uniform over its area."""
        if self.kind == "rect":
            return Vec2(
                rng.uniform(-self.width / 2.0, self.width / 2.0),
                rng.uniform(-self.height / 2.0, self.height / 2.0),
            )
        if self.kind == "sphere":
            ro = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
            phi = rng.uniform(0.0, math.pi * 2.0)
            return Vec2(ro * math.cos(phi), ro * math.sin(phi))
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class ColorCurve:
    """Colour of a particle at the start, middle and end of its life."""

    start: Color = WHITE
    mid: Color = WHITE
    end: Color = WHITE

    def at(self, t: float) -> Color:
        """Colour at life fraction `t`: start to mid over the first half, mid to end after."""
        if t < 0.5:
            return self.start.lerp(self.mid, t * 2.0)
        return self.mid.lerp(self.end, (t - 0.5) * 2.0)


class BlendMode(Enum):
    """How overlapping particles combine."""

    ALPHA = "alpha"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class AtlasConfig:
    """A spritesheet of n columns and m rows, animated over frames start..end."""

    n: int
    m: int
    start_index: int
    end_index: int

    @classmethod
    def from_range(cls, n, m, start=None, end=None) -> AtlasConfig:
        """Build from a half-open frame range; a missing bound means the sheet's edge."""
        if n < 1 or m < 1:
            raise ValueError("atlas needs at least one column and one row")
        start_index = 0 if start is None else start
        end_index = n * m if end is None else end
        return cls(n, m, start_index, end_index)

    def frame_at(self, progress: float) -> int:
        """Frame shown at life fraction `progress`."""
        return max(int(progress * (self.end_index - self.start_index)), 0) + self.start_index

    def uv_rect(self, frame: int) -> tuple[float, float, float, float]:
        """Texture rectangle (u, v, width, height) of a frame."""
        x = frame % self.n
        y = frame // self.n
        return (x / self.n, y / self.m, 1.0 / self.n, 1.0 / self.m)


@dataclass
class EmitterConfig:
    """Everything that shapes how an emitter spawns and animates particles."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=EmissionShape.point)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    emitting: bool = True
    initial_direction: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    initial_rotation: float = 0.0
    initial_rotation_randomness: float = 0.0
    initial_angular_velocity: float = 0.0
    initial_angular_velocity_randomness: float = 0.0
    angular_accel: float = 0.0
    angular_damping: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Curve | None = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    atlas: AtlasConfig | None = None