from __future__ import annotations

"""Screen-space vectors and rectangles (x right, y down)."""

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def normalized_with_length(self, *, epsilon: float = 1e-6) -> tuple[Vec2, float]:
        """Unit direction plus the original length; the zero vector for anything shorter than `epsilon`."""
        magnitude = self.length()
        if magnitude <= epsilon:
            return Vec2(), 0.0
        return self / magnitude, magnitude

    def distance_to(self, other: Vec2) -> float:
        return (other - self).length()

    @classmethod
    def from_polar(cls, theta: float, radius: float = 1.0) -> Vec2:
        return cls(math.cos(theta) * radius, math.sin(theta) * radius)

    def to_angle(self) -> float:
        return math.atan2(self.y, self.x)

    def offset(self, *, dx: float = 0.0, dy: float = 0.0) -> Vec2:
        return Vec2(self.x + dx, self.y + dy)

    def to_rl(self) -> rl.Vector2:
        import pyray as rl

        return rl.Vector2(self.x, self.y)


@dataclass(slots=True, frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def expanded(self, margin: float) -> Rect:
        return Rect(self.x - margin, self.y - margin, self.w + 2.0 * margin, self.h + 2.0 * margin)

    def contains(self, point: Vec2) -> bool:
        # Border counts as inside.
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom
