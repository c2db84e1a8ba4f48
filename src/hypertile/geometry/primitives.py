"""Geometry primitives for hypertile.

This module provides immutable Pydantic models for points, circles and
axis-aligned bounding boxes in the Euclidean plane that hosts the Poincare
disk. Coordinates are plain floats; NaN and infinity are representable so
that consumers can detect and reject them explicitly.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Self

from pydantic import BaseModel, Field, model_validator


class Vec2(BaseModel, frozen=True):
    """A 2D vector or point.

    Attributes:
        x: Horizontal component.
        y: Vertical component.
    """

    x: float = Field(..., description="X component")
    y: float = Field(..., description="Y component")

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(x=self.x * factor, y=self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(x=self.x / divisor, y=self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(x=-self.x, y=-self.y)

    def dot(self, other: Vec2) -> float:
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """Return the z-component of the 3D cross product with ``other``."""
        return self.x * other.y - self.y * other.x

    @property
    def norm_sq(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    @property
    def norm(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    @property
    def is_finite(self) -> bool:
        """True when both components are finite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def normalized(self) -> Vec2:
        """Return the unit vector in the same direction.

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        length = self.norm
        return Vec2(x=self.x / length, y=self.y / length)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, coord: tuple[float, float]) -> Self:
        """Create Vec2 from (x, y) tuple."""
        return cls(x=coord[0], y=coord[1])


ORIGIN = Vec2(x=0.0, y=0.0)


class Circle(BaseModel, frozen=True):
    """A Euclidean circle.

    The radius is not constrained here; consumers treat non-positive or
    non-finite radii as empty.

    Attributes:
        center: Circle center.
        radius: Circle radius.
    """

    center: Vec2 = Field(..., description="Circle center")
    radius: float = Field(..., description="Circle radius")

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to (cx, cy, radius) tuple."""
        return (self.center.x, self.center.y, self.radius)

    @classmethod
    def from_tuple(cls, circle: tuple[float, float, float]) -> Self:
        """Create Circle from (cx, cy, radius) tuple."""
        return cls(center=Vec2(x=circle[0], y=circle[1]), radius=circle[2])


class AABB(BaseModel, frozen=True):
    """An axis-aligned bounding box.

    Attributes:
        min_x: Left edge.
        min_y: Bottom edge.
        max_x: Right edge.
        max_y: Top edge.
    """

    min_x: float = Field(..., description="Minimum X coordinate")
    min_y: float = Field(..., description="Minimum Y coordinate")
    max_x: float = Field(..., description="Maximum X coordinate")
    max_y: float = Field(..., description="Maximum Y coordinate")

    @model_validator(mode="after")
    def _validate_extent(self) -> Self:
        """Ensure the box is not inverted."""
        if self.max_x < self.min_x or self.max_y < self.min_y:
            raise ValueError("AABB maximum must not be below minimum")
        return self

    @property
    def width(self) -> float:
        """Horizontal extent."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Vertical extent."""
        return self.max_y - self.min_y

    def contains_point(self, point: Vec2) -> bool:
        """Check if a point is inside this box (inclusive of edges)."""
        return (
            self.min_x <= point.x <= self.max_x
            and self.min_y <= point.y <= self.max_y
        )

    def intersects(self, other: AABB) -> bool:
        """Check if this box overlaps another (touching edges count)."""
        return not (
            other.min_x > self.max_x
            or other.max_x < self.min_x
            or other.min_y > self.max_y
            or other.max_y < self.min_y
        )

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y) tuple."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @classmethod
    def from_points(cls, points: Iterable[Vec2]) -> Self:
        """Create the tightest box around ``points``.

        Raises:
            ValueError: If ``points`` is empty.
        """
        pts = list(points)
        if not pts:
            raise ValueError("AABB requires at least one point")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def perp(v: Vec2) -> Vec2:
    """Rotate ``v`` by +90 degrees."""
    return Vec2(x=-v.y, y=v.x)


def rotate_cw(v: Vec2) -> Vec2:
    """Rotate ``v`` by -90 degrees."""
    return Vec2(x=v.y, y=-v.x)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return max(lo, min(hi, value))


def safe_sqrt(value: float, eps: float = 1e-15) -> float:
    """Square root that absorbs tiny negative rounding artifacts.

    Args:
        value: Radicand.
        eps: Negative values within ``eps`` of zero are clamped to 0.

    Returns:
        ``sqrt(value)``, 0 for values in ``[-eps, 0)``, NaN below that.
    """
    if value >= 0:
        return math.sqrt(value)
    if value >= -eps:
        return 0.0
    return math.nan


def normalize_angle(theta: float) -> float:
    """Map an angle into the half-open interval (-pi, pi]."""
    if -math.pi < theta <= math.pi:
        return theta
    if not math.isfinite(theta):
        return math.nan
    wrapped = math.fmod(theta + math.pi, 2 * math.pi)
    if wrapped <= 0:
        wrapped += 2 * math.pi
    return wrapped - math.pi


def barycenter(points: Iterable[Vec2]) -> Vec2:
    """Arithmetic mean of ``points``."""
    pts = list(points)
    sx = sum(p.x for p in pts)
    sy = sum(p.y for p in pts)
    return Vec2(x=sx / len(pts), y=sy / len(pts))
