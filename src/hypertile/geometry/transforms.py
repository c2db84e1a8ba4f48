"""Inversions and reflections.

Hyperbolic reflections in the Poincare disk are Euclidean reflections
across diameters or inversions in orthogonal circles. Euclidean tilings use
ordinary reflections across lines. Each reflection is an immutable value
object; calling ``apply`` (or the object itself) maps a point.

Example:
    from hypertile.geometry import Vec2, geodesic_from_boundary, reflect_across_geodesic

    g = geodesic_from_boundary(Vec2(x=1, y=0), Vec2(x=0, y=1))
    mirror = reflect_across_geodesic(g)
    image = mirror(Vec2(x=0.3, y=0.2))
    back = mirror(image)  # Vec2(x=0.3, y=0.2) up to rounding
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from hypertile.geometry.exceptions import DegenerateGeometryError
from hypertile.geometry.geodesic import (
    GeodesicCircle,
    GeodesicDiameter,
    GeodesicHalfPlane,
)
from hypertile.geometry.half_plane import (
    HalfPlane,
    from_geodesic_half_plane,
    normalize_half_plane,
)
from hypertile.geometry.primitives import Circle, Vec2, distance
from hypertile.geometry.tolerance import DEFAULT_TOL, tol_value

_EPS = tol_value(1.0, DEFAULT_TOL)


def invert_unit(p: Vec2) -> Vec2:
    """Invert ``p`` in the unit circle: ``p / |p|^2``.

    Points on the unit circle are fixed. Non-finite points and points
    within tolerance of the origin are returned unchanged.
    """
    if not p.is_finite:
        return p
    r2 = p.norm_sq
    if r2 <= _EPS:
        return p
    return p / r2


def invert_in_circle(p: Vec2, circle: Circle) -> Vec2:
    """Invert ``p`` in ``circle``: ``c + r^2 / |p - c|^2 * (p - c)``.

    Only the exact center (and non-finite input) is returned unchanged, so
    the map stays an involution arbitrarily close to the center.
    """
    v = p - circle.center
    if not v.is_finite:
        return p
    d2 = v.norm_sq
    if d2 == 0:
        return p
    return circle.center + v * (circle.radius * circle.radius / d2)


def circle_through_points(a: Vec2, b: Vec2, c: Vec2) -> Circle | None:
    """Circumscribed circle of three points, or None when they are colinear."""
    d = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if not math.isfinite(d) or abs(d) <= _EPS:
        return None
    a2, b2, c2 = a.norm_sq, b.norm_sq, c.norm_sq
    ux = (a2 * (b.y - c.y) + b2 * (c.y - a.y) + c2 * (a.y - b.y)) / d
    uy = (a2 * (c.x - b.x) + b2 * (a.x - c.x) + c2 * (b.x - a.x)) / d
    if not (math.isfinite(ux) and math.isfinite(uy)):
        return None
    center = Vec2(x=ux, y=uy)
    radius = distance(center, a)
    if not radius > 0:
        return None
    return Circle(center=center, radius=radius)


def invert_line_in_circle(
    start: Vec2, end: Vec2, circle: Circle
) -> GeodesicHalfPlane | Circle:
    """Image of the line through two handles under inversion in ``circle``.

    Args:
        start: First handle on the line.
        end: Second handle on the line.
        circle: Circle of inversion.

    Returns:
        The line itself (as ``normal . p + offset = 0``) when it passes
        through the center of inversion, otherwise the circle through the
        inverted handles and the center.

    Raises:
        DegenerateGeometryError: If the handles coincide.
    """
    direction = end - start
    length = direction.norm
    if not length > _EPS:
        raise DegenerateGeometryError(
            "Line handles must not coincide",
            {"start": start.to_tuple(), "end": end.to_tuple()},
        )
    normal = Vec2(x=-direction.y / length, y=direction.x / length)
    along = normal.dot(start)
    line = GeodesicHalfPlane(normal=normal, offset=-along)

    center_distance = normal.dot(circle.center) - along
    if abs(center_distance) <= tol_value(max(1.0, abs(along)), DEFAULT_TOL):
        return line

    image = circle_through_points(
        invert_in_circle(start, circle),
        invert_in_circle(end, circle),
        circle.center,
    )
    return line if image is None else image


class Reflection(Protocol):
    """A point reflection (involution of the plane)."""

    def apply(self, point: Vec2) -> Vec2:
        """Map ``point`` to its mirror image."""
        ...

    def __call__(self, point: Vec2) -> Vec2: ...


@dataclass(frozen=True)
class DiameterReflection:
    """Reflection across a line through the origin: ``2(u . p)u - p``."""

    direction: Vec2

    def apply(self, point: Vec2) -> Vec2:
        u = self.direction
        return u * (2 * u.dot(point)) - point

    def __call__(self, point: Vec2) -> Vec2:
        return self.apply(point)


@dataclass(frozen=True)
class CircleInversion:
    """Inversion in a circle."""

    center: Vec2
    radius: float

    def apply(self, point: Vec2) -> Vec2:
        return invert_in_circle(point, Circle(center=self.center, radius=self.radius))

    def __call__(self, point: Vec2) -> Vec2:
        return self.apply(point)


@dataclass(frozen=True)
class HalfPlaneReflection:
    """Reflection across the boundary of a half-plane with unit normal."""

    normal: Vec2
    anchor: Vec2

    def signed_distance(self, point: Vec2) -> float:
        """Signed distance of ``point`` from the boundary line."""
        return self.normal.dot(point - self.anchor)

    def apply(self, point: Vec2) -> Vec2:
        return point - self.normal * (2 * self.signed_distance(point))

    def __call__(self, point: Vec2) -> Vec2:
        return self.apply(point)


def _unit_direction(direction: Vec2) -> Vec2:
    length = direction.norm
    if not length > 0:
        return Vec2(x=1.0, y=0.0)
    return direction / length


def reflect_across_half_plane(
    plane: HalfPlane | GeodesicHalfPlane,
) -> HalfPlaneReflection:
    """Build the reflection across a half-plane boundary.

    Raises:
        DegenerateGeometryError: If the normal has zero length.
    """
    if isinstance(plane, GeodesicHalfPlane):
        plane = from_geodesic_half_plane(plane)
    unit = normalize_half_plane(plane)
    return HalfPlaneReflection(normal=unit.normal, anchor=unit.anchor)


def reflect_across_geodesic(
    geodesic: GeodesicCircle | GeodesicDiameter | GeodesicHalfPlane,
) -> DiameterReflection | CircleInversion | HalfPlaneReflection:
    """Build the reflection whose mirror is ``geodesic``."""
    match geodesic:
        case GeodesicDiameter(direction=direction):
            return DiameterReflection(direction=_unit_direction(direction))
        case GeodesicHalfPlane():
            return reflect_across_half_plane(geodesic)
        case GeodesicCircle(center=center, radius=radius):
            return CircleInversion(center=center, radius=radius)
