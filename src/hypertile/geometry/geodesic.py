"""Geodesics of the Poincare disk and their constructors.

A hyperbolic geodesic is either a diameter of the unit disk or an arc of a
circle orthogonal to the unit circle. A circle with center ``c`` and
radius ``r`` meets the unit circle at right angles iff ``|c|^2 = 1 + r^2``.
The Euclidean tilings reuse the same union with a half-plane variant whose
boundary line is ``normal . p + offset = 0``.

Example:
    from hypertile.geometry import Vec2, geodesic_from_boundary

    g = geodesic_from_boundary(Vec2(x=1, y=0), Vec2(x=0, y=1))
    # GeodesicCircle(kind='circle', center=Vec2(x=1.0, y=1.0), radius=1.0)
"""

from __future__ import annotations

import math
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from hypertile.geometry.exceptions import DegenerateGeometryError, NonFiniteInputError
from hypertile.geometry.primitives import Circle, Vec2, distance
from hypertile.geometry.tolerance import DEFAULT_TOL, Tolerance, tol_value


class GeodesicCircle(BaseModel, frozen=True):
    """A geodesic carried by a circle orthogonal to the unit circle.

    Attributes:
        center: Circle center, outside the closed unit disk.
        radius: Circle radius, ``sqrt(|center|^2 - 1)``.
    """

    kind: Literal["circle"] = "circle"
    center: Vec2 = Field(..., description="Center of the orthogonal circle")
    radius: float = Field(..., ge=0, description="Radius of the orthogonal circle")

    def to_circle(self) -> Circle:
        """Return the underlying Euclidean circle."""
        return Circle(center=self.center, radius=self.radius)


class GeodesicDiameter(BaseModel, frozen=True):
    """A geodesic through the origin.

    Attributes:
        direction: Unit vector along the diameter.
    """

    kind: Literal["diameter"] = "diameter"
    direction: Vec2 = Field(..., description="Unit direction of the diameter")


class GeodesicHalfPlane(BaseModel, frozen=True):
    """Euclidean mirror line ``normal . p + offset = 0``.

    Attributes:
        normal: Unit normal; the positive side is where the line is evaluated
            positive.
        offset: Signed offset of the line.
    """

    kind: Literal["half_plane"] = "half_plane"
    normal: Vec2 = Field(..., description="Unit normal of the line")
    offset: float = Field(..., description="Line offset")


Geodesic = Annotated[
    GeodesicCircle | GeodesicDiameter | GeodesicHalfPlane,
    Field(discriminator="kind"),
]


def _unit_or_fallback(v: Vec2) -> Vec2:
    length = v.norm
    if not (length > 0) or not math.isfinite(length):
        return Vec2(x=1.0, y=0.0)
    return v / length


def geodesic_from_boundary(a: Vec2, b: Vec2) -> GeodesicCircle | GeodesicDiameter:
    """Construct the geodesic joining two ideal (boundary) points.

    Opposite points give a diameter. Otherwise the center ``c`` solves
    ``a . c = 1`` and ``b . c = 1`` and the radius is ``|a - c|``.

    Args:
        a: First boundary point, expected on the unit circle.
        b: Second boundary point, expected on the unit circle.

    Returns:
        The geodesic through ``a`` and ``b``.

    Raises:
        NonFiniteInputError: If any coordinate is NaN or infinite.
        DegenerateGeometryError: If the points coincide or the linear system
            is singular.
    """
    if not (a.is_finite and b.is_finite):
        raise NonFiniteInputError(
            "Non-finite boundary point", {"a": a.to_tuple(), "b": b.to_tuple()}
        )

    eps = tol_value(1.0, DEFAULT_TOL)
    if distance(a, b) <= eps:
        raise DegenerateGeometryError(
            "Degenerate boundary pair: identical points",
            {"a": a.to_tuple(), "b": b.to_tuple()},
        )

    if (a + b).norm <= eps:
        return GeodesicDiameter(direction=_unit_or_fallback(a))

    det = a.cross(b)
    if abs(det) <= eps:
        raise DegenerateGeometryError(
            "Degenerate boundary pair: singular system",
            {"a": a.to_tuple(), "b": b.to_tuple(), "det": det},
        )
    center = Vec2(x=(b.y - a.y) / det, y=(a.x - b.x) / det)
    return GeodesicCircle(center=center, radius=distance(a, center))


def geodesic_through_points(p: Vec2, q: Vec2) -> GeodesicCircle | GeodesicDiameter:
    """Construct the geodesic through two interior points of the disk.

    Args:
        p: First point, expected inside the unit disk.
        q: Second point, expected inside the unit disk.

    Returns:
        A diameter when the points are colinear with the origin, otherwise
        the orthogonal circle through both points.

    Raises:
        NonFiniteInputError: If any coordinate is NaN or infinite.
        DegenerateGeometryError: If both points sit at the origin.
    """
    if not (p.is_finite and q.is_finite):
        raise NonFiniteInputError(
            "Non-finite interior point", {"p": p.to_tuple(), "q": q.to_tuple()}
        )

    eps = tol_value(1.0, DEFAULT_TOL)
    p_at_origin = p.norm <= eps
    q_at_origin = q.norm <= eps
    if p_at_origin and q_at_origin:
        raise DegenerateGeometryError(
            "Both points coincide with the origin",
            {"p": p.to_tuple(), "q": q.to_tuple()},
        )
    if p_at_origin:
        return GeodesicDiameter(direction=q.normalized())
    if q_at_origin:
        return GeodesicDiameter(direction=p.normalized())

    det = p.cross(q)
    if abs(det) <= eps:
        farther = p if p.norm >= q.norm else q
        return GeodesicDiameter(direction=farther.normalized())

    rhs1 = 0.5 * (1.0 + p.norm_sq)
    rhs2 = 0.5 * (1.0 + q.norm_sq)
    center = Vec2(
        x=(rhs1 * q.y - rhs2 * p.y) / det,
        y=(rhs2 * p.x - rhs1 * q.x) / det,
    )
    radius = math.sqrt(max(0.0, center.norm_sq - 1.0))
    return GeodesicCircle(center=center, radius=radius)


def geodesic_contains(
    geodesic: GeodesicCircle | GeodesicDiameter | GeodesicHalfPlane,
    point: Vec2,
    tol: Tolerance = DEFAULT_TOL,
) -> bool:
    """Check whether ``point`` lies on the carrier of ``geodesic``.

    The carrier is the full circle or line, not only the arc inside the
    disk. Non-finite points are never contained.
    """
    if not point.is_finite:
        return False
    match geodesic:
        case GeodesicCircle(center=center, radius=radius):
            return abs(distance(point, center) - radius) <= tol_value(radius, tol)
        case GeodesicDiameter(direction=direction):
            return abs(direction.cross(point)) <= tol_value(1.0, tol)
        case GeodesicHalfPlane(normal=normal, offset=offset):
            residual = normal.dot(point) + offset
            return abs(residual) <= tol_value(abs(offset), tol)
