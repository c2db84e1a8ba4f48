"""Half-planes for Euclidean reflection tilings.

A half-plane is stored as a boundary anchor point plus an outward normal.
The signed distance is positive on the normal side and zero on the
boundary. Interactive editors manipulate a half-plane through two handle
points on its boundary; ``half_plane_from_points`` and
``points_from_half_plane`` convert between the two representations.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from hypertile.geometry.exceptions import DegenerateGeometryError
from hypertile.geometry.geodesic import GeodesicHalfPlane
from hypertile.geometry.primitives import Vec2, perp, rotate_cw
from hypertile.geometry.tolerance import DEFAULT_TOL, tol_value

_EPS = tol_value(1.0, DEFAULT_TOL)


class HalfPlane(BaseModel, frozen=True):
    """A half-plane in anchor + normal form.

    Attributes:
        anchor: Any point on the boundary line.
        normal: Outward normal; need not be unit length until normalized.
    """

    anchor: Vec2 = Field(..., description="Point on the boundary line")
    normal: Vec2 = Field(..., description="Outward normal (positive side)")


def _unit_normal(normal: Vec2) -> Vec2:
    length = normal.norm
    if not length > _EPS:
        raise DegenerateGeometryError(
            "Half-plane normal must be non-zero", {"normal": normal.to_tuple()}
        )
    if abs(length - 1.0) <= _EPS:
        return normal
    return normal / length


def normalize_half_plane(plane: HalfPlane) -> HalfPlane:
    """Return an equivalent half-plane with a unit normal.

    Raises:
        DegenerateGeometryError: If the normal has (near) zero length.
    """
    return HalfPlane(anchor=plane.anchor, normal=_unit_normal(plane.normal))


def half_plane_offset(plane: HalfPlane) -> float:
    """Signed offset ``-(n . anchor)`` of the boundary line for the unit normal."""
    unit = normalize_half_plane(plane)
    return -unit.normal.dot(unit.anchor)


def half_plane_from_normal_and_offset(normal: Vec2, offset: float) -> HalfPlane:
    """Convert the ``normal . p + offset = 0`` form to anchor + normal.

    The anchor is the foot of the perpendicular from the origin.
    """
    unit = _unit_normal(normal)
    return HalfPlane(anchor=unit * -offset, normal=unit)


def evaluate_half_plane(plane: HalfPlane, point: Vec2) -> float:
    """Signed distance from the boundary; positive on the normal side."""
    unit = normalize_half_plane(plane)
    return unit.normal.dot(point - unit.anchor)


def to_geodesic_half_plane(plane: HalfPlane) -> GeodesicHalfPlane:
    """Convert to the ``GeodesicHalfPlane`` variant used by tilings."""
    unit = normalize_half_plane(plane)
    return GeodesicHalfPlane(normal=unit.normal, offset=-unit.normal.dot(unit.anchor))


def from_geodesic_half_plane(geodesic: GeodesicHalfPlane) -> HalfPlane:
    """Convert a ``GeodesicHalfPlane`` back to anchor + normal form."""
    return half_plane_from_normal_and_offset(geodesic.normal, geodesic.offset)


def half_plane_from_points(a: Vec2, b: Vec2) -> HalfPlane:
    """Derive the half-plane whose boundary passes through two handles.

    The normal is the clockwise rotation of the unit tangent ``b - a``, so
    the positive side is on the right when walking from ``a`` to ``b``.

    Raises:
        DegenerateGeometryError: If the handles coincide.
    """
    tangent = b - a
    length = tangent.norm
    if not length > tol_value(max(a.norm, b.norm)):
        raise DegenerateGeometryError(
            "Half-plane control points must not coincide",
            {"a": a.to_tuple(), "b": b.to_tuple()},
        )
    normal = rotate_cw(tangent / length)
    return half_plane_from_normal_and_offset(normal, -normal.dot(a))


def orient_half_plane_toward(plane: HalfPlane, point: Vec2) -> HalfPlane:
    """Flip the half-plane if needed so ``point`` lies on its non-negative side."""
    unit = normalize_half_plane(plane)
    if evaluate_half_plane(unit, point) >= 0:
        return unit
    return HalfPlane(anchor=unit.anchor, normal=-unit.normal)


def points_from_half_plane(plane: HalfPlane, spacing: float) -> tuple[Vec2, Vec2]:
    """Place two boundary handles ``spacing`` apart.

    The first handle is the foot of the perpendicular from the origin and
    the second follows the counter-clockwise rotation of the normal.

    Raises:
        DegenerateGeometryError: If ``spacing`` is not positive.
    """
    if not (math.isfinite(spacing) and spacing > _EPS):
        raise DegenerateGeometryError(
            "Half-plane control spacing must be positive", {"spacing": spacing}
        )
    unit = normalize_half_plane(plane)
    offset = -unit.normal.dot(unit.anchor)
    origin = unit.normal * -offset
    return origin, origin + perp(unit.normal) * spacing
