"""Angles between hyperbolic geodesics at a common point."""

from __future__ import annotations

import math

from hypertile.geometry.exceptions import GeometryError
from hypertile.geometry.geodesic import (
    GeodesicCircle,
    GeodesicDiameter,
    GeodesicHalfPlane,
)
from hypertile.geometry.primitives import ORIGIN, Vec2, clamp

AnyGeodesic = GeodesicCircle | GeodesicDiameter | GeodesicHalfPlane


def diameter_circle_meet(direction: Vec2, circle: GeodesicCircle) -> Vec2:
    """Intersection of a diameter with an orthogonal circle nearest the origin.

    Solves ``|s u - c| = r`` for the smaller root ``s``; a tiny negative
    discriminant is clamped to zero.
    """
    c = circle.center
    c_dot_u = c.dot(direction)
    disc = c_dot_u * c_dot_u - (c.norm_sq - circle.radius * circle.radius)
    s = c_dot_u - math.sqrt(max(0.0, disc))
    return direction * s


def _default_meeting_point(a: AnyGeodesic, b: AnyGeodesic) -> Vec2:
    match a, b:
        case GeodesicDiameter(), GeodesicDiameter():
            return ORIGIN
        case GeodesicDiameter(direction=u), GeodesicCircle():
            return diameter_circle_meet(u, b)
        case GeodesicCircle(), GeodesicDiameter(direction=u):
            return diameter_circle_meet(u, a)
        case GeodesicCircle(center=ca), GeodesicCircle(center=cb):
            return (ca + cb) * 0.5
    return ORIGIN


def _tangent_at(geodesic: GeodesicCircle | GeodesicDiameter, point: Vec2) -> Vec2:
    if isinstance(geodesic, GeodesicDiameter):
        return geodesic.direction
    c = geodesic.center
    return Vec2(x=point.y - c.y, y=-(point.x - c.x))


def _unit(v: Vec2) -> Vec2:
    length = v.norm
    return v / length if length > 0 else v


def angle_between_geodesics_at(
    a: AnyGeodesic,
    b: AnyGeodesic,
    at: Vec2 | None = None,
) -> float:
    """Unsigned angle in [0, pi/2] between two geodesics at a point.

    When ``at`` is omitted the meeting point is inferred: the origin for two
    diameters, the diameter/circle intersection nearest the origin, or the
    midpoint of the centers for two circles.

    Raises:
        GeometryError: If either geodesic is a Euclidean half-plane.
    """
    if isinstance(a, GeodesicHalfPlane) or isinstance(b, GeodesicHalfPlane):
        raise GeometryError(
            "Half-plane geodesics are not supported in hyperbolic angle evaluation"
        )
    point = at if at is not None else _default_meeting_point(a, b)
    du = _unit(_tangent_at(a, point))
    dv = _unit(_tangent_at(b, point))
    return math.acos(clamp(abs(du.dot(dv)), 0.0, 1.0))
