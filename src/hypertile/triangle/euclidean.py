"""Fundamental Euclidean (p, q, r) triangle.

Only (3,3,3), (2,4,4) and (2,3,6) (up to order) close up in the plane.
The triangle has ``v0`` at the origin, ``v1 = (1, 0)`` and ``v2`` placed by
the law of sines. Mirror ``i`` is the line through the edge opposite
``v{i}``, oriented so the triangle lies on its negative side.
"""

from __future__ import annotations

import math

from hypertile.geometry.exceptions import InfeasibleParametersError
from hypertile.geometry.geodesic import GeodesicHalfPlane
from hypertile.geometry.half_plane import (
    half_plane_from_points,
    orient_half_plane_toward,
    to_geodesic_half_plane,
)
from hypertile.geometry.primitives import Vec2, barycenter
from hypertile.triangle.models import FundamentalTriangle, GeometryKind

SUM_TOL = 1e-6


def _edge_mirror(a: Vec2, b: Vec2, interior: Vec2) -> GeodesicHalfPlane:
    plane = half_plane_from_points(a, b)
    # orient toward the interior, then flip so the interior is negative
    toward = orient_half_plane_toward(plane, interior)
    outward = to_geodesic_half_plane(toward)
    return GeodesicHalfPlane(normal=-outward.normal, offset=-outward.offset)


def build_euclidean_triangle(p: float, q: float, r: float) -> FundamentalTriangle:
    """Construct the Euclidean (p, q, r) triangle with ``|v0 v1| = 1``.

    Raises:
        InfeasibleParametersError: If any value is not above 1, the angles
            do not sum to pi within ``SUM_TOL``, or the triangle degenerates.
    """
    params = {"p": p, "q": q, "r": r}
    if not (p > 1 and q > 1 and r > 1):
        raise InfeasibleParametersError(
            "(p,q,r) must all exceed 1 for Euclidean mode", params=params
        )
    alpha, beta, gamma = math.pi / p, math.pi / q, math.pi / r
    if abs(alpha + beta + gamma - math.pi) > SUM_TOL:
        raise InfeasibleParametersError(
            "Angles do not form a Euclidean triangle (sum must be pi)", params=params
        )

    sin_gamma = math.sin(gamma)
    if not sin_gamma > 0:
        raise InfeasibleParametersError(
            "Invalid (p,q,r): degenerate Euclidean triangle", params=params
        )
    side_b = math.sin(beta) / sin_gamma

    v0 = Vec2(x=0.0, y=0.0)
    v1 = Vec2(x=1.0, y=0.0)
    v2 = Vec2(x=side_b * math.cos(alpha), y=side_b * math.sin(alpha))
    center = barycenter((v0, v1, v2))

    return FundamentalTriangle(
        kind=GeometryKind.EUCLIDEAN,
        mirrors=(
            _edge_mirror(v1, v2, center),
            _edge_mirror(v0, v2, center),
            _edge_mirror(v0, v1, center),
        ),
        vertices=(v0, v1, v2),
        angles=(alpha, beta, gamma),
    )
