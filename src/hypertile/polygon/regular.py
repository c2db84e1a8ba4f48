"""Regular polygons: hyperbolic {n, q} n-gons and Euclidean half-plane rooms.

A regular hyperbolic n-gon with interior angle ``alpha = 2*pi/q`` exists
iff ``(n - 2)(q - 2) > 4``. Its hyperbolic edge length follows from the
right-triangle relation ``cosh(L/2) = cos(pi/n) / sin(alpha/2)``; the
Euclidean vertex radius ``rho`` of the centered polygon is found by
bisection on the edge length as a function of ``rho``.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from hypertile.config import settings
from hypertile.geometry.exceptions import (
    DegenerateGeometryError,
    InfeasibleParametersError,
)
from hypertile.geometry.geodesic import GeodesicCircle, geodesic_through_points
from hypertile.geometry.half_plane import HalfPlane, normalize_half_plane
from hypertile.geometry.primitives import Vec2, barycenter
from hypertile.geometry.roots import bisect_increasing
from hypertile.polygon.oriented import (
    OrientedGeodesic,
    oriented_circle_around,
    oriented_line_around,
)
from hypertile.utils.logging import get_logger

logger = get_logger(__name__)

MIN_RHO = 1e-9
MAX_RHO = 1 - 1e-9
_CENTERED_EPS = 1e-6


class HyperbolicRegularNgon(BaseModel, frozen=True):
    """A regular hyperbolic n-gon centered at the origin.

    Attributes:
        n: Number of sides.
        q: Polygons meeting at each vertex.
        rho: Euclidean distance of the vertices from the origin.
        alpha: Interior angle ``2*pi/q``.
        edge_length: Hyperbolic edge length.
        vertices: Corners in counter-clockwise order.
        geodesics: Oriented edge ``i`` from vertex ``i`` to ``i + 1``.
    """

    n: int = Field(..., ge=3)
    q: int = Field(..., ge=3)
    rho: float = Field(..., gt=0, lt=1)
    alpha: float
    edge_length: float
    vertices: tuple[Vec2, ...]
    geodesics: tuple[OrientedGeodesic, ...]


def is_hyperbolic_ngon_feasible(n: float, q: float) -> bool:
    """True when ``n, q`` are integers >= 3 with ``(n - 2)(q - 2) > 4``."""
    if not (_is_int(n) and _is_int(q)):
        return False
    return n >= 3 and q >= 3 and (n - 2) * (q - 2) > 4


def _is_int(value: float) -> bool:
    return isinstance(value, int) or (
        isinstance(value, float) and math.isfinite(value) and value.is_integer()
    )


def edge_length_from_rho(n: int, rho: float) -> float:
    """Hyperbolic edge length of a centered regular n-gon with vertex radius ``rho``."""
    if not 0 < rho < 1:
        raise DegenerateGeometryError("rho must be within (0, 1)", {"rho": rho})
    sin_term = math.sin(math.pi / n)
    numerator = 8 * rho * rho * sin_term * sin_term
    denominator = (1 - rho * rho) ** 2
    return math.acosh(1 + numerator / denominator)


def edge_length_from_alpha(n: int, alpha: float) -> float:
    """Hyperbolic edge length of a regular n-gon with interior angle ``alpha``.

    Raises:
        InfeasibleParametersError: If the polygon cannot be hyperbolic.
    """
    sin_half = math.sin(alpha / 2)
    if not 0 < sin_half < 1:
        raise InfeasibleParametersError(
            "alpha produces invalid sine term", params={"n": n, "alpha": alpha}
        )
    ratio = math.cos(math.pi / n) / sin_half
    if not ratio > 1:
        raise InfeasibleParametersError(
            "ratio must exceed 1 for hyperbolic polygons",
            params={"n": n, "alpha": alpha},
        )
    return 2 * math.acosh(ratio)


def solve_hyperbolic_vertex_radius(
    n: int,
    alpha: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> float:
    """Find the vertex radius ``rho`` for a regular n-gon with angle ``alpha``.

    Args:
        n: Number of sides (integer >= 3).
        alpha: Interior angle in (0, pi).
        tolerance: Edge-length tolerance; defaults to ``settings.NGON_TOLERANCE``.
        max_iterations: Bisection cap; defaults to ``settings.NGON_MAX_ITERATIONS``.

    Raises:
        InfeasibleParametersError: If ``n`` or ``alpha`` is out of range.
    """
    if not _is_int(n) or n < 3:
        raise InfeasibleParametersError("n must be an integer >= 3", params={"n": n})
    if not 0 < alpha < math.pi:
        raise InfeasibleParametersError(
            "alpha must be within (0, pi)", params={"alpha": alpha}
        )
    n = int(n)
    target = edge_length_from_alpha(n, alpha)
    return bisect_increasing(
        lambda rho: edge_length_from_rho(n, rho),
        target,
        MIN_RHO,
        MAX_RHO,
        tolerance=settings.NGON_TOLERANCE if tolerance is None else tolerance,
        max_iterations=(
            settings.NGON_MAX_ITERATIONS if max_iterations is None else max_iterations
        ),
    )


def _regular_vertices(n: int, rho: float, rotation: float) -> tuple[Vec2, ...]:
    return tuple(
        Vec2(
            x=math.cos(rotation + 2 * math.pi * k / n) * rho,
            y=math.sin(rotation + 2 * math.pi * k / n) * rho,
        )
        for k in range(n)
    )


def _interior_point(vertices: tuple[Vec2, ...]) -> Vec2:
    center = barycenter(vertices)
    if center.norm > _CENTERED_EPS:
        return center
    return vertices[0] * 0.5


def _oriented_edge(p: Vec2, q: Vec2, interior: Vec2) -> OrientedGeodesic:
    geodesic = geodesic_through_points(p, q)
    if isinstance(geodesic, GeodesicCircle):
        return oriented_circle_around(geodesic.center, geodesic.radius, interior)
    return oriented_line_around(geodesic, interior)


def build_hyperbolic_regular_ngon(
    n: int,
    q: int,
    rotation: float = 0.0,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> HyperbolicRegularNgon:
    """Build the regular hyperbolic {n, q} polygon centered at the origin.

    Args:
        n: Number of sides.
        q: Number of polygons meeting at each vertex.
        rotation: Angle of the first vertex.
        tolerance: Edge-length tolerance for the radius bisection.
        max_iterations: Iteration cap for the radius bisection.

    Raises:
        InfeasibleParametersError: If ``(n, q)`` is not hyperbolic.

    Example:
        >>> ngon = build_hyperbolic_regular_ngon(7, 3)
        >>> len(ngon.vertices), round(ngon.alpha, 6)
        (7, 2.094395)
    """
    if not is_hyperbolic_ngon_feasible(n, q):
        raise InfeasibleParametersError(
            "(n, q) does not satisfy hyperbolic feasibility condition",
            params={"n": n, "q": q},
        )
    n, q = int(n), int(q)
    alpha = 2 * math.pi / q
    rho = solve_hyperbolic_vertex_radius(n, alpha, tolerance, max_iterations)
    vertices = _regular_vertices(n, rho, rotation)
    interior = _interior_point(vertices)
    geodesics = tuple(
        _oriented_edge(vertices[i], vertices[(i + 1) % n], interior) for i in range(n)
    )
    logger.debug("Built regular n-gon", n=n, q=q, rho=rho)
    return HyperbolicRegularNgon(
        n=n,
        q=q,
        rho=rho,
        alpha=alpha,
        edge_length=edge_length_from_rho(n, rho),
        vertices=vertices,
        geodesics=geodesics,
    )


def regular_polygon_half_planes(
    sides: int, radius: float = 1.0
) -> tuple[HalfPlane, ...]:
    """Half-planes bounding a regular Euclidean polygon centered at the origin.

    Plane ``i`` touches the point at distance ``radius`` and angle
    ``2*pi*i/sides``; its normal points toward the origin.

    Raises:
        InfeasibleParametersError: If ``sides`` is not an integer >= 3.
    """
    if not _is_int(sides) or sides < 3:
        raise InfeasibleParametersError(
            "sides must be an integer >= 3", params={"sides": sides}
        )
    count = int(sides)
    planes = []
    for i in range(count):
        angle = i * 2 * math.pi / count
        outward = Vec2(x=math.cos(angle), y=math.sin(angle))
        plane = HalfPlane(anchor=outward * radius, normal=-outward)
        planes.append(normalize_half_plane(plane))
    return tuple(planes)
