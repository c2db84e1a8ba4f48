"""Fundamental hyperbolic (p, q, r) triangle in the Poincare disk.

The triangle is placed in a canonical pose:

- mirror 1 is the x-axis diameter,
- mirror 2 is the diameter at angle ``alpha = pi/p`` so the two meet at the
  origin with angle alpha,
- mirror 3 is a circle orthogonal to the unit circle, meeting mirror 1 at
  angle ``beta = pi/q`` and mirror 2 at angle ``gamma = pi/r``.

Mirror 3 is found on the one-parameter family ``t in (0, 1)``::

    cx = (1 + t^2) / (2t),  dx = t - cx,  cy = |dx| / tan(beta),  r = hypot(dx, cy)

which satisfies orthogonality and the beta constraint by construction;
the gamma constraint is solved by root finding on ``t``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from hypertile.geometry.exceptions import InfeasibleParametersError
from hypertile.geometry.geodesic import GeodesicCircle, geodesic_from_boundary
from hypertile.geometry.primitives import Vec2, clamp
from hypertile.geometry.roots import bisect, find_sign_change, secant
from hypertile.triangle.models import FundamentalTriangle, GeometryKind
from hypertile.triangle.params import HYPERBOLIC_EPS, reciprocal_sum
from hypertile.utils.logging import get_logger

logger = get_logger(__name__)

# Fallback clamp for the x-axis vertex when neither root lies in (0, 1)
_V1_CLAMP = (1e-6, 0.999)


@dataclass(frozen=True)
class CircleParameters:
    """Third-mirror circle for a family parameter ``t``."""

    cx: float
    cy: float
    dx: float
    r: float


@dataclass(frozen=True)
class ThirdMirrorSolution:
    """Solved third mirror.

    Attributes:
        center: Circle center.
        radius: Circle radius.
        parameter: Family parameter ``t`` at the solution.
        method: "bisection" when a bracket was found, otherwise "secant".
    """

    center: Vec2
    radius: float
    parameter: float
    method: str


def unit_direction(alpha: float) -> Vec2:
    """Unit vector at angle ``alpha``."""
    return Vec2(x=math.cos(alpha), y=math.sin(alpha))


def circle_from_parameter(t: float, beta: float) -> CircleParameters:
    """Orthogonal circle through ``(t, 0)`` meeting the x-axis at angle ``beta``."""
    cx = (1 + t * t) / (2 * t)
    dx = t - cx
    cy = abs(dx) / math.tan(beta)
    return CircleParameters(cx=cx, cy=cy, dx=dx, r=math.hypot(dx, cy))


def angle_at_second_mirror(t: float, alpha: float, beta: float) -> float:
    """Angle between the family circle for ``t`` and the diameter at ``alpha``.

    The meeting point is ``Q = s u`` with the smaller root ``s`` of
    ``|s u - c| = r``; since ``|c|^2 - r^2 = 1`` the discriminant reduces to
    ``(c . u)^2 - 1``.
    """
    circle = circle_from_parameter(t, beta)
    u = unit_direction(alpha)
    c_dot_u = circle.cx * u.x + circle.cy * u.y
    s = c_dot_u - math.sqrt(max(0.0, c_dot_u * c_dot_u - 1))
    nx = (s * u.x - circle.cx) / circle.r
    ny = (s * u.y - circle.cy) / circle.r
    return math.asin(clamp(abs(nx * u.x + ny * u.y), 0.0, 1.0))


def solve_third_mirror(alpha: float, beta: float, gamma: float) -> ThirdMirrorSolution:
    """Find the third mirror satisfying the gamma constraint.

    A sign change of ``angle_at_second_mirror(t) - gamma`` is searched on
    ``[0.1, 0.9]`` and refined by bisection. Without a bracket a short
    clamped secant iteration from ``(0.5, 0.6)`` is used instead.
    """

    def residual(t: float) -> float:
        return angle_at_second_mirror(t, alpha, beta) - gamma

    bracket = find_sign_change(residual)
    if bracket is not None:
        parameter = bisect(residual, bracket)
        method = "bisection"
    else:
        logger.warning(
            "No sign change for third mirror, using secant fallback",
            alpha=alpha,
            beta=beta,
            gamma=gamma,
        )
        parameter = secant(residual)
        method = "secant"

    circle = circle_from_parameter(parameter, beta)
    logger.debug(
        "Solved third mirror",
        method=method,
        parameter=parameter,
        residual=residual(parameter),
    )
    return ThirdMirrorSolution(
        center=Vec2(x=circle.cx, y=circle.cy),
        radius=circle.r,
        parameter=parameter,
        method=method,
    )


def _x_axis_vertex(center: Vec2, radius: float) -> Vec2:
    half_chord = math.sqrt(max(0.0, radius * radius - center.y * center.y))
    near, far = center.x - half_chord, center.x + half_chord
    if 0 < near < 1:
        x = near
    elif 0 < far < 1:
        x = far
    else:
        x = clamp(near, *_V1_CLAMP)
    return Vec2(x=x, y=0.0)


def _diameter_vertex(u: Vec2, center: Vec2, radius: float) -> Vec2:
    c_dot_u = center.dot(u)
    disc = c_dot_u * c_dot_u - (center.norm_sq - radius * radius)
    return u * (c_dot_u - math.sqrt(max(0.0, disc)))


def build_fundamental_triangle(p: float, q: float, r: float) -> FundamentalTriangle:
    """Construct the canonical hyperbolic (p, q, r) triangle.

    Args:
        p: Angle denominator at the origin.
        q: Angle denominator at the x-axis vertex.
        r: Angle denominator at the vertex on the rotated diameter.

    Returns:
        FundamentalTriangle with mirrors ``(x-axis, rotated diameter,
        orthogonal circle)`` and vertices ``(origin, v1, v2)``.

    Raises:
        InfeasibleParametersError: Unless ``p, q, r > 1`` and
            ``1/p + 1/q + 1/r < 1``.
    """
    params = {"p": p, "q": q, "r": r}
    feasible = p > 1 and q > 1 and r > 1
    if not feasible or reciprocal_sum(p, q, r) >= 1 - HYPERBOLIC_EPS:
        raise InfeasibleParametersError(
            "Invalid (p,q,r) for hyperbolic triangle: "
            "need p, q, r > 1 and 1/p + 1/q + 1/r < 1",
            params=params,
        )

    alpha, beta, gamma = math.pi / p, math.pi / q, math.pi / r
    u = unit_direction(alpha)

    g1 = geodesic_from_boundary(Vec2(x=1.0, y=0.0), Vec2(x=-1.0, y=0.0))
    g2 = geodesic_from_boundary(u, -u)
    third = solve_third_mirror(alpha, beta, gamma)
    g3 = GeodesicCircle(center=third.center, radius=third.radius)

    v0 = Vec2(x=0.0, y=0.0)
    v1 = _x_axis_vertex(third.center, third.radius)
    v2 = _diameter_vertex(u, third.center, third.radius)

    logger.debug("Built hyperbolic triangle", p=p, q=q, r=r, method=third.method)
    return FundamentalTriangle(
        kind=GeometryKind.HYPERBOLIC,
        mirrors=(g1, g2, g3),
        vertices=(v0, v1, v2),
        angles=(alpha, beta, gamma),
    )
