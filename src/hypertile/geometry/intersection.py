"""Circle-circle intersection with explicit classification.

Notation for the classical derivation used below:

- Centers and radii ``A, r1`` and ``B, r2``; ``d = |B - A|``.
- ``u = (B - A) / d`` is the unit direction from A to B.
- ``a_len = (r1^2 - r2^2 + d^2) / (2d)`` is the signed distance from A to
  the foot point ``P = A + a_len * u`` on the chord line.
- ``h^2 = r1^2 - a_len^2``; ``h == 0`` means tangency, ``h > 0`` gives the
  two points ``P +/- h * perp(u)``.

Same-center, separation and containment checks use thresholds scaled by
``r1 + r2``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from hypertile.geometry.primitives import Circle, Vec2, distance, perp, safe_sqrt
from hypertile.geometry.tolerance import DEFAULT_TOL, eq_tol, tol_value


class IntersectKind(str, Enum):
    """Classification of a circle-circle intersection."""

    NONE = "none"
    TANGENT = "tangent"
    TWO = "two"
    CONCENTRIC = "concentric"
    COINCIDENT = "coincident"


@dataclass(frozen=True)
class IntersectResult:
    """Outcome of ``circle_circle_intersection``.

    Attributes:
        kind: Intersection classification.
        points: Zero points for none/concentric/coincident, one for tangent,
            two (sorted ascending by x then y) for two.
    """

    kind: IntersectKind
    points: tuple[Vec2, ...] = ()


_NONE = IntersectResult(kind=IntersectKind.NONE)


def _sanitize(circle: Circle) -> Circle | None:
    r = abs(circle.radius)
    if not circle.center.is_finite or not math.isfinite(r) or not r > 0:
        return None
    return Circle(center=circle.center, radius=r)


def _order_key(circle: Circle) -> tuple[float, float, float]:
    return (circle.radius, circle.center.x, circle.center.y)


def circle_circle_intersection(a: Circle, b: Circle) -> IntersectResult:
    """Intersect two circles.

    Negative radii are taken by absolute value. Non-finite input and zero
    radii yield ``none``. Tiny negative ``h^2`` from rounding is clamped
    to a tangency.

    Args:
        a: First circle.
        b: Second circle.

    Returns:
        IntersectResult describing the relation and its points.

    Example:
        >>> a = Circle.from_tuple((0, 0, 5))
        >>> res = circle_circle_intersection(a, Circle.from_tuple((8, 0, 5)))
        >>> res.kind, [p.to_tuple() for p in res.points]
        (<IntersectKind.TWO: 'two'>, [(4.0, -3.0), (4.0, 3.0)])
    """
    ca = _sanitize(a)
    cb = _sanitize(b)
    if ca is None or cb is None:
        return _NONE
    # Canonical order so swapped arguments take the same rounding path
    if _order_key(ca) < _order_key(cb):
        ca, cb = cb, ca

    r1, r2 = ca.radius, cb.radius
    d = distance(ca.center, cb.center)
    scale = r1 + r2

    if eq_tol(d, 0.0, scale, DEFAULT_TOL):
        if r1 == r2:
            return IntersectResult(kind=IntersectKind.COINCIDENT)
        return IntersectResult(kind=IntersectKind.CONCENTRIC)

    eps = tol_value(scale, DEFAULT_TOL)
    if d > scale + eps or d < abs(r1 - r2) - eps:
        return _NONE

    a_len = (r1 * r1 - r2 * r2 + d * d) / (2 * d)
    h = safe_sqrt(r1 * r1 - a_len * a_len)
    if math.isnan(h):
        return _NONE

    u = (cb.center - ca.center) / d
    foot = ca.center + u * a_len
    if h == 0:
        return IntersectResult(kind=IntersectKind.TANGENT, points=(foot,))

    offset = perp(u) * h
    points = sorted((foot + offset, foot - offset), key=lambda p: (p.x, p.y))
    return IntersectResult(kind=IntersectKind.TWO, points=tuple(points))
