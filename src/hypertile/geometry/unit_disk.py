"""Unit circle helpers for the Poincare disk.

Conversions between boundary angles and boundary points, membership tests
and snapping of boundary handles to regular angular divisions.
"""

from __future__ import annotations

import math

from hypertile.geometry.primitives import Vec2, normalize_angle
from hypertile.geometry.tolerance import DEFAULT_TOL, Tolerance, tol_value

_FALLBACK = Vec2(x=1.0, y=0.0)


def angle_to_boundary_point(theta: float) -> Vec2:
    """Return the unit circle point at angle ``theta``.

    The angle is first normalized into (-pi, pi].
    """
    t = normalize_angle(theta)
    return Vec2(x=math.cos(t), y=math.sin(t))


def boundary_point_to_angle(point: Vec2) -> float:
    """Return the polar angle of ``point`` in (-pi, pi].

    Non-finite components fall back to x=1 and y=0 respectively; the zero
    vector maps to angle 0.
    """
    x = point.x if math.isfinite(point.x) else 1.0
    y = point.y if math.isfinite(point.y) else 0.0
    length = math.hypot(x, y)
    if length == 0:
        return 0.0
    return normalize_angle(math.atan2(y / length, x / length))


def is_on_unit_circle(point: Vec2, tol: Tolerance = DEFAULT_TOL) -> bool:
    """Check whether ``point`` lies on the unit circle within tolerance."""
    if not point.is_finite:
        return False
    return abs(point.norm - 1.0) <= tol_value(1.0, tol)


def normalize_on_unit_circle(point: Vec2) -> Vec2:
    """Project ``point`` radially onto the unit circle.

    Non-finite input and the zero vector project to (1, 0).
    """
    if not point.is_finite:
        return _FALLBACK
    length = point.norm
    if length == 0:
        return _FALLBACK
    return Vec2(x=point.x / length, y=point.y / length)


def snap_angle(theta: float, divisions: float) -> float:
    """Round ``theta`` to the nearest multiple of ``2*pi / divisions``.

    Ties round upward. ``divisions`` is floored and at least 1. The result
    lies in (-pi, pi]; non-finite input snaps to 0.
    """
    if not math.isfinite(theta):
        return 0.0
    count = max(1, math.floor(abs(divisions))) if math.isfinite(divisions) else 1
    step = 2 * math.pi / count
    t0 = theta % (2 * math.pi)
    k = math.floor((t0 + step / 2) / step)
    return normalize_angle(k * step)


def snap_boundary_point(point: Vec2, divisions: float) -> Vec2:
    """Snap a boundary handle to the nearest of ``divisions`` equal arcs."""
    return angle_to_boundary_point(
        snap_angle(boundary_point_to_angle(point), divisions)
    )
