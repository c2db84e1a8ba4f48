"""One-dimensional root finding for the triangle and polygon solvers.

A coarse sign-change search locates a bracket, bisection refines it and a
clamped secant iteration serves as a fallback when no bracket exists. The
default constants are part of the numeric contract: changing them changes
solver outputs.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from hypertile.geometry.primitives import clamp

Scalar = Callable[[float], float]

DEFAULT_INTERVAL = (0.1, 0.9)
SCAN_STEPS = 20
BISECTION_MAX_ITERATIONS = 60
BISECTION_F_TOL = 5e-4
BISECTION_X_TOL = 1e-6
SECANT_START = (0.5, 0.6)
SECANT_ITERATIONS = 12
SECANT_CLAMP = (0.05, 0.95)
SECANT_MIN_DENOMINATOR = 1e-6


@dataclass(frozen=True)
class Bracket:
    """An interval ``[lo, hi]`` on which ``fn`` changes sign (or vanishes)."""

    lo: float
    hi: float
    f_lo: float
    f_hi: float


def find_sign_change(
    fn: Scalar,
    interval: tuple[float, float] = DEFAULT_INTERVAL,
    steps: int = SCAN_STEPS,
) -> Bracket | None:
    """Locate a sub-interval of ``interval`` where ``fn`` changes sign.

    The full interval is tried first; otherwise it is scanned left to right
    in ``steps`` equal pieces and the first sign change wins.

    Returns:
        The bracket, or None when no sign change is found.
    """
    a, b = interval
    fa, fb = fn(a), fn(b)
    if fa * fb <= 0:
        return Bracket(lo=a, hi=b, f_lo=fa, f_hi=fb)

    prev_t, prev_f = a, fa
    for i in range(1, steps + 1):
        t = a + (b - a) * i / steps
        f = fn(t)
        if prev_f * f <= 0:
            return Bracket(lo=prev_t, hi=t, f_lo=prev_f, f_hi=f)
        prev_t, prev_f = t, f
    return None


def bisect(
    fn: Scalar,
    bracket: Bracket,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
    f_tol: float = BISECTION_F_TOL,
    x_tol: float = BISECTION_X_TOL,
) -> float:
    """Refine a bracket by bisection.

    Stops at the first midpoint where ``|fn(m)| < f_tol`` or the bracket is
    narrower than ``x_tol``; after ``max_iterations`` returns the midpoint of
    the remaining bracket.
    """
    a, b, fa = bracket.lo, bracket.hi, bracket.f_lo
    for _ in range(max_iterations):
        m = 0.5 * (a + b)
        fm = fn(m)
        if abs(fm) < f_tol or abs(b - a) < x_tol:
            return m
        if fa * fm <= 0:
            b = m
        else:
            a, fa = m, fm
    return 0.5 * (a + b)


def secant(
    fn: Scalar,
    start: tuple[float, float] = SECANT_START,
    iterations: int = SECANT_ITERATIONS,
    bounds: tuple[float, float] = SECANT_CLAMP,
) -> float:
    """Run a fixed number of clamped secant steps and return the last iterate.

    The denominator keeps the sign of ``f1 - f0`` but never drops below
    ``SECANT_MIN_DENOMINATOR`` in magnitude.
    """
    t0, t1 = start
    f0, f1 = fn(t0), fn(t1)
    for _ in range(iterations):
        delta = f1 - f0
        denominator = math.copysign(max(abs(delta), SECANT_MIN_DENOMINATOR), delta)
        candidate = clamp(t1 - f1 * (t1 - t0) / denominator, *bounds)
        t0, f0 = t1, f1
        t1 = candidate
        f1 = fn(t1)
    return t1


def bisect_increasing(
    fn: Scalar,
    target: float,
    lo: float,
    hi: float,
    tolerance: float = 1e-12,
    max_iterations: int = 128,
) -> float:
    """Solve ``fn(x) = target`` for an increasing ``fn`` on ``[lo, hi]``.

    Returns the first midpoint within ``tolerance`` of the target, or the
    last midpoint after ``max_iterations``.
    """
    mid = 0.5 * (lo + hi)
    for _ in range(max_iterations):
        mid = 0.5 * (lo + hi)
        value = fn(mid)
        if abs(value - target) <= tolerance:
            return mid
        if value > target:
            hi = mid
        else:
            lo = mid
    return mid
