"""Snapping of triangle parameters to the pi/n grid.

Interactive controls produce arbitrary real values; tilings require each
angle to be ``pi/n`` for an integer ``n``. Snapping picks the closest grid
angle and, when the result is not strictly hyperbolic, nudges unlocked
axes upward with a bounded, deterministic hill-climb.
"""

from __future__ import annotations

import math
from collections.abc import Collection
from typing import Literal, Self

from pydantic import BaseModel, Field

from hypertile.triangle.params import HYPERBOLIC_EPS, reciprocal_sum
from hypertile.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_N_MIN = 2
DEFAULT_N_MAX = 200
HYPERBOLIC_THRESHOLD = 1 - HYPERBOLIC_EPS

PqrKey = Literal["p", "q", "r"]

# Tie-break preference when two unlocked axes share the smallest value
_ADJUST_ORDER: tuple[PqrKey, ...] = ("r", "q", "p")


class TriangleTriple(BaseModel, frozen=True):
    """An integer (p, q, r) triple."""

    p: int = Field(..., ge=DEFAULT_N_MIN, description="Denominator of the angle at v0")
    q: int = Field(..., ge=DEFAULT_N_MIN, description="Denominator of the angle at v1")
    r: int = Field(..., ge=DEFAULT_N_MIN, description="Denominator of the angle at v2")

    @property
    def is_hyperbolic(self) -> bool:
        """True when ``1/p + 1/q + 1/r`` is strictly below 1."""
        return reciprocal_sum(self.p, self.q, self.r) < HYPERBOLIC_THRESHOLD

    def to_tuple(self) -> tuple[int, int, int]:
        """Convert to (p, q, r) tuple."""
        return (self.p, self.q, self.r)

    @classmethod
    def from_tuple(cls, triple: tuple[int, int, int]) -> Self:
        """Create TriangleTriple from (p, q, r) tuple."""
        return cls(p=triple[0], q=triple[1], r=triple[2])


def _resolve_bounds(n_min: float, n_max: float) -> tuple[int, int]:
    floor_min = math.floor(n_min) if math.isfinite(n_min) else DEFAULT_N_MIN
    lo = max(DEFAULT_N_MIN, floor_min)
    hi = math.floor(n_max) if math.isfinite(n_max) else DEFAULT_N_MAX
    return lo, max(lo, hi)


def snap_parameter_to_pi_over_n(
    value: float,
    n_min: float = DEFAULT_N_MIN,
    n_max: float = DEFAULT_N_MAX,
) -> int:
    """Return the integer ``n`` whose angle ``pi/n`` is closest to ``pi/value``.

    ``value`` is clamped into ``[n_min, n_max]`` first; non-finite or
    non-positive values snap to ``n_min``. Ties within 1e-12 go to the
    smaller ``n``.

    Example:
        >>> snap_parameter_to_pi_over_n(7.1), snap_parameter_to_pi_over_n(7.8)
        (7, 8)
    """
    lo, hi = _resolve_bounds(n_min, n_max)
    if not math.isfinite(value) or value <= 0:
        return lo
    theta = math.pi / min(max(value, lo), hi)

    best_n = lo
    best_diff = math.inf
    for n in range(lo, hi + 1):
        diff = abs(math.pi / n - theta)
        if diff + HYPERBOLIC_EPS < best_diff:
            best_diff = diff
            best_n = n
        elif abs(diff - best_diff) <= HYPERBOLIC_EPS and n < best_n:
            best_n = n
    return best_n


def _next_adjustable(
    values: dict[PqrKey, int], adjustable: list[PqrKey], n_max: int
) -> PqrKey | None:
    candidate: PqrKey | None = None
    for key in _ADJUST_ORDER:
        if key not in adjustable or values[key] >= n_max:
            continue
        if candidate is None or values[key] < values[candidate]:
            candidate = key
    return candidate


def snap_triangle_params(
    p: float,
    q: float,
    r: float,
    n_min: float = DEFAULT_N_MIN,
    n_max: float = DEFAULT_N_MAX,
    locked: Collection[str] = (),
) -> TriangleTriple:
    """Snap a (p, q, r) triple to the pi/n grid and make it hyperbolic.

    Each axis is snapped independently. If any axis is unlocked and the
    snapped triple is not strictly hyperbolic, the smallest unlocked axis
    below ``n_max`` is incremented until the inequality holds or no axis can
    move. Locked axes keep their snapped value.

    Args:
        p: Raw value for p.
        q: Raw value for q.
        r: Raw value for r.
        n_min: Smallest allowed denominator (at least 2).
        n_max: Largest allowed denominator.
        locked: Axis names ("p", "q", "r") that must not be adjusted.

    Returns:
        The snapped triple; it may remain non-hyperbolic when every axis is
        locked or saturated.

    Example:
        >>> snap_triangle_params(3, 3, 3, locked={"p", "q"}).to_tuple()
        (3, 3, 4)
    """
    lo, hi = _resolve_bounds(n_min, n_max)
    values: dict[PqrKey, int] = {
        "p": snap_parameter_to_pi_over_n(p, lo, hi),
        "q": snap_parameter_to_pi_over_n(q, lo, hi),
        "r": snap_parameter_to_pi_over_n(r, lo, hi),
    }

    adjustable: list[PqrKey] = [key for key in ("p", "q", "r") if key not in locked]
    if adjustable:
        while (
            reciprocal_sum(values["p"], values["q"], values["r"])
            >= HYPERBOLIC_THRESHOLD
        ):
            key = _next_adjustable(values, adjustable, hi)
            if key is None:
                logger.debug("Snap hill-climb saturated", values=values, n_max=hi)
                break
            values[key] += 1

    return TriangleTriple(p=values["p"], q=values["q"], r=values["r"])
