"""Feasibility checks for (p, q, r) triangle parameters.

A triangle with interior angles ``(pi/p, pi/q, pi/r)`` is hyperbolic when
``1/p + 1/q + 1/r < 1`` and Euclidean when the sum equals 1. Validation
collects every problem instead of stopping at the first one so that UIs
can show them together.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from hypertile.config import settings
from hypertile.geometry.exceptions import InfeasibleParametersError

MIN_VALUE = 2
HYPERBOLIC_EPS = 1e-12
EUCLIDEAN_SUM_TOL = 1e-6
EUCLIDEAN_WARN_TOL = 1e-9
MIN_ANGLE_SINE = 1e-6

_KEYS = ("p", "q", "r")


@dataclass(frozen=True)
class ParamsValidation:
    """Outcome of a parameter validation.

    Attributes:
        ok: True when the triple is usable.
        errors: Human-readable problems; empty when ``ok``.
        warning: Optional non-fatal note (e.g. near the Euclidean boundary).
        params: The validated triple, keyed by "p", "q", "r".
    """

    ok: bool
    errors: tuple[str, ...] = ()
    warning: str | None = None
    params: tuple[tuple[str, float], ...] = ()

    def raise_for_errors(self) -> None:
        """Raise if validation failed.

        Raises:
            InfeasibleParametersError: Carrying the triple and all errors.
        """
        if self.ok:
            return
        raise InfeasibleParametersError(
            "; ".join(self.errors),
            params=dict(self.params),
            errors=self.errors,
        )


def _check_minimum(values: dict[str, float], require_integers: bool) -> list[str]:
    errors: list[str] = []
    for key in _KEYS:
        value = values[key]
        if require_integers:
            if not _is_integral(value) or value < MIN_VALUE:
                errors.append(f"{key} must be an integer >= {MIN_VALUE}")
        elif not math.isfinite(value) or value < MIN_VALUE:
            errors.append(f"{key} must be >= {MIN_VALUE}")
    return errors


def _is_integral(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer()


def reciprocal_sum(p: float, q: float, r: float) -> float:
    """Return ``1/p + 1/q + 1/r``."""
    return 1 / p + 1 / q + 1 / r


def validate_triangle_params(
    p: float,
    q: float,
    r: float,
    require_integers: bool = True,
) -> ParamsValidation:
    """Validate a hyperbolic (p, q, r) triple.

    Args:
        p: Angle denominator at the origin vertex.
        q: Angle denominator at the x-axis vertex.
        r: Angle denominator at the third vertex.
        require_integers: Reject non-integral values when True.

    Returns:
        ParamsValidation; the strict inequality is only checked once every
        value passes the per-axis check.

    Example:
        >>> validate_triangle_params(2, 3, 6).errors
        ('1/p + 1/q + 1/r must be < 1',)
    """
    values = {"p": p, "q": q, "r": r}
    params = tuple(values.items())
    errors = _check_minimum(values, require_integers)
    if not errors and not reciprocal_sum(p, q, r) < 1 - HYPERBOLIC_EPS:
        errors.append("1/p + 1/q + 1/r must be < 1")
    if errors:
        return ParamsValidation(ok=False, errors=tuple(errors), params=params)
    return ParamsValidation(ok=True, params=params)


def validate_euclidean_params(p: float, q: float, r: float) -> ParamsValidation:
    """Validate a Euclidean (p, q, r) triple.

    The reciprocal sum must equal 1 within ``EUCLIDEAN_SUM_TOL``; a sum off
    by more than ``EUCLIDEAN_WARN_TOL`` is accepted with a warning. Triples
    whose smallest angle has a sine below ``MIN_ANGLE_SINE`` are rejected.
    """
    values = {"p": p, "q": q, "r": r}
    params = tuple(values.items())
    errors = _check_minimum(values, require_integers=False)
    if errors:
        return ParamsValidation(ok=False, errors=tuple(errors), params=params)

    deviation = abs(reciprocal_sum(p, q, r) - 1)
    if deviation > EUCLIDEAN_SUM_TOL:
        errors.append("1/p + 1/q + 1/r must equal 1")

    smallest = math.pi / max(p, q, r)
    if math.sin(smallest) < MIN_ANGLE_SINE:
        errors.append("smallest angle is too small for a stable triangle")

    if errors:
        return ParamsValidation(ok=False, errors=tuple(errors), params=params)

    warning = None
    if deviation > EUCLIDEAN_WARN_TOL:
        warning = f"1/p + 1/q + 1/r deviates from 1 by {deviation:.3g}"
    return ParamsValidation(ok=True, warning=warning, params=params)


def normalize_depth(value: float) -> int:
    """Round ``value`` half up and clamp it into the configured depth range.

    Non-finite input maps to the minimum depth.

    Raises:
        ConfigError: If the configured depth bounds are inconsistent.
    """
    lo, hi = settings.require_depth_bounds()
    if not math.isfinite(value):
        return lo
    rounded = math.floor(value + 0.5)
    return max(lo, min(hi, rounded))
