"""Scale-aware floating point tolerances.

Every geometric classification in the kernel (same center, tangency,
singular systems, near-origin guards) is decided through ``tol_value`` so
that thresholds grow with the magnitude of the quantities being compared.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Tolerance(BaseModel, frozen=True):
    """Absolute and relative tolerance pair.

    Attributes:
        abs: Absolute floor added to every threshold.
        rel: Relative factor applied to ``max(1, |scale|)``.
    """

    abs: float = Field(default=1e-12, ge=0, description="Absolute tolerance")
    rel: float = Field(default=1e-12, ge=0, description="Relative tolerance")


DEFAULT_TOL = Tolerance()


def tol_value(scale: float, tol: Tolerance = DEFAULT_TOL) -> float:
    """Compute the comparison threshold for values of magnitude ``scale``.

    Args:
        scale: Typical magnitude of the compared quantities.
        tol: Tolerance pair to apply.

    Returns:
        ``tol.rel * max(1, |scale|) + tol.abs``.
    """
    magnitude = abs(scale) if math.isfinite(scale) else 1.0
    return tol.rel * max(1.0, magnitude) + tol.abs


def eq_tol(a: float, b: float, scale: float, tol: Tolerance = DEFAULT_TOL) -> bool:
    """Check whether ``a`` and ``b`` agree within the threshold for ``scale``."""
    return abs(a - b) <= tol_value(scale, tol)
