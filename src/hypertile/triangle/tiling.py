"""Parameters to triangle to faces pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from pydantic import BaseModel, Field

from hypertile.triangle.euclidean import build_euclidean_triangle
from hypertile.triangle.group import ExpansionStats, expand_triangle_group
from hypertile.triangle.hyperbolic import build_fundamental_triangle
from hypertile.triangle.models import FundamentalTriangle, GeometryKind, TriangleFace
from hypertile.utils.logging import (
    clear_correlation_context,
    get_logger,
    set_correlation_context,
)

logger = get_logger(__name__)


class TilingParams(BaseModel, frozen=True):
    """Inputs of a tiling build.

    Attributes:
        p: Angle denominator at v0.
        q: Angle denominator at v1.
        r: Angle denominator at v2.
        depth: Number of reflection rounds.
        geometry: Hyperbolic or Euclidean host geometry.
        max_faces: Optional face cap.
        time_budget_s: Optional wall-clock budget for the expansion.
    """

    p: float = Field(..., gt=1, description="Angle denominator at v0")
    q: float = Field(..., gt=1, description="Angle denominator at v1")
    r: float = Field(..., gt=1, description="Angle denominator at v2")
    depth: int = Field(default=2, ge=0, description="Reflection rounds")
    geometry: GeometryKind = Field(default=GeometryKind.HYPERBOLIC)
    max_faces: int | None = Field(default=None, gt=0, description="Face cap")
    time_budget_s: float | None = Field(
        default=None, gt=0, description="Expansion deadline in seconds"
    )

    @property
    def triple_label(self) -> str:
        """Compact "p,q,r" label used in logs."""
        return ",".join(f"{v:g}" for v in (self.p, self.q, self.r))


@dataclass(frozen=True)
class Tiling:
    """A built tiling: the fundamental triangle, its faces and statistics."""

    base: FundamentalTriangle
    faces: tuple[TriangleFace, ...]
    stats: ExpansionStats


def build_base_triangle(
    p: float, q: float, r: float, geometry: GeometryKind
) -> FundamentalTriangle:
    """Build the fundamental triangle for ``geometry``."""
    if geometry is GeometryKind.EUCLIDEAN:
        return build_euclidean_triangle(p, q, r)
    return build_fundamental_triangle(p, q, r)


def build_tiling(params: TilingParams) -> Tiling:
    """Solve the fundamental triangle and expand its reflection group.

    Raises:
        InfeasibleParametersError: If the triple does not fit ``geometry``.
    """
    set_correlation_context(run_id=uuid.uuid4().hex[:12], triple=params.triple_label)
    try:
        base = build_base_triangle(params.p, params.q, params.r, params.geometry)
        result = expand_triangle_group(
            base,
            params.depth,
            max_faces=params.max_faces,
            time_budget_s=params.time_budget_s,
        )
        logger.info(
            "Built tiling",
            geometry=params.geometry.value,
            depth=params.depth,
            faces=result.stats.total,
            stop_reason=result.stats.stop_reason.value,
        )
        return Tiling(base=base, faces=result.faces, stats=result.stats)
    finally:
        clear_correlation_context()
