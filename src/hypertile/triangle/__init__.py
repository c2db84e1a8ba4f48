"""Triangle reflection groups for hypertile.

Key Components:
    - Params: hyperbolic / Euclidean feasibility checks and depth clamping
    - Snap: pi/n grid snapping of (p, q, r)
    - Hyperbolic: fundamental triangle solver in the Poincare disk
    - Euclidean: fundamental triangle with half-plane mirrors
    - Group: breadth-first reflection group expansion
    - Tiling: parameters -> triangle -> faces pipeline

Example:
    from hypertile.triangle import TilingParams, build_tiling

    tiling = build_tiling(TilingParams(p=2, q=3, r=7, depth=3))
    print(tiling.stats.total)
"""

from hypertile.triangle.angles import angle_between_geodesics_at
from hypertile.triangle.euclidean import build_euclidean_triangle
from hypertile.triangle.group import (
    ExpansionResult,
    ExpansionStats,
    StopReason,
    expand_triangle_group,
)
from hypertile.triangle.hyperbolic import (
    ThirdMirrorSolution,
    build_fundamental_triangle,
    solve_third_mirror,
)
from hypertile.triangle.models import FundamentalTriangle, GeometryKind, TriangleFace
from hypertile.triangle.params import (
    ParamsValidation,
    normalize_depth,
    validate_euclidean_params,
    validate_triangle_params,
)
from hypertile.triangle.snap import (
    TriangleTriple,
    snap_parameter_to_pi_over_n,
    snap_triangle_params,
)
from hypertile.triangle.tiling import Tiling, TilingParams, build_tiling

__all__ = [
    "ExpansionResult",
    "ExpansionStats",
    "FundamentalTriangle",
    "GeometryKind",
    "ParamsValidation",
    "StopReason",
    "ThirdMirrorSolution",
    "Tiling",
    "TilingParams",
    "TriangleFace",
    "TriangleTriple",
    "angle_between_geodesics_at",
    "build_euclidean_triangle",
    "build_fundamental_triangle",
    "build_tiling",
    "expand_triangle_group",
    "normalize_depth",
    "snap_parameter_to_pi_over_n",
    "snap_triangle_params",
    "solve_third_mirror",
    "validate_euclidean_params",
    "validate_triangle_params",
]
