"""hypertile: geometry kernel for triangle-reflection tilings.

Robust circle and geodesic algebra in the Poincare disk, inversion and
reflection operators, a fundamental (p, q, r) triangle solver, a
breadth-first reflection group expander and a regular hyperbolic n-gon
solver.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from hypertile.geometry import (
    Circle,
    DegenerateGeometryError,
    GeodesicCircle,
    GeodesicDiameter,
    GeodesicHalfPlane,
    GeometryError,
    InfeasibleParametersError,
    NonFiniteInputError,
    Vec2,
    circle_circle_intersection,
    geodesic_from_boundary,
    geodesic_through_points,
    reflect_across_geodesic,
)
from hypertile.polygon import build_hyperbolic_regular_ngon, is_hyperbolic_ngon_feasible
from hypertile.triangle import (
    TilingParams,
    build_euclidean_triangle,
    build_fundamental_triangle,
    build_tiling,
    expand_triangle_group,
    snap_triangle_params,
    validate_triangle_params,
)

try:
    __version__ = _version("hypertile")
except PackageNotFoundError:
    __version__ = "0.0.0+dev"

__all__ = [
    "Circle",
    "DegenerateGeometryError",
    "GeodesicCircle",
    "GeodesicDiameter",
    "GeodesicHalfPlane",
    "GeometryError",
    "InfeasibleParametersError",
    "NonFiniteInputError",
    "TilingParams",
    "Vec2",
    "__version__",
    "build_euclidean_triangle",
    "build_fundamental_triangle",
    "build_hyperbolic_regular_ngon",
    "build_tiling",
    "circle_circle_intersection",
    "expand_triangle_group",
    "geodesic_from_boundary",
    "geodesic_through_points",
    "is_hyperbolic_ngon_feasible",
    "reflect_across_geodesic",
    "snap_triangle_params",
    "validate_triangle_params",
]
