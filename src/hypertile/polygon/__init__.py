"""Regular polygons in the Poincare disk and the Euclidean plane."""

from hypertile.polygon.oriented import OrientedCircle, OrientedGeodesic, OrientedLine
from hypertile.polygon.regular import (
    HyperbolicRegularNgon,
    build_hyperbolic_regular_ngon,
    is_hyperbolic_ngon_feasible,
    regular_polygon_half_planes,
    solve_hyperbolic_vertex_radius,
)

__all__ = [
    "HyperbolicRegularNgon",
    "OrientedCircle",
    "OrientedGeodesic",
    "OrientedLine",
    "build_hyperbolic_regular_ngon",
    "is_hyperbolic_ngon_feasible",
    "regular_polygon_half_planes",
    "solve_hyperbolic_vertex_radius",
]
