"""Geometry kernel for hypertile.

This package provides the numeric primitives of the Poincare disk and its
Euclidean analog.

Key Components:
    - Tolerance: scale-aware absolute/relative thresholds
    - Primitives: Vec2, Circle, AABB models
    - Unit disk: boundary angles, projections and angular snapping
    - Intersection: classified circle-circle intersection
    - Geodesics: circle / diameter / half-plane union and constructors
    - Transforms: inversions and reflection value objects
    - Roots: bracket, bisection and secant utilities

Example:
    from hypertile.geometry import Vec2, geodesic_from_boundary, reflect_across_geodesic

    g = geodesic_from_boundary(Vec2(x=1, y=0), Vec2(x=0, y=1))
    mirror = reflect_across_geodesic(g)
    image = mirror(Vec2(x=0.2, y=0.1))
"""

from hypertile.geometry.exceptions import (
    DegenerateGeometryError,
    GeometryError,
    InfeasibleParametersError,
    NonFiniteInputError,
)
from hypertile.geometry.geodesic import (
    Geodesic,
    GeodesicCircle,
    GeodesicDiameter,
    GeodesicHalfPlane,
    geodesic_contains,
    geodesic_from_boundary,
    geodesic_through_points,
)
from hypertile.geometry.half_plane import (
    HalfPlane,
    evaluate_half_plane,
    from_geodesic_half_plane,
    half_plane_from_normal_and_offset,
    half_plane_from_points,
    half_plane_offset,
    normalize_half_plane,
    orient_half_plane_toward,
    points_from_half_plane,
    to_geodesic_half_plane,
)
from hypertile.geometry.intersection import (
    IntersectKind,
    IntersectResult,
    circle_circle_intersection,
)
from hypertile.geometry.primitives import AABB, ORIGIN, Circle, Vec2
from hypertile.geometry.tolerance import DEFAULT_TOL, Tolerance, eq_tol, tol_value
from hypertile.geometry.transforms import (
    CircleInversion,
    DiameterReflection,
    HalfPlaneReflection,
    Reflection,
    invert_in_circle,
    invert_line_in_circle,
    invert_unit,
    reflect_across_geodesic,
    reflect_across_half_plane,
)
from hypertile.geometry.unit_disk import (
    angle_to_boundary_point,
    boundary_point_to_angle,
    is_on_unit_circle,
    normalize_on_unit_circle,
    snap_angle,
    snap_boundary_point,
)

__all__ = [
    "AABB",
    "DEFAULT_TOL",
    "ORIGIN",
    "Circle",
    "CircleInversion",
    "DegenerateGeometryError",
    "DiameterReflection",
    "Geodesic",
    "GeodesicCircle",
    "GeodesicDiameter",
    "GeodesicHalfPlane",
    "GeometryError",
    "HalfPlane",
    "HalfPlaneReflection",
    "InfeasibleParametersError",
    "IntersectKind",
    "IntersectResult",
    "NonFiniteInputError",
    "Reflection",
    "Tolerance",
    "Vec2",
    "angle_to_boundary_point",
    "boundary_point_to_angle",
    "circle_circle_intersection",
    "eq_tol",
    "evaluate_half_plane",
    "from_geodesic_half_plane",
    "geodesic_contains",
    "geodesic_from_boundary",
    "geodesic_through_points",
    "half_plane_from_normal_and_offset",
    "half_plane_from_points",
    "half_plane_offset",
    "invert_in_circle",
    "invert_line_in_circle",
    "invert_unit",
    "is_on_unit_circle",
    "normalize_half_plane",
    "normalize_on_unit_circle",
    "orient_half_plane_toward",
    "points_from_half_plane",
    "reflect_across_geodesic",
    "reflect_across_half_plane",
    "snap_angle",
    "snap_boundary_point",
    "to_geodesic_half_plane",
    "tol_value",
]
