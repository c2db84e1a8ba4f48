"""Data models shared by the triangle builders and the group expander."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from hypertile.geometry.geodesic import Geodesic
from hypertile.geometry.primitives import AABB, Vec2


class GeometryKind(str, Enum):
    """Geometry hosting a triangle-reflection tiling."""

    HYPERBOLIC = "hyperbolic"
    EUCLIDEAN = "euclidean"


class FundamentalTriangle(BaseModel, frozen=True):
    """The triangle whose three mirrors generate a (p, q, r) tiling.

    Vertex ``i`` is the corner opposite mirror ``i`` for Euclidean triangles;
    for hyperbolic triangles ``v0`` is the origin (mirrors 1 and 2), ``v1``
    lies on mirrors 1 and 3 and ``v2`` on mirrors 2 and 3.

    Attributes:
        kind: Hyperbolic or Euclidean.
        mirrors: The three reflecting geodesics.
        vertices: Triangle corners.
        angles: Interior angles ``(pi/p, pi/q, pi/r)``.
    """

    kind: GeometryKind = Field(..., description="Host geometry")
    mirrors: tuple[Geodesic, Geodesic, Geodesic] = Field(
        ..., description="Mirrors in generator order 1, 2, 3"
    )
    vertices: tuple[Vec2, Vec2, Vec2] = Field(..., description="Triangle corners")
    angles: tuple[float, float, float] = Field(..., description="Interior angles")


class TriangleFace(BaseModel, frozen=True):
    """One tile produced by reflecting the fundamental triangle.

    Attributes:
        id: ``f"{word}|{qx}:{qy}"`` with the quantized barycenter.
        vertices: Image of the fundamental triangle's corners.
        aabb: Bounding box of ``vertices``.
        word: Mirror indices (1..3) applied from the fundamental triangle.
    """

    id: str = Field(..., description="Stable face identifier")
    vertices: tuple[Vec2, Vec2, Vec2] = Field(..., description="Face corners")
    aabb: AABB = Field(..., description="Bounding box of the corners")
    word: str = Field(default="", description="Reflection word over {1, 2, 3}")
