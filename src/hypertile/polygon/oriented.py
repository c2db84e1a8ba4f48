"""Oriented geodesic boundaries.

An oriented boundary splits the plane into a positive and a negative side.
Circles carry an explicit orientation sign (+1 makes the outside positive);
lines carry a unit normal pointing to their positive side.

Polygon edges are oriented against an interior reference point: circle
edges keep that point on the non-negative side, line edges keep it on the
non-positive side. Renderers depend on these sign conventions as is.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from hypertile.geometry.geodesic import GeodesicCircle, GeodesicDiameter
from hypertile.geometry.primitives import Vec2, distance


class OrientedCircle(BaseModel, frozen=True):
    """Circle boundary; ``orientation=+1`` makes the outside positive.

    Attributes:
        center: Circle center.
        radius: Circle radius.
        orientation: +1 (outside positive) or -1 (inside positive).
    """

    kind: Literal["circle"] = "circle"
    center: Vec2
    radius: float = Field(..., ge=0)
    orientation: Literal[1, -1] = 1

    def signed_distance(self, point: Vec2) -> float:
        """Signed Euclidean distance from the circle."""
        return self.orientation * (distance(point, self.center) - self.radius)

    def to_geodesic(self) -> GeodesicCircle:
        """Drop the orientation."""
        return GeodesicCircle(center=self.center, radius=self.radius)


class OrientedLine(BaseModel, frozen=True):
    """Line boundary through ``anchor`` with outward unit ``normal``."""

    kind: Literal["line"] = "line"
    anchor: Vec2
    normal: Vec2

    def signed_distance(self, point: Vec2) -> float:
        """Signed distance, positive on the normal side."""
        length = self.normal.norm or 1.0
        return self.normal.dot(point - self.anchor) / length

    def to_geodesic(self) -> GeodesicDiameter:
        """Geodesic along the line; direction is the clockwise-rotated normal."""
        length = self.normal.norm or 1.0
        return GeodesicDiameter(
            direction=Vec2(x=self.normal.y / length, y=-self.normal.x / length)
        )


OrientedGeodesic = OrientedCircle | OrientedLine


def oriented_circle_around(
    center: Vec2, radius: float, interior: Vec2
) -> OrientedCircle:
    """Orient a circle so ``interior`` lies on its non-negative side."""
    orientation: Literal[1, -1] = -1 if distance(interior, center) <= radius else 1
    return OrientedCircle(center=center, radius=radius, orientation=orientation)


def oriented_line_around(diameter: GeodesicDiameter, interior: Vec2) -> OrientedLine:
    """Orient a diameter so ``interior`` lies on its non-positive side."""
    d = diameter.direction
    length = d.norm or 1.0
    normal = Vec2(x=-d.y / length, y=d.x / length)
    if normal.dot(interior) > 0:
        normal = -normal
    return OrientedLine(anchor=Vec2(x=0.0, y=0.0), normal=normal)
