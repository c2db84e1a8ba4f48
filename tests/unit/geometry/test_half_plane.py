"""Unit tests for Euclidean half-planes."""

from __future__ import annotations

import math

import pytest

from hypertile.geometry import DegenerateGeometryError, GeodesicHalfPlane, Vec2
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


class TestNormalization:
    """Tests for normal handling."""

    def test_normalize_scales_normal(self) -> None:
        """Test the normal becomes unit length and the anchor is kept."""
        plane = normalize_half_plane(
            HalfPlane(anchor=Vec2(x=1, y=2), normal=Vec2(x=0, y=4))
        )
        assert plane.normal == Vec2(x=0, y=1)
        assert plane.anchor == Vec2(x=1, y=2)

    def test_zero_normal_raises(self) -> None:
        """Test a zero normal is degenerate."""
        with pytest.raises(DegenerateGeometryError, match="non-zero"):
            normalize_half_plane(
                HalfPlane(anchor=Vec2(x=0, y=0), normal=Vec2(x=0, y=0))
            )


class TestConversions:
    """Tests for the anchor/normal and normal/offset forms."""

    def test_from_normal_and_offset(self) -> None:
        """Test the anchor is the foot of the perpendicular from the origin."""
        plane = half_plane_from_normal_and_offset(Vec2(x=2, y=0), -3)
        assert plane.normal == Vec2(x=1, y=0)
        assert plane.anchor.to_tuple() == pytest.approx((3, 0))
        assert half_plane_offset(plane) == pytest.approx(-3)

    def test_geodesic_round_trip(self) -> None:
        """Test conversion to and from the tiling variant."""
        plane = HalfPlane(anchor=Vec2(x=1, y=1), normal=Vec2(x=0, y=-2))
        g = to_geodesic_half_plane(plane)
        assert g.normal == Vec2(x=0, y=-1)
        assert g.offset == pytest.approx(1)
        back = from_geodesic_half_plane(g)
        assert evaluate_half_plane(back, Vec2(x=5, y=1)) == pytest.approx(0)

    def test_from_geodesic_variant(self) -> None:
        """Test a GeodesicHalfPlane converts to anchor form."""
        plane = from_geodesic_half_plane(
            GeodesicHalfPlane(normal=Vec2(x=0, y=1), offset=2)
        )
        assert plane.anchor.to_tuple() == pytest.approx((0, -2))


class TestEvaluate:
    """Tests for signed distance."""

    def test_signed_distance(self) -> None:
        """Test positive on the normal side and zero on the boundary."""
        plane = HalfPlane(anchor=Vec2(x=0, y=1), normal=Vec2(x=0, y=1))
        assert evaluate_half_plane(plane, Vec2(x=3, y=3)) == pytest.approx(2)
        assert evaluate_half_plane(plane, Vec2(x=-3, y=1)) == pytest.approx(0)
        assert evaluate_half_plane(plane, Vec2(x=0, y=0)) == pytest.approx(-1)

    def test_orient_toward_flips(self) -> None:
        """Test orientation puts the reference point on the non-negative side."""
        plane = HalfPlane(anchor=Vec2(x=0, y=1), normal=Vec2(x=0, y=1))
        flipped = orient_half_plane_toward(plane, Vec2(x=0, y=0))
        assert flipped.normal == Vec2(x=0, y=-1)
        assert flipped.anchor == plane.anchor
        assert evaluate_half_plane(flipped, Vec2(x=0, y=0)) > 0

    def test_orient_toward_keeps(self) -> None:
        """Test an already oriented plane is unchanged."""
        plane = HalfPlane(anchor=Vec2(x=0, y=1), normal=Vec2(x=0, y=1))
        assert orient_half_plane_toward(plane, Vec2(x=0, y=5)) == plane


class TestControlPoints:
    """Tests for the two-handle representation."""

    def test_from_points_right_hand_normal(self) -> None:
        """Test the normal points to the right of a -> b."""
        plane = half_plane_from_points(Vec2(x=0, y=0), Vec2(x=1, y=0))
        assert plane.normal.to_tuple() == pytest.approx((0, -1))
        assert evaluate_half_plane(plane, Vec2(x=0.5, y=-1)) > 0

    def test_from_points_coincident_raises(self) -> None:
        """Test coincident handles are rejected."""
        with pytest.raises(DegenerateGeometryError, match="must not coincide"):
            half_plane_from_points(Vec2(x=1, y=1), Vec2(x=1, y=1))

    def test_from_points_coincidence_scales_with_magnitude(self) -> None:
        """Test the coincidence threshold grows with the handle coordinates."""
        with pytest.raises(DegenerateGeometryError, match="must not coincide"):
            half_plane_from_points(Vec2(x=1e6, y=0), Vec2(x=1e6 + 5e-7, y=0))
        plane = half_plane_from_points(Vec2(x=0, y=0), Vec2(x=5e-7, y=0))
        assert plane.normal.to_tuple() == pytest.approx((0, -1))

    def test_points_from_half_plane(self) -> None:
        """Test handles lie on the boundary at the requested spacing."""
        plane = half_plane_from_normal_and_offset(Vec2(x=1, y=1), -1)
        a, b = points_from_half_plane(plane, 2.0)
        assert evaluate_half_plane(plane, a) == pytest.approx(0, abs=1e-12)
        assert evaluate_half_plane(plane, b) == pytest.approx(0, abs=1e-12)
        assert (b - a).norm == pytest.approx(2)
        assert a.norm == pytest.approx(1)

    def test_handles_round_trip(self) -> None:
        """Test handles reproduce the same line and normal."""
        plane = half_plane_from_normal_and_offset(Vec2(x=0.6, y=0.8), 0.5)
        a, b = points_from_half_plane(plane, 1.0)
        rebuilt = half_plane_from_points(a, b)
        assert half_plane_offset(rebuilt) == pytest.approx(half_plane_offset(plane))
        assert abs(rebuilt.normal.dot(plane.normal)) == pytest.approx(1)

    @pytest.mark.parametrize("spacing", [0.0, -1.0, math.nan])
    def test_bad_spacing_raises(self, spacing: float) -> None:
        """Test non-positive spacing is rejected."""
        plane = half_plane_from_normal_and_offset(Vec2(x=1, y=0), 0)
        with pytest.raises(DegenerateGeometryError, match="spacing"):
            points_from_half_plane(plane, spacing)
