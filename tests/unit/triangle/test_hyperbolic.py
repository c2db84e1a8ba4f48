"""Unit tests for the hyperbolic fundamental triangle and geodesic angles."""

from __future__ import annotations

import math

import pytest

from hypertile.geometry import (
    GeodesicCircle,
    GeodesicDiameter,
    GeodesicHalfPlane,
    GeometryError,
    InfeasibleParametersError,
    Tolerance,
    Vec2,
    geodesic_contains,
)
from hypertile.triangle import (
    FundamentalTriangle,
    GeometryKind,
    angle_between_geodesics_at,
    build_fundamental_triangle,
    solve_third_mirror,
)
from hypertile.triangle.hyperbolic import angle_at_second_mirror, circle_from_parameter
from hypertile.triangle.params import reciprocal_sum

LOOSE = Tolerance(abs=1e-9, rel=1e-9)


class TestCircleFamily:
    """Tests for the one-parameter third-mirror family."""

    @pytest.mark.parametrize("t", [0.1, 0.3, 0.75])
    def test_family_is_orthogonal(self, t: float) -> None:
        """Test |c|^2 - r^2 = 1 for every parameter."""
        circle = circle_from_parameter(t, math.pi / 3)
        assert circle.cx**2 + circle.cy**2 - circle.r**2 == pytest.approx(1)

    def test_family_passes_through_axis_point(self) -> None:
        """Test the circle meets the x-axis at (t, 0)."""
        circle = circle_from_parameter(0.4, math.pi / 4)
        assert math.hypot(0.4 - circle.cx, circle.cy) == pytest.approx(circle.r)

    def test_angle_at_second_mirror_in_range(self) -> None:
        """Test the measured angle is within [0, pi/2]."""
        angle = angle_at_second_mirror(0.5, math.pi / 2, math.pi / 3)
        assert 0 <= angle <= math.pi / 2


class TestSolveThirdMirror:
    """Tests for the gamma root solve."""

    def test_bisection_for_237(self) -> None:
        """Test (2,3,7) is bracketed and solved by bisection."""
        solution = solve_third_mirror(math.pi / 2, math.pi / 3, math.pi / 7)
        assert solution.method == "bisection"
        assert solution.parameter == pytest.approx(0.1406, abs=2e-3)

    def test_secant_fallback(self) -> None:
        """Test an unreachable target falls back to clamped secant steps."""
        solution = solve_third_mirror(math.pi / 2, math.pi / 3, -1.0)
        assert solution.method == "secant"
        assert 0.05 <= solution.parameter <= 0.95


class TestBuildFundamentalTriangle:
    """Tests for the canonical (p, q, r) triangle."""

    def test_kind_and_angles(self, triangle_237: FundamentalTriangle) -> None:
        """Test metadata of the (2,3,7) triangle."""
        assert triangle_237.kind is GeometryKind.HYPERBOLIC
        assert triangle_237.angles == pytest.approx(
            (math.pi / 2, math.pi / 3, math.pi / 7)
        )

    def test_mirror_layout(self, triangle_237: FundamentalTriangle) -> None:
        """Test two diameters and an orthogonal circle."""
        g1, g2, g3 = triangle_237.mirrors
        assert isinstance(g1, GeodesicDiameter)
        assert g1.direction.to_tuple() == pytest.approx((1, 0))
        assert isinstance(g2, GeodesicDiameter)
        assert g2.direction.to_tuple() == pytest.approx((0, 1), abs=1e-12)
        assert isinstance(g3, GeodesicCircle)
        assert g3.center.norm_sq == pytest.approx(1 + g3.radius**2)

    def test_vertices(self, triangle_237: FundamentalTriangle) -> None:
        """Test vertex positions against the right-triangle closed form."""
        v0, v1, v2 = triangle_237.vertices
        assert v0 == Vec2(x=0, y=0)
        assert v1.y == 0
        assert v1.x == pytest.approx(0.1406, abs=2e-3)
        assert v2.x == pytest.approx(0, abs=1e-9)
        assert v2.y == pytest.approx(0.2661, abs=3e-3)
        for v in triangle_237.vertices:
            assert v.norm < 1

    def test_vertices_lie_on_their_mirrors(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test v0 on mirrors 1-2, v1 on 1-3, v2 on 2-3."""
        g1, g2, g3 = triangle_237.mirrors
        v0, v1, v2 = triangle_237.vertices
        assert geodesic_contains(g1, v0, LOOSE)
        assert geodesic_contains(g2, v0, LOOSE)
        assert geodesic_contains(g1, v1, LOOSE)
        assert geodesic_contains(g3, v1, LOOSE)
        assert geodesic_contains(g2, v2, LOOSE)
        assert geodesic_contains(g3, v2, LOOSE)

    def test_mirror_angles(self, triangle_237: FundamentalTriangle) -> None:
        """Test the realized angles match pi/p, pi/q, pi/r."""
        g1, g2, g3 = triangle_237.mirrors
        _, v1, v2 = triangle_237.vertices
        assert angle_between_geodesics_at(g1, g2) == pytest.approx(
            math.pi / 2, abs=1e-6
        )
        assert angle_between_geodesics_at(g1, g3, v1) == pytest.approx(
            math.pi / 3, abs=5e-3
        )
        assert angle_between_geodesics_at(g2, g3, v2) == pytest.approx(
            math.pi / 7, abs=5e-3
        )

    @pytest.mark.parametrize("triple", [(3, 3, 4), (2, 4, 5), (4, 4, 4), (3, 7, 7)])
    def test_other_triples(self, triple: tuple[int, int, int]) -> None:
        """Test further hyperbolic triples build and satisfy their angles."""
        p, q, r = triple
        tri = build_fundamental_triangle(p, q, r)
        g1, g2, g3 = tri.mirrors
        _, v1, v2 = tri.vertices
        assert angle_between_geodesics_at(g1, g3, v1) == pytest.approx(
            math.pi / q, abs=5e-3
        )
        assert angle_between_geodesics_at(g2, g3, v2) == pytest.approx(
            math.pi / r, abs=5e-3
        )

    @pytest.mark.parametrize("triple", [(2, 3, 6), (3, 3, 3), (2, 2, 9), (1, 5, 5)])
    def test_infeasible_raises(self, triple: tuple[int, int, int]) -> None:
        """Test non-hyperbolic triples are rejected."""
        with pytest.raises(InfeasibleParametersError, match="Invalid \\(p,q,r\\)"):
            build_fundamental_triangle(*triple)

    @pytest.mark.parametrize("triple", [(2, 3, 6), (2, 3, 6 + 1e-12), (2, 4, 4)])
    def test_euclidean_boundary_rejected(self, triple: tuple[float, ...]) -> None:
        """Test sums that round just below 1 are still rejected."""
        p, q, r = triple
        assert reciprocal_sum(p, q, r) > 1 - 1e-12
        with pytest.raises(InfeasibleParametersError):
            build_fundamental_triangle(p, q, r)


class TestAngleBetweenGeodesics:
    """Tests for angle evaluation."""

    def test_two_diameters(self) -> None:
        """Test diameters meet at the origin."""
        a = GeodesicDiameter(direction=Vec2(x=1, y=0))
        b = GeodesicDiameter(
            direction=Vec2(x=math.cos(math.pi / 3), y=math.sin(math.pi / 3))
        )
        assert angle_between_geodesics_at(a, b) == pytest.approx(math.pi / 3)

    def test_result_is_unsigned(self) -> None:
        """Test obtuse crossings report the acute angle."""
        a = GeodesicDiameter(direction=Vec2(x=1, y=0))
        b = GeodesicDiameter(direction=Vec2(x=-1, y=0.2))
        assert 0 <= angle_between_geodesics_at(a, b) <= math.pi / 2

    def test_diameter_circle_default_meet(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test the inferred meeting point is the intersection nearest the origin."""
        g1, _, g3 = triangle_237.mirrors
        assert angle_between_geodesics_at(g3, g1) == pytest.approx(
            math.pi / 3, abs=1e-9
        )

    def test_half_plane_rejected(self) -> None:
        """Test Euclidean mirrors are not accepted."""
        with pytest.raises(GeometryError, match="Half-plane"):
            angle_between_geodesics_at(
                GeodesicHalfPlane(normal=Vec2(x=1, y=0), offset=0),
                GeodesicDiameter(direction=Vec2(x=1, y=0)),
            )
