"""Unit tests for circle-circle intersection.

Covers every classification branch, degenerate inputs, and the symmetry
and similarity-covariance properties of the result.
"""

from __future__ import annotations

import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from hypertile.geometry import (
    Circle,
    IntersectKind,
    Vec2,
    circle_circle_intersection,
)
from hypertile.geometry.primitives import distance


def _circle(x: float, y: float, r: float) -> Circle:
    return Circle(center=Vec2(x=x, y=y), radius=r)


coords = st.floats(min_value=-50, max_value=50, allow_nan=False, allow_infinity=False)
radii = st.floats(min_value=0.5, max_value=20, allow_nan=False, allow_infinity=False)


class TestClassification:
    """Tests for each intersection kind."""

    def test_two_points_sorted(self) -> None:
        """Test two equal circles eight apart meet at (4, -3) and (4, 3)."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(8, 0, 5))
        assert res.kind is IntersectKind.TWO
        assert [p.to_tuple() for p in res.points] == [
            pytest.approx((4, -3)),
            pytest.approx((4, 3)),
        ]

    def test_tangent_point(self) -> None:
        """Test externally tangent circles touch at (5, 0)."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(10, 0, 5))
        assert res.kind is IntersectKind.TANGENT
        assert len(res.points) == 1
        assert res.points[0].to_tuple() == pytest.approx((5, 0))

    def test_internal_tangent(self) -> None:
        """Test internally tangent circles."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(2, 0, 3))
        assert res.kind is IntersectKind.TANGENT
        assert res.points[0].to_tuple() == pytest.approx((5, 0))

    def test_concentric(self) -> None:
        """Test same center, different radii."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(0, 0, 3))
        assert res.kind is IntersectKind.CONCENTRIC
        assert res.points == ()

    def test_coincident(self) -> None:
        """Test identical circles."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(0, 0, 5))
        assert res.kind is IntersectKind.COINCIDENT
        assert res.points == ()

    def test_separated(self) -> None:
        """Test circles farther apart than the radius sum."""
        res = circle_circle_intersection(_circle(0, 0, 1), _circle(3, 0, 1))
        assert res.kind is IntersectKind.NONE
        assert res.points == ()

    def test_contained(self) -> None:
        """Test a small circle strictly inside a larger one."""
        res = circle_circle_intersection(_circle(0, 0, 5), _circle(1, 0, 1))
        assert res.kind is IntersectKind.NONE

    def test_near_tangent_is_order_independent(self) -> None:
        """Test rounding near internal tangency does not depend on argument order."""
        a = _circle(0, 7.326283936706151, 6.326283936706151)
        b = _circle(0, 4, 3)
        forward = circle_circle_intersection(a, b)
        backward = circle_circle_intersection(b, a)
        assert forward.kind in (IntersectKind.TANGENT, IntersectKind.TWO)
        assert forward == backward


class TestDegenerateInputs:
    """Tests for input sanitization."""

    def test_negative_radius_uses_magnitude(self) -> None:
        """Test negative radii behave like their absolute value."""
        res = circle_circle_intersection(_circle(0, 0, -5), _circle(8, 0, 5))
        assert res.kind is IntersectKind.TWO

    @pytest.mark.parametrize(
        "bad",
        [
            _circle(0, 0, 0),
            _circle(math.nan, 0, 1),
            _circle(0, math.inf, 1),
            _circle(0, 0, math.nan),
        ],
    )
    def test_invalid_circle_gives_none(self, bad: Circle) -> None:
        """Test zero radius and non-finite values yield none."""
        res = circle_circle_intersection(bad, _circle(1, 0, 1))
        assert res.kind is IntersectKind.NONE
        assert res.points == ()


class TestProperties:
    """Property-based tests."""

    @given(coords, coords, radii, coords, coords, radii)
    def test_points_lie_on_both_circles(
        self, ax: float, ay: float, ar: float, bx: float, by: float, br: float
    ) -> None:
        """Test reported points are on both circles."""
        a, b = _circle(ax, ay, ar), _circle(bx, by, br)
        res = circle_circle_intersection(a, b)
        if res.kind in (IntersectKind.TWO, IntersectKind.TANGENT):
            for p in res.points:
                assert distance(p, a.center) == pytest.approx(ar, abs=1e-6)
                assert distance(p, b.center) == pytest.approx(br, abs=1e-6)

    @given(coords, coords, radii, coords, coords, radii)
    def test_symmetric_in_argument_order(
        self, ax: float, ay: float, ar: float, bx: float, by: float, br: float
    ) -> None:
        """Test swapping the circles gives the same kind and points."""
        a, b = _circle(ax, ay, ar), _circle(bx, by, br)
        forward = circle_circle_intersection(a, b)
        backward = circle_circle_intersection(b, a)
        assert forward.kind is backward.kind
        for p, q in zip(forward.points, backward.points, strict=True):
            assert p.to_tuple() == pytest.approx(q.to_tuple(), abs=1e-6)

    @given(
        st.floats(min_value=-3, max_value=3),
        st.floats(min_value=0.25, max_value=4),
        st.floats(min_value=-5, max_value=5),
        st.floats(min_value=-5, max_value=5),
    )
    def test_covariant_under_similarity(
        self, angle: float, scale: float, tx: float, ty: float
    ) -> None:
        """Test rotating, scaling, and translating inputs maps the points alike."""
        c, s = math.cos(angle), math.sin(angle)

        def transform(p: Vec2) -> Vec2:
            return Vec2(
                x=scale * (c * p.x - s * p.y) + tx,
                y=scale * (s * p.x + c * p.y) + ty,
            )

        a, b = _circle(0, 0, 5), _circle(8, 0, 5)
        moved = circle_circle_intersection(
            Circle(center=transform(a.center), radius=5 * scale),
            Circle(center=transform(b.center), radius=5 * scale),
        )
        assume(moved.kind is IntersectKind.TWO)
        expected = sorted(
            transform(Vec2(x=4, y=sign * 3)).to_tuple() for sign in (-1, 1)
        )
        got = [p.to_tuple() for p in moved.points]
        for g, e in zip(got, expected, strict=True):
            assert g == pytest.approx(e, abs=1e-9)
