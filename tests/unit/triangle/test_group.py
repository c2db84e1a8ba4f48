"""Unit tests for breadth-first reflection group expansion."""

from __future__ import annotations

import itertools

import pytest

from hypertile.geometry import Vec2
from hypertile.geometry.primitives import barycenter
from hypertile.triangle import (
    FundamentalTriangle,
    StopReason,
    build_euclidean_triangle,
    expand_triangle_group,
)
from hypertile.triangle.group import QUANTUM, quantize
from hypertile.utils.logging import _bfs_level, _run_id, set_correlation_context


class TestQuantize:
    """Tests for barycenter quantization."""

    def test_rounds_to_grid(self) -> None:
        """Test coordinates map to integer multiples of the quantum."""
        assert quantize(Vec2(x=0.25, y=-0.5)) == (250_000_000, -500_000_000)

    def test_half_rounds_up(self) -> None:
        """Test exact halves round toward positive infinity."""
        assert quantize(Vec2(x=2.5, y=-2.5), quantum=1.0) == (3, -2)

    def test_nearby_points_share_key(self) -> None:
        """Test points closer than the quantum collapse."""
        assert quantize(Vec2(x=0.1, y=0.1)) == quantize(
            Vec2(x=0.1 + QUANTUM / 10, y=0.1)
        )


class TestExpandHyperbolic:
    """Tests for hyperbolic expansions."""

    def test_depth_zero_is_base_only(self, triangle_237: FundamentalTriangle) -> None:
        """Test no rounds yield the fundamental triangle alone."""
        result = expand_triangle_group(triangle_237, depth=0)
        assert len(result.faces) == 1
        assert result.faces[0].word == ""
        assert result.faces[0].vertices == triangle_237.vertices
        assert result.stats.stop_reason is StopReason.DEPTH
        assert result.stats.levels_completed == 0

    def test_negative_depth_acts_as_zero(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test negative depth is treated as no rounds."""
        assert expand_triangle_group(triangle_237, depth=-2).stats.total == 1

    def test_depth_one(self, triangle_237: FundamentalTriangle) -> None:
        """Test one round adds one face per mirror."""
        result = expand_triangle_group(triangle_237, depth=1)
        assert [face.word for face in result.faces] == ["", "1", "2", "3"]
        assert result.stats.duplicates == 0
        assert result.stats.levels_completed == 1

    def test_depth_two_deduplicates(self, triangle_237: FundamentalTriangle) -> None:
        """Test involutions and the order-2 rotation at v0 are rejected."""
        result = expand_triangle_group(triangle_237, depth=2)
        words = [face.word for face in result.faces]
        assert words == ["", "1", "2", "3", "12", "13", "23", "31", "32"]
        assert result.stats.duplicates == 4
        assert result.stats.total == 9

    def test_faces_stay_in_disk(self, triangle_237: FundamentalTriangle) -> None:
        """Test every vertex of every face is inside the unit disk."""
        result = expand_triangle_group(triangle_237, depth=5)
        assert result.stats.total > 20
        for face in result.faces:
            for v in face.vertices:
                assert v.norm < 1

    def test_unique_ids_and_barycenters(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test ids and quantized barycenters are unique."""
        result = expand_triangle_group(triangle_237, depth=4)
        ids = [face.id for face in result.faces]
        keys = [quantize(barycenter(face.vertices)) for face in result.faces]
        assert len(set(ids)) == len(ids)
        assert len(set(keys)) == len(keys)

    def test_deterministic(self, triangle_237: FundamentalTriangle) -> None:
        """Test repeated runs produce identical ids in identical order."""
        first = expand_triangle_group(triangle_237, depth=3)
        second = expand_triangle_group(triangle_237, depth=3)
        assert [f.id for f in first.faces] == [f.id for f in second.faces]

    def test_canonical_order(self, triangle_237: FundamentalTriangle) -> None:
        """Test faces are sorted by word length, then word, then id."""
        result = expand_triangle_group(triangle_237, depth=3)
        keys = [(len(f.word), f.word, f.id) for f in result.faces]
        assert keys == sorted(keys)

    def test_id_format(self, triangle_237: FundamentalTriangle) -> None:
        """Test ids combine the word and the quantized barycenter."""
        result = expand_triangle_group(triangle_237, depth=1)
        for face in result.faces:
            qx, qy = quantize(barycenter(face.vertices))
            assert face.id == f"{face.word}|{qx}:{qy}"

    def test_aabb_covers_vertices(self, triangle_237: FundamentalTriangle) -> None:
        """Test each face's bounding box contains its corners."""
        for face in expand_triangle_group(triangle_237, depth=2).faces:
            assert all(face.aabb.contains_point(v) for v in face.vertices)

    def test_child_shares_edge_with_parent(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test reflecting across a mirror fixes the two corners on it."""
        result = expand_triangle_group(triangle_237, depth=1)
        by_word = {face.word: face for face in result.faces}
        v0, v1, _ = triangle_237.vertices
        face = by_word["1"]
        assert face.vertices[0].to_tuple() == pytest.approx(v0.to_tuple())
        assert face.vertices[1].to_tuple() == pytest.approx(v1.to_tuple())


class TestStopConditions:
    """Tests for caps, cancellation and deadlines."""

    def test_max_faces_stops_exactly(self, triangle_237: FundamentalTriangle) -> None:
        """Test the cap is never exceeded."""
        result = expand_triangle_group(triangle_237, depth=6, max_faces=7)
        assert result.stats.total == 7
        assert result.stats.stop_reason is StopReason.MAX_FACES

    def test_max_faces_non_positive_is_uncapped(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test zero disables the cap."""
        result = expand_triangle_group(triangle_237, depth=2, max_faces=0)
        assert result.stats.total == 9

    def test_cancel_before_first_round(
        self, triangle_237: FundamentalTriangle
    ) -> None:
        """Test cancellation keeps the faces produced so far."""
        result = expand_triangle_group(
            triangle_237, depth=3, should_cancel=lambda: True
        )
        assert result.stats.total == 1
        assert result.stats.stop_reason is StopReason.CANCELLED

    def test_cancel_between_rounds(self, triangle_237: FundamentalTriangle) -> None:
        """Test the hook is polled once per round."""
        calls = itertools.count()
        result = expand_triangle_group(
            triangle_237, depth=5, should_cancel=lambda: next(calls) >= 2
        )
        assert result.stats.levels_completed == 2
        assert result.stats.total == 9

    def test_time_budget(
        self, triangle_237: FundamentalTriangle, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an elapsed deadline stops the expansion."""
        clock = itertools.count(step=10)
        monkeypatch.setattr(
            "hypertile.triangle.group.time.monotonic", lambda: float(next(clock))
        )
        result = expand_triangle_group(triangle_237, depth=5, time_budget_s=15)
        assert result.stats.stop_reason is StopReason.TIME_BUDGET
        assert result.stats.levels_completed == 1


class TestExpandEuclidean:
    """Tests for Euclidean expansions."""

    def test_equilateral_depth_one(self) -> None:
        """Test (3,3,3) grows by three faces in the first round."""
        result = expand_triangle_group(build_euclidean_triangle(3, 3, 3), depth=1)
        assert result.stats.total == 4

    def test_square_tiling_closes_around_vertex(self) -> None:
        """Test (2,4,4) rotations around the right-angle vertex close up."""
        result = expand_triangle_group(build_euclidean_triangle(2, 4, 4), depth=4)
        keys = [quantize(barycenter(face.vertices)) for face in result.faces]
        assert len(set(keys)) == len(keys)
        assert result.stats.duplicates > 0


class TestExpansionResult:
    """Tests for array export."""

    def test_to_array_shape(self, triangle_237: FundamentalTriangle) -> None:
        """Test the (N, 3, 2) layout."""
        result = expand_triangle_group(triangle_237, depth=2)
        array = result.to_array()
        assert array.shape == (9, 3, 2)
        first = result.faces[0]
        assert array[0].tolist() == [list(v.to_tuple()) for v in first.vertices]


class TestCorrelationContext:
    """Tests for the BFS level log context."""

    def test_level_not_left_behind(self, triangle_237: FundamentalTriangle) -> None:
        """Test a direct call leaves no bfs_level on later log lines."""
        expand_triangle_group(triangle_237, depth=2)
        assert _bfs_level.get() is None

    def test_outer_context_restored(self, triangle_237: FundamentalTriangle) -> None:
        """Test ids bound by the caller survive the expansion."""
        set_correlation_context(run_id="outer", bfs_level=7)
        expand_triangle_group(triangle_237, depth=2)
        assert _run_id.get() == "outer"
        assert _bfs_level.get() == 7
