"""Breadth-first expansion of a triangle reflection group.

Starting from the fundamental triangle, every frontier face is reflected
across the three mirrors each round. The reflection monoid is not free
(reflecting twice across one mirror, or around a vertex whose angle
multiplicity closes to 2*pi, returns to a known tile), so faces are
deduplicated by their barycenter quantized to a 1e-9 grid rather than by
word. The expander owns an arena of faces plus a dict keyed by the
quantized barycenter and returns an immutable, canonically sorted snapshot.

Example:
    from hypertile.triangle import build_fundamental_triangle, expand_triangle_group

    result = expand_triangle_group(build_fundamental_triangle(2, 3, 7), depth=3)
    print(result.stats.total, result.faces[1].word)
"""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np
import numpy.typing as npt

from hypertile.geometry.primitives import AABB, Vec2, barycenter
from hypertile.geometry.transforms import reflect_across_geodesic
from hypertile.triangle.models import FundamentalTriangle, TriangleFace
from hypertile.utils.logging import (
    correlation_scope,
    get_logger,
    set_correlation_context,
)

logger = get_logger(__name__)

QUANTUM = 1e-9

Triple = tuple[Vec2, Vec2, Vec2]
QuantKey = tuple[int, int]


class StopReason(str, Enum):
    """Why an expansion stopped."""

    DEPTH = "depth"  # requested number of rounds completed
    EXHAUSTED = "exhausted"  # frontier emptied before reaching depth
    MAX_FACES = "max_faces"
    CANCELLED = "cancelled"
    TIME_BUDGET = "time_budget"


@dataclass(frozen=True)
class ExpansionStats:
    """Summary of an expansion run.

    Attributes:
        depth: Requested number of reflection rounds.
        total: Number of faces returned.
        duplicates: Children rejected because their barycenter was known.
        levels_completed: Rounds fully processed.
        stop_reason: Why the expansion ended.
    """

    depth: int
    total: int
    duplicates: int
    levels_completed: int
    stop_reason: StopReason


@dataclass(frozen=True)
class ExpansionResult:
    """Faces of an expansion in canonical order plus statistics."""

    faces: tuple[TriangleFace, ...]
    stats: ExpansionStats

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return face corners as an ``(N, 3, 2)`` float array."""
        if not self.faces:
            return np.empty((0, 3, 2), dtype=np.float64)
        return np.array(
            [[v.to_tuple() for v in face.vertices] for face in self.faces],
            dtype=np.float64,
        )


def quantize(point: Vec2, quantum: float = QUANTUM) -> QuantKey:
    """Round a point to the integer grid of spacing ``quantum`` (half up)."""
    return (
        math.floor(point.x / quantum + 0.5),
        math.floor(point.y / quantum + 0.5),
    )


def _sort_key(face: TriangleFace) -> tuple[int, str, str]:
    return (len(face.word), face.word, face.id)


class _FaceArena:
    """Append-only face storage with barycenter deduplication."""

    def __init__(self) -> None:
        self.faces: list[TriangleFace] = []
        self.index: dict[QuantKey, int] = {}
        self.duplicates = 0

    def admit(self, vertices: Triple, word: str) -> bool:
        key = quantize(barycenter(vertices))
        if key in self.index:
            self.duplicates += 1
            return False
        self.index[key] = len(self.faces)
        self.faces.append(
            TriangleFace(
                id=f"{word}|{key[0]}:{key[1]}",
                vertices=vertices,
                aabb=AABB.from_points(vertices),
                word=word,
            )
        )
        return True


def expand_triangle_group(
    base: FundamentalTriangle,
    depth: int,
    max_faces: int | None = None,
    should_cancel: Callable[[], bool] | None = None,
    time_budget_s: float | None = None,
) -> ExpansionResult:
    """Generate the tiles reachable from ``base`` in at most ``depth`` rounds.

    Args:
        base: Fundamental triangle (hyperbolic or Euclidean).
        depth: Number of reflection rounds; negative values act as 0.
        max_faces: Stop once this many faces exist (None or <= 0: no cap).
        should_cancel: Cooperative cancellation hook, polled once per round.
        time_budget_s: Wall-clock budget in seconds, checked once per round.

    Returns:
        ExpansionResult with faces sorted by ``(len(word), word, id)``.
    """
    rounds = max(0, depth)
    cap = max_faces if max_faces is not None and max_faces > 0 else None
    deadline = time.monotonic() + time_budget_s if time_budget_s else None
    reflections = [reflect_across_geodesic(mirror) for mirror in base.mirrors]

    arena = _FaceArena()
    arena.admit(base.vertices, "")
    frontier: deque[tuple[Triple, str]] = deque([(base.vertices, "")])

    stop_reason = StopReason.DEPTH
    levels_completed = 0
    with correlation_scope():
        for level in range(rounds):
            if cap is not None and len(arena.faces) >= cap:
                stop_reason = StopReason.MAX_FACES
                break
            if should_cancel is not None and should_cancel():
                stop_reason = StopReason.CANCELLED
                break
            if deadline is not None and time.monotonic() >= deadline:
                stop_reason = StopReason.TIME_BUDGET
                break
            if not frontier:
                stop_reason = StopReason.EXHAUSTED
                break

            set_correlation_context(bfs_level=level + 1)
            capped = False
            for _ in range(len(frontier)):
                vertices, word = frontier.popleft()
                for index, reflect in enumerate(reflections, start=1):
                    child: Triple = (
                        reflect(vertices[0]),
                        reflect(vertices[1]),
                        reflect(vertices[2]),
                    )
                    child_word = f"{word}{index}"
                    if arena.admit(child, child_word):
                        frontier.append((child, child_word))
                    if cap is not None and len(arena.faces) >= cap:
                        capped = True
                        break
                if capped:
                    break

            if capped:
                stop_reason = StopReason.MAX_FACES
                logger.warning("Expansion truncated by face cap", max_faces=cap)
                break
            levels_completed += 1
            logger.debug(
                "Expanded level",
                faces=len(arena.faces),
                frontier=len(frontier),
                duplicates=arena.duplicates,
            )

    faces = tuple(sorted(arena.faces, key=_sort_key))
    stats = ExpansionStats(
        depth=depth,
        total=len(faces),
        duplicates=arena.duplicates,
        levels_completed=levels_completed,
        stop_reason=stop_reason,
    )
    if stop_reason in (StopReason.CANCELLED, StopReason.TIME_BUDGET):
        logger.warning("Expansion stopped early", reason=stop_reason.value)
    return ExpansionResult(faces=faces, stats=stats)
