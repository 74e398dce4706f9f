"""Unit tests for crease extraction.

Tests cover:
- Edge multiplicity and interior edge selection
- Mountain creases
- Valley perpendiculars and deduplication
"""

import pytest

from foldcut.config import CreaseConfig
from foldcut.core.creases import (
    MOUNTAIN_SOURCE,
    VALLEY_SOURCE,
    CreaseExtractor,
    InteriorEdge,
    deduplicate_creases,
    edge_multiplicity,
)
from foldcut.core.wavefront import WavefrontSkeletonSolver
from foldcut.domain import Crease, CreaseKind, Point, Skeleton, SkeletonVertex


def square_skeleton() -> Skeleton:
    """Hand-built skeleton of the 100x100 square."""
    return Skeleton(
        vertices=(
            SkeletonVertex(0.0, 0.0, 0.0),
            SkeletonVertex(100.0, 0.0, 0.0),
            SkeletonVertex(100.0, 100.0, 0.0),
            SkeletonVertex(0.0, 100.0, 0.0),
            SkeletonVertex(50.0, 50.0, 50.0),
        ),
        faces=((0, 1, 4), (1, 2, 4), (2, 3, 4), (3, 0, 4)),
    )


def segment_set(creases: list[Crease]) -> set[frozenset[tuple[float, float]]]:
    return {
        frozenset({(round(c.a.x, 6), round(c.a.y, 6)), (round(c.b.x, 6), round(c.b.y, 6))})
        for c in creases
    }


class TestEdgeMultiplicity:
    """Tests for counting face references."""

    def test_square_counts(self):
        counts = edge_multiplicity(square_skeleton())
        assert counts[(0, 1)] == 1
        assert counts[(0, 4)] == 2
        assert counts[(1, 4)] == 2
        assert sum(1 for c in counts.values() if c >= 2) == 4

    def test_self_loops_ignored(self):
        skeleton = Skeleton(
            vertices=(
                SkeletonVertex(0.0, 0.0, 0.0),
                SkeletonVertex(1.0, 0.0, 0.0),
                SkeletonVertex(0.5, 0.5, 0.5),
            ),
            faces=((0, 1, 1, 2),),
        )
        assert (1, 1) not in edge_multiplicity(skeleton)

    def test_first_appearance_order(self):
        counts = edge_multiplicity(square_skeleton())
        assert list(counts)[:3] == [(0, 1), (1, 4), (0, 4)]


class TestMountainCreases:
    """Tests for mountain creases."""

    def test_square_mountains(self):
        mountains = CreaseExtractor().mountain_creases(square_skeleton())

        assert len(mountains) == 4
        assert all(c.kind is CreaseKind.MOUNTAIN for c in mountains)
        assert all(c.source == MOUNTAIN_SOURCE for c in mountains)
        assert segment_set(mountains) == {
            frozenset({(0.0, 0.0), (50.0, 50.0)}),
            frozenset({(100.0, 0.0), (50.0, 50.0)}),
            frozenset({(100.0, 100.0), (50.0, 50.0)}),
            frozenset({(0.0, 100.0), (50.0, 50.0)}),
        }

    def test_degenerate_interior_edge_skipped(self):
        """Interior edges between coincident vertices produce no crease."""
        skeleton = Skeleton(
            vertices=(
                SkeletonVertex(0.0, 0.0, 0.0),
                SkeletonVertex(10.0, 0.0, 0.0),
                SkeletonVertex(5.0, 5.0, 5.0),
                SkeletonVertex(5.0, 5.0, 5.0),
            ),
            faces=((0, 1, 2, 3), (1, 0, 3, 2)),
        )
        edges = CreaseExtractor().interior_edges(skeleton)
        assert InteriorEdge(2, 3, 2) not in edges
        assert all(not (e.i0 == 2 and e.i1 == 3) for e in edges)

    def test_no_faces_no_creases(self):
        skeleton = Skeleton(vertices=(SkeletonVertex(0.0, 0.0, 0.0),), faces=())
        assert CreaseExtractor().extract(skeleton) == []


class TestValleyCreases:
    """Tests for valley perpendiculars."""

    def test_square_valleys(self):
        """The centre drops a perpendicular to each side's midpoint."""
        valleys = CreaseExtractor().valley_creases(square_skeleton())

        assert len(valleys) == 4
        assert all(c.kind is CreaseKind.VALLEY for c in valleys)
        assert all(c.source == VALLEY_SOURCE for c in valleys)
        assert segment_set(valleys) == {
            frozenset({(50.0, 50.0), (50.0, 0.0)}),
            frozenset({(50.0, 50.0), (100.0, 50.0)}),
            frozenset({(50.0, 50.0), (50.0, 100.0)}),
            frozenset({(50.0, 50.0), (0.0, 50.0)}),
        }
        for crease in valleys:
            assert crease.a == Point(50.0, 50.0)

    def test_rectangle_valleys(self):
        """Both ridge nodes drop perpendiculars to the long sides."""
        rings = [[(0.0, 0.0), (200.0, 0.0), (200.0, 100.0), (0.0, 100.0), (0.0, 0.0)]]
        skeleton = WavefrontSkeletonSolver().build_from_polygon(rings)
        valleys = CreaseExtractor().valley_creases(skeleton)

        assert segment_set(valleys) == {
            frozenset({(50.0, 50.0), (50.0, 0.0)}),
            frozenset({(150.0, 50.0), (150.0, 0.0)}),
            frozenset({(50.0, 50.0), (50.0, 100.0)}),
            frozenset({(150.0, 50.0), (150.0, 100.0)}),
            frozenset({(50.0, 50.0), (0.0, 50.0)}),
            frozenset({(150.0, 50.0), (200.0, 50.0)}),
        }

    def test_face_without_boundary_pair_skipped(self):
        """Faces with fewer than two boundary vertices yield no valley."""
        skeleton = Skeleton(
            vertices=(
                SkeletonVertex(0.0, 0.0, 0.0),
                SkeletonVertex(5.0, 5.0, 5.0),
                SkeletonVertex(10.0, 0.0, 3.0),
            ),
            faces=((0, 1, 2),),
        )
        assert CreaseExtractor().valley_creases(skeleton) == []

    def test_extract_orders_mountains_first(self):
        creases = CreaseExtractor().extract(square_skeleton())
        kinds = [c.kind for c in creases]
        assert kinds == [CreaseKind.MOUNTAIN] * 4 + [CreaseKind.VALLEY] * 4


class TestDeduplication:
    """Tests for quantized deduplication."""

    def test_reversed_duplicate_dropped(self):
        a = Crease(Point(0.0, 0.0), Point(10.0, 0.0), CreaseKind.VALLEY)
        b = Crease(Point(10.0, 0.0), Point(0.0, 0.0), CreaseKind.VALLEY)
        assert deduplicate_creases([a, b]) == [a]

    def test_near_duplicate_dropped(self):
        a = Crease(Point(10.001, 0.0), Point(20.0, 5.0), CreaseKind.VALLEY)
        b = Crease(Point(20.0, 5.0), Point(10.003, 0.0), CreaseKind.VALLEY)
        assert deduplicate_creases([a, b]) == [a]

    def test_distinct_creases_kept_in_order(self):
        a = Crease(Point(0.0, 0.0), Point(10.0, 0.0), CreaseKind.VALLEY)
        b = Crease(Point(0.0, 0.0), Point(0.0, 10.0), CreaseKind.VALLEY)
        assert deduplicate_creases([b, a]) == [b, a]

    def test_add_unique_reports_duplicates(self):
        extractor = CreaseExtractor(CreaseConfig(dedup_tolerance=1e-2))
        creases: list[Crease] = []
        seen: set = set()
        crease = Crease(Point(0.0, 0.0), Point(1.0, 1.0), CreaseKind.VALLEY)

        assert extractor.add_unique(creases, seen, crease) is False
        assert extractor.add_unique(creases, seen, crease) is True
        assert creases == [crease]

    @pytest.mark.parametrize("tolerance", [1e-3, 1e-2, 1e-1])
    def test_tolerance_respected(self, tolerance):
        a = Crease(Point(0.0, 0.0), Point(5.0, 0.0), CreaseKind.VALLEY)
        b = Crease(Point(0.0, 0.0), Point(5.0 + 3 * tolerance, 0.0), CreaseKind.VALLEY)
        assert len(deduplicate_creases([a, b], tolerance)) == 2
