"""End-to-end tests for FoldAndCutEngine.

Runs complete scenes through ring building, the wavefront solver, crease
extraction and export.
"""

import asyncio
import json

import pytest

from foldcut.config import FoldCutSettings
from foldcut.core import FoldAndCutEngine, SkeletonService
from foldcut.core.geometry import point_in_polygon, signed_area
from foldcut.domain import CreaseKind, Point, Scene, Shape, Viewport
from foldcut.exceptions import (
    DegenerateRingError,
    MultipleDisjointOuterRingsError,
    NoClosedPolygonError,
    SelfIntersectingRingError,
    SkeletonComputationError,
)
from foldcut.io import ResultWriter, SceneReader


def polygon(coords, shape_id: str) -> Shape:
    return Shape(points=[Point(x, y) for x, y in coords], closed=True, id=shape_id)


SQUARE = polygon([(0, 0), (100, 0), (100, 100), (0, 100)], "square")
RECTANGLE = polygon([(0, 0), (200, 0), (200, 100), (0, 100)], "rect")
FRAME_OUTER = polygon([(0, 0), (300, 0), (300, 300), (0, 300)], "outer")
FRAME_HOLE = polygon([(100, 100), (200, 100), (200, 200), (100, 200)], "hole")
L_SHAPE = polygon(
    [(0, 0), (200, 0), (200, 100), (100, 100), (100, 200), (0, 200)],
    "ell",
)


@pytest.fixture
def engine() -> FoldAndCutEngine:
    return FoldAndCutEngine(FoldCutSettings(), service=SkeletonService())


def segments(creases):
    return {
        frozenset({(round(c.a.x, 6), round(c.a.y, 6)), (round(c.b.x, 6), round(c.b.y, 6))})
        for c in creases
    }


class TestConvexScenes:
    """Square and rectangle scenes."""

    def test_square(self, engine):
        result = engine.run_sync([SQUARE])

        assert result.rings.outer_id == "square"
        assert len(result.mountains) == 4
        assert len(result.valleys) == 4
        assert segments(result.mountains) == {
            frozenset({(0.0, 0.0), (50.0, 50.0)}),
            frozenset({(100.0, 0.0), (50.0, 50.0)}),
            frozenset({(100.0, 100.0), (50.0, 50.0)}),
            frozenset({(0.0, 100.0), (50.0, 50.0)}),
        }
        assert result.cut_line.a == Point(0.0, 50.0)
        assert result.cut_line.b == Point(1000.0, 50.0)

    def test_rectangle(self, engine):
        result = engine.run_sync(Scene(shapes=[RECTANGLE]), viewport=Viewport(400.0, 300.0))

        assert len(result.mountains) == 5
        assert frozenset({(50.0, 50.0), (150.0, 50.0)}) in segments(result.mountains)
        assert len(result.valleys) == 6
        assert result.cut_line.b == Point(400.0, 50.0)

    def test_mountains_precede_valleys(self, engine):
        result = engine.run_sync([RECTANGLE])
        kinds = [c.kind for c in result.creases]
        first_valley = kinds.index(CreaseKind.VALLEY)
        assert all(k is CreaseKind.VALLEY for k in kinds[first_valley:])

    def test_clockwise_input_normalized(self, engine):
        reversed_square = polygon([(0, 100), (100, 100), (100, 0), (0, 0)], "cw")
        result = engine.run_sync([reversed_square])
        assert signed_area(result.rings.outer) > 0
        assert len(result.mountains) == 4

    def test_explicit_closure_input(self, engine):
        """A repeated first point gives the same pattern."""
        closed = polygon([(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)], "square")
        assert segments(engine.run_sync([closed]).creases) == segments(
            engine.run_sync([SQUARE]).creases
        )


class TestHolesAndConcaveScenes:
    """Scenes with holes and reflex corners."""

    def test_square_with_hole(self, engine):
        result = engine.run_sync([FRAME_HOLE, FRAME_OUTER])

        assert result.rings.outer_id == "outer"
        assert result.rings.hole_ids == ("hole",)
        assert signed_area(result.rings.holes[0]) < 0
        assert len(result.skeleton.faces) == 8
        assert len(result.mountains) == 12

        # Creases may end on hole corners but never run through the hole
        hole = list(result.rings.holes[0])
        for crease in result.creases:
            mid = Point((crease.a.x + crease.b.x) / 2, (crease.a.y + crease.b.y) / 2)
            assert not point_in_polygon(mid, hole)

    def test_l_shape(self, engine):
        result = engine.run_sync([L_SHAPE])

        outline = list(L_SHAPE.points)
        assert len(result.skeleton.faces) == 6
        assert result.mountains
        for crease in result.mountains:
            mid = Point((crease.a.x + crease.b.x) / 2, (crease.a.y + crease.b.y) / 2)
            assert point_in_polygon(mid, outline)

    def test_notched_rectangle(self, engine):
        """Both notch corners reach the bottom edge at the same moment."""
        notch = polygon(
            [(0, 0), (300, 0), (300, 100), (200, 100), (200, 30), (100, 30), (100, 100), (0, 100)],
            "notch",
        )
        result = engine.run_sync([notch])

        assert len(result.skeleton.faces) == 8
        assert frozenset({(85.0, 15.0), (215.0, 15.0)}) in segments(result.mountains)
        outline = list(notch.points)
        for crease in result.creases:
            mid = Point((crease.a.x + crease.b.x) / 2, (crease.a.y + crease.b.y) / 2)
            assert point_in_polygon(mid, outline)

    def test_open_shapes_ignored(self, engine):
        stroke = Shape(points=[Point(10, 10), Point(90, 90)], id="stroke")
        result = engine.run_sync([SQUARE, stroke])
        assert result.rings.outer_id == "square"
        assert len(result.mountains) == 4


class TestErrors:
    """Error kinds surface unchanged from the engine."""

    def test_no_closed_polygon(self, engine):
        with pytest.raises(NoClosedPolygonError):
            engine.run_sync([Shape(points=[Point(0, 0), Point(1, 1)], id="line")])

    def test_degenerate_ring(self, engine):
        with pytest.raises(DegenerateRingError):
            engine.run_sync([polygon([(0, 0), (10, 0)], "two")])

    def test_self_intersection(self, engine):
        with pytest.raises(SelfIntersectingRingError):
            engine.run_sync([polygon([(0, 0), (100, 100), (100, 0), (0, 100)], "bow")])

    def test_disjoint_rings(self, engine):
        far = polygon([(500, 0), (600, 0), (600, 100), (500, 100)], "far")
        with pytest.raises(MultipleDisjointOuterRingsError):
            engine.run_sync([SQUARE, far])

    def test_solver_failure(self):
        class BrokenSolver:
            def build_from_polygon(self, rings):
                return None

        engine = FoldAndCutEngine(service=SkeletonService(BrokenSolver))
        with pytest.raises(SkeletonComputationError):
            engine.run_sync([SQUARE])
        assert engine.run_logger.stats.failure_count == 1


class TestEngineLifecycle:
    """Initialization and result freshness."""

    def test_init_then_run(self, engine):
        async def scenario():
            assert not engine.ready
            await engine.init()
            assert engine.ready
            await engine.init()
            return await engine.run([SQUARE])

        result = asyncio.run(scenario())
        assert len(result.creases) == 8

    def test_fresh_results_per_run(self, engine):
        first = engine.run_sync([SQUARE])
        second = engine.run_sync([SQUARE])
        assert first is not second
        assert first.creases == second.creases
        assert engine.run_logger.stats.run_count == 2

    def test_concurrent_runs(self, engine):
        async def scenario():
            return await asyncio.gather(engine.run([SQUARE]), engine.run([RECTANGLE]))

        square_result, rect_result = asyncio.run(scenario())
        assert len(square_result.mountains) == 4
        assert len(rect_result.mountains) == 5


class TestSceneFiles:
    """Scene file in, result file out."""

    def test_round_trip_through_files(self, engine, tmp_path):
        scene_path = tmp_path / "frame.json"
        scene_path.write_text(
            json.dumps(Scene(shapes=[FRAME_OUTER, FRAME_HOLE]).to_dict()), encoding="utf-8"
        )

        scene = SceneReader(scene_path).load()
        result = engine.run_sync(scene, preferred_outer_id="outer")
        out_path = ResultWriter.get_result_path(scene_path)
        ResultWriter(out_path).save(result)

        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert len(data["rings"]) == 2
        assert data["rings"][0][0] == data["rings"][0][-1]
        assert sum(1 for c in data["creases"] if c["kind"] == "M") == 12
