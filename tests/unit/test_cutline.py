"""Unit tests for cut-line estimation."""

from foldcut.core.cutline import estimate_cut_line
from foldcut.domain import Point, Skeleton, SkeletonVertex, Viewport


class TestCutLine:
    """Tests for the horizontal cut line."""

    def test_midpoint_of_skeleton(self):
        skeleton = Skeleton(
            vertices=(
                SkeletonVertex(10.0, 20.0, 0.0),
                SkeletonVertex(90.0, 80.0, 0.0),
                SkeletonVertex(50.0, 50.0, 30.0),
            ),
            faces=(),
        )
        cut = estimate_cut_line(skeleton, Viewport(width=1000.0, height=700.0))
        assert cut.a == Point(0.0, 50.0)
        assert cut.b == Point(1000.0, 50.0)

    def test_spans_viewport_width(self):
        skeleton = Skeleton(vertices=(SkeletonVertex(0.0, 10.0, 0.0),), faces=())
        cut = estimate_cut_line(skeleton, Viewport(width=320, height=200))
        assert cut.b.x == 320.0
        assert isinstance(cut.b.x, float)
        assert cut.a.y == cut.b.y == 10.0

    def test_empty_skeleton(self):
        """No vertices gives a line at y = 0."""
        cut = estimate_cut_line(Skeleton(vertices=(), faces=()), Viewport(100.0, 100.0))
        assert cut.a == Point(0.0, 0.0)
        assert cut.b == Point(100.0, 0.0)
