"""Ring builder: turns a scene's closed shapes into solver-ready rings.

The builder accepts one outer boundary plus any number of holes:
- Closed shapes are cleaned (consecutive duplicates collapsed) and
  validated (at least 3 vertices, simple)
- The outer ring is the preferred shape when it is closed, otherwise the
  ring with the largest absolute area
- Every other ring whose centroid lies inside the outer ring is a hole;
  any ring outside is rejected
- The outer ring is wound counter-clockwise and holes clockwise

Holes are assumed not to overlap each other. That is not checked.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from foldcut.config import GeometryConfig
from foldcut.core.geometry import (
    centroid,
    ensure_ccw,
    ensure_cw,
    is_simple_polygon,
    point_in_polygon,
    remove_consecutive_duplicates,
    signed_area,
)
from foldcut.domain import Point, RingSet, Shape
from foldcut.exceptions import (
    DegenerateRingError,
    MultipleDisjointOuterRingsError,
    NoClosedPolygonError,
    SelfIntersectingRingError,
)

logger = logging.getLogger(__name__)


@dataclass
class RingInfo:
    """A validated closed shape with its measurements.

    Attributes:
        shape_id: Identifier of the source shape
        ring: Cleaned vertices in the shape's own winding
        area: Signed area of ``ring``
        centroid: Area-weighted centroid of ``ring``
    """

    shape_id: str
    ring: list[Point]
    area: float
    centroid: Point

    @property
    def abs_area(self) -> float:
        return abs(self.area)


class RingBuilder:
    """Builds a RingSet from the shapes of a scene.

    The builder is stateless apart from its tolerances and can be reused.
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        """Initialize the ring builder.

        Args:
            config: Geometry tolerances (defaults if None)
        """
        self.config = config or GeometryConfig()

    def build(
        self, shapes: Iterable[Shape], preferred_outer_id: str | None = None
    ) -> RingSet:
        """Build the ring set for a scene.

        Args:
            shapes: All shapes in the scene
            preferred_outer_id: Shape to use as the outer boundary, if closed

        Returns:
            RingSet with a CCW outer ring and CW holes

        Raises:
            NoClosedPolygonError: If no shape is closed with 2 or more points
            DegenerateRingError: If a closed shape has fewer than 3 distinct points
            SelfIntersectingRingError: If a closed shape is not simple
            MultipleDisjointOuterRingsError: If rings lie outside the outer ring
        """
        closed = [s for s in shapes if s.is_polygon]
        if not closed:
            raise NoClosedPolygonError()

        infos = [self.ring_info(s) for s in closed]
        outer = self._select_outer(infos, preferred_outer_id)

        holes: list[RingInfo] = []
        outsiders: list[RingInfo] = []
        for info in infos:
            if info is outer:
                continue
            if point_in_polygon(info.centroid, outer.ring):
                holes.append(info)
            else:
                outsiders.append(info)

        logger.debug(
            "Ring classification: outer=%s holes=%d outside=%d",
            outer.shape_id,
            len(holes),
            len(outsiders),
        )

        if outsiders:
            raise MultipleDisjointOuterRingsError(len(outsiders))

        return RingSet(
            outer=tuple(ensure_ccw(outer.ring)),
            holes=tuple(tuple(ensure_cw(h.ring)) for h in holes),
            outer_id=outer.shape_id,
            hole_ids=tuple(h.shape_id for h in holes),
        )

    def ring_info(self, shape: Shape) -> RingInfo:
        """Clean and validate one closed shape.

        Consecutive points within ``duplicate_epsilon`` on both axes are
        collapsed, including the wrap-around pair.

        Args:
            shape: A closed shape

        Returns:
            RingInfo with signed area and centroid

        Raises:
            DegenerateRingError: If fewer than 3 distinct points remain
            SelfIntersectingRingError: If the ring is not simple
        """
        eps = self.config.duplicate_epsilon
        ring = remove_consecutive_duplicates(shape.points, eps)
        while len(ring) > 1 and _coincident(ring[0], ring[-1], eps):
            ring.pop()

        if len(ring) < 3:
            raise DegenerateRingError(shape.id, len(ring))
        if not is_simple_polygon(ring, self.config.intersection_epsilon):
            raise SelfIntersectingRingError(shape.id)

        return RingInfo(
            shape_id=shape.id,
            ring=ring,
            area=signed_area(ring),
            centroid=centroid(ring, self.config.area_epsilon),
        )

    def _select_outer(
        self, infos: list[RingInfo], preferred_outer_id: str | None
    ) -> RingInfo:
        """Pick the preferred ring if it is a closed shape, else the largest."""
        if preferred_outer_id is not None:
            for info in infos:
                if info.shape_id == preferred_outer_id:
                    return info
            logger.warning(
                "Preferred outer shape %s is not a closed polygon; using largest ring",
                preferred_outer_id,
            )

        best = infos[0]
        for info in infos[1:]:
            if info.abs_area > best.abs_area:
                best = info
        return best


def build_rings(
    shapes: Iterable[Shape],
    preferred_outer_id: str | None = None,
    config: GeometryConfig | None = None,
) -> RingSet:
    """Build a ring set with a one-off RingBuilder.

    This is a convenience wrapper around ``RingBuilder.build``.
    """
    return RingBuilder(config).build(shapes, preferred_outer_id)


def _coincident(a: Point, b: Point, eps: float) -> bool:
    return abs(a.x - b.x) <= eps and abs(a.y - b.y) <= eps
