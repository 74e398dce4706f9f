"""Crease extraction from a straight skeleton.

Two independent derivations run over the same skeleton graph:

- Mountain creases: face-boundary edges referenced by two or more faces.
  These are the interior skeleton edges; edges used by a single face lie on
  the polygon boundary and are skipped.
- Valley creases: for each face, the farthest pair of its boundary
  vertices (collapse time 0) approximates the original edge the face swept
  from. Every interior vertex of the face casts a ray toward its foot on
  that edge line, and the nearest hit on the face's own boundary closes the
  crease. Valleys are deduplicated on a quantized undirected key.

This is a heuristic. It is not the full fold-and-cut reflection
construction and the pattern is not guaranteed to fold flat.
"""

import logging
from dataclasses import dataclass

from foldcut.config import CreaseConfig
from foldcut.core.geometry import (
    RayHit,
    distance_sq,
    farthest_pair,
    is_zero,
    normalize,
    project_onto_line,
    ray_segment_intersection,
    sub,
    undirected_edge_key,
)
from foldcut.domain import Crease, CreaseKind, Point, Skeleton

logger = logging.getLogger(__name__)

MOUNTAIN_SOURCE = "skeleton"
VALLEY_SOURCE = "perp"


@dataclass(frozen=True, slots=True)
class InteriorEdge:
    """A skeleton edge shared by at least two faces.

    Attributes:
        i0: Smaller vertex index
        i1: Larger vertex index
        count: Number of face references
    """

    i0: int
    i1: int
    count: int


def edge_multiplicity(skeleton: Skeleton) -> dict[tuple[int, int], int]:
    """Count how many face cycles reference each undirected vertex pair.

    Self-loops (repeated consecutive indices) are ignored. Insertion order
    follows first appearance.
    """
    counts: dict[tuple[int, int], int] = {}
    for face in skeleton.faces:
        n = len(face)
        for i in range(n):
            a = face[i]
            b = face[(i + 1) % n]
            if a == b:
                continue
            key = (a, b) if a < b else (b, a)
            counts[key] = counts.get(key, 0) + 1
    return counts


class CreaseExtractor:
    """Derives mountain and valley creases from a skeleton.

    Stateless apart from its tolerances.
    """

    def __init__(self, config: CreaseConfig | None = None) -> None:
        """Initialize the extractor.

        Args:
            config: Crease tolerances (defaults if None)
        """
        self.config = config or CreaseConfig()

    def extract(self, skeleton: Skeleton) -> list[Crease]:
        """Extract all creases: mountains first, then valleys."""
        mountains = self.mountain_creases(skeleton)
        valleys = self.valley_creases(skeleton)
        logger.debug("Creases extracted: %d mountain, %d valley", len(mountains), len(valleys))
        return [*mountains, *valleys]

    def interior_edges(self, skeleton: Skeleton) -> list[InteriorEdge]:
        """Edges referenced by two or more faces, without degenerate ones."""
        edges: list[InteriorEdge] = []
        vertices = skeleton.vertices
        for (i0, i1), count in edge_multiplicity(skeleton).items():
            if count < 2:
                continue
            if distance_sq(vertices[i0].point, vertices[i1].point) < self.config.degenerate_length_sq:
                continue
            edges.append(InteriorEdge(i0, i1, count))
        return edges

    def mountain_creases(self, skeleton: Skeleton) -> list[Crease]:
        """One mountain crease per interior skeleton edge."""
        vertices = skeleton.vertices
        return [
            Crease(
                a=vertices[e.i0].point,
                b=vertices[e.i1].point,
                kind=CreaseKind.MOUNTAIN,
                source=MOUNTAIN_SOURCE,
            )
            for e in self.interior_edges(skeleton)
        ]

    def valley_creases(self, skeleton: Skeleton) -> list[Crease]:
        """Perpendiculars from interior vertices toward each face's defining edge."""
        creases: list[Crease] = []
        seen: set[tuple[tuple[float, float], tuple[float, float]]] = set()
        eps_time = self.config.time_epsilon

        for face in skeleton.faces:
            face_vertices = [skeleton.vertices[i] for i in face]
            boundary = [v.point for v in face_vertices if abs(v.time) <= eps_time]
            if len(boundary) < 2:
                continue

            e0, e1 = farthest_pair(boundary)
            edge_dir = normalize(sub(e1, e0))
            if is_zero(edge_dir):
                continue

            polygon = [v.point for v in face_vertices]
            for vertex in face_vertices:
                if vertex.time <= eps_time:
                    continue
                start = vertex.point
                foot = project_onto_line(start, e0, edge_dir)
                direction = normalize(sub(foot, start))
                if is_zero(direction):
                    continue

                hit = self._nearest_hit(start, direction, polygon)
                if hit is None:
                    continue

                crease = Crease(
                    a=start, b=hit.point, kind=CreaseKind.VALLEY, source=VALLEY_SOURCE
                )
                self.add_unique(creases, seen, crease)

        return creases

    def add_unique(
        self,
        creases: list[Crease],
        seen: set[tuple[tuple[float, float], tuple[float, float]]],
        crease: Crease,
    ) -> bool:
        """Append a crease unless its quantized key was seen.

        Returns:
            True if the crease was a duplicate and skipped
        """
        key = undirected_edge_key(crease.a, crease.b, self.config.dedup_tolerance)
        if key in seen:
            return True
        seen.add(key)
        creases.append(crease)
        return False

    def _nearest_hit(self, origin: Point, direction: Point, polygon: list[Point]) -> RayHit | None:
        best: RayHit | None = None
        n = len(polygon)
        for i in range(n):
            hit = ray_segment_intersection(origin, direction, polygon[i], polygon[(i + 1) % n])
            if hit is None or hit.t <= self.config.min_ray_parameter:
                continue
            if best is None or hit.t < best.t:
                best = hit
        return best


def deduplicate_creases(creases: list[Crease], tolerance: float = 1e-2) -> list[Crease]:
    """Drop creases whose quantized undirected key repeats an earlier one.

    Order of first occurrence is kept.
    """
    extractor = CreaseExtractor(CreaseConfig(dedup_tolerance=tolerance))
    result: list[Crease] = []
    seen: set[tuple[tuple[float, float], tuple[float, float]]] = set()
    for crease in creases:
        extractor.add_unique(result, seen, crease)
    return result
