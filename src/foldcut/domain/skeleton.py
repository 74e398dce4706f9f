"""Rings handed to the solver and the skeleton graph it returns.

- RingSet: One outer ring (CCW) plus hole rings (CW), implicit closure
- SkeletonVertex: A skeleton node with its collapse time
- Skeleton: Vertex list plus faces as cyclic index lists
"""

from dataclasses import dataclass
from typing import Any

from foldcut.domain.shape import Point

# Coordinate sequence with the first vertex repeated at the end
ExplicitRing = list[tuple[float, float]]


@dataclass(frozen=True)
class RingSet:
    """Outer boundary plus holes, normalized for the solver.

    Rings are stored with implicit closure. ``to_explicit`` produces the
    explicit-closure coordinate form the solver consumes.

    Attributes:
        outer: Outer ring, counter-clockwise
        holes: Hole rings, clockwise
        outer_id: Identifier of the shape chosen as the outer ring
        hole_ids: Identifiers of the shapes used as holes, parallel to ``holes``
    """

    outer: tuple[Point, ...]
    holes: tuple[tuple[Point, ...], ...] = ()
    outer_id: str | None = None
    hole_ids: tuple[str, ...] = ()

    @property
    def rings(self) -> list[tuple[Point, ...]]:
        """All rings, outer first."""
        return [self.outer, *self.holes]

    def to_explicit(self) -> list[ExplicitRing]:
        """Convert to explicit-closure coordinate rings, outer first."""
        result: list[ExplicitRing] = []
        for ring in self.rings:
            coords = [(p.x, p.y) for p in ring]
            coords.append((ring[0].x, ring[0].y))
            result.append(coords)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Serialize as explicit-closure coordinate lists."""
        return {
            "outer_id": self.outer_id,
            "hole_ids": list(self.hole_ids),
            "rings": [[list(c) for c in ring] for ring in self.to_explicit()],
        }


@dataclass(frozen=True, slots=True)
class SkeletonVertex:
    """A vertex of the skeleton subdivision.

    Attributes:
        x: X coordinate
        y: Y coordinate
        time: Collapse time; 0 for original boundary vertices
    """

    x: float
    y: float
    time: float

    @property
    def point(self) -> Point:
        """Position without the collapse time."""
        return Point(self.x, self.y)

    def to_list(self) -> list[float]:
        """Serialize as ``[x, y, time]``."""
        return [self.x, self.y, self.time]


@dataclass(frozen=True)
class Skeleton:
    """Straight skeleton as returned by a solver.

    Each face is the region swept by one original boundary edge, given as a
    cyclic list of indices into ``vertices``.

    Attributes:
        vertices: Skeleton vertices
        faces: Faces as cyclic vertex index lists
    """

    vertices: tuple[SkeletonVertex, ...]
    faces: tuple[tuple[int, ...], ...]

    @property
    def interior_vertices(self) -> list[SkeletonVertex]:
        """Vertices created while the polygon shrank (time > 0)."""
        return [v for v in self.vertices if v.time > 0.0]

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box over all vertices as (min_x, min_y, max_x, max_y)."""
        if not self.vertices:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{"vertices": [[x, y, t]], "polygons": [[i]]}``."""
        return {
            "vertices": [v.to_list() for v in self.vertices],
            "polygons": [list(face) for face in self.faces],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Skeleton":
        """Deserialize from the ``to_dict`` form.

        Args:
            data: Dictionary with ``vertices`` and ``polygons``

        Returns:
            Skeleton instance
        """
        vertices = tuple(
            SkeletonVertex(float(v[0]), float(v[1]), float(v[2]))
            for v in data["vertices"]
        )
        faces = tuple(tuple(int(i) for i in face) for face in data["polygons"])
        return cls(vertices=vertices, faces=faces)
