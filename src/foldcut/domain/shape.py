"""Scene geometry as authored by the user.

This module defines the input side of the engine:
- Point: An immutable 2D point
- Shape: An ordered point sequence with a closed flag and an identifier
- Scene: The full set of shapes plus editor settings
- Viewport: The drawing area size used for the cut line
"""

import secrets
import time
from dataclasses import dataclass, field
from typing import Any


def new_shape_id(prefix: str = "shape") -> str:
    """Generate a unique shape identifier.

    Args:
        prefix: Identifier prefix

    Returns:
        Identifier of the form ``{prefix}_{random}_{timestamp}`` in hex
    """
    return f"{prefix}_{secrets.token_hex(6)}_{int(time.time() * 1000):x}"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class Shape:
    """User-authored geometry.

    Closure is implicit: a closed shape never repeats its first point at the
    end of ``points``.

    Attributes:
        points: Ordered points of the shape
        closed: True if the last point connects back to the first
        id: Unique identifier within the scene
    """

    points: tuple[Point, ...]
    closed: bool = False
    id: str = field(default_factory=new_shape_id)

    def __post_init__(self) -> None:
        points = tuple(self.points)
        if self.closed and len(points) > 1 and points[0] == points[-1]:
            points = points[:-1]
        object.__setattr__(self, "points", points)

    @property
    def is_polygon(self) -> bool:
        """Whether this shape is a ring candidate (closed, more than one point)."""
        return self.closed and len(self.points) > 1

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the shape.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the editor's scene JSON shape record."""
        return {
            "id": self.id,
            "type": "polygon" if self.closed else "polyline",
            "closed": self.closed,
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize a scene JSON shape record.

        A shape counts as closed when ``closed`` is truthy or its ``type``
        is ``"polygon"``. Missing points give an empty shape and a missing
        id is generated.

        Args:
            data: Shape record

        Returns:
            Shape instance
        """
        raw_points = data.get("points")
        points = (
            tuple(Point.from_dict(p) for p in raw_points)
            if isinstance(raw_points, list)
            else ()
        )
        closed = bool(data.get("closed")) or data.get("type") == "polygon"
        shape_id = data.get("id") or new_shape_id()
        return cls(points=points, closed=closed, id=str(shape_id))


@dataclass
class Scene:
    """The full set of shapes in an editor document.

    Attributes:
        shapes: Shapes in drawing order
        settings: Editor settings (grid size, snapping); carried through untouched
        version: Document format version
    """

    shapes: list[Shape] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    version: int = 1

    def get_shape_by_id(self, shape_id: str | None) -> Shape | None:
        """Look up a shape by identifier.

        Args:
            shape_id: Identifier to look up (None returns None)

        Returns:
            The matching shape, or None
        """
        if shape_id is None:
            return None
        for shape in self.shapes:
            if shape.id == shape_id:
                return shape
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to scene JSON."""
        return {
            "version": self.version,
            "settings": dict(self.settings),
            "shapes": [s.to_dict() for s in self.shapes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Deserialize from scene JSON.

        Args:
            data: Scene document

        Returns:
            Scene instance
        """
        raw_shapes = data.get("shapes")
        shapes = (
            [Shape.from_dict(s) for s in raw_shapes if isinstance(s, dict)]
            if isinstance(raw_shapes, list)
            else []
        )
        settings = data.get("settings")
        return cls(
            shapes=shapes,
            settings=dict(settings) if isinstance(settings, dict) else {},
            version=int(data.get("version", 1)),
        )


@dataclass(frozen=True, slots=True)
class Viewport:
    """Size of the drawing area.

    Attributes:
        width: Viewport width
        height: Viewport height
    """

    width: float
    height: float
