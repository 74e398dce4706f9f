"""Crease pattern output types.

This module defines the engine's result types:
- CreaseKind: Mountain or valley tag
- Crease: A tagged line segment
- CutLine: The single straight cut
- ResultBundle: Everything one engine run produces
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from foldcut.domain.shape import Point
from foldcut.domain.skeleton import RingSet, Skeleton


class CreaseKind(str, Enum):
    """Crease fold direction.

    The labels are categorical: mountains are shared skeleton edges,
    valleys are per-face perpendiculars.
    """

    MOUNTAIN = "M"
    VALLEY = "V"


@dataclass(frozen=True, slots=True)
class Crease:
    """A crease segment. Endpoint order carries no meaning.

    Attributes:
        a: First endpoint
        b: Second endpoint
        kind: Mountain or valley
        source: Which derivation produced the crease
    """

    a: Point
    b: Point
    kind: CreaseKind
    source: str | None = None

    def to_dict(self, precision: int | None = None) -> dict[str, Any]:
        """Serialize to ``{kind, a, b, source}``.

        Args:
            precision: Round coordinates to this many digits (None keeps them)

        Returns:
            Dictionary representation of the crease
        """
        return {
            "kind": self.kind.value,
            "a": _point_dict(self.a, precision),
            "b": _point_dict(self.b, precision),
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class CutLine:
    """The straight cut line.

    Attributes:
        a: Start point
        b: End point
    """

    a: Point
    b: Point

    def to_dict(self, precision: int | None = None) -> dict[str, Any]:
        """Serialize to ``{a, b}``."""
        return {"a": _point_dict(self.a, precision), "b": _point_dict(self.b, precision)}


@dataclass(frozen=True)
class ResultBundle:
    """Everything produced by one engine run.

    Created fresh on every run and never mutated afterwards.

    Attributes:
        rings: Rings handed to the solver
        skeleton: Raw solver output
        creases: Mountain creases followed by valley creases
        cut_line: The illustrative cut line
    """

    rings: RingSet
    skeleton: Skeleton
    creases: tuple[Crease, ...]
    cut_line: CutLine

    @property
    def mountains(self) -> list[Crease]:
        """Mountain creases in production order."""
        return [c for c in self.creases if c.kind is CreaseKind.MOUNTAIN]

    @property
    def valleys(self) -> list[Crease]:
        """Valley creases in production order."""
        return [c for c in self.creases if c.kind is CreaseKind.VALLEY]


def _point_dict(point: Point, precision: int | None) -> dict[str, float]:
    if precision is None:
        return point.to_dict()
    return {"x": round(point.x, precision), "y": round(point.y, precision)}
