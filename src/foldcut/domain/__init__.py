"""Domain models for foldcut.

This module contains the value types that flow through the engine. All models
are designed to be:

- Immutable where the data model calls for it (frozen dataclasses)
- Serializable to the editor's JSON interchange
- Independent of any particular skeleton solver

Key classes:
- Point, Shape, Scene, Viewport: Engine input
- RingSet: Normalized outer ring plus holes
- SkeletonVertex, Skeleton: Solver output
- Crease, CutLine, ResultBundle: Engine output
"""

from foldcut.domain.crease import Crease, CreaseKind, CutLine, ResultBundle
from foldcut.domain.shape import Point, Scene, Shape, Viewport, new_shape_id
from foldcut.domain.skeleton import ExplicitRing, RingSet, Skeleton, SkeletonVertex

__all__: list[str] = [
    # Enums
    "CreaseKind",
    # Input types
    "Point",
    "Shape",
    "Scene",
    "Viewport",
    "new_shape_id",
    # Solver boundary
    "ExplicitRing",
    "RingSet",
    "SkeletonVertex",
    "Skeleton",
    # Output types
    "Crease",
    "CutLine",
    "ResultBundle",
]
