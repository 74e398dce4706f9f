"""Core processing algorithms for foldcut.

This module contains the geometric engine:

- Geometry kernel (vectors, area, orientation, point-in-polygon, intersections)
- Ring building (outer boundary plus holes, validated and oriented)
- Straight-skeleton computation (solver adapter and wavefront solver)
- Crease extraction (mountain and valley creases) and the cut line

All stages are designed to be:
- Stateless apart from their tolerances
- Pure (each run allocates fresh results)

Key functions:
- signed_area: Calculate polygon area using shoelace formula
- point_in_polygon: Test if point is inside polygon
- is_simple_polygon: Quadratic self-intersection check
- ray_segment_intersection: Ray against segment
- build_rings: Scene shapes to a RingSet
- estimate_cut_line: Horizontal cut through the skeleton

Key classes:
- RingBuilder: Builds and validates rings
- SkeletonService: Memoized solver access
- WavefrontSkeletonSolver: Pure-Python straight-skeleton solver
- CreaseExtractor: Mountain and valley creases
- FoldAndCutEngine: End-to-end runs
"""

from foldcut.core.creases import CreaseExtractor, deduplicate_creases, edge_multiplicity
from foldcut.core.cutline import estimate_cut_line
from foldcut.core.engine import DEFAULT_VIEWPORT, FoldAndCutEngine
from foldcut.core.geometry import (
    centroid,
    ensure_ccw,
    ensure_cw,
    is_simple_polygon,
    point_in_polygon,
    ray_segment_intersection,
    segments_intersect,
    signed_area,
    undirected_edge_key,
)
from foldcut.core.rings import RingBuilder, build_rings
from foldcut.core.skeleton import (
    SkeletonService,
    SkeletonSolver,
    compute_skeleton,
    get_default_service,
)
from foldcut.core.wavefront import WavefrontSkeletonSolver

__all__ = [
    # Engine
    "DEFAULT_VIEWPORT",
    "FoldAndCutEngine",
    # Creases
    "CreaseExtractor",
    "deduplicate_creases",
    "edge_multiplicity",
    "estimate_cut_line",
    # Rings
    "RingBuilder",
    "build_rings",
    # Skeleton
    "SkeletonService",
    "SkeletonSolver",
    "WavefrontSkeletonSolver",
    "compute_skeleton",
    "get_default_service",
    # Geometry functions
    "centroid",
    "ensure_ccw",
    "ensure_cw",
    "is_simple_polygon",
    "point_in_polygon",
    "ray_segment_intersection",
    "segments_intersect",
    "signed_area",
    "undirected_edge_key",
]
