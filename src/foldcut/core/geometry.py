"""Geometric primitives for ring building and crease extraction.

This module provides the core mathematical utilities for:
- Vector arithmetic on points (add, subtract, scale, dot, cross, normalize)
- Signed area and centroid (shoelace formula)
- Orientation normalization (ensure_ccw / ensure_cw)
- Point-in-polygon testing (ray casting algorithm)
- Segment intersection and the quadratic simple-polygon check
- Ray-segment intersection and nearest-point queries
- Quantized keys for deduplicating undirected edges

Sign convention: positive signed area means counter-clockwise in a y-up
coordinate system. Screen coordinates (y-down) flip the visual sense but
not the arithmetic, so callers only need to be consistent.

All functions are pure and stateless. Polygons are point sequences without
a repeated closing point.
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

from foldcut.domain import Point

DEFAULT_EPSILON = 1e-9
NORMALIZE_EPSILON = 1e-12
AREA_EPSILON = 1e-12

ZERO = Point(0.0, 0.0)


class RayHit(NamedTuple):
    """Result of a ray-segment intersection.

    Attributes:
        t: Ray parameter of the hit (distance in units of the direction)
        u: Segment parameter of the hit, in [0, 1]
        point: Hit location
    """

    t: float
    u: float
    point: Point


def add(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def sub(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def scale(a: Point, s: float) -> Point:
    return Point(a.x * s, a.y * s)


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Point, b: Point) -> float:
    """Z component of the 3D cross product of two planar vectors."""
    return a.x * b.y - a.y * b.x


def length_sq(a: Point) -> float:
    return a.x * a.x + a.y * a.y


def length(a: Point) -> float:
    return math.sqrt(length_sq(a))


def distance_sq(a: Point, b: Point) -> float:
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2


def distance(a: Point, b: Point) -> float:
    return math.sqrt(distance_sq(a, b))


def normalize(v: Point, eps: float = NORMALIZE_EPSILON) -> Point:
    """Scale a vector to unit length.

    Args:
        v: Vector to normalize
        eps: Vectors shorter than this return the zero vector

    Returns:
        Unit vector, or ``Point(0.0, 0.0)`` for near-zero input
    """
    n = length(v)
    if n < eps:
        return ZERO
    return Point(v.x / n, v.y / n)


def is_zero(v: Point) -> bool:
    return v.x == 0.0 and v.y == 0.0


def bounding_box(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """Calculate the bounding box of a point sequence.

    Args:
        points: Points to bound

    Returns:
        Tuple of (min_x, min_y, max_x, max_y); all zeros for an empty sequence
    """
    if not points:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: Polygon vertices without a repeated closing point

    Returns:
        Signed area. Returns 0.0 for fewer than 3 points.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> signed_area(square)
        1.0
        >>> signed_area(square[::-1])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        area += p.x * q.y - q.x * p.y

    return area / 2.0


def centroid(points: Sequence[Point], area_eps: float = AREA_EPSILON) -> Point:
    """Calculate the area-weighted centroid of a simple polygon.

    Falls back to the bounding-box centre when the absolute area is below
    ``area_eps`` (collinear or otherwise degenerate input).

    Args:
        points: Polygon vertices without a repeated closing point
        area_eps: Degenerate-area threshold

    Returns:
        Centroid point
    """
    area = signed_area(points)
    if abs(area) < area_eps:
        min_x, min_y, max_x, max_y = bounding_box(points)
        return Point((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)

    n = len(points)
    cx = 0.0
    cy = 0.0
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        k = p.x * q.y - q.x * p.y
        cx += (p.x + q.x) * k
        cy += (p.y + q.y) * k

    return Point(cx / (6.0 * area), cy / (6.0 * area))


def ensure_ccw(points: Sequence[Point]) -> list[Point]:
    """Return the polygon with counter-clockwise winding.

    Always returns a new list; the input is reversed only when its signed
    area is negative.
    """
    if signed_area(points) < 0:
        return list(reversed(points))
    return list(points)


def ensure_cw(points: Sequence[Point]) -> list[Point]:
    """Return the polygon with clockwise winding.

    Always returns a new list; the input is reversed only when its signed
    area is positive.
    """
    if signed_area(points) > 0:
        return list(reversed(points))
    return list(points)


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd number of crossings = inside, even = outside.
    Works for either winding.

    Args:
        point: The point to test
        polygon: Polygon vertices without a repeated closing point

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def orientation(a: Point, b: Point, c: Point) -> float:
    """Twice the signed area of triangle abc; positive when c is left of ab."""
    return cross(sub(b, a), sub(c, a))


def on_segment(a: Point, b: Point, p: Point, eps: float = DEFAULT_EPSILON) -> bool:
    """Check whether p lies on segment ab, within ``eps``."""
    return (
        min(a.x, b.x) - eps <= p.x <= max(a.x, b.x) + eps
        and min(a.y, b.y) - eps <= p.y <= max(a.y, b.y) + eps
        and abs(orientation(a, b, p)) <= eps
    )


def segments_intersect(
    a: Point, b: Point, c: Point, d: Point, eps: float = DEFAULT_EPSILON
) -> bool:
    """Test whether segments ab and cd intersect.

    Reports both proper crossings and touching: an endpoint lying on the
    other segment, or collinear overlap.

    Args:
        a: First endpoint of segment 1
        b: Second endpoint of segment 1
        c: First endpoint of segment 2
        d: Second endpoint of segment 2
        eps: Orientation tolerance

    Returns:
        True if the segments share at least one point
    """
    o1 = orientation(a, b, c)
    o2 = orientation(a, b, d)
    o3 = orientation(c, d, a)
    o4 = orientation(c, d, b)

    if ((o1 > eps and o2 < -eps) or (o1 < -eps and o2 > eps)) and (
        (o3 > eps and o4 < -eps) or (o3 < -eps and o4 > eps)
    ):
        return True

    # Touching or collinear overlap
    if abs(o1) <= eps and on_segment(a, b, c, eps):
        return True
    if abs(o2) <= eps and on_segment(a, b, d, eps):
        return True
    if abs(o3) <= eps and on_segment(c, d, a, eps):
        return True
    if abs(o4) <= eps and on_segment(c, d, b, eps):
        return True
    return False


def is_simple_polygon(points: Sequence[Point], eps: float = DEFAULT_EPSILON) -> bool:
    """Check that no two non-adjacent edges of a polygon intersect.

    Quadratic in the number of edges. Edges that share a vertex are not
    compared.

    Args:
        points: Polygon vertices without a repeated closing point
        eps: Intersection tolerance

    Returns:
        True if the polygon has at least 3 vertices and no self-intersection
    """
    n = len(points)
    if n < 3:
        return False

    for i in range(n):
        a1 = points[i]
        a2 = points[(i + 1) % n]
        for j in range(i + 1, n):
            if (i + 1) % n == j or (j + 1) % n == i:
                continue
            b1 = points[j]
            b2 = points[(j + 1) % n]
            if segments_intersect(a1, a2, b1, b2, eps):
                return False

    return True


def ray_segment_intersection(
    origin: Point,
    direction: Point,
    a: Point,
    b: Point,
    eps: float = DEFAULT_EPSILON,
) -> RayHit | None:
    """Intersect the ray ``origin + t * direction`` (t >= 0) with segment ab.

    Solves the 2x2 system with cross products. Both bounds get ``eps`` slack.

    Args:
        origin: Ray origin
        direction: Ray direction (need not be unit length)
        a: Segment start
        b: Segment end
        eps: Parallelism and bounds tolerance

    Returns:
        RayHit with the ray parameter, segment parameter and point, or None
        when the ray is parallel to the segment or misses it
    """
    w = sub(b, a)
    denom = cross(direction, w)
    if abs(denom) <= eps:
        return None

    ap = sub(a, origin)
    t = cross(ap, w) / denom
    u = cross(ap, direction) / denom
    if t >= -eps and -eps <= u <= 1.0 + eps:
        return RayHit(t=t, u=u, point=add(origin, scale(direction, t)))
    return None


def project_onto_line(point: Point, line_point: Point, line_dir: Point) -> Point:
    """Foot of the perpendicular from a point to a line.

    Args:
        point: Point to project
        line_point: Any point on the line
        line_dir: Unit direction of the line

    Returns:
        Projected point on the line
    """
    return add(line_point, scale(line_dir, dot(sub(point, line_point), line_dir)))


def nearest_point_on_segment(point: Point, a: Point, b: Point) -> tuple[Point, float]:
    """Find the closest point on segment ab.

    Projects onto the infinite line, then clamps to the endpoints.

    Args:
        point: The point to project
        a: Segment start
        b: Segment end

    Returns:
        Tuple of (nearest_point, segment_parameter) with the parameter in [0, 1]
    """
    ab = sub(b, a)
    t = dot(sub(point, a), ab) / (length_sq(ab) + 1e-12)
    t = max(0.0, min(1.0, t))
    return add(a, scale(ab, t)), t


def farthest_pair(points: Sequence[Point]) -> tuple[Point, Point]:
    """Return the two points with the greatest mutual distance.

    Ties keep the first pair found. Requires at least two points.
    """
    if len(points) < 2:
        raise ValueError("farthest_pair needs at least 2 points")

    best = (0, 1)
    best_d2 = -math.inf
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            d2 = distance_sq(points[i], points[j])
            if d2 > best_d2:
                best_d2 = d2
                best = (i, j)
    return points[best[0]], points[best[1]]


def remove_consecutive_duplicates(
    points: Sequence[Point], eps: float = DEFAULT_EPSILON
) -> list[Point]:
    """Collapse runs of points that coincide within ``eps`` on both axes.

    Only neighbours in sequence order are compared; the wrap-around pair is
    handled by the caller.
    """
    clean: list[Point] = []
    for p in points:
        if clean:
            prev = clean[-1]
            if abs(prev.x - p.x) <= eps and abs(prev.y - p.y) <= eps:
                continue
        clean.append(p)
    return clean


def quantize_point(point: Point, tolerance: float = 1e-3) -> tuple[float, float]:
    """Round both coordinates to a multiple of ``tolerance``.

    The result is snapped through ``round`` a second time so that equal grid
    cells always produce identical floats.
    """
    return (
        round(round(point.x / tolerance) * tolerance, 12),
        round(round(point.y / tolerance) * tolerance, 12),
    )


def undirected_edge_key(
    a: Point, b: Point, tolerance: float = 1e-3
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Canonical key for an undirected segment.

    Endpoints are quantized to ``tolerance`` and ordered lexicographically,
    so ab and ba give the same key.

    Examples:
        >>> k1 = undirected_edge_key(Point(0, 0), Point(1, 1))
        >>> k2 = undirected_edge_key(Point(1, 1), Point(0, 0))
        >>> k1 == k2
        True
    """
    qa = quantize_point(a, tolerance)
    qb = quantize_point(b, tolerance)
    return (qa, qb) if qa <= qb else (qb, qa)
