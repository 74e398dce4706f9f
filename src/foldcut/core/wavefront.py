"""Straight-skeleton solver based on wavefront propagation.

Every boundary edge moves inward at unit speed. Wavefront vertices slide
along the bisector of their two edges, so their position at time ``t`` is
``origin + velocity * (t - created)``. Two kinds of event change the
wavefront topology:

- Edge event: a wavefront edge shrinks to zero length and its two
  vertices merge into one.
- Split event: a reflex vertex runs into a non-adjacent wavefront edge.
  The loop is split in two, or, when the edge belongs to another loop (a
  hole), the two loops are merged.

The next event is found by scanning the whole wavefront after every event,
which is cubic in the worst case. Events that fall at the same moment are
applied one at a time: an edge that has already shrunk to zero length, or a
reflex vertex that already touches an edge, is due at the current time.
Edge events win ties, so coincident vertices are merged before any split
at that moment is resolved. Rectilinear shapes, where many events coincide,
go through this path.

Each skeleton arc (the track of a vertex between two nodes, or a collapsed
wavefront segment) is recorded against the faces it separates. A face is
the region swept by one boundary edge and is closed by walking its arcs
from the edge's end vertex back to its start vertex.

Input rings use the y-up convention: outer ring counter-clockwise, holes
clockwise, interior always to the left of each directed edge.
"""

import logging
import math
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from foldcut.core.geometry import (
    add,
    cross,
    dot,
    normalize,
    remove_consecutive_duplicates,
    scale,
    signed_area,
    sub,
)
from foldcut.domain import ExplicitRing, Point, Skeleton, SkeletonVertex
from foldcut.exceptions import SkeletonComputationError

logger = logging.getLogger(__name__)

# Relative tolerances, multiplied by the input's bounding-box size
LENGTH_TOLERANCE = 1e-9
MERGE_TOLERANCE = 1e-7
AREA_TOLERANCE = 1e-10

PARALLEL_EPSILON = 1e-9
RATE_EPSILON = 1e-12


@dataclass(frozen=True)
class _Edge:
    """An original boundary edge and its moving offset line."""

    index: int
    start_node: int
    end_node: int
    direction: Point
    normal: Point
    offset: float

    def wavefront_distance(self, point: Point, t: float) -> float:
        """Signed distance of a point ahead of this edge's wavefront at time t."""
        return dot(self.normal, point) - self.offset - t


class _Vertex:
    """A vertex of the moving wavefront."""

    __slots__ = (
        "origin",
        "created",
        "node",
        "left",
        "right",
        "velocity",
        "reflex",
        "prev",
        "next",
        "active",
    )

    def __init__(self, origin: Point, created: float, node: int, left: _Edge, right: _Edge):
        self.origin = origin
        self.created = created
        self.node = node
        self.left = left
        self.right = right
        self.active = True
        self.prev: _Vertex = self
        self.next: _Vertex = self

        n_sum = add(left.normal, right.normal)
        denom = 1.0 + dot(left.normal, right.normal)
        if denom < PARALLEL_EPSILON:
            # Opposite edges: both wavefronts already coincide here
            self.velocity = Point(0.0, 0.0)
        else:
            self.velocity = scale(n_sum, 1.0 / denom)
        self.reflex = cross(left.direction, right.direction) < -PARALLEL_EPSILON

    def position(self, t: float) -> Point:
        return add(self.origin, scale(self.velocity, t - self.created))


@dataclass(frozen=True)
class _Event:
    """A pending wavefront event."""

    time: float
    priority: int
    vertex: _Vertex
    segment_start: _Vertex | None = None

    @property
    def is_split(self) -> bool:
        return self.segment_start is not None


class _Wavefront:
    """State of a single skeleton computation."""

    def __init__(self, rings: list[list[Point]]) -> None:
        xs = [p.x for ring in rings for p in ring]
        ys = [p.y for ring in rings for p in ring]
        size = max(max(xs) - min(xs), max(ys) - min(ys), 1e-12)
        self.length_tol = size * LENGTH_TOLERANCE
        self.merge_tol = size * MERGE_TOLERANCE
        self.area_tol = size * size * AREA_TOLERANCE

        self.nodes: list[SkeletonVertex] = []
        self.edges: list[_Edge] = []
        self.vertices: list[_Vertex] = []
        self.face_arcs: dict[int, set[tuple[int, int]]] = {}
        self.event_count = 0

        for ring in rings:
            self._add_ring(ring)
        self.boundary_count = len(self.nodes)

    def _add_ring(self, ring: list[Point]) -> None:
        first_node = len(self.nodes)
        n = len(ring)
        for p in ring:
            self.nodes.append(SkeletonVertex(p.x, p.y, 0.0))

        ring_edges: list[_Edge] = []
        for k in range(n):
            a = ring[k]
            b = ring[(k + 1) % n]
            direction = normalize(sub(b, a))
            normal = Point(-direction.y, direction.x)
            edge = _Edge(
                index=len(self.edges),
                start_node=first_node + k,
                end_node=first_node + (k + 1) % n,
                direction=direction,
                normal=normal,
                offset=dot(normal, a),
            )
            self.edges.append(edge)
            ring_edges.append(edge)
            self.face_arcs[edge.index] = set()

        ring_vertices: list[_Vertex] = []
        for k in range(n):
            left = ring_edges[k - 1]
            right = ring_edges[k]
            if dot(left.direction, right.direction) < -1.0 + PARALLEL_EPSILON:
                raise SkeletonComputationError(
                    f"zero-width spike at ({ring[k].x}, {ring[k].y})"
                )
            ring_vertices.append(_Vertex(ring[k], 0.0, first_node + k, left, right))

        for k, vertex in enumerate(ring_vertices):
            vertex.prev = ring_vertices[k - 1]
            vertex.next = ring_vertices[(k + 1) % n]
        self.vertices.extend(ring_vertices)

    # Graph recording

    def node_at(self, point: Point, t: float) -> int:
        """Index of the internal node at a point and time, created if new."""
        for idx in range(self.boundary_count, len(self.nodes)):
            node = self.nodes[idx]
            if (
                abs(node.time - t) <= self.merge_tol
                and math.hypot(node.x - point.x, node.y - point.y) <= self.merge_tol
            ):
                return idx
        self.nodes.append(SkeletonVertex(point.x, point.y, t))
        return len(self.nodes) - 1

    def add_arc(self, a: int, b: int, faces: Sequence[int]) -> None:
        if a == b:
            return
        key = (a, b) if a < b else (b, a)
        for face in faces:
            self.face_arcs[face].add(key)

    def new_vertex(self, origin: Point, t: float, node: int, left: _Edge, right: _Edge) -> _Vertex:
        vertex = _Vertex(origin, t, node, left, right)
        self.vertices.append(vertex)
        return vertex

    # Event search

    def active_vertices(self) -> list[_Vertex]:
        self.vertices = [v for v in self.vertices if v.active]
        return self.vertices

    def loops(self) -> list[list[_Vertex]]:
        seen: set[int] = set()
        result: list[list[_Vertex]] = []
        for start in self.active_vertices():
            if id(start) in seen:
                continue
            loop = []
            v = start
            while id(v) not in seen:
                seen.add(id(v))
                loop.append(v)
                v = v.next
            result.append(loop)
        return result

    def edge_event(self, u: _Vertex, t_now: float) -> _Event | None:
        w = u.next
        direction = u.right.direction
        span = dot(sub(w.position(t_now), u.position(t_now)), direction)
        if span <= self.length_tol:
            # Already collapsed, whatever the rate
            return _Event(time=t_now, priority=0, vertex=u)
        rate = dot(sub(w.velocity, u.velocity), direction)
        if rate >= -RATE_EPSILON:
            return None
        return _Event(time=t_now + span / -rate, priority=0, vertex=u)

    def split_event(self, r: _Vertex, x: _Vertex, t_now: float) -> _Event | None:
        y = x.next
        if x is r or y is r:
            return None
        f = x.right
        if f is r.left or f is r.right:
            return None

        # A gap of zero means r already touches the edge and the split is due now
        gap = f.wavefront_distance(r.position(t_now), t_now)
        if gap < -self.length_tol:
            return None
        approach = 1.0 - dot(f.normal, r.velocity)
        if approach <= RATE_EPSILON:
            return None

        t_hit = t_now + max(gap, 0.0) / approach
        hit = r.position(t_hit)
        if dot(sub(hit, x.position(t_hit)), f.direction) < -self.length_tol:
            return None
        if dot(sub(y.position(t_hit), hit), f.direction) < -self.length_tol:
            return None
        return _Event(time=t_hit, priority=1, vertex=r, segment_start=x)

    def next_event(self, t_now: float) -> _Event | None:
        best: _Event | None = None
        active = self.active_vertices()
        for u in active:
            candidates = [self.edge_event(u, t_now)]
            if u.reflex:
                candidates.extend(self.split_event(u, x, t_now) for x in active)
            for event in candidates:
                if event is None:
                    continue
                if best is None or (event.time, event.priority) < (best.time, best.priority):
                    best = event
        return best

    # Event handling

    def apply_edge_event(self, event: _Event) -> None:
        u = event.vertex
        w = u.next
        t = event.time
        pu = u.position(t)
        pw = w.position(t)
        point = Point((pu.x + pw.x) / 2.0, (pu.y + pw.y) / 2.0)
        node = self.node_at(point, t)
        self.add_arc(u.node, node, (u.left.index, u.right.index))
        self.add_arc(w.node, node, (w.left.index, w.right.index))
        u.active = False
        w.active = False

        merged = self.new_vertex(point, t, node, u.left, w.right)
        before = u.prev
        after = w.next
        before.next = merged
        merged.prev = before
        merged.next = after
        after.prev = merged

    def apply_split_event(self, event: _Event) -> None:
        r = event.vertex
        x = event.segment_start
        assert x is not None
        y = x.next
        f = x.right
        t = event.time
        point = r.position(t)
        node = self.node_at(point, t)
        self.add_arc(r.node, node, (r.left.index, r.right.index))
        r.active = False

        before = r.prev
        after = r.next
        v1 = self.new_vertex(point, t, node, r.left, f)
        v2 = self.new_vertex(point, t, node, f, r.right)

        before.next = v1
        v1.prev = before
        v1.next = y
        y.prev = v1

        x.next = v2
        v2.prev = x
        v2.next = after
        after.prev = v2

    def close_loop(self, loop: list[_Vertex], t: float) -> None:
        """Finish a loop that has no area left by connecting its vertices."""
        stops: list[int] = []
        for v in loop:
            p = v.position(t)
            origin = self.nodes[v.node]
            if math.hypot(origin.x - p.x, origin.y - p.y) <= self.merge_tol:
                stop = v.node
            else:
                stop = self.node_at(p, t)
            self.add_arc(v.node, stop, (v.left.index, v.right.index))
            stops.append(stop)

        for i, v in enumerate(loop):
            self.add_arc(stops[i], stops[(i + 1) % len(loop)], (v.right.index,))
            v.active = False

    def close_degenerate_loops(self, t: float) -> None:
        for loop in self.loops():
            if len(loop) <= 2:
                self.close_loop(loop, t)
                continue
            area = signed_area([v.position(t) for v in loop])
            if abs(area) <= self.area_tol:
                self.close_loop(loop, t)

    def run(self) -> None:
        max_events = 10 * len(self.vertices) ** 2 + 100
        t_now = 0.0
        for _ in range(max_events):
            self.close_degenerate_loops(t_now)
            if not self.active_vertices():
                return
            event = self.next_event(t_now)
            if event is None:
                raise SkeletonComputationError(
                    f"wavefront stalled at t={t_now:.6g} with "
                    f"{len(self.vertices)} active vertices"
                )
            t_now = max(t_now, event.time)
            if event.is_split:
                self.apply_split_event(event)
            else:
                self.apply_edge_event(event)
            self.event_count += 1
        raise SkeletonComputationError(f"no convergence after {max_events} events")

    # Output

    def faces(self) -> list[tuple[int, ...]]:
        return [self._face_cycle(edge) for edge in self.edges]

    def _face_cycle(self, edge: _Edge) -> tuple[int, ...]:
        adjacency: dict[int, list[int]] = {}
        for a, b in sorted(self.face_arcs[edge.index]):
            adjacency.setdefault(a, []).append(b)
            adjacency.setdefault(b, []).append(a)

        # Shortest arc path from the edge's end back to its start
        start, goal = edge.end_node, edge.start_node
        parents: dict[int, int | None] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == goal:
                break
            for neighbour in adjacency.get(current, []):
                if neighbour not in parents:
                    parents[neighbour] = current
                    queue.append(neighbour)

        if goal not in parents:
            raise SkeletonComputationError(f"face of boundary edge {edge.index} is not closed")

        path: list[int] = []
        node: int | None = parents[goal]
        while node is not None and node != start:
            path.append(node)
            node = parents[node]
        path.reverse()
        return (edge.start_node, edge.end_node, *path)


def _prepare_ring(coords: ExplicitRing, index: int) -> list[Point]:
    points = [Point(float(x), float(y)) for x, y in coords]
    if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in points):
        raise SkeletonComputationError(f"ring {index} has non-finite coordinates")
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    points = remove_consecutive_duplicates(points)
    while len(points) > 1 and points[0] == points[-1]:
        points.pop()
    if len(points) < 3:
        raise SkeletonComputationError(f"ring {index} has fewer than 3 vertices")
    return points


class WavefrontSkeletonSolver:
    """Pure-Python straight-skeleton solver.

    Example:
        solver = WavefrontSkeletonSolver()
        skeleton = solver.build_from_polygon(ring_set.to_explicit())
    """

    name = "wavefront"

    def build_from_polygon(self, rings: Sequence[ExplicitRing]) -> Skeleton:
        """Compute the straight skeleton of a polygon with holes.

        Args:
            rings: Explicit-closure rings, outer (CCW) first, then holes (CW)

        Returns:
            Skeleton with boundary vertices first (time 0) and one face per
            boundary edge, in ring order

        Raises:
            SkeletonComputationError: If the rings are not admissible or the
                wavefront cannot be resolved
        """
        if not rings:
            raise SkeletonComputationError("no rings given")

        prepared = [_prepare_ring(coords, i) for i, coords in enumerate(rings)]
        if signed_area(prepared[0]) <= 0:
            raise SkeletonComputationError("outer ring must be counter-clockwise")
        for i, hole in enumerate(prepared[1:], start=1):
            if signed_area(hole) >= 0:
                raise SkeletonComputationError(f"hole ring {i} must be clockwise")

        wavefront = _Wavefront(prepared)
        wavefront.run()
        faces = wavefront.faces()

        logger.debug(
            "Skeleton computed: %d events, %d vertices (%d interior), %d faces",
            wavefront.event_count,
            len(wavefront.nodes),
            len(wavefront.nodes) - wavefront.boundary_count,
            len(faces),
        )
        return Skeleton(vertices=tuple(wavefront.nodes), faces=tuple(faces))
