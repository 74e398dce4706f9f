"""Exception hierarchy for Foldcut."""


class FoldCutError(Exception):
    """Base exception for all Foldcut errors."""

    pass


class GeometryError(FoldCutError):
    """Errors in the input geometry of a scene."""

    pass


class NoClosedPolygonError(GeometryError):
    """The scene contains no closed shape with enough points."""

    def __init__(self) -> None:
        super().__init__(
            "No closed polygon found. Draw a closed shape with at least 3 points."
        )


class DegenerateRingError(GeometryError):
    """A closed shape has fewer than 3 distinct vertices."""

    def __init__(self, shape_id: str, vertex_count: int) -> None:
        self.shape_id = shape_id
        self.vertex_count = vertex_count
        super().__init__(
            f"Shape '{shape_id}' needs at least 3 distinct points (has {vertex_count})"
        )


class SelfIntersectingRingError(GeometryError):
    """A closed shape crosses or touches itself."""

    def __init__(self, shape_id: str) -> None:
        self.shape_id = shape_id
        super().__init__(
            f"Shape '{shape_id}' is self-intersecting. Please use a simple polygon."
        )


class MultipleDisjointOuterRingsError(GeometryError):
    """Closed shapes were found outside the chosen outer boundary."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            "Multiple disjoint closed polygons were detected. Only one outer "
            "boundary plus holes is supported. "
            f"Polygons outside the outer boundary: {count}"
        )


class SkeletonError(FoldCutError):
    """Errors related to the straight-skeleton solver."""

    pass


class SkeletonComputationError(SkeletonError):
    """The solver rejected the ring set or failed internally."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to generate a straight skeleton: {reason}")


class SolverUnavailableError(SkeletonError):
    """The solver could not be initialized."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Straight-skeleton solver unavailable: {reason}")


class SceneError(FoldCutError):
    """Errors related to reading scenes or writing results."""

    pass


class SceneLoadError(SceneError):
    """Error loading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class ResultSaveError(SceneError):
    """Error saving a result file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save result '{path}': {reason}")
