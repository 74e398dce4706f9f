"""End-to-end crease pattern engine.

One run goes: shapes -> RingBuilder -> skeleton solver -> CreaseExtractor
plus cut line -> ResultBundle. Every run builds fresh data, so bundles from
different runs never share mutable state and may be kept side by side.
A failed run raises and produces nothing; earlier bundles are untouched.
"""

import asyncio
import time
from collections.abc import Iterable

import structlog

from foldcut.config import FoldCutSettings, get_default_settings
from foldcut.core.creases import CreaseExtractor
from foldcut.core.cutline import estimate_cut_line
from foldcut.core.rings import RingBuilder
from foldcut.core.skeleton import SkeletonService, get_default_service
from foldcut.domain import ResultBundle, Scene, Shape, Viewport
from foldcut.exceptions import FoldCutError
from foldcut.utils import RunLogger, get_logger

DEFAULT_VIEWPORT = Viewport(width=1000.0, height=700.0)


class FoldAndCutEngine:
    """Computes crease patterns for editor scenes.

    Example:
        engine = FoldAndCutEngine()
        await engine.init()
        result = await engine.run(scene, preferred_outer_id=None,
                                  viewport=Viewport(1000, 700))
    """

    def __init__(
        self,
        settings: FoldCutSettings | None = None,
        service: SkeletonService | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Tolerances and export settings (defaults if None)
            service: Solver service (process-wide default if None)
            logger: Structured logger for run events
        """
        self.settings = settings or get_default_settings()
        self.service = service or get_default_service()
        self.ring_builder = RingBuilder(self.settings.geometry)
        self.extractor = CreaseExtractor(self.settings.creases)
        self.run_logger = RunLogger(logger or get_logger("foldcut.engine"))

    @property
    def ready(self) -> bool:
        """Whether the skeleton solver is loaded."""
        return self.service.ready

    async def init(self) -> None:
        """Load the skeleton solver. Safe to call more than once."""
        await self.service.load()

    async def run(
        self,
        shapes: Scene | Iterable[Shape],
        preferred_outer_id: str | None = None,
        viewport: Viewport = DEFAULT_VIEWPORT,
    ) -> ResultBundle:
        """Compute the crease pattern for a set of shapes.

        Args:
            shapes: A scene or its shapes
            preferred_outer_id: Shape to use as the outer boundary, if closed
            viewport: Drawing area; sets the cut line's width

        Returns:
            A new ResultBundle

        Raises:
            GeometryError: If the shapes do not form one outer ring plus holes
            SkeletonError: If the solver is unavailable or rejects the rings
        """
        shape_list = list(shapes.shapes if isinstance(shapes, Scene) else shapes)
        start = time.perf_counter()
        self.run_logger.log_run_start(len(shape_list), preferred_outer_id)

        try:
            await self.service.load()
            rings = self.ring_builder.build(shape_list, preferred_outer_id)
            self.run_logger.log_ring_classification(rings.outer_id, len(rings.holes))
            skeleton = self.service.compute(rings)
            creases = self.extractor.extract(skeleton)
            cut_line = estimate_cut_line(skeleton, viewport)
        except FoldCutError as e:
            self.run_logger.log_run_failed(e)
            raise

        result = ResultBundle(
            rings=rings,
            skeleton=skeleton,
            creases=tuple(creases),
            cut_line=cut_line,
        )
        self.run_logger.log_run_complete(
            mountains=len(result.mountains),
            valleys=len(result.valleys),
            skeleton_vertices=len(skeleton.vertices),
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return result

    def run_sync(
        self,
        shapes: Scene | Iterable[Shape],
        preferred_outer_id: str | None = None,
        viewport: Viewport = DEFAULT_VIEWPORT,
    ) -> ResultBundle:
        """Blocking wrapper around ``run`` for callers without an event loop."""
        return asyncio.run(self.run(shapes, preferred_outer_id, viewport))
