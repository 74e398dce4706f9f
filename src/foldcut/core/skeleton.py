"""Adapter between the engine and a straight-skeleton solver.

The solver is treated as a black box: explicit-closure rings in, a
``Skeleton`` (vertices with collapse times plus faces as index cycles) out.
Any object with a ``build_from_polygon`` method fits.

Solver initialization happens once. ``SkeletonService.load`` starts a
single shared task on first use; every caller, concurrent or later, awaits
that same task and gets the same solver or the same failure.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from functools import cache
from typing import Protocol, runtime_checkable

from foldcut.core.wavefront import WavefrontSkeletonSolver
from foldcut.domain import ExplicitRing, RingSet, Skeleton
from foldcut.exceptions import (
    SkeletonComputationError,
    SkeletonError,
    SolverUnavailableError,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class SkeletonSolver(Protocol):
    """Anything that can compute a straight skeleton from rings."""

    def build_from_polygon(self, rings: Sequence[ExplicitRing]) -> Skeleton | None:
        """Return the skeleton of the rings, or None if they are rejected."""
        ...


SolverFactory = Callable[[], SkeletonSolver | Awaitable[SkeletonSolver]]


def compute_skeleton(solver: SkeletonSolver, rings: Sequence[ExplicitRing]) -> Skeleton:
    """Run a solver and normalize its failures.

    Args:
        solver: Loaded solver
        rings: Explicit-closure rings, outer first

    Returns:
        The solver's skeleton

    Raises:
        SkeletonComputationError: If the solver raises, returns None, or
            returns faces that reference missing vertices
    """
    try:
        skeleton = solver.build_from_polygon(rings)
    except SkeletonComputationError:
        raise
    except Exception as e:
        raise SkeletonComputationError(str(e) or type(e).__name__) from e

    if skeleton is None:
        raise SkeletonComputationError("the input may not be weakly simple")

    vertex_count = len(skeleton.vertices)
    for face in skeleton.faces:
        if any(i < 0 or i >= vertex_count for i in face):
            raise SkeletonComputationError("solver returned a face with an invalid vertex index")

    return skeleton


class SkeletonService:
    """Memoized access to a straight-skeleton solver.

    Example:
        service = SkeletonService()
        await service.load()
        skeleton = service.compute(ring_set)
    """

    def __init__(self, factory: SolverFactory = WavefrontSkeletonSolver) -> None:
        """Initialize the service without loading the solver.

        Args:
            factory: Callable returning a solver, or an awaitable of one
        """
        self._factory = factory
        self._solver: SkeletonSolver | None = None
        self._init_task: asyncio.Future[SkeletonSolver] | None = None

    @property
    def ready(self) -> bool:
        """Whether the solver has been loaded."""
        return self._solver is not None

    async def load(self) -> SkeletonSolver:
        """Load the solver once and return it.

        Safe to call repeatedly and concurrently: all callers share one
        initialization task.

        Returns:
            The loaded solver

        Raises:
            SolverUnavailableError: If initialization failed
        """
        if self._solver is not None:
            return self._solver

        task = self._init_task
        if task is None or (not task.done() and task.get_loop().is_closed()):
            task = asyncio.ensure_future(self._initialize())
            self._init_task = task
        return await task

    def reset(self) -> None:
        """Forget the loaded solver or failed initialization."""
        self._solver = None
        self._init_task = None

    def compute(self, ring_set: RingSet) -> Skeleton:
        """Compute the skeleton for a ring set with the loaded solver.

        Raises:
            SolverUnavailableError: If ``load`` has not completed
            SkeletonComputationError: If the solver rejects the rings
        """
        if self._solver is None:
            raise SolverUnavailableError("solver not loaded; await load() first")
        return compute_skeleton(self._solver, ring_set.to_explicit())

    async def _initialize(self) -> SkeletonSolver:
        try:
            solver = self._factory()
            if inspect.isawaitable(solver):
                solver = await solver
        except SkeletonError:
            raise
        except Exception as e:
            raise SolverUnavailableError(str(e) or type(e).__name__) from e

        if not isinstance(solver, SkeletonSolver):
            raise SolverUnavailableError(
                f"{type(solver).__name__} has no build_from_polygon method"
            )

        self._solver = solver
        logger.debug("Skeleton solver loaded: %s", type(solver).__name__)
        return solver


@cache
def get_default_service() -> SkeletonService:
    """Process-wide service backed by the wavefront solver."""
    return SkeletonService()
