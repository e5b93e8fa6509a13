"""
ResolutionContext

This module tracks which classes are currently being auto-wired so that a
class depending (directly or indirectly) on itself is reported instead of
recursing forever.

The chain is stored in a ContextVar, so every thread and every asyncio task
has its own chain and concurrent resolutions never see each other's state.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Tuple, Type

from .exceptions import CircularDependencyError
from .lookup import id_name


class ResolutionContext:
    """Chain of classes being auto-wired, outermost first.

    Contexts are immutable: entering a class produces a new context,
    which keeps the parent chain untouched once the nested resolution
    finishes.

    Attributes:
        resolving: Classes in the current auto-wiring chain

    Example (internal usage)::

        ctx = ResolutionContext()
        ctx = ctx.enter(Car)     # (Car,)
        ctx = ctx.enter(Engine)  # (Car, Engine)
        ctx.enter(Car)           # Raises CircularDependencyError
    """

    def __init__(self, resolving: Tuple[Type, ...] = ()):
        self.resolving: Tuple[Type, ...] = resolving

    def enter(self, cls: Type) -> 'ResolutionContext':
        """Return a context with ``cls`` appended to the chain.

        Raises:
            CircularDependencyError: When ``cls`` is already in the chain
        """
        if cls in self.resolving:
            cycle = " -> ".join(id_name(t) for t in self.resolving + (cls,))
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")
        return ResolutionContext(self.resolving + (cls,))


_resolution_context: ContextVar[ResolutionContext] = ContextVar(
    '_KOT_DEFINITIONS_RESOLUTION_CONTEXT',
    default=ResolutionContext()
)


@contextmanager
def resolving(cls: Type) -> Iterator[ResolutionContext]:
    """Mark ``cls`` as being auto-wired for the duration of the block."""
    ctx = _resolution_context.get().enter(cls)
    token = _resolution_context.set(ctx)
    try:
        yield ctx
    finally:
        _resolution_context.reset(token)
