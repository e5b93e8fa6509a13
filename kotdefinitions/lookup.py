"""
LookupService

This module provides the lookup service capability consumed by definitions
and a small in-memory implementation of it.

A lookup service answers two questions for an id (usually a type, sometimes
a string name):

- has(id): can a value be supplied for this id?
- get(id): supply it, or raise ServiceNotFoundError

Any application container can take part in resolution by implementing
these two methods. Lifecycle (singleton vs. new instance per call) is the
lookup service's business, definitions never cache what they get.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, Mapping, Optional

from .exceptions import ServiceNotFoundError


def id_name(id: Hashable) -> str:
    """Human-readable form of a lookup id (``module.Class`` for types)."""
    if isinstance(id, type):
        return f"{id.__module__}.{id.__qualname__}"
    return str(id)


class LookupService(ABC):
    """Capability for resolving ids to values.

    Example::

        class MyContainer(LookupService):
            def has(self, id):
                return id in self._services

            def get(self, id):
                try:
                    return self._services[id]
                except KeyError:
                    raise ServiceNotFoundError(id) from None
    """

    @abstractmethod
    def has(self, id: Hashable) -> bool:
        """Return True if the lookup service can supply a value for ``id``."""

    @abstractmethod
    def get(self, id: Hashable) -> Any:
        """Return the value for ``id``.

        Raises:
            ServiceNotFoundError: When ``id`` is not registered
        """


class SimpleLookup(LookupService):
    """In-memory lookup service backed by a mapping.

    Misses can be delegated to a ``factory`` callable, in which case a
    ``has`` callable should be supplied as well so that ``has()`` reports
    what the factory is able to build.

    Attributes:
        _definitions: Mapping of ids to ready values
        _factory: Optional callable invoked for ids missing from the mapping
        _has: Optional callable answering has() for ids missing from the mapping

    Example::

        lookup = SimpleLookup({EngineInterface: EngineMarkOne()})
        lookup.get(EngineInterface)  # EngineMarkOne instance

        lookup = SimpleLookup(
            factory=lambda id: build(id),
            has=lambda id: id is Engine,
        )
    """

    def __init__(
        self,
        definitions: Optional[Mapping[Hashable, Any]] = None,
        factory: Optional[Callable[[Hashable], Any]] = None,
        has: Optional[Callable[[Hashable], bool]] = None,
    ):
        self._definitions: Dict[Hashable, Any] = dict(definitions or {})
        self._factory = factory
        self._has = has

    def has(self, id: Hashable) -> bool:
        if id in self._definitions:
            return True
        if self._has is not None:
            return self._has(id)
        return False

    def get(self, id: Hashable) -> Any:
        if id in self._definitions:
            return self._definitions[id]
        if self._factory is not None:
            return self._factory(id)

        registered = ", ".join(id_name(key) for key in self._definitions) or "None"
        raise ServiceNotFoundError(
            id,
            f"{id_name(id)} is not registered.\n"
            f"Registered ids: {registered}",
        )
