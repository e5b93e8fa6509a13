"""
Reference

This module provides the markers that stand for "a value from the lookup
service" inside definitions, and the function that resolves argument
values containing them.

- Reference.to(id): the service registered under ``id``
- DynamicReference.to(callable): the result of calling ``callable`` with
  its parameters auto-wired from the lookup service

Neither is resolved when created, only when the definition holding them
is resolved.
"""

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional, TYPE_CHECKING

from .definition import Definition
from .exceptions import InvalidConfigError
from .lookup import id_name

if TYPE_CHECKING:
    from .lookup import LookupService


@dataclass(frozen=True)
class Reference(Definition):
    """Reference to the service registered under ``id``.

    Example::

        ObjectDefinition.from_config({
            ObjectDefinition.CLASS: Car,
            "set_color()": [Reference.to(ColorInterface)],
        })
    """

    id: Hashable

    @classmethod
    def to(cls, id: Hashable) -> 'Reference':
        """Create a reference to ``id``.

        Raises:
            InvalidConfigError: When ``id`` is an empty string or None
        """
        if id is None or id == "":
            raise InvalidConfigError("Reference id must be a type or a non-empty string.")
        return cls(id)

    def resolve(self, lookup: 'LookupService') -> Any:
        return lookup.get(self.id)

    def __repr__(self) -> str:
        return f"Reference.to({id_name(self.id)})"


class DynamicReference(Definition):
    """Reference to the result of a factory callable.

    The callable's parameters are resolved like constructor parameters:
    class-typed ones from the lookup service, the rest from defaults.
    The callable runs again on every resolution.

    Example::

        def make_engine(config: EngineConfig) -> Engine:
            return Engine(config.power)

        ObjectDefinition.from_config({
            ObjectDefinition.CLASS: Car,
            ObjectDefinition.CONSTRUCTOR: [DynamicReference.to(make_engine)],
        })
    """

    def __init__(self, factory: Callable[..., Any]):
        self.factory = factory

    @classmethod
    def to(cls, factory: Callable[..., Any]) -> 'DynamicReference':
        if not callable(factory):
            raise InvalidConfigError(
                f"DynamicReference expects a callable, {type(factory).__name__} given."
            )
        return cls(factory)

    def resolve(self, lookup: 'LookupService') -> Any:
        from .argument_binder import bind_arguments
        from .parameter_definition import get_parameter_definitions

        args, kwargs = bind_arguments({}, get_parameter_definitions(self.factory), lookup)
        return self.factory(*args, **kwargs)

    def __repr__(self) -> str:
        return f"DynamicReference.to({self.factory!r})"


def resolve_argument(
    value: Any,
    lookup: 'LookupService',
    reference_lookup: Optional['LookupService'] = None,
) -> Any:
    """Resolve one argument value.

    References are resolved against ``reference_lookup`` when one is
    given, so that a definition can pull collaborators from a different
    registry than the one building the object graph. Other definitions
    are resolved against ``lookup``. Plain values are returned as they
    are, without looking inside lists or dicts.
    """
    if isinstance(value, Reference) and reference_lookup is not None:
        return value.resolve(reference_lookup)
    if isinstance(value, Definition):
        return value.resolve(lookup)
    return value
