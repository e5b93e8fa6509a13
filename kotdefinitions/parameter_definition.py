"""
ParameterDefinition

This module describes a single parameter of a callable and knows how to
obtain a value for it when the definition being resolved does not supply
one. The value comes from, in order of preference:

- The lookup service, when the parameter is typed with a class it can supply
- The default value, for optional parameters
- Auto-wiring, when the class type itself can be instantiated

Builtin-typed and untyped parameters are never looked up; they need a
default value or an explicit argument.
"""

import inspect
import logging
from functools import cached_property
from typing import Any, Callable, List, Optional, Tuple

from .definition import Definition
from .exceptions import (
    InvalidConfigError,
    NotInstantiableError,
    ServiceNotFoundError,
)
from .lookup import LookupService, id_name
from .resolution_context import resolving
from .type_hints import (
    callable_name,
    constructor_of,
    get_signature,
    injectable_type,
    is_builtin_type,
    is_native,
    resolve_string_annotation,
    resolve_type_hints,
    unwrap_optional,
)

logger = logging.getLogger(__name__)

_EMPTY = inspect.Parameter.empty


class ParameterDefinition(Definition):
    """Resolvable description of one callable parameter.

    Attributes:
        _parameter: The inspect.Parameter being described
        _function: The callable the parameter belongs to
        _hint: Raw or already resolved annotation, evaluated on first use
          so that arguments supplied explicitly never need it

    Example::

        def connect(engine: EngineInterface, retries: int = 3): ...

        engine, retries = get_parameter_definitions(connect)
        engine.resolve(lookup)   # lookup.get(EngineInterface)
        retries.resolve(lookup)  # 3
    """

    def __init__(
        self,
        parameter: inspect.Parameter,
        function: Optional[Callable] = None,
        type_hint: Any = _EMPTY,
    ):
        """Describe ``parameter`` of ``function``.

        Args:
            parameter: The parameter from the function's signature
            function: The callable the parameter belongs to, used for
                forward reference resolution and error messages
            type_hint: Already resolved annotation; defaults to the
                parameter's raw annotation
        """
        self._parameter = parameter
        self._function = function
        self._hint = parameter.annotation if type_hint is _EMPTY else type_hint

    def __repr__(self) -> str:
        return f"ParameterDefinition({self._parameter} of {self.callable_name})"

    @property
    def name(self) -> str:
        return self._parameter.name

    @cached_property
    def _annotation(self) -> Tuple[Any, bool]:
        hint = self._hint
        if hint is _EMPTY:
            return None, False
        if isinstance(hint, str):
            hint = resolve_string_annotation(self._function, self.name, hint)
        hint, nullable = unwrap_optional(hint)
        return (hint if is_builtin_type(hint) else injectable_type(hint)), nullable

    @property
    def type(self) -> Any:
        """Declared type, ``Optional`` unwrapped. None for untyped parameters.

        Raises:
            NotInstantiableError: When a string annotation can't be resolved
        """
        return self._annotation[0]

    @property
    def callable_name(self) -> str:
        if self._function is None:
            return "<unknown>()"
        return callable_name(self._function)

    @property
    def is_builtin(self) -> bool:
        return self.type is not None and is_builtin_type(self.type)

    @property
    def is_nullable(self) -> bool:
        return self._parameter.default is None or self._annotation[1]

    @property
    def is_variadic(self) -> bool:
        return self._parameter.kind == inspect.Parameter.VAR_POSITIONAL

    @property
    def is_keyword_variadic(self) -> bool:
        return self._parameter.kind == inspect.Parameter.VAR_KEYWORD

    @property
    def is_keyword_only(self) -> bool:
        return self._parameter.kind == inspect.Parameter.KEYWORD_ONLY

    @property
    def is_positional_only(self) -> bool:
        return self._parameter.kind == inspect.Parameter.POSITIONAL_ONLY

    @property
    def is_optional(self) -> bool:
        """True when the parameter may be left out of a call."""
        return self.has_value or self.is_variadic or self.is_keyword_variadic

    @property
    def has_value(self) -> bool:
        """True when a default value is available."""
        return self._parameter.default is not _EMPTY

    @property
    def default_value(self) -> Any:
        if not self.has_value:
            raise InvalidConfigError(
                f'Parameter "{self.name}" of {self.callable_name} has no default value.'
            )
        return self._parameter.default

    @property
    def is_native(self) -> bool:
        return self._function is not None and is_native(self._function)

    def resolve(self, lookup: LookupService) -> Any:
        """Obtain a value for the parameter.

        Args:
            lookup: Lookup service supplying class-typed dependencies

        Returns:
            The looked up, auto-wired or default value

        Raises:
            NotInstantiableError: When no value can be determined
            InvalidConfigError: When the lookup service returns a value
                of the wrong type
            ServiceNotFoundError: When a required dependency is missing
            CircularDependencyError: When auto-wiring runs into a cycle
        """
        if self.is_variadic:
            return ()
        if self.is_keyword_variadic:
            return {}

        if self.type is None:
            if self.has_value:
                return self.default_value
            if self.is_native:
                raise self._native_error()
            raise NotInstantiableError(
                f'Can not determine value of the "{self.name}" parameter without type '
                f'when instantiating "{self.callable_name}". '
                f'Please specify argument explicitly.'
            )

        if self.is_builtin:
            if self.has_value:
                return self.default_value
            if self.is_native:
                raise self._native_error()
            raise NotInstantiableError(
                f'Can not determine value of the "{self.name}" parameter of type '
                f'"{_type_name(self.type)}" when instantiating "{self.callable_name}". '
                f'Please specify argument explicitly.'
            )

        return self._resolve_class(lookup)

    def _resolve_class(self, lookup: LookupService) -> Any:
        cls = self.type
        try:
            if lookup.has(cls):
                result = lookup.get(cls)
            elif self.has_value:
                logger.debug(
                    "%s is not available, using default of parameter %r of %s",
                    id_name(cls), self.name, self.callable_name,
                )
                return self.default_value
            else:
                return self._autowire(lookup)
        except ServiceNotFoundError as e:
            # A missing optional collaborator is expected, anything else is a defect
            if not self.has_value:
                raise
            logger.debug(
                "Dependency of parameter %r of %s not found (%s), using default",
                self.name, self.callable_name, e,
            )
            return self.default_value

        if result is None and self.is_nullable:
            return None
        if not _is_instance(result, cls):
            raise InvalidConfigError(
                f'Lookup service returned incorrect type "{type(result).__name__}" '
                f'for service "{id_name(cls)}".'
            )
        return result

    def _autowire(self, lookup: LookupService) -> Any:
        from .object_definition import ObjectDefinition

        cls = self.type
        logger.debug("Auto-wiring %s for parameter %r", id_name(cls), self.name)
        try:
            # Only implicit auto-wiring enters the chain, explicit definitions may nest freely
            with resolving(cls):
                return ObjectDefinition.from_prepared_data(cls).resolve(lookup)
        except NotInstantiableError as e:
            raise NotInstantiableError(
                f'Can not determine value of the "{self.name}" parameter of type '
                f'"{id_name(cls)}" when instantiating "{self.callable_name}": {e}'
            ) from e

    def _native_error(self) -> NotInstantiableError:
        return NotInstantiableError(
            f'Can not determine default value of parameter "{self.name}" when '
            f'instantiating "{self.callable_name}" because it is a native routine. '
            f'Please specify argument explicitly.'
        )


def get_parameter_definitions(target: Callable) -> List[ParameterDefinition]:
    """Describe the parameters of a callable or of a class constructor.

    The ``self``/``cls`` parameter of constructors is skipped; bound
    methods are already stripped of it by their signature.

    Args:
        target: A function, bound method or class

    Returns:
        Parameter definitions in declaration order

    Annotations are evaluated lazily, on first access to a descriptor's
    type, so a type imported only under ``TYPE_CHECKING`` is fine as long
    as the argument is supplied explicitly.

    Raises:
        NotInstantiableError: When the signature can't be introspected
    """
    if isinstance(target, type):
        function = constructor_of(target)
        if function is None:
            return []
        parameters = list(get_signature(function).parameters.values())[1:]
    else:
        function = target
        parameters = list(get_signature(function).parameters.values())

    hints = resolve_type_hints(function)
    return [
        ParameterDefinition(parameter, function, hints.get(parameter.name, _EMPTY))
        for parameter in parameters
    ]


def _type_name(hint: Any) -> str:
    if isinstance(hint, type):
        return hint.__name__
    return str(hint).replace('typing.', '')


def _is_instance(value: Any, cls: Any) -> bool:
    if not isinstance(cls, type):
        return True
    # Protocols without @runtime_checkable can't be checked with isinstance()
    if getattr(cls, '_is_protocol', False) and not getattr(cls, '_is_runtime_protocol', False):
        return True
    return isinstance(value, cls)
