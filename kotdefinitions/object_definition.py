"""
ObjectDefinition

This module provides the definition of how to build and set up one object:

- The class to instantiate
- Constructor arguments, by position or by name
- Property assignments and method calls applied after construction, in order

Definitions are usually created from a declarative mapping::

    definition = ObjectDefinition.from_config({
        ObjectDefinition.CLASS: Phone,
        ObjectDefinition.CONSTRUCTOR: {"name": "Kiradzu"},
        "$dev": True,
        "set_id()": ["s43g23456"],
        "with_author()": ["Sergei"],
    })
    phone = definition.resolve(lookup)

Every resolve() builds a new object; definitions never cache instances.
"""

import inspect
import logging
import pkgutil
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .argument_binder import Arguments, bind_arguments, normalize_arguments
from .definition import Definition
from .exceptions import InvalidConfigError, NotInstantiableError
from .lookup import LookupService, id_name
from .mutator import METHOD_SUFFIX, PROPERTY_PREFIX, Mutator, MutatorType
from .parameter_definition import get_parameter_definitions
from .reference import resolve_argument
from .type_hints import constructor_of

logger = logging.getLogger(__name__)

ClassTarget = Union[type, str]


class ObjectDefinition(Definition):
    """Definition of an object: class, constructor arguments and mutators.

    Attributes:
        _class: Class to instantiate, or its dotted import path
        _constructor_arguments: Arguments keyed by position or by name
        _methods_and_properties: Mutators keyed by ``$property`` / ``method()``
        _reference_lookup: Lookup service used for References, if not the
            one passed to resolve()
    """

    CLASS = "class"
    CONSTRUCTOR = "__init__()"

    def __init__(
        self,
        class_: ClassTarget,
        constructor_arguments: Optional[Arguments] = None,
        methods_and_properties: Optional[Mapping[str, Mutator]] = None,
    ):
        self._class = class_
        self._constructor_arguments = normalize_arguments(constructor_arguments)
        self._methods_and_properties: Dict[str, Mutator] = dict(methods_and_properties or {})
        self._reference_lookup: Optional[LookupService] = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'ObjectDefinition':
        """Create a definition from its declarative form.

        Keys:
            ``"class"``: the class (or dotted path) to instantiate, required
            ``"__init__()"``: constructor arguments, list or mapping
            ``"$name"``: assign the value to property ``name``
            ``"name()"``: call method ``name`` with the given arguments

        Raises:
            InvalidConfigError: When the class is missing or a key or
                value is malformed
        """
        class_ = config.get(cls.CLASS)
        if not class_:
            raise InvalidConfigError(
                f'Definition must contain the "{cls.CLASS}" key with the class to instantiate.'
            )
        if not isinstance(class_, (type, str)):
            raise InvalidConfigError(
                f'Definition "{cls.CLASS}" must be a class or a dotted path, '
                f'{type(class_).__name__} given.'
            )

        mutators = []
        for key, value in config.items():
            if key in (cls.CLASS, cls.CONSTRUCTOR):
                continue
            mutators.append(_parse_mutator(key, value))

        return cls.from_prepared_data(class_, config.get(cls.CONSTRUCTOR), mutators)

    @classmethod
    def from_prepared_data(
        cls,
        class_: ClassTarget,
        constructor_arguments: Optional[Arguments] = None,
        methods_and_properties: Union[Mapping[str, Mutator], Iterable[Mutator], None] = None,
    ) -> 'ObjectDefinition':
        """Create a definition from already parsed parts."""
        if isinstance(methods_and_properties, Mapping):
            methods_and_properties = methods_and_properties.values()
        mutators = {mutator.key: mutator for mutator in methods_and_properties or ()}
        return cls(class_, constructor_arguments, mutators)

    def get_class(self) -> ClassTarget:
        return self._class

    def get_constructor_arguments(self) -> Dict[Union[int, str], Any]:
        return dict(self._constructor_arguments)

    def get_methods_and_properties(self) -> Dict[str, Mutator]:
        return dict(self._methods_and_properties)

    def set_reference_lookup(self, lookup: Optional[LookupService]) -> None:
        """Resolve References of this definition against ``lookup``.

        Lets a definition take collaborators from another registry than
        the one building the object graph, e.g. a module-local one.
        """
        self._reference_lookup = lookup

    def merge(self, other: 'ObjectDefinition') -> 'ObjectDefinition':
        """Return a new definition combining this one with ``other``.

        ``other`` wins: its class replaces this class, its constructor
        arguments replace those with the same key, and its mutators
        replace (method arguments: merge into) those with the same key
        while keeping their position. Mutators only ``other`` has are
        appended. Neither definition is modified.

        Example::

            a = ObjectDefinition.from_config({
                ObjectDefinition.CLASS: Phone,
                "$code_name": "a",
                "set_colors()": ["red", "green"],
            })
            b = ObjectDefinition.from_config({
                ObjectDefinition.CLASS: Phone,
                "$code_name": "b",
                "set_colors()": ["yellow"],
            })
            a.merge(b)  # $code_name="b", set_colors("yellow", "green")
        """
        constructor_arguments = dict(self._constructor_arguments)
        constructor_arguments.update(other._constructor_arguments)

        mutators = dict(self._methods_and_properties)
        for key, mutator in other._methods_and_properties.items():
            mutators[key] = mutators[key].merge(mutator) if key in mutators else mutator

        merged = ObjectDefinition(other._class, constructor_arguments, mutators)
        merged._reference_lookup = other._reference_lookup or self._reference_lookup
        return merged

    def resolve(self, lookup: LookupService) -> Any:
        """Build the object.

        Args:
            lookup: Lookup service for dependencies and References

        Returns:
            The new object, or what the last fluent method returned

        Raises:
            NotInstantiableError: When the class or a parameter can't be
                resolved
            InvalidConfigError: When the definition is self-contradictory
            ArgumentError: When a named variadic argument is not a list
            ServiceNotFoundError: When a required dependency is missing
            CircularDependencyError: When auto-wiring runs into a cycle
        """
        cls = self._load_class()
        instance = self._instantiate(cls, lookup)

        for mutator in self._methods_and_properties.values():
            instance = self._apply(instance, mutator, lookup)
        return instance

    def _load_class(self) -> type:
        cls = self._class
        if isinstance(cls, str):
            try:
                cls = pkgutil.resolve_name(cls)
            except (ImportError, AttributeError, ValueError) as e:
                raise NotInstantiableError(f'Class "{self._class}" can not be imported: {e}') from e

        if not isinstance(cls, type):
            raise NotInstantiableError(f'"{self._class}" is not a class.')
        if getattr(cls, '_is_protocol', False):
            raise NotInstantiableError(f'Can not instantiate {id_name(cls)} because it is a Protocol.')
        if inspect.isabstract(cls):
            raise NotInstantiableError(
                f'Can not instantiate {id_name(cls)} because it is abstract '
                f'(abstract methods: {", ".join(sorted(cls.__abstractmethods__))}).'
            )
        return cls

    def _instantiate(self, cls: type, lookup: LookupService) -> Any:
        if self._constructor_arguments and constructor_of(cls) is None:
            raise InvalidConfigError(
                f'{id_name(cls)} has no constructor, constructor arguments can not be set.'
            )

        args, kwargs = bind_arguments(
            self._constructor_arguments,
            get_parameter_definitions(cls),
            lookup,
            self._reference_lookup,
        )
        logger.debug("Instantiating %s", id_name(cls))
        return cls(*args, **kwargs)

    def _apply(self, instance: Any, mutator: Mutator, lookup: LookupService) -> Any:
        if mutator.type is MutatorType.PROPERTY:
            setattr(instance, mutator.name, resolve_argument(mutator.value, lookup, self._reference_lookup))
            return instance

        try:
            method = getattr(instance, mutator.name)
        except AttributeError as e:
            raise InvalidConfigError(
                f'Method "{mutator.name}" does not exist in {id_name(type(instance))}.'
            ) from e

        args, kwargs = bind_arguments(
            mutator.value,
            get_parameter_definitions(method),
            lookup,
            self._reference_lookup,
        )
        result = method(*args, **kwargs)

        # Fluent "with" methods return a new instance to continue with
        if result is not instance and isinstance(result, type(instance)):
            logger.debug("%s() returned a new %s", mutator.name, id_name(type(instance)))
            return result
        return instance

    def __repr__(self) -> str:
        class_name = self._class if isinstance(self._class, str) else id_name(self._class)
        return f"ObjectDefinition({class_name})"


def _parse_mutator(key: Any, value: Any) -> Mutator:
    if isinstance(key, str) and key.startswith(PROPERTY_PREFIX) and len(key) > len(PROPERTY_PREFIX):
        return Mutator.assign(key[len(PROPERTY_PREFIX):], value)

    if isinstance(key, str) and key.endswith(METHOD_SUFFIX) and len(key) > len(METHOD_SUFFIX):
        if not isinstance(value, (list, tuple, Mapping)):
            raise InvalidConfigError(
                f'Invalid definition: arguments of method "{key}" must be a list or a mapping, '
                f'{type(value).__name__} given.'
            )
        return Mutator.call(key[:-len(METHOD_SUFFIX)], value)

    raise InvalidConfigError(
        f'Invalid definition: key "{key}" is neither a property ("$name") nor a method ("name()").'
    )
