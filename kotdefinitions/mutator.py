"""
Mutator

Post-construction actions of an object definition: property assignments
and method calls
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .argument_binder import normalize_arguments

PROPERTY_PREFIX = "$"
METHOD_SUFFIX = "()"


class MutatorType(Enum):
    """Kind of post-construction action"""
    PROPERTY = "PROPERTY"
    METHOD = "METHOD"


@dataclass(frozen=True)
class Mutator:
    """One property assignment or method call.

    For properties ``value`` is the value to assign, for methods it is
    the argument dict (keyed by position or by parameter name).
    """
    type: MutatorType
    name: str
    value: Any

    @classmethod
    def assign(cls, name: str, value: Any) -> 'Mutator':
        return cls(MutatorType.PROPERTY, name, value)

    @classmethod
    def call(cls, name: str, arguments: Any = None) -> 'Mutator':
        return cls(MutatorType.METHOD, name, normalize_arguments(arguments))

    @property
    def key(self) -> str:
        """Identity used for merging: ``$name`` or ``name()``."""
        if self.type is MutatorType.PROPERTY:
            return PROPERTY_PREFIX + self.name
        return self.name + METHOD_SUFFIX

    def merge(self, other: 'Mutator') -> 'Mutator':
        """Combine with a mutator of the same key, ``other`` taking precedence.

        Method arguments are merged key by key into a new dict, so
        arguments ``other`` does not mention are kept. Values themselves
        are not copied: property values and argument values are shared
        with both operands.
        """
        if self.type is MutatorType.METHOD and other.type is MutatorType.METHOD:
            arguments: Dict[Any, Any] = dict(self.value)
            arguments.update(other.value)
            return Mutator(MutatorType.METHOD, other.name, arguments)
        return other
