# Public API
import logging

from .argument_binder import bind_arguments
from .definition import Definition
from .exceptions import (
    ArgumentError,
    CircularDependencyError,
    InvalidConfigError,
    KotDefinitionsError,
    NotInstantiableError,
    ServiceNotFoundError,
)
from .lookup import LookupService, SimpleLookup
from .mutator import Mutator, MutatorType
from .object_definition import ObjectDefinition
from .parameter_definition import ParameterDefinition, get_parameter_definitions
from .reference import DynamicReference, Reference, resolve_argument

__all__ = [
    "Definition",
    "ObjectDefinition",
    "ParameterDefinition",
    "get_parameter_definitions",
    "Mutator",
    "MutatorType",
    # References
    "Reference",
    "DynamicReference",
    "resolve_argument",
    "bind_arguments",
    # Lookup
    "LookupService",
    "SimpleLookup",
    # Exceptions
    "KotDefinitionsError",
    "NotInstantiableError",
    "InvalidConfigError",
    "ArgumentError",
    "ServiceNotFoundError",
    "CircularDependencyError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version will be dynamically set by poetry-dynamic-versioning
try:
    from ._version import __version__
except ImportError:
    # Fallback for development
    __version__ = '0.0.0'
