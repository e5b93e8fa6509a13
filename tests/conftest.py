"""
Test Configuration and Utilities

Common base classes and helper functions for KotDefinitions tests
"""

import unittest
from typing import Any, Callable, Dict, Hashable

from kotdefinitions import (
    ParameterDefinition,
    ServiceNotFoundError,
    SimpleLookup,
    get_parameter_definitions,
)


class KotDefinitionsTestCase(unittest.TestCase):
    """
    Base test case class for KotDefinitions tests.

    Provides an empty lookup service for each test.
    """

    def setUp(self):
        """Create an empty lookup service before each test"""
        self.lookup = SimpleLookup()


def first_parameter(function: Callable) -> ParameterDefinition:
    """Return the definition of the first parameter of a function or class."""
    return get_parameter_definitions(function)[0]


def create_factory_lookup(factories: Dict[Hashable, Callable[[], Any]]) -> SimpleLookup:
    """
    Create a lookup service that builds values on demand.

    Ids present in ``factories`` are reported by has() and built by
    calling the factory; any other id raises ServiceNotFoundError.

    Example:
        >>> lookup = create_factory_lookup({Engine: lambda: EngineMarkOne()})
    """

    def factory(id: Hashable) -> Any:
        if id in factories:
            return factories[id]()
        raise ServiceNotFoundError(id)

    return SimpleLookup(factory=factory, has=lambda id: id in factories)
