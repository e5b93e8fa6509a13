"""
Test Fixtures

Common test classes used across test modules
"""

import copy
from abc import ABC, abstractmethod
from typing import List, Optional

from kotdefinitions import CircularDependencyError


class EngineInterface(ABC):
    """Abstract engine"""

    @abstractmethod
    def get_name(self) -> str:
        pass


class EngineMarkOne(EngineInterface):
    def get_name(self) -> str:
        return "Mark One"


class EngineMarkTwo(EngineInterface):
    def get_name(self) -> str:
        return "Mark Two"


class ColorInterface(ABC):
    """Abstract color"""

    @abstractmethod
    def get_color(self) -> str:
        pass


class ColorPink(ColorInterface):
    def get_color(self) -> str:
        return "pink"


class Car:
    """Car with an engine dependency and a color set by a method"""

    def __init__(self, engine: EngineInterface):
        self.engine = engine
        self.color: Optional[ColorInterface] = None

    def set_color(self, color: ColorInterface) -> 'Car':
        self.color = color
        return self

    def get_engine(self) -> EngineInterface:
        return self.engine


class Garage:
    """Concrete dependency that can be auto-wired when the engine is known"""

    def __init__(self, car: Car, capacity: int = 2):
        self.car = car
        self.capacity = capacity


class Phone:
    """Phone with optional constructor arguments, variadic colors and mutators"""

    def __init__(self, name: Optional[str] = None, version: Optional[str] = None, *colors: str):
        self.name = name
        self.version = version
        self.colors: List[str] = list(colors)
        self.dev = False
        self.code_name: Optional[str] = None
        self.id: Optional[str] = None
        self.apps: List[list] = []
        self.author: Optional[str] = None
        self.country: Optional[str] = None

    def set_id(self, id: str) -> None:
        self.id = id

    def set_id777(self) -> None:
        self.id = "777"

    def add_app(self, name: str, version: Optional[str] = None) -> None:
        self.apps.append([name, version])

    def set_colors(self, *colors: str) -> None:
        self.colors = list(colors)

    def with_author(self, author: str) -> 'Phone':
        new = copy.copy(self)
        new.author = author
        return new

    def with_country(self, country: str) -> 'Phone':
        new = copy.copy(self)
        new.country = country
        return new


class NoConstructor:
    """Class without its own constructor"""
    pass


class SelfDependency:
    """Class depending on itself"""

    def __init__(self, self_dependency: 'SelfDependency'):
        self.self_dependency = self_dependency


class NullableConcreteDependency:
    """Nullable but required dependency on a class that can't be auto-wired"""

    def __init__(self, car: Optional[Car]):
        self.car = car


class RuntimeErrorDependency:
    """Dependency whose constructor is broken"""

    def __init__(self):
        raise RuntimeError("Broken.")


class CircularReferenceDependency:
    """Dependency whose construction runs into a cycle"""

    def __init__(self):
        raise CircularDependencyError("Circular reference.")


class Node:
    """Linked list node, nested through explicit definitions"""

    def __init__(self, label: str, next: Optional['Node'] = None):
        self.label = label
        self.next = next


class Wrapper:
    """Optionally wraps another instance of itself"""

    def __init__(self, inner: Optional['Wrapper'] = None):
        self.inner = inner


class TowEngine(EngineInterface):
    """Engine that tows a car, built by a lookup service while a car is being built"""

    def __init__(self, towed: Optional[Car] = None):
        self.towed = towed

    def get_name(self) -> str:
        return "Tow"
