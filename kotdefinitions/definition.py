"""
Definition

Interface shared by everything that can be resolved into a value
"""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .lookup import LookupService


class Definition(ABC):
    """Something that can be resolved into a value using a lookup service.

    Definitions found among constructor or method arguments are resolved
    before the call; any other argument value is passed as it is.
    """

    @abstractmethod
    def resolve(self, lookup: 'LookupService') -> Any:
        """Resolve the definition into a value."""
