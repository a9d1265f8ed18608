"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` is the domain entity managed by the repository.
    Missing rows are reported by raising, never by returning ``None``.
    """

    @abstractmethod
    def find_by_id(self, id: int) -> T:
        """Retrieve an entity by its identifier."""

    @abstractmethod
    def save(self, entity: T) -> None:
        """Insert or update an entity, writing store-assigned state back."""
