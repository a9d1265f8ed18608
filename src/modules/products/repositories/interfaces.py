"""Product repository interface.

Extends ``IRepository[Product]`` with the paged, searchable listing used
by the product list endpoint.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Literal

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.entities import Product

SortField = Literal["name", "sku"]
SortDirection = Literal["asc", "desc"]


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def find_by_id(self, id: int) -> Product:
        """Retrieve a product by id.

        Raises:
            RecordNotFound: if no row has this id.
            EmptyName: if the stored row violates the entity invariants.
        """

    @abstractmethod
    def save(self, entity: Product) -> None:
        """Insert a transient product or update a persisted one.

        Raises:
            RecordNotFound: when updating an id with no stored row.
        """

    @abstractmethod
    def list_products(
        self,
        search: str,
        sort_by: SortField,
        sort_direction: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Product]:
        """Return one page of products.

        ``search`` matches name or SKU, case-insensitively; empty means
        no filter.  A non-positive ``limit`` yields an empty list.
        """
