"""Product service layer (Use Cases).

Orchestrates the Product entity's business rules and delegates
persistence to the injected ``IProductRepository``.

Missing rows reported by the repository (``RecordNotFound``) are
translated into ``ProductNotFound``; every other repository failure
propagates unchanged so the API layer can log it and answer with a
generic 500.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.core.exceptions import DomainException, ErrorKind
from modules.products.entities import Product
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import (
        IProductRepository,
        SortDirection,
        SortField,
    )
    from modules.products.sku import RandomSource

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``random_source`` is handed to SKU generation; ``None`` selects the
    system source.
    """

    def __init__(
        self,
        repository: IProductRepository,
        random_source: RandomSource | None = None,
    ) -> None:
        self._repo = repository
        self._random_source = random_source

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, name: str) -> Product:
        """Create and persist a new product.

        Raises:
            EmptyName: if ``name`` is empty.
        """
        product = Product.create(name, self._random_source)
        self._repo.save(product)
        logger.info("product.created", product_id=product.id, sku=product.sku)
        return product

    def update_product_name(self, id: int, new_name: str) -> Product:
        """Rename an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            EmptyName: if ``new_name`` is empty.
        """
        product = self._fetch(id)
        product.rename(new_name)
        self._repo.save(product)
        logger.info("product.renamed", product_id=product.id)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product_by_id(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._fetch(id)
        logger.info("product.retrieved", product_id=id)
        return product

    def list_products(
        self,
        search: str,
        sort_by: SortField,
        sort_direction: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Product]:
        """Return one page of products."""
        products = self._repo.list_products(
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
            limit=limit,
            offset=offset,
        )
        logger.info(
            "product.listed",
            count=len(products),
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
        )
        return products

    def _fetch(self, id: int) -> Product:
        try:
            return self._repo.find_by_id(id)
        except DomainException as exc:
            if exc.kind == ErrorKind.RECORD_NOT_FOUND:
                logger.warning("product.not_found", product_id=id)
                raise ProductNotFound() from exc
            raise
