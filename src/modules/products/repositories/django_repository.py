"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.  Entities
and ``ProductRecord`` rows are converted by the two pure mapping
functions below; nothing outside this module sees a ``ProductRecord``.

The store handle is the Django database alias passed to the
constructor, so tests and alternative deployments can point the
repository at any configured connection.
"""

from __future__ import annotations

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Q
from django.utils import timezone

import structlog

from modules.products.entities import UNSAVED_ID, Product
from modules.products.exceptions import RecordNotFound
from modules.products.models import ProductRecord
from modules.products.repositories.interfaces import (
    IProductRepository,
    SortDirection,
    SortField,
)

logger = structlog.get_logger(__name__)


# ------------------------------------------------------------------
# Mapping
# ------------------------------------------------------------------


def entity_to_record(product: Product) -> ProductRecord:
    """Build an unsaved ``ProductRecord`` carrying the entity's state.

    A transient entity (id 0) maps to a record without a primary key.
    """
    return ProductRecord(
        id=None if product.id == UNSAVED_ID else product.id,
        name=product.name,
        sku=product.sku,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def record_to_entity(record: ProductRecord) -> Product:
    """Rehydrate a ``Product`` from a stored row.

    Raises:
        EmptyName: if the row holds an empty name.
    """
    return Product.reconstruct(
        id=record.id,
        name=record.name,
        sku=record.sku,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _records(self):
        return ProductRecord.objects.using(self._using)

    def save(self, entity: Product) -> None:
        """Persist (create or update) a product.

        An insert stamps ``created_at`` and ``updated_at`` with the same
        instant; an update refreshes ``updated_at`` only.  On success the
        entity receives the id and timestamps assigned here.
        """
        now = timezone.now()
        with transaction.atomic(using=self._using):
            record = entity_to_record(entity)
            record.updated_at = now
            if record.pk is None:
                record.created_at = now
                record.save(force_insert=True, using=self._using)
                event = "product.inserted"
            else:
                if not self._records().filter(pk=record.pk).exists():
                    raise RecordNotFound(record.pk)
                record.save(
                    force_update=True,
                    using=self._using,
                    update_fields=["name", "sku", "updated_at"],
                )
                event = "product.record_updated"

        entity.mark_persisted(record.id, record.created_at, record.updated_at)
        logger.info(event, product_id=record.id, sku=record.sku)

    def find_by_id(self, id: int) -> Product:
        try:
            record = self._records().get(pk=id)
        except ProductRecord.DoesNotExist:
            raise RecordNotFound(id) from None
        return record_to_entity(record)

    def list_products(
        self,
        search: str,
        sort_by: SortField,
        sort_direction: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Product]:
        """List one page of products, ordered by ``sort_by`` then id."""
        if limit <= 0:
            return []

        queryset = self._records().all()
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(sku__icontains=search)
            )

        prefix = "-" if sort_direction == "desc" else ""
        queryset = queryset.order_by(f"{prefix}{sort_by}", f"{prefix}id")

        offset = max(offset, 0)
        return [record_to_entity(r) for r in queryset[offset : offset + limit]]
