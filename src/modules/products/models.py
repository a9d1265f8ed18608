"""Product persistence record.

Flat storage-shaped mirror of the ``Product`` entity.  It carries no
business rules; the repository converts it to and from the entity so
the table schema can evolve independently of the domain invariants.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class ProductRecord(models.Model):
    """Row of the ``products`` table.

    ``id`` is assigned by the database on insert.  The repository stamps
    ``created_at`` and ``updated_at`` from one clock reading on insert and
    refreshes ``updated_at`` on every update.
    """

    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["name"], name="products_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
