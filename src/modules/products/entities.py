"""Product domain entity.

The entity owns identity, name, SKU and timestamps and enforces its own
invariants.  It is independent of Django: the persistence record lives in
``modules.products.models`` and the two are converted at the repository
boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone

from modules.products.exceptions import EmptyName
from modules.products.sku import RandomSource, generate_sku

UNSAVED_ID = 0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product:
    """Product aggregate.

    Build new products with ``Product.create`` and rehydrate stored ones
    with ``Product.reconstruct``.  The name can only change through
    ``rename``; id and timestamps only through ``mark_persisted``, which
    is reserved for repositories.
    """

    __slots__ = ("_id", "_name", "_sku", "_created_at", "_updated_at")

    def __init__(
        self,
        id: int,
        name: str,
        sku: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        _ensure_name(name)
        self._id = id
        self._name = name
        self._sku = sku
        self._created_at = created_at
        self._updated_at = updated_at

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, name: str, random_source: RandomSource | None = None) -> Product:
        """Create a transient product (id 0) with a freshly generated SKU.

        Raises:
            EmptyName: if ``name`` is empty.
        """
        _ensure_name(name)
        now = _utcnow()
        return cls(
            id=UNSAVED_ID,
            name=name,
            sku=generate_sku(name, random_source),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        id: int,
        name: str,
        sku: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> Product:
        """Rehydrate a product from stored values.

        Raises:
            EmptyName: if the stored name is empty (corrupt row).
        """
        return cls(
            id=id,
            name=name,
            sku=sku,
            created_at=created_at,
            updated_at=updated_at,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_persisted(self) -> bool:
        return self._id != UNSAVED_ID

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def rename(self, new_name: str) -> None:
        """Replace the name.  SKU and timestamps are left untouched.

        Raises:
            EmptyName: if ``new_name`` is empty; the entity is unchanged.
        """
        _ensure_name(new_name)
        self._name = new_name

    def mark_persisted(self, id: int, created_at: datetime, updated_at: datetime) -> None:
        """Write back the state assigned by the store after a save."""
        if self.is_persisted and id != self._id:
            raise ValueError(
                f"Product id is immutable once persisted ({self._id} -> {id})."
            )
        self._id = id
        self._created_at = created_at
        self._updated_at = updated_at

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return (
            self._id == other._id
            and self._name == other._name
            and self._sku == other._sku
            and self._created_at == other._created_at
            and self._updated_at == other._updated_at
        )

    def __repr__(self) -> str:
        return f"<Product(id={self._id}, sku='{self._sku}', name='{self._name}')>"


def _ensure_name(name: str) -> None:
    if name == "":
        raise EmptyName()
