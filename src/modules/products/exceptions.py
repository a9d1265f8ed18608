"""Product domain exceptions.

Raised by the entity, repository and service layers.  The API layer
(Views) inspects ``exc.kind`` and translates it into the appropriate
HTTP response.
"""

from __future__ import annotations

from modules.core.exceptions import DomainException, ErrorKind


class EmptyName(DomainException):
    """A product name was empty at construction or rename time."""

    def __init__(self, message: str = "name cannot be empty") -> None:
        super().__init__(message, kind=ErrorKind.EMPTY_NAME)


class RecordNotFound(DomainException):
    """The store holds no product row for the requested id.

    Raised by repositories only; the service layer translates it into
    ``ProductNotFound``.
    """

    def __init__(self, product_id: int) -> None:
        super().__init__(
            f"product record {product_id} not found", kind=ErrorKind.RECORD_NOT_FOUND
        )
        self.product_id = product_id


class ProductNotFound(DomainException):
    """The requested product does not exist."""

    def __init__(self, message: str = "product not found") -> None:
        super().__init__(message, kind=ErrorKind.NOT_FOUND)
