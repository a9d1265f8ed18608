"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer.  DTOs are immutable (``frozen=True``).

Inbound data is first checked against an explicit rule table
(``modules.core.validation``) so every violation is reported under the
field's display name with a human-readable message.

- ``CreateProductRequest``: input for product creation.
- ``UpdateProductRequest``: input for renaming a product.
- ``ListQueryParams``: search / sort / paging for the product list.
- ``ProductOutputDTO``: output with all product fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal, Self

from django.conf import settings
from pydantic import BaseModel, ConfigDict

from modules.core.validation import (
    FieldRules,
    MalformedInput,
    RequestValidationError,
    max_length,
    min_length,
    one_of,
    required,
    validate,
)

if TYPE_CHECKING:
    from modules.products.entities import Product


NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255

# offset + limit stays well inside the store's 64-bit LIMIT/OFFSET range
MAX_PAGING_VALUE = 2**31 - 1

SORT_FIELDS = ("name", "sku")
SORT_DIRECTIONS = ("asc", "desc")

PRODUCT_NAME_RULES = (
    FieldRules(
        field="Name",
        source="name",
        rules=(
            required("Product name is required."),
            min_length(
                NAME_MIN_LENGTH,
                f"Product name must be at least {NAME_MIN_LENGTH} characters long.",
            ),
            max_length(
                NAME_MAX_LENGTH,
                f"Product name must not exceed {NAME_MAX_LENGTH} characters.",
            ),
        ),
    ),
)

LIST_QUERY_RULES = (
    FieldRules(
        field="SortBy",
        source="sort_by",
        rules=(one_of(SORT_FIELDS, "sortBy must be either 'name' or 'sku'."),),
    ),
    FieldRules(
        field="SortDirection",
        source="sort_direction",
        rules=(
            one_of(SORT_DIRECTIONS, "sortDirection must be either 'asc' or 'desc'."),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class _ProductNameRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str

    @classmethod
    def from_payload(cls, payload: Any) -> Self:
        """Validate a decoded JSON body and build the DTO.

        Raises:
            MalformedInput: if the body is not an object or ``name`` is
                not a string.
            RequestValidationError: if ``name`` breaks a rule.
        """
        if not isinstance(payload, Mapping):
            raise MalformedInput()
        name = payload.get("name")
        if name is not None and not isinstance(name, str):
            raise MalformedInput()

        errors = validate({"name": name}, PRODUCT_NAME_RULES)
        if errors:
            raise RequestValidationError(errors)
        return cls(name=name)


class CreateProductRequest(_ProductNameRequest):
    """Immutable DTO for ``POST /products``."""


class UpdateProductRequest(_ProductNameRequest):
    """Immutable DTO for ``PUT /products/{id}``."""


def _parse_int(raw: str | None, default: int) -> int:
    """Parse a paging value; out-of-range values count as unparsable."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if abs(value) > MAX_PAGING_VALUE:
        return default
    return value


class ListQueryParams(BaseModel):
    """Immutable DTO for the product list query string.

    ``limit`` and ``offset`` never fail validation: unparsable values, and
    values beyond ``MAX_PAGING_VALUE`` in magnitude, fall back to their
    defaults.  A non-positive ``limit`` is kept as-is and
    yields an empty page.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    sort_by: Literal["name", "sku"] = "name"
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: int = 10
    offset: int = 0

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> ListQueryParams:
        """Build the DTO from raw query parameters.

        Raises:
            RequestValidationError: for an unsupported ``sortBy`` or
                ``sortDirection``.
        """
        values = {
            "sort_by": params.get("sortBy") or "name",
            "sort_direction": params.get("sortDirection") or "asc",
        }
        errors = validate(values, LIST_QUERY_RULES)
        if errors:
            raise RequestValidationError(errors)

        return cls(
            search=params.get("search", ""),
            sort_by=values["sort_by"],
            sort_direction=values["sort_direction"],
            limit=_parse_int(params.get("limit"), settings.PRODUCT_LIST_DEFAULT_LIMIT),
            offset=max(_parse_int(params.get("offset"), 0), 0),
        )


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    sku: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product entity."""
        return cls(
            id=product.id,
            name=product.name,
            sku=product.sku,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
