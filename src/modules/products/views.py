"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  The view is
the composition root: it wires ``ProductDjangoRepository`` (bound to the
configured database alias) into a fresh ``ProductService`` per request.

Domain exceptions are translated by ``exc.kind``:

- ``MALFORMED_INPUT`` -> 400
- ``VALIDATION`` -> 422, and ``EMPTY_NAME`` raised while creating
- ``NOT_FOUND`` -> 404

An ``EMPTY_NAME`` outside creation can only come from a stored row with
an empty name and is treated as an internal failure.

Anything else is logged with the failing action and answered with a
generic 500 message; internal error text never reaches the client.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.parsers import JSONParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import DomainException, ErrorKind
from modules.core.validation import MalformedInput
from modules.products.dtos import (
    CreateProductRequest,
    ListQueryParams,
    ProductOutputDTO,
    UpdateProductRequest,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ErrorSerializer,
    ProductListSerializer,
    ProductNameInputSerializer,
    ProductSerializer,
)
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)

MAX_PRODUCT_ID = 2**32 - 1

INVALID_ID_MESSAGE = "invalid product ID"
CREATE_FAILED_MESSAGE = "failed to create product"
RETRIEVE_FAILED_MESSAGE = "failed to retrieve product"
UPDATE_FAILED_MESSAGE = "failed to update product"
EMPTY_NAME_ERRORS = {"Name": "Product name is required."}

_ERROR_RESPONSES = {
    400: ErrorSerializer,
    404: ErrorSerializer,
    422: ErrorSerializer,
    500: ErrorSerializer,
}


def parse_product_id(raw: str | None) -> int | None:
    """Return the id for a decimal string in ``[1, 2**32 - 1]``, else ``None``."""
    if not raw or not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    if value < 1 or value > MAX_PRODUCT_ID:
        return None
    return value


def _errors(body: Any, status_code: int) -> Response:
    return Response({"errors": body}, status=status_code)


class ProductViewSet(GenericViewSet):
    """ViewSet for the Product resource (create, retrieve, rename, list).

    Does **not** extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    parser_classes = [JSONParser]
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = self.build_service()

    @staticmethod
    def build_service() -> ProductService:
        return ProductService(
            repository=ProductDjangoRepository(using=settings.PRODUCTS_DB_ALIAS)
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read_body(request: Request) -> Any:
        try:
            return request.data
        except (ParseError, UnsupportedMediaType) as exc:
            raise MalformedInput() from exc

    def _failure(
        self, exc: Exception, action: str, message: str, **context: Any
    ) -> Response:
        if isinstance(exc, DomainException):
            if exc.kind == ErrorKind.MALFORMED_INPUT:
                return _errors(exc.message, status.HTTP_400_BAD_REQUEST)
            if exc.kind == ErrorKind.VALIDATION:
                return _errors(exc.errors, status.HTTP_422_UNPROCESSABLE_ENTITY)
            if exc.kind == ErrorKind.EMPTY_NAME and action == "create":
                return _errors(EMPTY_NAME_ERRORS, status.HTTP_422_UNPROCESSABLE_ENTITY)
            if exc.kind == ErrorKind.NOT_FOUND:
                return _errors(exc.message, status.HTTP_404_NOT_FOUND)

        logger.exception(f"product.{action}_failed", **context)
        return _errors(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[
            OpenApiParameter("search", str, description="Substring of name or SKU."),
            OpenApiParameter("sortBy", str, enum=["name", "sku"]),
            OpenApiParameter("sortDirection", str, enum=["asc", "desc"]),
            OpenApiParameter("limit", int),
            OpenApiParameter("offset", int),
        ],
        responses={200: ProductListSerializer, **_ERROR_RESPONSES},
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/products"""
        try:
            params = ListQueryParams.from_query(request.query_params)
            products = self._service.list_products(
                search=params.search,
                sort_by=params.sort_by,
                sort_direction=params.sort_direction,
                limit=params.limit,
                offset=params.offset,
            )
        except Exception as exc:
            return self._failure(exc, "list", RETRIEVE_FAILED_MESSAGE)

        return Response(
            {
                "products": [
                    ProductOutputDTO.from_entity(p).model_dump(mode="json")
                    for p in products
                ],
                "total": len(products),
            }
        )

    @extend_schema(responses={200: ProductSerializer, **_ERROR_RESPONSES})
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}"""
        product_id = parse_product_id(pk)
        if product_id is None:
            return _errors(INVALID_ID_MESSAGE, status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.get_product_by_id(product_id)
        except Exception as exc:
            return self._failure(
                exc, "retrieve", RETRIEVE_FAILED_MESSAGE, product_id=product_id
            )

        return Response(ProductOutputDTO.from_entity(product).model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @extend_schema(
        request=ProductNameInputSerializer,
        responses={201: ProductSerializer, **_ERROR_RESPONSES},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/products"""
        try:
            dto = CreateProductRequest.from_payload(self._read_body(request))
            product = self._service.create_product(dto.name)
        except Exception as exc:
            return self._failure(exc, "create", CREATE_FAILED_MESSAGE)

        return Response(
            ProductOutputDTO.from_entity(product).model_dump(mode="json"),
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=ProductNameInputSerializer,
        responses={200: ProductSerializer, **_ERROR_RESPONSES},
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}"""
        product_id = parse_product_id(pk)
        if product_id is None:
            return _errors(INVALID_ID_MESSAGE, status.HTTP_400_BAD_REQUEST)

        try:
            dto = UpdateProductRequest.from_payload(self._read_body(request))
            product = self._service.update_product_name(product_id, dto.name)
        except Exception as exc:
            return self._failure(
                exc, "update", UPDATE_FAILED_MESSAGE, product_id=product_id
            )

        return Response(ProductOutputDTO.from_entity(product).model_dump(mode="json"))
