"""Integration tests for Product API endpoints.

Covers:
- Create / retrieve / rename / list via /api/v1/products.
- Error mapping: 400 malformed or invalid id, 404, 422, 500.
- List query handling: search, sorting, paging, invalid sort values.
"""

from __future__ import annotations

import re
from unittest.mock import MagicMock, patch

import pytest

from modules.products.models import ProductRecord
from modules.products.views import ProductViewSet

pytestmark = pytest.mark.integration

PRODUCTS_URL = "/api/v1/products"
SKU_PATTERN = re.compile(r"^SKU-WID-\d{5}$")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def created_product(api_client):
    """A product created through the API, as returned by it."""
    response = api_client.post(PRODUCTS_URL, {"name": "Widget"}, format="json")
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def failing_service():
    """Patch the view's service with a mock whose every call explodes."""
    service = MagicMock()
    error = RuntimeError("connection refused at db.internal:5432")
    service.create_product.side_effect = error
    service.get_product_by_id.side_effect = error
    service.update_product_name.side_effect = error
    service.list_products.side_effect = error
    with patch.object(ProductViewSet, "build_service", return_value=service):
        yield service


def _seed(*names: str) -> None:
    for i, name in enumerate(names, start=1):
        ProductRecord.objects.create(name=name, sku=f"SKU-{name[:3].upper()}-{i:05d}")


# ===========================================================================
# Create
# ===========================================================================


class TestCreateProduct:
    def test_create_returns_201_with_product(self, api_client):
        response = api_client.post(PRODUCTS_URL, {"name": "Widget"}, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["name"] == "Widget"
        assert SKU_PATTERN.match(data["sku"])
        assert data["created_at"]
        assert data["updated_at"]
        assert ProductRecord.objects.filter(pk=data["id"]).exists()

    def test_new_product_has_equal_timestamps(self, api_client):
        for _ in range(5):
            data = api_client.post(
                PRODUCTS_URL, {"name": "Widget"}, format="json"
            ).json()
            assert data["created_at"] == data["updated_at"]

    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": None}])
    def test_missing_name_returns_422(self, api_client, payload):
        response = api_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 422
        assert response.json() == {"errors": {"Name": "Product name is required."}}

    def test_short_name_returns_422(self, api_client):
        response = api_client.post(PRODUCTS_URL, {"name": "A"}, format="json")

        assert response.status_code == 422
        assert response.json()["errors"]["Name"] == (
            "Product name must be at least 2 characters long."
        )

    def test_long_name_returns_422(self, api_client):
        response = api_client.post(PRODUCTS_URL, {"name": "A" * 300}, format="json")

        assert response.status_code == 422
        assert response.json()["errors"]["Name"] == (
            "Product name must not exceed 255 characters."
        )
        assert not ProductRecord.objects.exists()

    @pytest.mark.parametrize("body", ["{bad json", '["Widget"]', '{"name": 5}'])
    def test_malformed_body_returns_400(self, api_client, body):
        response = api_client.post(
            PRODUCTS_URL, data=body, content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"errors": "invalid JSON format"}

    def test_internal_failure_returns_generic_500(self, api_client, failing_service):
        response = api_client.post(PRODUCTS_URL, {"name": "Widget"}, format="json")

        assert response.status_code == 500
        assert response.json() == {"errors": "failed to create product"}
        assert "db.internal" not in response.content.decode()


# ===========================================================================
# Retrieve
# ===========================================================================


class TestRetrieveProduct:
    def test_retrieve_returns_product(self, api_client, created_product):
        response = api_client.get(f"{PRODUCTS_URL}/{created_product['id']}")

        assert response.status_code == 200
        assert response.json() == created_product

    def test_missing_product_returns_404(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}/999999")

        assert response.status_code == 404
        assert response.json() == {"errors": "product not found"}

    @pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "4294967296", "1e3"])
    def test_invalid_id_returns_400(self, api_client, raw_id):
        response = api_client.get(f"{PRODUCTS_URL}/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"errors": "invalid product ID"}

    def test_largest_valid_id_is_accepted(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}/4294967295")
        assert response.status_code == 404

    def test_corrupt_row_returns_500(self, api_client):
        record = ProductRecord.objects.create(name="", sku="SKU-X-00001")

        response = api_client.get(f"{PRODUCTS_URL}/{record.id}")

        assert response.status_code == 500
        assert response.json() == {"errors": "failed to retrieve product"}

    def test_internal_failure_returns_generic_500(self, api_client, failing_service):
        response = api_client.get(f"{PRODUCTS_URL}/1")

        assert response.status_code == 500
        assert response.json() == {"errors": "failed to retrieve product"}


# ===========================================================================
# Update
# ===========================================================================


class TestUpdateProduct:
    def test_rename_keeps_sku_and_created_at(self, api_client, created_product):
        url = f"{PRODUCTS_URL}/{created_product['id']}"

        response = api_client.put(url, {"name": "Gadget"}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created_product["id"]
        assert data["name"] == "Gadget"
        assert data["sku"] == created_product["sku"]
        assert data["created_at"] == created_product["created_at"]
        assert api_client.get(url).json()["name"] == "Gadget"

    def test_empty_name_returns_422(self, api_client, created_product):
        response = api_client.put(
            f"{PRODUCTS_URL}/{created_product['id']}", {"name": ""}, format="json"
        )

        assert response.status_code == 422
        assert response.json() == {"errors": {"Name": "Product name is required."}}

    def test_missing_product_returns_404(self, api_client):
        response = api_client.put(
            f"{PRODUCTS_URL}/999999", {"name": "Gadget"}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"errors": "product not found"}

    def test_invalid_id_returns_400(self, api_client):
        response = api_client.put(f"{PRODUCTS_URL}/abc", {"name": "Gadget"}, format="json")

        assert response.status_code == 400
        assert response.json() == {"errors": "invalid product ID"}

    def test_malformed_body_returns_400(self, api_client, created_product):
        response = api_client.put(
            f"{PRODUCTS_URL}/{created_product['id']}",
            data="{nope",
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json() == {"errors": "invalid JSON format"}

    def test_partial_update_not_allowed(self, api_client, created_product):
        response = api_client.patch(
            f"{PRODUCTS_URL}/{created_product['id']}", {"name": "Gadget"}, format="json"
        )
        assert response.status_code == 405

    def test_internal_failure_returns_generic_500(self, api_client, failing_service):
        response = api_client.put(f"{PRODUCTS_URL}/1", {"name": "Gadget"}, format="json")

        assert response.status_code == 500
        assert response.json() == {"errors": "failed to update product"}


# ===========================================================================
# List
# ===========================================================================


class TestListProducts:
    def test_list_defaults(self, api_client):
        _seed("Gamma", "Alpha", "Beta")

        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [p["name"] for p in data["products"]] == ["Alpha", "Beta", "Gamma"]

    def test_empty_store(self, api_client):
        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 200
        assert response.json() == {"products": [], "total": 0}

    def test_sort_descending(self, api_client):
        _seed("Gamma", "Alpha", "Beta")

        response = api_client.get(PRODUCTS_URL, {"sortDirection": "desc"})

        assert [p["name"] for p in response.json()["products"]] == [
            "Gamma",
            "Beta",
            "Alpha",
        ]

    def test_search_and_paging(self, api_client):
        _seed("Widget One", "Widget Two", "Widget Three", "Gadget")

        response = api_client.get(
            PRODUCTS_URL, {"search": "widget", "limit": "2", "offset": "1"}
        )

        data = response.json()
        assert data["total"] == 2
        assert [p["name"] for p in data["products"]] == ["Widget Three", "Widget Two"]

    def test_total_is_page_size(self, api_client):
        _seed("Alpha", "Beta", "Gamma")

        data = api_client.get(PRODUCTS_URL, {"limit": "1"}).json()

        assert data["total"] == 1
        assert len(data["products"]) == 1

    def test_zero_limit_returns_empty_list(self, api_client):
        _seed("Alpha")

        response = api_client.get(PRODUCTS_URL, {"limit": "0"})

        assert response.status_code == 200
        assert response.json() == {"products": [], "total": 0}

    def test_unparsable_paging_uses_defaults(self, api_client):
        _seed("Alpha", "Beta")

        data = api_client.get(PRODUCTS_URL, {"limit": "lots", "offset": "x"}).json()

        assert data["total"] == 2

    @pytest.mark.parametrize("param", ["limit", "offset"])
    def test_oversized_paging_uses_defaults(self, api_client, param):
        _seed("Alpha", "Beta")

        response = api_client.get(PRODUCTS_URL, {param: "99999999999999999999"})

        assert response.status_code == 200
        assert response.json()["total"] == 2

    def test_largest_paging_values_do_not_overflow(self, api_client):
        _seed("Alpha")

        response = api_client.get(
            PRODUCTS_URL, {"limit": "2147483647", "offset": "2147483647"}
        )

        assert response.status_code == 200
        assert response.json() == {"products": [], "total": 0}

    def test_invalid_sort_by_returns_422(self, api_client):
        response = api_client.get(PRODUCTS_URL, {"sortBy": "price"})

        assert response.status_code == 422
        assert response.json() == {
            "errors": {"SortBy": "sortBy must be either 'name' or 'sku'."}
        }

    def test_invalid_sort_direction_returns_422(self, api_client):
        response = api_client.get(PRODUCTS_URL, {"sortDirection": "sideways"})

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "SortDirection": "sortDirection must be either 'asc' or 'desc'."
        }

    def test_internal_failure_returns_generic_500(self, api_client, failing_service):
        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 500
        assert response.json() == {"errors": "failed to retrieve product"}


# ===========================================================================
# Headers
# ===========================================================================


class TestResponseHeaders:
    def test_product_responses_carry_request_id(self, api_client_with_correlation):
        client, cid = api_client_with_correlation

        response = client.get(PRODUCTS_URL)

        assert response["X-Request-ID"] == cid

    def test_error_responses_carry_request_id(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}/abc")

        assert response.status_code == 400
        assert response["X-Request-ID"]
