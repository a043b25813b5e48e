"""Integration tests for Variation endpoints.

Covers:
- POST   /api/v1/products/{id}/variation
- PUT    /api/v1/products/{id}/variation/{variation_id}
- DELETE /api/v1/products/{id}/variation/{variation_id}
- Ownership scoping (a variation is only reachable through its product).
- Availability rule on variation create/update (409).
"""

from __future__ import annotations

import pytest

from modules.products.models import Variation

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/products"


def _variation_url(product_id: int, variation_id: int | None = None) -> str:
    url = f"{BASE_URL}/{product_id}/variation"
    if variation_id is not None:
        url = f"{url}/{variation_id}"
    return url


def _variation_payload(**overrides) -> dict:
    payload = {
        "size_name": "XL",
        "description": "Extra large",
        "price": "24.90",
        "available": True,
    }
    payload.update(overrides)
    return payload


# ===========================================================================
# CREATE
# ===========================================================================


class TestVariationCreate:
    def test_create_returns_full_product(self, api_client, make_product):
        product = make_product(variations=[("S", True)])

        response = api_client.post(
            _variation_url(product.id), _variation_payload(), format="json"
        )

        assert response.status_code == 200
        assert response.data["id"] == product.id
        assert [v["size_name"] for v in response.data["variations"]] == ["S", "XL"]

    def test_create_under_missing_product_returns_404(self, api_client):
        response = api_client.post(
            _variation_url(999999), _variation_payload(), format="json"
        )

        assert response.status_code == 404
        assert response.data["errors"][0]["code"] == "product_not_found"

    def test_available_variation_under_unavailable_product_returns_409(
        self, api_client, make_product, assert_invariant
    ):
        product = make_product(available=False, variations=[("S", False)])

        response = api_client.post(
            _variation_url(product.id), _variation_payload(available=True), format="json"
        )

        assert response.status_code == 409
        assert product.variations.count() == 1
        assert_invariant(product.id)

    def test_unavailable_variation_under_unavailable_product(
        self, api_client, make_product
    ):
        product = make_product(available=False, variations=[])

        response = api_client.post(
            _variation_url(product.id),
            _variation_payload(available=False),
            format="json",
        )

        assert response.status_code == 200
        assert response.data["variations"][0]["available"] is False

    @pytest.mark.parametrize("field", ["size_name", "description", "price", "available"])
    def test_missing_field_returns_400(self, api_client, make_product, field):
        product = make_product()
        payload = _variation_payload()
        del payload[field]

        response = api_client.post(_variation_url(product.id), payload, format="json")

        assert response.status_code == 400
        assert response.data["type"] == "validation_error"

    def test_negative_price_returns_400(self, api_client, make_product):
        product = make_product()
        response = api_client.post(
            _variation_url(product.id), _variation_payload(price="-0.01"), format="json"
        )
        assert response.status_code == 400


# ===========================================================================
# UPDATE
# ===========================================================================


class TestVariationUpdate:
    def test_partial_update(self, api_client, make_product):
        product = make_product(variations=[("M", True)])
        variation = product.variations.get()

        response = api_client.put(
            _variation_url(product.id, variation.id),
            {"price": "9.90"},
            format="json",
        )

        assert response.status_code == 200
        body = response.data["variations"][0]
        assert body["price"] == "9.90"
        assert body["size_name"] == "M"
        assert body["available"] is True

    def test_make_available_under_unavailable_product_returns_409(
        self, api_client, make_product, assert_invariant
    ):
        product = make_product(available=False, variations=[("M", False)])
        variation = product.variations.get()

        response = api_client.put(
            _variation_url(product.id, variation.id),
            {"available": True, "size_name": "L"},
            format="json",
        )

        assert response.status_code == 409
        variation.refresh_from_db()
        assert variation.available is False
        assert variation.size_name == "M"
        assert_invariant(product.id)

    def test_make_unavailable_is_always_allowed(self, api_client, make_product):
        product = make_product(variations=[("M", True)])
        variation = product.variations.get()

        response = api_client.put(
            _variation_url(product.id, variation.id),
            {"available": False},
            format="json",
        )

        assert response.status_code == 200
        variation.refresh_from_db()
        assert variation.available is False

    def test_variation_of_another_product_returns_404(self, api_client, make_product):
        owner = make_product(name="Owner")
        other = make_product(name="Other")
        variation = owner.variations.get()

        response = api_client.put(
            _variation_url(other.id, variation.id),
            {"size_name": "L"},
            format="json",
        )

        assert response.status_code == 404
        assert response.data["errors"][0]["code"] == "variation_not_found"

    def test_missing_product_returns_product_not_found(self, api_client):
        response = api_client.put(
            _variation_url(999999, 1), {"size_name": "L"}, format="json"
        )

        assert response.status_code == 404
        assert response.data["errors"][0]["code"] == "product_not_found"


# ===========================================================================
# DELETE
# ===========================================================================


class TestVariationDelete:
    def test_delete_only_that_variation(self, api_client, make_product):
        product = make_product(variations=[("S", True), ("M", True)])
        small = product.variations.get(size_name="S")

        response = api_client.delete(_variation_url(product.id, small.id))

        assert response.status_code == 204
        remaining = api_client.get(f"{BASE_URL}/{product.id}").data
        assert [v["size_name"] for v in remaining["variations"]] == ["M"]

    def test_delete_under_wrong_product_returns_404(self, api_client, make_product):
        owner = make_product(name="Owner")
        other = make_product(name="Other")
        variation = owner.variations.get()

        response = api_client.delete(_variation_url(other.id, variation.id))

        assert response.status_code == 404
        assert response.data["errors"][0]["code"] == "variation_not_found"
        assert Variation.objects.filter(id=variation.id).exists()

    def test_delete_missing_variation_returns_404(self, api_client, make_product):
        product = make_product()
        response = api_client.delete(_variation_url(product.id, 999999))
        assert response.status_code == 404
