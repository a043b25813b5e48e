from __future__ import annotations

from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product, Variation


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_product():
    """Factory persisting a product with ``(size_name, available)`` variations."""

    def _make(
        name: str = "Classic Tee",
        available: bool = True,
        variations=(("M", True),),
        category: str = "SHIRT",
        **overrides,
    ) -> Product:
        product = Product.objects.create(
            name=name,
            description=overrides.pop("description", "Cotton crew-neck t-shirt"),
            category=category,
            available=available,
            **overrides,
        )
        for size_name, variation_available in variations:
            Variation.objects.create(
                product=product,
                size_name=size_name,
                description=f"Size {size_name}",
                price=Decimal("19.90"),
                available=variation_available,
            )
        return product

    return _make


@pytest.fixture()
def assert_invariant():
    """Checker: an unavailable product must not own any available variation."""

    def _check(product_id: int) -> None:
        product = Product.objects.prefetch_related("variations").get(id=product_id)
        assert product.is_consistent(), (
            f"Product {product_id} is unavailable but has available variations"
        )

    return _check
