"""Integration tests for catalog write atomicity.

A storage failure midway through a command must leave no partial write:
neither a product without its full set of variations, nor a product
marked unavailable while some variations were never cascaded.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from rest_framework.test import APIClient

from modules.products.models import Product, Variation
from modules.products.repositories.django_repository import VariationDjangoRepository

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/products"


@pytest.fixture()
def raw_client():
    """APIClient that returns 500 responses instead of re-raising."""
    return APIClient(raise_request_exception=False)


@pytest.fixture()
def fail_second_variation_save():
    """Make the second ``VariationDjangoRepository.save`` call fail."""
    real_save = VariationDjangoRepository.save
    calls = []

    def _save(repo, variation):
        calls.append(variation)
        if len(calls) == 2:
            raise DatabaseError("simulated write failure")
        return real_save(repo, variation)

    with patch.object(
        VariationDjangoRepository, "save", autospec=True, side_effect=_save
    ):
        yield calls


def _payload() -> dict:
    return {
        "name": "Classic Tee",
        "description": "Cotton crew-neck t-shirt",
        "category": "SHIRT",
        "available": True,
        "variations": [
            {"size_name": "S", "description": "Small", "price": "19.90", "available": True},
            {"size_name": "M", "description": "Medium", "price": "21.90", "available": True},
        ],
    }


class TestCreateAtomicity:
    def test_failed_variation_write_rolls_back_product(
        self, raw_client, fail_second_variation_save
    ):
        response = raw_client.post(BASE_URL, _payload(), format="json")

        assert response.status_code == 500
        assert len(fail_second_variation_save) == 2
        assert response.json()["type"] == "server_error"
        assert Product.objects.count() == 0
        assert Variation.objects.count() == 0


class TestCascadeAtomicity:
    def test_failed_cascade_rolls_back_whole_update(
        self, raw_client, make_product, fail_second_variation_save
    ):
        product = make_product(variations=[("S", True), ("M", True)])

        response = raw_client.patch(
            f"{BASE_URL}/{product.id}", {"available": False}, format="json"
        )

        assert response.status_code == 500
        product.refresh_from_db()
        assert product.available is True
        assert product.variations.filter(available=True).count() == 2
