"""Catalog DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.models import Product, Variation

PRICE_FIELD_KWARGS = {
    "max_digits": 10,
    "decimal_places": 2,
    "min_value": Decimal("0"),
}

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateVariationSerializer(serializers.Serializer):
    """Validates a single variation in a creation request."""

    size_name = serializers.CharField(max_length=64)
    description = serializers.CharField()
    price = serializers.DecimalField(**PRICE_FIELD_KWARGS)
    available = serializers.BooleanField()


class CreateProductSerializer(serializers.Serializer):
    """Validates the product creation request payload.

    ``category`` is only checked for presence here; the service matches
    it against the fixed category set.
    """

    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    category = serializers.CharField(max_length=20)
    variations = CreateVariationSerializer(many=True, allow_empty=False)
    available = serializers.BooleanField()


class UpdateProductSerializer(serializers.Serializer):
    """Validates a partial product update; every field is optional."""

    name = serializers.CharField(max_length=255, required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_null=True)
    available = serializers.BooleanField(required=False, allow_null=True)


class UpdateVariationSerializer(serializers.Serializer):
    """Validates a partial variation update; every field is optional."""

    size_name = serializers.CharField(max_length=64, required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_null=True)
    price = serializers.DecimalField(
        required=False, allow_null=True, **PRICE_FIELD_KWARGS
    )
    available = serializers.BooleanField(required=False, allow_null=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class VariationSerializer(serializers.ModelSerializer):
    """Read serializer for a variation (no back-reference to the product)."""

    class Meta:
        model = Variation
        fields = [
            "id",
            "size_name",
            "description",
            "price",
            "available",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for products with nested variations."""

    variations = VariationSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "variations",
            "available",
        ]
        read_only_fields = fields
