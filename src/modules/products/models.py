"""Product and Variation models.

Business rules implemented:
- RN-CAT-001: Category belongs to a fixed closed set (``Category``).
- RN-CAT-002: Variation price cannot be negative.
- RN-CAT-003: An unavailable product cannot have available variations
  (enforced at service layer; ``has_available_variations`` exposes the check).
- RN-CAT-004: A product owns its variations; deleting the product
  deletes them (``on_delete=CASCADE``).
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Category(models.TextChoices):
    SHIRT = "SHIRT", "Shirt"
    PANTS = "PANTS", "Pants"
    SHORTS = "SHORTS", "Shorts"
    DRESS = "DRESS", "Dress"
    SHOES = "SHOES", "Shoes"
    ACCESSORIES = "ACCESSORIES", "Accessories"

    @classmethod
    def parse(cls, value: str) -> Category:
        """Match ``value`` against the enum names, ignoring case.

        Raises ``ValueError`` for anything outside the closed set.
        """
        normalized = (value or "").strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(cls.values)
            raise ValueError(
                f"Invalid category '{value}'. Allowed values: {allowed}."
            ) from None


class Product(BaseModel):
    """Product aggregate root.

    Variations are reachable through the ``variations`` reverse relation
    and are always returned in creation (id) order.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices)
    available = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
        ]

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def has_available_variations(self) -> bool:
        return any(variation.available for variation in self.variations.all())

    def is_consistent(self) -> bool:
        """``False`` when the product is unavailable but a variation is not."""
        return self.available or not self.has_available_variations()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": "Name must not be blank."})
        if self.category and self.category not in Category.values:
            raise ValidationError({"category": f"Invalid category '{self.category}'."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
                category=self.category,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"


class Variation(BaseModel):
    """A purchasable form of a product (e.g. a size) with its own price."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variations",
    )
    size_name = models.CharField(max_length=64)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    available = models.BooleanField(default=True)

    class Meta:
        db_table = "product_variations"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="product_variations_price_non_negative",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.size_name is not None and not self.size_name.strip():
            raise ValidationError({"size_name": "Size name must not be blank."})
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})

    def __str__(self) -> str:
        return f"{self.product_id}/{self.size_name}"
