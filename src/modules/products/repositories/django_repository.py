"""Django ORM implementation of the catalog repositories.

Satisfies ``IProductRepository`` and ``IVariationRepository`` using
Django's QuerySet API.  Error handling follows the Null Object pattern:
methods return ``None`` instead of raising HTTP-level exceptions. The
Service Layer decides how to translate a missing entity into an API
response.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from django.db import transaction

from modules.products.models import Product, Variation
from modules.products.repositories.interfaces import (
    IProductRepository,
    IVariationRepository,
)

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product (with its variations) by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return Product.objects.prefetch_related("variations").filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside ``transaction.atomic``.  Variations are
        prefetched so the caller can iterate over them while the row is
        locked.
        """
        try:
            return (
                Product.objects.select_for_update()
                .prefetch_related("variations")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError):
            return None

    def list(self) -> List[Product]:
        """List every product with its variations, ordered by id."""
        return list(Product.objects.prefetch_related("variations").all())

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=entity.id,
            available=entity.available,
        )
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a product and, by cascade, its variations.

        Returns ``True`` if the product was found and deleted,
        ``False`` if no product exists with the given ID.
        """
        deleted, by_model = Product.objects.filter(id=id).delete()
        if not deleted:
            return False
        logger.info(
            "product.deleted",
            product_id=id,
            variations_deleted=by_model.get(Variation._meta.label, 0),
        )
        return True

    def exists(self, id: int) -> bool:
        try:
            return Product.objects.filter(id=id).exists()
        except (TypeError, ValueError):
            return False


class VariationDjangoRepository(IVariationRepository):
    """Concrete Variation repository backed by Django ORM."""

    def get_by_product_and_id(
        self, product_id: int, variation_id: int
    ) -> Optional[Variation]:
        try:
            return Variation.objects.filter(
                product_id=product_id, id=variation_id
            ).first()
        except (TypeError, ValueError):
            return None

    @transaction.atomic
    def save(self, entity: Variation) -> Variation:
        """Persist (create or update) a variation."""
        entity.save()
        logger.info(
            "variation.saved",
            product_id=entity.product_id,
            variation_id=entity.id,
            available=entity.available,
        )
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        deleted, _ = Variation.objects.filter(id=id).delete()
        return bool(deleted)
