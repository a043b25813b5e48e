"""Catalog repository interfaces.

``IProductRepository`` extends ``IRepository[Product]`` with the
row-locking read used by every catalog command.  ``IVariationRepository``
resolves variations only through their owning product (composite key),
so a variation can never be addressed by its id alone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product, Variation


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional["Product"]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Used by the catalog service so lookup, mutation and save run as
        one unit of work.  Returns ``None`` if the product does not exist.
        """


class IVariationRepository(ABC):
    """Repository contract for variations, scoped to their product."""

    @abstractmethod
    def get_by_product_and_id(
        self, product_id: int, variation_id: int
    ) -> Optional["Variation"]:
        """Retrieve a variation only if it belongs to ``product_id``."""

    @abstractmethod
    def save(self, entity: "Variation") -> "Variation":
        """Persist (create or update) a variation."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove a variation by ID."""
