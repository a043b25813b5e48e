"""Catalog service layer (Use Cases).

Orchestrates business logic for the Product aggregate and its
variations, delegating persistence to the injected repositories.
All write operations are atomic and lock the product row first, so a
lookup, its mutation and the save form one unit of work.

Business rules enforced here:
- RN-CAT-001: Category must be one of the fixed catalog categories.
- RN-CAT-003: An unavailable product cannot have available variations.
  Creation paths reject conflicting input; turning a product unavailable
  repairs its variations instead.
- RN-CAT-005: Variations are addressed through their owning product.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.products.exceptions import (
    AvailabilityConflict,
    InvalidCategory,
    ProductNotFound,
    VariationNotFound,
)
from modules.products.models import Category, Product, Variation

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        CreateVariationDTO,
        UpdateProductDTO,
        UpdateVariationDTO,
    )
    from modules.products.repositories.interfaces import (
        IProductRepository,
        IVariationRepository,
    )

logger = structlog.get_logger(__name__)

UNAVAILABLE_PRODUCT_MESSAGE = (
    "An unavailable product cannot have available variations."
)


class CatalogService:
    """Application service for catalog use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        variation_repository: IVariationRepository,
    ) -> None:
        self._product_repo = product_repository
        self._variation_repo = variation_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product together with its initial variations.

        Raises:
            InvalidCategory: category is outside the fixed set (RN-CAT-001).
            AvailabilityConflict: product is unavailable but a variation
                is available (RN-CAT-003).  Nothing is written.
        """
        log = logger.bind(product_name=dto.name)

        try:
            category = Category.parse(dto.category)
        except ValueError as exc:
            log.warning("product.invalid_category", category=dto.category)
            raise InvalidCategory(str(exc)) from exc

        if not dto.available and dto.has_available_variations():
            log.warning("product.availability_conflict")
            raise AvailabilityConflict(UNAVAILABLE_PRODUCT_MESSAGE)

        product = self._product_repo.save(
            Product(
                name=dto.name,
                description=dto.description,
                category=category,
                available=dto.available,
            )
        )
        for variation_dto in dto.variations:
            self._variation_repo.save(
                Variation(product=product, **variation_dto.model_dump())
            )

        log.info(
            "product.created",
            product_id=product.id,
            variations=len(dto.variations),
        )
        return product

    @transaction.atomic
    def create_variation(self, product_id: int, dto: CreateVariationDTO) -> Product:
        """Append a new variation to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            AvailabilityConflict: the product is unavailable and the new
                variation is available (RN-CAT-003).
        """
        product = self._get_locked(product_id)
        log = logger.bind(product_id=product_id)

        if dto.available and not product.available:
            log.warning("variation.availability_conflict")
            raise AvailabilityConflict(UNAVAILABLE_PRODUCT_MESSAGE)

        variation = self._variation_repo.save(
            Variation(product=product, **dto.model_dump())
        )
        log.info("variation.created", variation_id=variation.id)
        return self._product_repo.get_by_id(product_id)

    @transaction.atomic
    def update_product(self, product_id: int, dto: UpdateProductDTO) -> Product:
        """Apply a partial update to a product.

        Only fields the caller supplied are touched.  Setting
        ``available`` to ``False`` forces every variation unavailable.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_locked(product_id)
        log = logger.bind(product_id=product_id)

        changes = dto.changes()
        for field, value in changes.items():
            setattr(product, field, value)
        product = self._product_repo.save(product)

        if changes.get("available") is False:
            cascaded = 0
            for variation in product.variations.all():
                if variation.available:
                    variation.available = False
                    self._variation_repo.save(variation)
                    cascaded += 1
            log.info("product.availability_cascaded", variations=cascaded)

        log.info("product.updated", fields=sorted(changes))
        return product

    @transaction.atomic
    def update_variation(
        self, product_id: int, variation_id: int, dto: UpdateVariationDTO
    ) -> Product:
        """Apply a partial update to one of a product's variations.

        Raises:
            ProductNotFound: if the product does not exist.
            VariationNotFound: if the variation is not part of the product.
            AvailabilityConflict: making the variation available while the
                product is unavailable (RN-CAT-003).  The variation is left
                unchanged.
        """
        product = self._get_locked(product_id)
        log = logger.bind(product_id=product_id, variation_id=variation_id)

        variation = next(
            (v for v in product.variations.all() if v.id == variation_id),
            None,
        )
        if variation is None:
            raise VariationNotFound(
                f"Variation {variation_id} not found for product {product_id}."
            )

        changes = dto.changes()
        if changes.get("available") is True and not product.available:
            log.warning("variation.availability_conflict")
            raise AvailabilityConflict(UNAVAILABLE_PRODUCT_MESSAGE)

        for field, value in changes.items():
            setattr(variation, field, value)
        self._variation_repo.save(variation)

        log.info("variation.updated", fields=sorted(changes))
        return product

    @transaction.atomic
    def delete_product(self, product_id: int) -> None:
        """Delete a product and, by cascade, all of its variations.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._product_repo.exists(product_id):
            raise ProductNotFound(f"Product {product_id} not found.")
        self._product_repo.delete(product_id)
        logger.info("product.deleted", product_id=product_id)

    @transaction.atomic
    def delete_variation(self, product_id: int, variation_id: int) -> None:
        """Delete a single variation, resolved through its product.

        Raises:
            VariationNotFound: no variation ``variation_id`` exists under
                ``product_id``.
        """
        variation = self._variation_repo.get_by_product_and_id(
            product_id, variation_id
        )
        if not variation:
            raise VariationNotFound(
                f"Variation {variation_id} not found for product {product_id}."
            )
        self._variation_repo.delete(variation.id)
        logger.info(
            "variation.deleted",
            product_id=product_id,
            variation_id=variation_id,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product with its variations."""
        return self._product_repo.list()

    def get_product(self, product_id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._product_repo.get_by_id(product_id)
        if not product:
            raise ProductNotFound(f"Product {product_id} not found.")
        logger.info("product.retrieved", product_id=product_id)
        return product

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_locked(self, product_id: int) -> Product:
        product = self._product_repo.get_for_update(product_id)
        if not product:
            raise ProductNotFound(f"Product {product_id} not found.")
        return product
