"""Catalog DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateVariationDTO``: input for a single variation.
- ``CreateProductDTO``: input for product creation (nested variations).
- ``UpdateProductDTO``: input for partial product updates.
- ``UpdateVariationDTO``: input for partial variation updates.

Update DTOs distinguish "not sent" from a value: only fields the caller
explicitly supplied (``model_fields_set``) with a non-null value are
returned by ``changes()``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _not_blank(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return value
    if not value.strip():
        raise ValueError(f"{label} must not be blank.")
    return value.strip()


def _non_negative(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is not None and value < 0:
        raise ValueError("Price cannot be negative.")
    return value


class _PartialUpdateDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    def changes(self) -> Dict[str, Any]:
        """Return the explicitly supplied, non-null fields."""
        return {
            field: getattr(self, field)
            for field in self.model_fields_set
            if getattr(self, field) is not None
        }


# ---------------------------------------------------------------------------
# Create DTOs
# ---------------------------------------------------------------------------


class CreateVariationDTO(BaseModel):
    """Immutable DTO for a variation in a creation request."""

    model_config = ConfigDict(frozen=True)

    size_name: str
    description: str
    price: Decimal
    available: bool

    @field_validator("size_name")
    @classmethod
    def size_name_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Size name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Description")

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Decimal) -> Decimal:
        return _non_negative(v)


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name``, ``description`` and ``category`` are non-blank.
    - ``variations`` contains at least one variation.

    ``category`` is kept as the raw string; matching it against the
    closed ``Category`` set is a business rule owned by the service.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: str
    variations: List[CreateVariationDTO]
    available: bool

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Description")

    @field_validator("category")
    @classmethod
    def category_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Category")

    @field_validator("variations")
    @classmethod
    def variations_must_not_be_empty(
        cls, v: List[CreateVariationDTO]
    ) -> List[CreateVariationDTO]:
        if not v:
            raise ValueError("Product must have at least one variation.")
        return v

    def has_available_variations(self) -> bool:
        return any(variation.available for variation in self.variations)


# ---------------------------------------------------------------------------
# Update DTOs
# ---------------------------------------------------------------------------


class UpdateProductDTO(_PartialUpdateDTO):
    """Immutable DTO for partial product updates.

    Variations are not editable through this DTO; ``available=False``
    cascades to them in the service.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    available: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "Name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "Description")


class UpdateVariationDTO(_PartialUpdateDTO):
    """Immutable DTO for partial variation updates."""

    size_name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    available: Optional[bool] = None

    @field_validator("size_name")
    @classmethod
    def size_name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "Size name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "Description")

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _non_negative(v)
