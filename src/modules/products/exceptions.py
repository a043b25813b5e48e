"""Catalog domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog business-rule failures."""


class ProductNotFound(CatalogError):
    """The requested product does not exist."""


class VariationNotFound(CatalogError):
    """No variation with the given id exists under the given product."""


class AvailabilityConflict(CatalogError):
    """An available variation was requested under an unavailable product (RN-CAT-003)."""


class InvalidCategory(CatalogError):
    """The category is not one of the fixed catalog categories (RN-CAT-001)."""
