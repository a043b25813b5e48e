"""Catalog API views.

Exposes the ``CatalogService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exception_handler import error_response
from modules.products.dtos import (
    CreateProductDTO,
    CreateVariationDTO,
    UpdateProductDTO,
    UpdateVariationDTO,
)
from modules.products.exceptions import (
    AvailabilityConflict,
    CatalogError,
    InvalidCategory,
    ProductNotFound,
    VariationNotFound,
)
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    VariationDjangoRepository,
)
from modules.products.serializers import (
    CreateProductSerializer,
    CreateVariationSerializer,
    ProductSerializer,
    UpdateProductSerializer,
    UpdateVariationSerializer,
)
from modules.products.services import CatalogService


def _domain_error_response(exc: CatalogError) -> Response:
    """Translate a catalog exception into a standardized error response."""
    if isinstance(exc, ProductNotFound):
        return error_response(
            status.HTTP_404_NOT_FOUND, "product_not_found", "Product not found."
        )
    if isinstance(exc, VariationNotFound):
        return error_response(
            status.HTTP_404_NOT_FOUND, "variation_not_found", "Variation not found."
        )
    if isinstance(exc, AvailabilityConflict):
        return error_response(
            status.HTTP_409_CONFLICT, "availability_conflict", str(exc), "available"
        )
    if isinstance(exc, InvalidCategory):
        return error_response(
            status.HTTP_400_BAD_REQUEST, "invalid_category", str(exc), "category"
        )
    raise exc


class ProductViewSet(ViewSet):
    """ViewSet for product and variation operations.

    Uses ``CatalogService`` with the Django repositories (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CatalogService(
            product_repository=ProductDjangoRepository(),
            variation_repository=VariationDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/v1/products/{pk}"""
        try:
            product = self._service.get_product(int(pk))
        except CatalogError as exc:
            return _domain_error_response(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products"""
        serializer = CreateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = CreateProductDTO(
            name=data["name"],
            description=data["description"],
            category=data["category"],
            variations=[
                CreateVariationDTO(**variation) for variation in data["variations"]
            ],
            available=data["available"],
        )

        try:
            product = self._service.create_product(dto)
        except CatalogError as exc:
            return _domain_error_response(exc)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str) -> Response:
        """PATCH /api/v1/products/{pk}"""
        serializer = UpdateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateProductDTO(**serializer.validated_data)

        try:
            product = self._service.update_product(int(pk), dto)
        except CatalogError as exc:
            return _domain_error_response(exc)

        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/v1/products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except CatalogError as exc:
            return _domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Variations
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="variation")
    def create_variation(self, request: Request, pk: str) -> Response:
        """POST /api/v1/products/{pk}/variation"""
        serializer = CreateVariationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = CreateVariationDTO(**serializer.validated_data)

        try:
            product = self._service.create_variation(int(pk), dto)
        except CatalogError as exc:
            return _domain_error_response(exc)

        return Response(ProductSerializer(product).data)

    @action(
        detail=True,
        methods=["put"],
        url_path=r"variation/(?P<variation_id>\d+)",
        url_name="variation-detail",
    )
    def update_variation(
        self, request: Request, pk: str, variation_id: str
    ) -> Response:
        """PUT /api/v1/products/{pk}/variation/{variation_id}

        Fields left out of the body are not touched.
        """
        serializer = UpdateVariationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateVariationDTO(**serializer.validated_data)

        try:
            product = self._service.update_variation(int(pk), int(variation_id), dto)
        except CatalogError as exc:
            return _domain_error_response(exc)

        return Response(ProductSerializer(product).data)

    @update_variation.mapping.delete
    def delete_variation(
        self, request: Request, pk: str, variation_id: str
    ) -> Response:
        """DELETE /api/v1/products/{pk}/variation/{variation_id}"""
        try:
            self._service.delete_variation(int(pk), int(variation_id))
        except CatalogError as exc:
            return _domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
