# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalog browsing (list/retrieve, AllowAny)
- Artisan product management, guarded by the policy engine
- Admin featured toggle

Key rule alignment:
- Every mutation consults permissions/policy.py before touching the service.
- A new product is always bound to the caller's own artisan profile.
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from artisans.services.profiles import get_profile_for_user
from permissions.policy import can_edit_product, require
from permissions.roles import IsAdmin, IsArtisan
from products.filters import ProductFilter
from products.models import Product
from products.serializers.product import (
    ProductSerializer,
    ProductStockSerializer,
    ProductWriteSerializer,
)
from products.services.catalog import (
    create_product,
    delete_product,
    toggle_featured,
    update_product,
    update_product_stock,
)


class ProductViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Product endpoints.

    Public:
    - GET /catalog/products/?category=&artisan=&featured=&in_stock=&q=
    - GET /catalog/products/<id>/

    Owner (artisan) or admin:
    - PUT/PATCH/DELETE /catalog/products/<id>/
    - PATCH /catalog/products/<id>/stock/

    Admin:
    - POST /catalog/products/<id>/toggle-featured/
    """

    serializer_class = ProductSerializer
    lookup_value_regex = r"\d+"
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter

    def get_queryset(self):
        return (
            Product.objects.select_related("artisan", "category")
            .prefetch_related("images")
            .order_by("-created_at")
        )

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        if self.action == "create":
            return [IsArtisan()]
        if self.action == "toggle_featured":
            return [IsAdmin()]
        return [IsAuthenticated()]

    def _render(self, product, http_status=status.HTTP_200_OK):
        product = self.get_queryset().get(pk=product.pk)
        return Response(ProductSerializer(product).data, status=http_status)

    @extend_schema(request=ProductWriteSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = get_profile_for_user(request.user.pk)
        product = create_product(artisan_profile=profile, **serializer.validated_data)
        return self._render(product, status.HTTP_201_CREATED)

    @extend_schema(request=ProductWriteSerializer, responses={200: ProductSerializer})
    def update(self, request, *args, **kwargs):
        require(can_edit_product(request.user, kwargs["pk"]), "You can only edit your own products")

        partial = kwargs.pop("partial", False)
        serializer = ProductWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        product = update_product(product_id=kwargs["pk"], **serializer.validated_data)
        return self._render(product)

    @extend_schema(request=ProductWriteSerializer, responses={200: ProductSerializer})
    def partial_update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return self.update(request, *args, **kwargs)

    @extend_schema(responses={204: None, 409: OpenApiResponse(description="Product is referenced by orders")})
    def destroy(self, request, *args, **kwargs):
        require(can_edit_product(request.user, kwargs["pk"]), "You can only delete your own products")

        delete_product(product_id=kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ProductSerializer})
    @action(detail=True, methods=["post"], url_path="toggle-featured")
    def toggle_featured(self, request, pk=None):
        return self._render(toggle_featured(product_id=pk))

    @extend_schema(request=ProductStockSerializer, responses={200: ProductSerializer})
    @action(detail=True, methods=["patch"], url_path="stock")
    def stock(self, request, pk=None):
        require(can_edit_product(request.user, pk), "You can only restock your own products")

        serializer = ProductStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = update_product_stock(product_id=pk, new_stock=serializer.validated_data["stock_quantity"])
        return self._render(product)
