# products/views/category.py

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from permissions.roles import IsAdmin
from products.models import Category
from products.serializers.category import CategorySerializer
from products.services.categories import (
    create_category,
    delete_category,
    get_category_by_slug,
    update_category,
)


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront navigation)
    - Only admins can CREATE/UPDATE/DELETE
    """

    serializer_class = CategorySerializer
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return Category.objects.annotate(product_count=Count("products")).order_by("name")

    def get_permissions(self):
        if self.action in {"list", "retrieve", "by_slug"}:
            return [AllowAny()]
        return [IsAdmin()]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_category(name=serializer.validated_data["name"])
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = update_category(category_id=kwargs["pk"], name=serializer.validated_data["name"])
        return Response(CategorySerializer(category).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        delete_category(category_id=kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: CategorySerializer})
    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[-a-z0-9]+)")
    def by_slug(self, request, slug=None):
        """GET /api/catalog/categories/slug/<slug>/"""
        return Response(CategorySerializer(get_category_by_slug(slug)).data)
