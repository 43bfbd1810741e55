# products/urls.py

"""
CATALOG URLS

Registered under /api/catalog/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import (
    CategoryViewSet,
    ProductImageCountView,
    ProductImageDetailView,
    ProductImagesBulkView,
    ProductImageSetPrimaryView,
    ProductImagesView,
    ProductPrimaryImageView,
    ProductViewSet,
)

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("products/<int:product_id>/images/", ProductImagesView.as_view(), name="product-images"),
    path("products/<int:product_id>/images/bulk/", ProductImagesBulkView.as_view(), name="product-images-bulk"),
    path("products/<int:product_id>/images/primary/", ProductPrimaryImageView.as_view(), name="product-image-primary"),
    path("products/<int:product_id>/images/count/", ProductImageCountView.as_view(), name="product-image-count"),
    path("images/<int:image_id>/", ProductImageDetailView.as_view(), name="product-image-detail"),
    path("images/<int:image_id>/set-primary/", ProductImageSetPrimaryView.as_view(), name="product-image-set-primary"),
    path("", include(router.urls)),
]
