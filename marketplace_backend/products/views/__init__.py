# products/views/__init__.py

"""
Catalog views package exports.
"""

from .category import CategoryViewSet
from .product import ProductViewSet
from .product_image import (
    ProductImageCountView,
    ProductImageDetailView,
    ProductImagesBulkView,
    ProductImageSetPrimaryView,
    ProductImagesView,
    ProductPrimaryImageView,
)

__all__ = [
    "CategoryViewSet",
    "ProductViewSet",
    "ProductImagesView",
    "ProductImagesBulkView",
    "ProductPrimaryImageView",
    "ProductImageCountView",
    "ProductImageDetailView",
    "ProductImageSetPrimaryView",
]
