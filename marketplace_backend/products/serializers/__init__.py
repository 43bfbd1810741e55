# products/serializers/__init__.py

from .category import CategorySerializer
from .product import ProductSerializer, ProductStockSerializer, ProductWriteSerializer
from .product_image import (
    ProductImageBulkSerializer,
    ProductImageCreateSerializer,
    ProductImageSerializer,
    ProductImageUpdateSerializer,
)

__all__ = [
    "CategorySerializer",
    "ProductSerializer",
    "ProductWriteSerializer",
    "ProductStockSerializer",
    "ProductImageSerializer",
    "ProductImageCreateSerializer",
    "ProductImageUpdateSerializer",
    "ProductImageBulkSerializer",
]
