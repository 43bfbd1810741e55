# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: read shape for catalog browsing
- ProductWriteSerializer: create/update input; the owning artisan is
  never taken from input (it is the caller's own profile)
- ProductStockSerializer: direct stock set
"""

from decimal import Decimal

from rest_framework import serializers

from products.models import Product
from products.serializers.product_image import ProductImageSerializer


class ProductSerializer(serializers.ModelSerializer):
    artisan_id = serializers.IntegerField(read_only=True)
    artisan_name = serializers.CharField(source="artisan.display_name", read_only=True)
    category_id = serializers.IntegerField(read_only=True)
    category_name = serializers.CharField(source="category.name", read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock_quantity",
            "is_in_stock",
            "is_featured",
            "artisan_id",
            "artisan_name",
            "category_id",
            "category_name",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = serializers.IntegerField(required=False, min_value=0)
    category = serializers.IntegerField()

    def validate_price(self, value):
        if value is None or value <= Decimal("0.00"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value


class ProductStockSerializer(serializers.Serializer):
    stock_quantity = serializers.IntegerField()
