# products/serializers/product_image.py

from rest_framework import serializers

from products.models import ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProductImage
        fields = ["id", "product_id", "image_url", "is_primary", "created_at"]
        read_only_fields = ["id", "product_id", "created_at"]


class ProductImageCreateSerializer(serializers.Serializer):
    image_url = serializers.CharField(max_length=500)
    is_primary = serializers.BooleanField(required=False, default=False)


class ProductImageUpdateSerializer(serializers.Serializer):
    image_url = serializers.CharField(max_length=500, required=False)
    is_primary = serializers.BooleanField(required=False)


class ProductImageBulkSerializer(serializers.Serializer):
    image_urls = serializers.ListField(
        child=serializers.CharField(max_length=500),
        allow_empty=False,
    )
    primary_index = serializers.IntegerField(required=False, allow_null=True, min_value=0)
