# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - only name is writable; slug is derived server-side
    """

    name = serializers.CharField(required=True, allow_blank=False, max_length=120)
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "product_count", "created_at", "updated_at"]
        read_only_fields = ["id", "slug", "product_count", "created_at", "updated_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def get_product_count(self, obj) -> int:
        annotated = getattr(obj, "product_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.products.count()
